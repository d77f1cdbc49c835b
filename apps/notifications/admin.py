from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("recipient", "notif_type", "title", "read_at", "created_at")
    list_filter = ("notif_type", "recipient_role")
    search_fields = ("title", "message")
