from django.contrib import admin

from .models import ProgressUpdate


@admin.register(ProgressUpdate)
class ProgressUpdateAdmin(admin.ModelAdmin):
    list_display = ("project", "field_worker", "step_key", "percent_complete", "amount_used", "approval_status", "created_at")
    list_filter = ("approval_status", "work_status")
