from django.contrib import admin

from .models import Project


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("title", "receiver", "status", "required_amount", "collected_amount", "progress_percent", "created_at")
    list_filter = ("status", "category", "urgency_level")
    search_fields = ("title", "full_name", "city")
    readonly_fields = ("collected_amount", "spent_amount", "progress_percent")
