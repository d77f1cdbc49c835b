from django.contrib import admin
from .models import PortalCredential, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("email", "role", "registration_status", "is_active", "created_at")
    list_filter = ("role", "registration_status", "is_active")
    search_fields = ("email", "name", "cnic")
    exclude = ("password",)


@admin.register(PortalCredential)
class PortalCredentialAdmin(admin.ModelAdmin):
    list_display = ("portal_key", "username", "is_active", "created_at")
    list_filter = ("portal_key", "is_active")
    exclude = ("password",)
