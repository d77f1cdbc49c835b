from django.contrib import admin

from .models import Donation


@admin.register(Donation)
class DonationAdmin(admin.ModelAdmin):
    list_display = ("receipt_no", "project", "donor", "amount", "method", "payment_status", "receiver_status", "created_at")
    list_filter = ("method", "payment_status", "verification_status", "receiver_status")
    search_fields = ("receipt_no", "transaction_id", "provider_order_id")
    readonly_fields = ("receipt_no", "provider_order_id", "provider_capture_id")
