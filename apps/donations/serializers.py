from rest_framework import serializers

from apps.projects.serializers import ProjectSummarySerializer

from .constants import OFFLINE_PROOF_METHODS, PaymentMethod
from .models import Donation

PAYPAL_CHECKOUT_ONLY = "PayPal donations must be created via PayPal checkout"


class DonationSerializer(serializers.ModelSerializer):
    project_id = serializers.IntegerField(read_only=True)
    donor_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Donation
        fields = [
            "id",
            "project_id",
            "donor_id",
            "amount",
            "method",
            "payment_status",
            "verification_status",
            "receiver_status",
            "receiver_remark",
            "receiver_action_at",
            "paid_amount",
            "donor_account_name",
            "donor_account_number_or_mobile",
            "transaction_id",
            "proof_paths",
            "provider_type",
            "provider_order_id",
            "provider_capture_id",
            "admin_remark",
            "receipt_no",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class DonationWithProjectSerializer(DonationSerializer):
    project = ProjectSummarySerializer(read_only=True)

    class Meta(DonationSerializer.Meta):
        fields = DonationSerializer.Meta.fields + ["project"]
        read_only_fields = fields


def normalize_method(value):
    return (value or "").strip().lower()


class OfflineDonationSerializer(serializers.Serializer):
    """Offline transfer the donor already made, with proof uploaded alongside."""
    method = serializers.CharField()
    paid_amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=1)
    transaction_id = serializers.CharField(max_length=128)
    donor_account_name = serializers.CharField(max_length=255)
    donor_account_number_or_mobile = serializers.CharField(max_length=64)

    def validate_method(self, value):
        value = normalize_method(value)
        if value == PaymentMethod.PAYPAL:
            raise serializers.ValidationError(PAYPAL_CHECKOUT_ONLY)
        if value not in OFFLINE_PROOF_METHODS:
            raise serializers.ValidationError("Unsupported payment method")
        return PaymentMethod(value)


class CreateOfflineDonationSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=1)
    method = serializers.CharField()

    def validate_method(self, value):
        value = normalize_method(value)
        if value == PaymentMethod.PAYPAL:
            raise serializers.ValidationError(PAYPAL_CHECKOUT_ONLY)
        if value not in PaymentMethod.values:
            raise serializers.ValidationError("Unsupported payment method")
        return PaymentMethod(value)


class PayPalOrderSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=1)
    return_url = serializers.URLField()
    cancel_url = serializers.URLField()
    currency = serializers.CharField(max_length=3, required=False)

    def validate_currency(self, value):
        return value.strip().upper()


class PayPalCaptureSerializer(serializers.Serializer):
    donation_id = serializers.IntegerField(min_value=1)
    order_id = serializers.CharField(max_length=128)
