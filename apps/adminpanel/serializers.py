from rest_framework import serializers

from apps.users.models import User

from .models import AppSettings


class AdminAccountSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "role",
            "name",
            "father_name",
            "phone",
            "address",
            "cnic",
            "photo_path",
            "registration_status",
            "is_active",
            "created_at",
        ]
        read_only_fields = fields


class AdminAccountCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6)
    name = serializers.CharField(max_length=255, required=False)

    def validate_email(self, value):
        return value.lower().strip()


class AccountStatusSerializer(serializers.Serializer):
    is_active = serializers.BooleanField(required=False, allow_null=True, default=None)

    def validate(self, data):
        if data.get("is_active") is None:
            raise serializers.ValidationError("is_active is required")
        return data


class DonorSummarySerializer(serializers.ModelSerializer):
    donation_count = serializers.IntegerField(read_only=True)
    total_amount = serializers.DecimalField(max_digits=16, decimal_places=2, read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "role",
            "name",
            "phone",
            "city",
            "address",
            "cnic",
            "photo_path",
            "is_active",
            "created_at",
            "donation_count",
            "total_amount",
        ]
        read_only_fields = fields


class AssignFieldWorkersSerializer(serializers.Serializer):
    field_worker_ids = serializers.ListField(child=serializers.IntegerField(min_value=1))


class AppSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = AppSettings
        fields = ["id", "name", "address", "phone", "logo_path", "created_at", "updated_at"]
        read_only_fields = ["id", "logo_path", "created_at", "updated_at"]
        extra_kwargs = {
            "address": {"required": False, "allow_blank": True},
            "phone": {"required": False, "allow_blank": True},
        }
