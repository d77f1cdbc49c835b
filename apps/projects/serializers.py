from rest_framework import serializers

from apps.projects.constants import CATEGORY_CHOICES, DEFAULT_STEPS, URGENCY_CHOICES
from apps.projects.models import Project

PAYMENT_BLOCKS = (
    # (toggle, required fields, message when incomplete)
    ("enable_bank", ("bank_name", "bank_account_holder_name", "bank_account_number"), "Bank details are incomplete"),
    ("enable_jazzcash", ("jazzcash_account_name", "jazzcash_mobile_number"), "JazzCash details are incomplete"),
    ("enable_easypaisa", ("easypaisa_account_name", "easypaisa_mobile_number"), "EasyPaisa details are incomplete"),
)

BLOCK_FIELDS = {
    "enable_bank": ("bank_name", "bank_account_holder_name", "bank_account_number", "bank_iban"),
    "enable_jazzcash": ("jazzcash_account_name", "jazzcash_mobile_number"),
    "enable_easypaisa": ("easypaisa_account_name", "easypaisa_mobile_number"),
}


class ProjectSerializer(serializers.ModelSerializer):
    receiver_id = serializers.IntegerField(read_only=True)
    assigned_field_worker_ids = serializers.PrimaryKeyRelatedField(
        source="assigned_field_workers", many=True, read_only=True,
    )
    payment_accounts = serializers.SerializerMethodField()
    configured_methods = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = [
            "id",
            "receiver_id",
            "full_name",
            "father_or_org_name",
            "cnic_or_id_number",
            "phone",
            "alternate_phone",
            "city",
            "full_address",
            "title",
            "purpose",
            "required_amount",
            "collected_amount",
            "spent_amount",
            "category",
            "urgency_level",
            "description",
            "usage_breakdown",
            "duration_text",
            "verification_media_paths",
            "timeline_start",
            "timeline_end",
            "steps",
            "payment_accounts",
            "configured_methods",
            "status",
            "admin_remark",
            "approved_at",
            "rejected_at",
            "published_at",
            "assigned_field_worker_ids",
            "progress_percent",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_payment_accounts(self, obj):
        return obj.payment_accounts()

    def get_configured_methods(self, obj):
        return [str(method) for method in obj.configured_methods()]


class PublicProjectSerializer(ProjectSerializer):
    """Published requests, without the receiver's identity documents."""

    class Meta(ProjectSerializer.Meta):
        fields = [
            field for field in ProjectSerializer.Meta.fields
            if field not in ("cnic_or_id_number", "alternate_phone", "full_address", "admin_remark", "assigned_field_worker_ids")
        ]
        read_only_fields = fields


class ProjectSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = [
            "id",
            "title",
            "status",
            "required_amount",
            "collected_amount",
            "spent_amount",
            "progress_percent",
            "usage_breakdown",
        ]
        read_only_fields = fields


class StepSerializer(serializers.Serializer):
    key = serializers.CharField(max_length=64)
    title = serializers.CharField(max_length=255)
    order = serializers.IntegerField(min_value=1)


class ProjectCreateSerializer(serializers.Serializer):
    """
    Receiver submission. Accepts JSON or multipart; in multipart `steps`
    is a JSON-encoded list.
    """
    # Receiver details
    full_name = serializers.CharField(max_length=255)
    father_or_org_name = serializers.CharField(max_length=255)
    cnic_or_id_number = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    phone = serializers.CharField(max_length=32)
    alternate_phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    city = serializers.CharField(max_length=120)
    full_address = serializers.CharField()

    # Request
    title = serializers.CharField(max_length=255)
    purpose = serializers.CharField()
    required_amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=1)
    category = serializers.ChoiceField(choices=CATEGORY_CHOICES)
    urgency_level = serializers.ChoiceField(choices=URGENCY_CHOICES, required=False, default="medium")
    description = serializers.CharField()
    usage_breakdown = serializers.CharField()
    duration_text = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    timeline_start = serializers.DateTimeField(required=False, allow_null=True)
    timeline_end = serializers.DateTimeField(required=False, allow_null=True)
    steps = serializers.JSONField(required=False)

    # Payment accounts
    enable_bank = serializers.BooleanField(required=False, default=False)
    bank_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    bank_account_holder_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    bank_account_number = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    bank_iban = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")

    enable_jazzcash = serializers.BooleanField(required=False, default=False)
    jazzcash_account_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    jazzcash_mobile_number = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")

    enable_easypaisa = serializers.BooleanField(required=False, default=False)
    easypaisa_account_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    easypaisa_mobile_number = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")

    def validate_steps(self, value):
        if value in (None, "", []):
            return []
        if not isinstance(value, list):
            raise serializers.ValidationError("Expected a list of steps.")

        serializer = StepSerializer(data=value, many=True)
        serializer.is_valid(raise_exception=True)

        steps = [dict(step) for step in serializer.validated_data]
        keys = [step["key"] for step in steps]
        if len(set(keys)) != len(keys):
            raise serializers.ValidationError("Step keys must be unique.")

        return sorted(steps, key=lambda step: step["order"])

    def validate(self, data):
        enabled = [toggle for toggle, _, _ in PAYMENT_BLOCKS if data.get(toggle)]
        if not enabled:
            raise serializers.ValidationError("Select and fill at least one payment method")

        for toggle, required, message in PAYMENT_BLOCKS:
            if data.get(toggle) and not all(data.get(field, "").strip() for field in required):
                raise serializers.ValidationError(message)

        return data

    def create(self, validated_data):
        # details of a disabled payment block are dropped
        for toggle, fields in BLOCK_FIELDS.items():
            enabled = validated_data.pop(toggle, False)
            for field in fields:
                value = validated_data.get(field, "").strip()
                validated_data[field] = value if enabled else ""

        validated_data["steps"] = validated_data.get("steps") or [dict(step) for step in DEFAULT_STEPS]
        return Project.objects.create(**validated_data)
