from rest_framework import serializers

from .models import ProgressUpdate


class ProgressUpdateSerializer(serializers.ModelSerializer):
    project_id = serializers.IntegerField(read_only=True)
    field_worker_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = ProgressUpdate
        fields = [
            "id",
            "project_id",
            "field_worker_id",
            "step_key",
            "step_title",
            "work_status",
            "percent_complete",
            "amount_used",
            "notes",
            "media_paths",
            "approval_status",
            "admin_remark",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProgressUpdateCreateSerializer(serializers.Serializer):
    step_key = serializers.CharField(max_length=64)
    work_status = serializers.ChoiceField(choices=ProgressUpdate.WORK_STATUS_CHOICES)
    percent_complete = serializers.IntegerField(min_value=0, max_value=100)
    amount_used = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=0, required=False, default=0)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
