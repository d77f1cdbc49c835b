from rest_framework import serializers


class DecisionSerializer(serializers.Serializer):
    """Body of every approve / reject action."""
    remark = serializers.CharField(required=False, allow_blank=True, default="")
