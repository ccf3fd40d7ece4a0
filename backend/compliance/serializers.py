from rest_framework import serializers

from .models import ComplianceSyncAttempt


class ComplianceSyncAttemptSerializer(serializers.ModelSerializer):
    complaint = serializers.UUIDField(source="complaint_id", read_only=True)

    class Meta:
        model = ComplianceSyncAttempt
        fields = ["id", "complaint", "attempt_at", "outcome", "message"]
        read_only_fields = fields
