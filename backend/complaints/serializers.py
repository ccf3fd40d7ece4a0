"""
Complaints app serializers.

Request serializers check the *shape* of input (types, choices, unknown
keys).  Length limits, contact-number rules and every permission rule
live in the lifecycle service, which is the authority for all callers.
"""

from __future__ import annotations

from typing import Any

from rest_framework import serializers

from core.constants import MAX_EVIDENCE_FILES

from .models import Complaint, ComplaintStatus


class RejectUnknownFieldsMixin:
    """Fail validation on input keys the serializer does not declare."""

    #: Keys that may appear in the raw input without being fields.
    passthrough_keys: frozenset[str] = frozenset()

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        unknown = set(self.initial_data) - set(self.fields) - self.passthrough_keys
        if unknown:
            raise serializers.ValidationError(
                {key: "Unknown or read-only field." for key in sorted(unknown)}
            )
        return super().validate(attrs)


# ═══════════════════════════════════════════════════════════════════
#  Request Serializers
# ═══════════════════════════════════════════════════════════════════


class ComplaintCreateSerializer(RejectUnknownFieldsMixin, serializers.Serializer):
    """
    Body of ``POST /api/complaints/`` (JSON or multipart).

    Up to three photos may be sent in the same multipart request under
    the ``evidence`` key.
    """

    passthrough_keys = frozenset({"evidence"})

    train_number = serializers.CharField(max_length=20)
    coach_number = serializers.CharField(max_length=20)
    pnr_number = serializers.CharField()
    customer_name = serializers.CharField()
    berth_number = serializers.CharField()
    contact_number = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    issue_description = serializers.CharField(help_text="10-2000 characters.")
    action_plan = serializers.CharField(help_text="3-1000 characters.")
    action_during_service = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    action_required_in_yard = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    evidence = serializers.ListField(
        child=serializers.FileField(),
        required=False,
        max_length=MAX_EVIDENCE_FILES,
        write_only=True,
        help_text="Up to 3 JPG/PNG/WEBP photos, 5MB each.",
    )


class ComplaintUpdateSerializer(RejectUnknownFieldsMixin, serializers.Serializer):
    """
    Body of ``PATCH /api/complaints/{id}/``.

    ``status`` is honoured for in-charge and admin users only and ignored
    for everyone else.
    """

    status = serializers.ChoiceField(choices=ComplaintStatus.choices, required=False)
    pnr_number = serializers.CharField(required=False)
    customer_name = serializers.CharField(required=False)
    berth_number = serializers.CharField(required=False)
    contact_number = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    issue_description = serializers.CharField(required=False)
    action_plan = serializers.CharField(required=False)
    action_during_service = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    action_required_in_yard = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class EvidenceUploadSerializer(serializers.Serializer):
    evidence = serializers.ListField(
        child=serializers.FileField(),
        max_length=MAX_EVIDENCE_FILES,
        help_text="Up to 3 JPG/PNG/WEBP photos, 5MB each.",
    )


class ComplaintFilterSerializer(serializers.Serializer):
    """
    Query parameters shared by the list and summary endpoints.

    Query Parameters
    ----------------
    ``status``          : str   — one of ``ComplaintStatus`` values
    ``train_number``    : str
    ``coach_number``    : str
    ``created_after``   : date  — ISO 8601, inclusive
    ``created_before``  : date  — ISO 8601, inclusive
    """

    status = serializers.ChoiceField(choices=ComplaintStatus.choices, required=False)
    train_number = serializers.CharField(required=False, max_length=20)
    coach_number = serializers.CharField(required=False, max_length=20)
    created_after = serializers.DateField(required=False)
    created_before = serializers.DateField(required=False)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        created_after = attrs.get("created_after")
        created_before = attrs.get("created_before")
        if created_after and created_before and created_after > created_before:
            raise serializers.ValidationError(
                "created_after must be earlier than created_before."
            )
        return attrs


# ═══════════════════════════════════════════════════════════════════
#  Response Serializers
# ═══════════════════════════════════════════════════════════════════


class CapabilitiesSerializer(serializers.Serializer):
    can_edit = serializers.BooleanField()
    can_edit_status = serializers.BooleanField()
    can_delete = serializers.BooleanField()


class ComplaintSerializer(serializers.ModelSerializer):
    """
    Complaint as returned by every endpoint.

    ``capabilities`` tells the client which controls to offer the
    current user.  The view supplies them through the ``capabilities``
    context entry, a ``{complaint_pk: ComplaintCapabilities}`` map.
    """

    reporter_user = serializers.PrimaryKeyRelatedField(read_only=True)
    capabilities = serializers.SerializerMethodField()

    class Meta:
        model = Complaint
        fields = [
            "id",
            "created_at",
            "updated_at",
            "reporter_user",
            "reporter_name",
            "reporter_staff_number",
            "train_number",
            "coach_number",
            "coach_class",
            "unit",
            "configuration",
            "capacity",
            "position",
            "pnr_number",
            "customer_name",
            "berth_number",
            "contact_number",
            "issue_description",
            "action_plan",
            "action_during_service",
            "action_required_in_yard",
            "status",
            "resolved_at",
            "evidence_paths",
            "capabilities",
        ]
        read_only_fields = fields

    def get_capabilities(self, obj: Complaint) -> dict | None:
        caps = self.context.get("capabilities", {}).get(obj.pk)
        if caps is None:
            return None
        return CapabilitiesSerializer(caps).data


class CoachCountSerializer(serializers.Serializer):
    coach_number = serializers.CharField()
    count = serializers.IntegerField()


class DailyCountSerializer(serializers.Serializer):
    date = serializers.DateField()
    count = serializers.IntegerField()


class StatusSummarySerializer(serializers.Serializer):
    open = serializers.IntegerField()
    in_progress = serializers.IntegerField()
    resolved = serializers.IntegerField()
    total = serializers.IntegerField()
    by_coach = CoachCountSerializer(many=True, help_text="Up to 12 coaches, most complaints first.")
    trend = DailyCountSerializer(many=True, help_text="Complaints per UTC day, oldest first.")


class EvidenceLinkSerializer(serializers.Serializer):
    path = serializers.CharField()
    url = serializers.CharField()
    expires_in = serializers.IntegerField(help_text="Seconds until the URL stops working.")
