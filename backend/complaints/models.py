"""
Complaints app models.

A ``Complaint`` is one service issue logged by a field officer against a
specific coach of a specific train.  Reporter identity and coach metadata
are snapshots taken at submission time and never change afterwards.
"""

import uuid

from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


class ComplaintStatus(models.TextChoices):
    OPEN = "open", "Open"
    IN_PROGRESS = "in_progress", "In Progress"
    RESOLVED = "resolved", "Resolved"


# Case-content fields a patch may touch.
CONTENT_FIELDS: tuple[str, ...] = (
    "pnr_number",
    "customer_name",
    "berth_number",
    "contact_number",
    "issue_description",
    "action_plan",
    "action_during_service",
    "action_required_in_yard",
)

# Fields fixed at creation.
SNAPSHOT_FIELDS: tuple[str, ...] = (
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
)


class Complaint(TimeStampedModel):
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )

    # ── Provenance (write-once) ─────────────────────────────────────
    reporter_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="reported_complaints",
        verbose_name="Reporter",
    )
    reporter_name = models.CharField(max_length=150, verbose_name="Reporter Name")
    reporter_staff_number = models.CharField(
        max_length=30,
        verbose_name="Reporter Staff Number",
    )

    # ── Coach snapshot (write-once) ─────────────────────────────────
    train_number = models.CharField(
        max_length=20,
        db_index=True,
        verbose_name="Train Number",
    )
    coach_number = models.CharField(
        max_length=20,
        db_index=True,
        verbose_name="Coach Number",
    )
    coach_class = models.CharField(
        max_length=20,
        db_column="class",
        verbose_name="Class",
    )
    unit = models.CharField(max_length=50, verbose_name="Unit")
    configuration = models.CharField(max_length=50, verbose_name="Configuration")
    capacity = models.PositiveIntegerField(verbose_name="Capacity")
    position = models.PositiveIntegerField(verbose_name="Position")

    # ── Case content ────────────────────────────────────────────────
    pnr_number = models.CharField(max_length=20, verbose_name="PNR Number")
    customer_name = models.CharField(max_length=120, verbose_name="Customer Name")
    berth_number = models.CharField(max_length=20, verbose_name="Berth Number")
    contact_number = models.CharField(
        max_length=15,
        null=True,
        blank=True,
        verbose_name="Contact Number",
    )
    issue_description = models.TextField(verbose_name="Issue Description")
    action_plan = models.TextField(verbose_name="Action Plan")
    action_during_service = models.TextField(
        null=True,
        blank=True,
        verbose_name="Action During Service",
    )
    action_required_in_yard = models.TextField(
        null=True,
        blank=True,
        verbose_name="Action Required In Yard",
    )

    # ── Workflow ────────────────────────────────────────────────────
    status = models.CharField(
        max_length=20,
        choices=ComplaintStatus.choices,
        default=ComplaintStatus.OPEN,
        db_index=True,
        verbose_name="Status",
    )
    resolved_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name="Resolved At",
    )

    # Ordered storage keys of confirmed uploads, at most three.
    evidence_paths = models.JSONField(
        default=list,
        blank=True,
        verbose_name="Evidence Paths",
    )

    class Meta:
        verbose_name = "Complaint"
        verbose_name_plural = "Complaints"
        ordering = ["-created_at"]

    def __str__(self):
        return f"Complaint {self.id} ({self.train_number}/{self.coach_number}, {self.status})"
