"""
Compliance app models.

``ComplianceSyncAttempt`` is the append-only audit trail of every attempt
to mirror a complaint to the external compliance spreadsheet.  Rows
outlive the complaint they describe.
"""

from django.db import models


class SyncOutcome(models.TextChoices):
    SUCCESS = "success", "Success"
    FAILED = "failed", "Failed"


class ComplianceSyncAttempt(models.Model):
    complaint = models.ForeignKey(
        "complaints.Complaint",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="sync_attempts",
        verbose_name="Complaint",
    )
    attempt_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        verbose_name="Attempted At",
    )
    outcome = models.CharField(
        max_length=10,
        choices=SyncOutcome.choices,
        verbose_name="Outcome",
    )
    message = models.TextField(
        null=True,
        blank=True,
        verbose_name="Message",
    )

    class Meta:
        verbose_name = "Compliance Sync Attempt"
        verbose_name_plural = "Compliance Sync Attempts"
        ordering = ["-attempt_at", "-id"]

    def __str__(self):
        return f"Sync of {self.complaint_id} at {self.attempt_at:%Y-%m-%d %H:%M:%S}: {self.outcome}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Compliance sync attempts are append-only.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Compliance sync attempts cannot be deleted.")
