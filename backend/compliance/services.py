"""
Compliance Service Layer.

``ComplianceSyncService.sync`` performs exactly one delivery of a
complaint to the compliance spreadsheet webhook and records exactly one
``ComplianceSyncAttempt`` for it.  Delivery failures are recorded and
logged; they are never raised to the caller.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from django.conf import settings
from django.db.models import QuerySet

from complaints.models import Complaint
from core.domain.exceptions import SyncError

from .models import ComplianceSyncAttempt, SyncOutcome
from .payload import build_sheet_payload

logger = logging.getLogger(__name__)

# Webhook error bodies can be whole HTML pages.
_MAX_MESSAGE_LENGTH = 2000

WEBHOOK_NOT_CONFIGURED = "compliance webhook URL is not configured"
COMPLAINT_GONE = "complaint no longer exists"


class ComplianceSyncService:
    """
    Parameters
    ----------
    transport : httpx.BaseTransport | None
        Passed straight to ``httpx.Client``; tests inject
        ``httpx.MockTransport`` here.
    """

    def __init__(
        self,
        *,
        webhook_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        config = settings.COMPLIANCE_SYNC
        self.webhook_url = config.get("WEBHOOK_URL", "") if webhook_url is None else webhook_url
        self.timeout = config.get("TIMEOUT_SECONDS", 15) if timeout is None else timeout
        self.transport = transport

    # ── Public API ───────────────────────────────────────────────────

    def sync(self, complaint_id: Any) -> ComplianceSyncAttempt:
        """
        Deliver the current state of one complaint.

        Always records and returns exactly one attempt.  A complaint
        deleted before its queued sync ran is recorded as a failure.
        """
        try:
            complaint = Complaint.objects.get(pk=complaint_id)
            self._deliver(build_sheet_payload(complaint))
        except Complaint.DoesNotExist:
            return self.record_failure(complaint_id, COMPLAINT_GONE)
        except SyncError as exc:
            return self.record_failure(complaint_id, str(exc))
        except Exception as exc:
            logger.exception("Unexpected compliance sync error for complaint %s", complaint_id)
            return self.record(
                complaint_id, SyncOutcome.FAILED, f"{type(exc).__name__}: {exc}",
            )

        logger.info("Compliance sync succeeded for complaint %s", complaint.pk)
        return self.record(complaint.pk, SyncOutcome.SUCCESS)

    def record_failure(self, complaint_id: Any, message: str) -> ComplianceSyncAttempt:
        logger.warning(
            "Compliance sync failed for complaint %s: %s", complaint_id, message,
        )
        return self.record(complaint_id, SyncOutcome.FAILED, message)

    @staticmethod
    def record(
        complaint_id: Any, outcome: str, message: str | None = None,
    ) -> ComplianceSyncAttempt:
        if message is not None:
            message = message[:_MAX_MESSAGE_LENGTH]
        return ComplianceSyncAttempt.objects.create(
            complaint_id=complaint_id,
            outcome=outcome,
            message=message,
        )

    @staticmethod
    def attempts_for(complaint_id: Any) -> QuerySet[ComplianceSyncAttempt]:
        """Audit trail of one complaint, newest first.  Kept after deletion."""
        return ComplianceSyncAttempt.objects.filter(complaint_id=complaint_id)

    # ── Internals ────────────────────────────────────────────────────

    def _deliver(self, payload: dict[str, Any]) -> None:
        if not self.webhook_url:
            raise SyncError(WEBHOOK_NOT_CONFIGURED)

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(self.webhook_url, json=payload)
        except httpx.HTTPError as exc:
            raise SyncError(f"{type(exc).__name__}: {exc}") from exc

        if not response.is_success:
            raise SyncError(
                f"HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
