"""
complaints.repository — Persistence for complaints.

The only module that issues queries against ``Complaint``.  Every
``UPDATE`` and ``DELETE`` carries a row-policy ``Q`` from
``complaints.policies``; when it matches nothing the repository tells a
missing row (``NotFound``) apart from a refused one (``PermissionDenied``).

Database failures are re-raised as ``StoreError`` with the driver error
chained.
"""

from __future__ import annotations

import functools
import logging
import uuid
from datetime import timezone as dt_timezone
from typing import Any, Mapping

from django.db import DatabaseError
from django.db.models import Count, Q, QuerySet
from django.db.models.functions import TruncDate
from django.utils import timezone

from core.constants import COMPLAINT_LIST_CAP, SUMMARY_TOP_COACHES
from core.domain.exceptions import NotFound, PermissionDenied, StoreError

from .models import Complaint, ComplaintStatus

logger = logging.getLogger(__name__)


def _store_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError as exc:
            logger.error("Complaint store failure in %s: %s", func.__name__, exc)
            raise StoreError(f"Complaint store failure: {exc}") from exc
    return wrapper


def parse_complaint_id(complaint_id: Any) -> uuid.UUID:
    if isinstance(complaint_id, uuid.UUID):
        return complaint_id
    try:
        return uuid.UUID(str(complaint_id))
    except (TypeError, ValueError):
        raise NotFound(f"Complaint {complaint_id} not found.")


class ComplaintRepository:

    # ── Reads ────────────────────────────────────────────────────────

    @_store_errors
    def get(self, complaint_id: Any) -> Complaint:
        pk = parse_complaint_id(complaint_id)
        try:
            return Complaint.objects.get(pk=pk)
        except Complaint.DoesNotExist:
            raise NotFound(f"Complaint {complaint_id} not found.")

    @_store_errors
    def exists(self, complaint_id: Any) -> bool:
        return Complaint.objects.filter(pk=parse_complaint_id(complaint_id)).exists()

    def filtered(self, filters: Mapping[str, Any] | None = None) -> QuerySet[Complaint]:
        """
        Apply listing filters.

        Supported keys: ``status``, ``train_number``, ``coach_number``,
        ``created_after`` and ``created_before`` (dates, both inclusive).
        """
        filters = filters or {}
        qs = Complaint.objects.all()
        if filters.get("status"):
            qs = qs.filter(status=filters["status"])
        if filters.get("train_number"):
            qs = qs.filter(train_number=filters["train_number"])
        if filters.get("coach_number"):
            qs = qs.filter(coach_number=filters["coach_number"])
        if filters.get("created_after"):
            qs = qs.filter(created_at__date__gte=filters["created_after"])
        if filters.get("created_before"):
            qs = qs.filter(created_at__date__lte=filters["created_before"])
        return qs

    @_store_errors
    def list(
        self,
        filters: Mapping[str, Any] | None = None,
        limit: int = COMPLAINT_LIST_CAP,
    ) -> list[Complaint]:
        return list(self.filtered(filters).order_by("-created_at")[:limit])

    @_store_errors
    def status_counts(self, filters: Mapping[str, Any] | None = None) -> dict[str, int]:
        rows = (
            self.filtered(filters)
            .order_by()
            .values("status")
            .annotate(count=Count("id"))
        )
        counts = {choice: 0 for choice in ComplaintStatus.values}
        for row in rows:
            counts[row["status"]] = row["count"]
        return counts

    @_store_errors
    def coach_counts(
        self, filters: Mapping[str, Any] | None = None, *, limit: int = SUMMARY_TOP_COACHES,
    ) -> list[dict[str, Any]]:
        """Complaints per coach number, busiest first."""
        rows = (
            self.filtered(filters)
            .order_by()
            .values("coach_number")
            .annotate(count=Count("id"))
            .order_by("-count", "coach_number")
        )
        return list(rows[:limit])

    @_store_errors
    def daily_counts(self, filters: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        """Complaints per UTC calendar day of ``created_at``, oldest first."""
        rows = (
            self.filtered(filters)
            .order_by()
            .annotate(date=TruncDate("created_at", tzinfo=dt_timezone.utc))
            .values("date")
            .annotate(count=Count("id"))
            .order_by("date")
        )
        return list(rows)

    # ── Writes ───────────────────────────────────────────────────────

    @_store_errors
    def create(self, **fields: Any) -> Complaint:
        return Complaint.objects.create(**fields)

    @_store_errors
    def update(
        self,
        complaint_id: Any,
        changes: Mapping[str, Any],
        row_filter: Q | None = None,
    ) -> Complaint:
        """
        Conditionally write *changes* and return the fresh row.

        ``updated_at`` is stamped here since ``QuerySet.update`` bypasses
        ``auto_now``.
        """
        pk = parse_complaint_id(complaint_id)
        affected = (
            Complaint.objects.filter(pk=pk)
            .filter(row_filter or Q())
            .update(**changes, updated_at=timezone.now())
        )
        if affected == 0:
            self._raise_for_missing_or_refused(pk, "update")
        return self.get(pk)

    @_store_errors
    def delete(self, complaint_id: Any, row_filter: Q | None = None) -> None:
        pk = parse_complaint_id(complaint_id)
        affected, _ = (
            Complaint.objects.filter(pk=pk)
            .filter(row_filter or Q())
            .delete()
        )
        if affected == 0:
            self._raise_for_missing_or_refused(pk, "delete")

    def _raise_for_missing_or_refused(self, pk: uuid.UUID, verb: str) -> None:
        if Complaint.objects.filter(pk=pk).exists():
            raise PermissionDenied(f"You are not allowed to {verb} this complaint.")
        raise NotFound(f"Complaint {pk} not found.")
