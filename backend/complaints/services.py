"""
Complaints Service Layer — the complaint lifecycle engine.

This module is the **single source of truth** for what may happen to a
complaint.  Views stay thin: they validate the request shape, call a
method here and serialize the result.

Architecture
------------
``ComplaintLifecycleService`` orchestrates, per operation:

1. Validation of the input (``complaints.validation``) before any write.
2. A fresh read of the complaint and a fresh ``RoleFlags`` snapshot
   (``accounts.roles.RoleResolver``).
3. The Python permission check (``complaints.policies``).
4. A conditional write through ``ComplaintRepository`` carrying the
   matching row policy.
5. For submissions only: the evidence phase
   (``evidence.storage.EvidenceStore``) and one compliance sync
   (``compliance.dispatch``).

Collaborators are injectable so tests can swap the clock, the role
resolver, the evidence store or the sync dispatcher.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Iterable, Mapping

from django.db import transaction
from django.utils import timezone

from accounts.roles import RoleResolver
from catalog.services import CatalogService
from compliance import dispatch
from core.constants import EVIDENCE_URL_TTL_SECONDS
from core.domain.exceptions import (
    EvidenceUploadFailed,
    NotFound,
    PermissionDenied,
    StoreError,
    ValidationError,
)
from evidence.storage import EvidenceStore, build_evidence_key

from . import policies
from .models import CONTENT_FIELDS, Complaint, ComplaintStatus
from .repository import ComplaintRepository
from .validation import (
    clean_content_field,
    reject_unknown_keys,
    validate_draft,
    validate_evidence_files,
)

logger = logging.getLogger(__name__)

PATCHABLE_FIELDS: frozenset[str] = frozenset((*CONTENT_FIELDS, "status"))


class ComplaintLifecycleService:

    def __init__(
        self,
        *,
        repository: ComplaintRepository | None = None,
        resolver: RoleResolver | None = None,
        evidence_store: EvidenceStore | None = None,
        dispatcher: dispatch.SyncDispatcher | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.repository = repository or ComplaintRepository()
        self.resolver = resolver or RoleResolver()
        self.evidence_store = evidence_store or EvidenceStore()
        self._dispatcher = dispatcher
        self._clock = clock or timezone.now

    @property
    def dispatcher(self) -> dispatch.SyncDispatcher:
        return self._dispatcher or dispatch.get_sync_dispatcher()

    def now(self) -> datetime:
        return self._clock()

    # ═══════════════════════════════════════════════════════════════
    #  Create
    # ═══════════════════════════════════════════════════════════════

    def submit_complaint(
        self,
        draft: Mapping[str, Any],
        actor: Any,
        evidence: Iterable[Any] = (),
    ) -> Complaint:
        """
        File a new complaint as *actor*.

        Parameters
        ----------
        draft : Mapping
            ``train_number``, ``coach_number`` and the case-content
            fields.  Reporter identity and coach metadata are never read
            from here.
        actor : User
            The authenticated reporter; their profile is snapshotted.
        evidence : Iterable[UploadedFile]
            Up to three photos, validated before anything is written.

        Returns
        -------
        Complaint
            The stored complaint, ``status=open``, with evidence linked.

        Raises
        ------
        ValidationError
            Bad draft or evidence.  Nothing was written.
        NotFound
            Unknown train/coach, or the actor has no staff profile.
        StoreError
            The complaint row could not be written.
        EvidenceUploadFailed
            The complaint exists (``complaint_id`` on the error) but its
            evidence could not be stored.  The sync was still dispatched.
        """
        cleaned = validate_draft(draft)
        files = validate_evidence_files(evidence)

        reporter_name = (getattr(actor, "full_name", "") or "").strip()
        reporter_staff_number = (getattr(actor, "staff_number", "") or "").strip()
        if not reporter_name or not reporter_staff_number:
            raise NotFound("Profile not found for the current user.")

        coach = CatalogService.resolve_coach(
            cleaned.pop("train_number"), cleaned.pop("coach_number"),
        )

        with transaction.atomic():
            complaint = self.repository.create(
                reporter_user=actor,
                reporter_name=reporter_name,
                reporter_staff_number=reporter_staff_number,
                train_number=coach.train.train_number,
                coach_number=coach.coach_number,
                coach_class=coach.coach_class,
                unit=coach.unit,
                configuration=coach.configuration,
                capacity=coach.capacity,
                position=coach.position,
                status=ComplaintStatus.OPEN,
                evidence_paths=[],
                **cleaned,
            )
        logger.info(
            "Complaint %s filed for %s/%s by user %s",
            complaint.pk,
            complaint.train_number,
            complaint.coach_number,
            actor,
        )

        upload_error: StoreError | None = None
        if files:
            try:
                complaint = self._store_evidence(complaint, files, actor)
            except StoreError as exc:
                upload_error = exc

        self.dispatcher.dispatch(complaint.pk)

        if upload_error is not None:
            raise EvidenceUploadFailed(
                f"Complaint was saved but evidence upload failed: {upload_error}",
                complaint_id=complaint.pk,
            ) from upload_error
        return complaint

    def attach_evidence(
        self, complaint_id: Any, files: Iterable[Any], actor: Any,
    ) -> Complaint:
        """
        Add photos to an existing complaint.  Needs content-edit rights;
        the total stays at most three, checked before any upload.
        """
        complaint = self.repository.get(complaint_id)
        flags = self.resolver.resolve(actor)
        now = self.now()
        if not policies.can_edit_content(complaint, flags, actor.pk, now):
            raise PermissionDenied("You are not allowed to add evidence to this complaint.")

        files = validate_evidence_files(files, existing_count=len(complaint.evidence_paths))
        if not files:
            raise ValidationError("At least one photo is required.", field="evidence")

        row_filter = policies.editable_rows_q(flags, actor.pk, now, ["evidence_paths"])
        complaint = self._store_evidence(complaint, files, actor, row_filter=row_filter)
        logger.info(
            "%d evidence file(s) attached to complaint %s by user %s",
            len(files),
            complaint.pk,
            actor,
        )
        return complaint

    # ═══════════════════════════════════════════════════════════════
    #  Read
    # ═══════════════════════════════════════════════════════════════

    def get_complaint(self, complaint_id: Any, actor: Any) -> Complaint:
        return self.repository.get(complaint_id)

    def list_complaints(
        self, filters: Mapping[str, Any] | None, actor: Any,
    ) -> list[Complaint]:
        """Newest first, never more than ``COMPLAINT_LIST_CAP`` rows."""
        return self.repository.list(filters)

    def status_summary(
        self, filters: Mapping[str, Any] | None, actor: Any,
    ) -> dict[str, Any]:
        """Status counts, busiest coaches and per-day trend for the dashboard."""
        summary: dict[str, Any] = self.repository.status_counts(filters)
        summary["total"] = sum(summary.values())
        summary["by_coach"] = self.repository.coach_counts(filters)
        summary["trend"] = self.repository.daily_counts(filters)
        return summary

    def capabilities(
        self, complaint: Complaint, actor: Any,
    ) -> policies.ComplaintCapabilities:
        flags = self.resolver.resolve(actor)
        return policies.capabilities(complaint, flags, getattr(actor, "pk", None), self.now())

    def capabilities_map(
        self, complaints: Iterable[Complaint], actor: Any,
    ) -> dict[Any, policies.ComplaintCapabilities]:
        """``capabilities`` for many complaints with a single role lookup."""
        flags = self.resolver.resolve(actor)
        now = self.now()
        actor_id = getattr(actor, "pk", None)
        return {
            complaint.pk: policies.capabilities(complaint, flags, actor_id, now)
            for complaint in complaints
        }

    def evidence_urls(
        self, complaint_id: Any, actor: Any, request=None,
    ) -> list[dict[str, Any]]:
        complaint = self.repository.get(complaint_id)
        return [
            {
                "path": path,
                "url": self.evidence_store.signed_url(
                    path, EVIDENCE_URL_TTL_SECONDS, request=request,
                ),
                "expires_in": EVIDENCE_URL_TTL_SECONDS,
            }
            for path in complaint.evidence_paths
        ]

    # ═══════════════════════════════════════════════════════════════
    #  Update / delete
    # ═══════════════════════════════════════════════════════════════

    def update_complaint(
        self, complaint_id: Any, patch: Mapping[str, Any], actor: Any,
    ) -> Complaint:
        """
        Apply *patch* to a complaint.

        ``status`` from an unprivileged actor is dropped without error.
        Content changes need content-edit rights on the complaint as it
        is right now.  An empty effective patch returns the complaint
        unchanged.  No compliance sync is dispatched.
        """
        reject_unknown_keys(patch, PATCHABLE_FIELDS)

        complaint = self.repository.get(complaint_id)
        flags = self.resolver.resolve(actor)
        now = self.now()
        changes: dict[str, Any] = {}

        if "status" in patch:
            if policies.can_edit_status(complaint, flags):
                changes.update(self._status_changes(complaint, patch["status"], now))
            else:
                logger.info(
                    "Ignoring status change on complaint %s from unprivileged user %s",
                    complaint.pk,
                    actor,
                )

        content = {
            field: clean_content_field(field, value)
            for field, value in patch.items()
            if field in CONTENT_FIELDS
        }
        if content and not policies.can_edit_content(complaint, flags, actor.pk, now):
            raise PermissionDenied("You are not allowed to edit this complaint.")
        changes.update(content)

        if not changes:
            return complaint

        row_filter = policies.editable_rows_q(flags, actor.pk, now, changes.keys())
        with transaction.atomic():
            updated = self.repository.update(complaint.pk, changes, row_filter)
        logger.info(
            "Complaint %s updated (%s) by user %s",
            updated.pk,
            ", ".join(sorted(changes)),
            actor,
        )
        return updated

    def delete_complaint(self, complaint_id: Any, actor: Any) -> None:
        """
        Hard-delete a complaint.  Privileged actors only.  Sync attempts
        are kept; stored evidence objects are removed best-effort.
        """
        complaint = self.repository.get(complaint_id)
        flags = self.resolver.resolve(actor)
        if not policies.can_delete(complaint, flags):
            raise PermissionDenied("Only in-charge or admin users can delete complaints.")

        paths = list(complaint.evidence_paths)
        with transaction.atomic():
            self.repository.delete(complaint.pk, policies.deletable_rows_q(flags))
        for path in paths:
            self.evidence_store.delete(path)
        logger.info("Complaint %s deleted by user %s", complaint.pk, actor)

    # ═══════════════════════════════════════════════════════════════
    #  Internals
    # ═══════════════════════════════════════════════════════════════

    @staticmethod
    def _status_changes(complaint: Complaint, status: Any, now: datetime) -> dict[str, Any]:
        if status not in ComplaintStatus.values:
            raise ValidationError(
                f"status must be one of: {', '.join(ComplaintStatus.values)}.",
                field="status",
            )
        if status == complaint.status:
            return {}
        changes: dict[str, Any] = {"status": status}
        if status == ComplaintStatus.RESOLVED:
            changes["resolved_at"] = now
        elif complaint.status == ComplaintStatus.RESOLVED:
            changes["resolved_at"] = None
        return changes

    def _store_evidence(
        self,
        complaint: Complaint,
        files: list[Any],
        actor: Any,
        row_filter=None,
    ) -> Complaint:
        """
        Upload *files*, then link all their keys in one write.  On any
        failure the objects uploaded so far are removed and nothing is
        linked.
        """
        timestamp_ms = int(self.now().timestamp() * 1000)
        offset = len(complaint.evidence_paths)
        uploaded: list[str] = []
        try:
            for index, item in enumerate(files, start=offset):
                key = build_evidence_key(
                    actor.pk,
                    complaint.pk,
                    index,
                    item.content_type,
                    timestamp_ms=timestamp_ms,
                )
                self.evidence_store.upload(key, item, item.content_type)
                uploaded.append(key)

            with transaction.atomic():
                return self.repository.update(
                    complaint.pk,
                    {"evidence_paths": [*complaint.evidence_paths, *uploaded]},
                    row_filter,
                )
        except Exception:
            for key in uploaded:
                self.evidence_store.delete(key)
            logger.warning(
                "Evidence phase failed for complaint %s; removed %d uploaded object(s)",
                complaint.pk,
                len(uploaded),
            )
            raise
