"""
core.domain.exceptions — Domain-specific exception hierarchy.

These exceptions represent business-rule violations inside service layers.
They are deliberately **not** DRF exceptions so that the domain layer stays
framework-agnostic.  The global DRF exception handler in
``core.domain.exception_handler`` maps them to HTTP responses.

Mapping cheatsheet
------------------
┌──────────────────────┬──────────────────────────────────────┬──────┐
│ Domain Exception     │ Meaning                              │ Code │
├──────────────────────┼──────────────────────────────────────┼──────┤
│ DomainError          │ Generic business-rule violation      │ 400  │
│ ValidationError      │ Malformed input, nothing was written │ 400  │
│ PermissionDenied     │ Actor lacks rights on current state  │ 403  │
│ NotFound             │ Complaint / train / coach missing    │ 404  │
│ StoreError           │ Database or object-storage failure   │ 503  │
│ EvidenceUploadFailed │ Evidence phase failed after create   │ 503  │
│ SyncError            │ Compliance webhook failure           │  —   │
└──────────────────────┴──────────────────────────────────────┴──────┘

``SyncError`` never reaches a caller: the compliance dispatcher records
it in the audit trail and logs it.

Recommended usage inside a service::

    from core.domain.exceptions import PermissionDenied

    if not can_delete(flags):
        raise PermissionDenied("Only in-charge or admin users can delete complaints.")
"""

from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """
    Base class for all domain / business-rule errors.

    ``details`` carries extra machine-readable context that the
    exception handler merges into the response body.
    """

    def __init__(
        self,
        message: str = "A business rule was violated.",
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(DomainError):
    """
    Malformed input: missing required field, out-of-range length, bad
    contact-number shape, unsupported evidence type/size, too many files.

    Raised before any write happens.  Maps to HTTP 400.
    """

    def __init__(
        self,
        message: str = "The submitted data is invalid.",
        *,
        field: str | None = None,
    ) -> None:
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


class PermissionDenied(DomainError):
    """
    The acting user does not have the rights for this operation given
    the complaint's current state and their role.

    Maps to HTTP 403.
    """

    def __init__(self, message: str = "You do not have permission to perform this action.") -> None:
        super().__init__(message)


class NotFound(DomainError):
    """
    The referenced complaint, train or coach does not exist.

    Maps to HTTP 404.
    """

    def __init__(self, message: str = "The requested resource was not found.") -> None:
        super().__init__(message)


class StoreError(DomainError):
    """
    Underlying persistence or object-storage failure.

    Not retried by the core; the original error is chained via
    ``raise ... from exc``.  Maps to HTTP 503.
    """

    def __init__(self, message: str = "The storage backend failed.", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)


class EvidenceUploadFailed(StoreError):
    """
    The evidence phase of a submission failed.

    The complaint itself was created and stays, with no evidence linked.
    ``complaint_id`` tells the caller which record to retry against.
    """

    def __init__(self, message: str, *, complaint_id: Any) -> None:
        super().__init__(message, details={"complaint_id": str(complaint_id)})
        self.complaint_id = complaint_id


class SyncError(DomainError):
    """
    The external compliance endpoint rejected or failed a dispatch.

    Recorded as a failed ``ComplianceSyncAttempt``; never propagated to
    the operation that triggered the sync.
    """

    def __init__(self, message: str = "Compliance sync failed.", *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
