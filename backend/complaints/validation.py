"""
complaints.validation — Input rules for drafts, patches and evidence.

Everything here runs before any write.  Failures raise
``core.domain.exceptions.ValidationError`` naming the offending field.
"""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

from core.constants import (
    EVIDENCE_CONTENT_TYPES,
    MAX_EVIDENCE_BYTES,
    MAX_EVIDENCE_FILES,
)
from core.domain.exceptions import ValidationError

from .models import CONTENT_FIELDS

_NON_DIGITS = re.compile(r"\D")

# field → (min length, max length) after trimming
REQUIRED_TEXT_LIMITS: dict[str, tuple[int, int]] = {
    "pnr_number": (1, 20),
    "customer_name": (1, 120),
    "berth_number": (1, 20),
    "issue_description": (10, 2000),
    "action_plan": (3, 1000),
}

OPTIONAL_TEXT_MAX: dict[str, int] = {
    "action_during_service": 1000,
    "action_required_in_yard": 1000,
}

DRAFT_FIELDS: frozenset[str] = frozenset(("train_number", "coach_number", *CONTENT_FIELDS))


def _clean_text(field: str, value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string.", field=field)
    return value.strip()


def clean_required_text(field: str, value: Any) -> str:
    low, high = REQUIRED_TEXT_LIMITS[field]
    text = _clean_text(field, value)
    if len(text) < low:
        if low == 1:
            raise ValidationError(f"{field} is required.", field=field)
        raise ValidationError(
            f"{field} must be at least {low} characters.", field=field,
        )
    if len(text) > high:
        raise ValidationError(
            f"{field} must be at most {high} characters.", field=field,
        )
    return text


def clean_optional_text(field: str, value: Any) -> str | None:
    text = _clean_text(field, value)
    if len(text) > OPTIONAL_TEXT_MAX[field]:
        raise ValidationError(
            f"{field} must be at most {OPTIONAL_TEXT_MAX[field]} characters.",
            field=field,
        )
    return text or None


def clean_contact_number(value: Any) -> str | None:
    """Strip everything but digits; empty means no contact number."""
    digits = _NON_DIGITS.sub("", _clean_text("contact_number", value))
    if not digits:
        return None
    if not 10 <= len(digits) <= 15:
        raise ValidationError(
            "Contact number should be 10-15 digits.", field="contact_number",
        )
    return digits


def clean_content_field(field: str, value: Any) -> Any:
    if field in REQUIRED_TEXT_LIMITS:
        return clean_required_text(field, value)
    if field == "contact_number":
        return clean_contact_number(value)
    return clean_optional_text(field, value)


def reject_unknown_keys(data: Mapping[str, Any], allowed: Iterable[str]) -> None:
    unknown = sorted(set(data) - set(allowed))
    if unknown:
        raise ValidationError(
            f"Unknown or read-only field(s): {', '.join(unknown)}.",
            field=unknown[0],
        )


def validate_draft(draft: Mapping[str, Any]) -> dict[str, Any]:
    """
    Check and normalise a new-complaint draft.

    Returns the cleaned values for ``train_number``, ``coach_number`` and
    every content field.  Reporter and coach metadata are not accepted
    from the caller.
    """
    reject_unknown_keys(draft, DRAFT_FIELDS)

    cleaned: dict[str, Any] = {}
    for field in ("train_number", "coach_number"):
        value = _clean_text(field, draft.get(field))
        if not value:
            raise ValidationError(f"{field} is required.", field=field)
        cleaned[field] = value

    for field in CONTENT_FIELDS:
        cleaned[field] = clean_content_field(field, draft.get(field))
    return cleaned


def validate_evidence_files(files: Iterable[Any], existing_count: int = 0) -> list[Any]:
    """
    Check count, content type and size of an upload batch.

    Each item needs ``content_type`` and ``size`` attributes, as Django's
    ``UploadedFile`` has.
    """
    files = list(files)
    if existing_count + len(files) > MAX_EVIDENCE_FILES:
        raise ValidationError(
            f"You can upload up to {MAX_EVIDENCE_FILES} photos per complaint.",
            field="evidence",
        )
    for item in files:
        if getattr(item, "content_type", None) not in EVIDENCE_CONTENT_TYPES:
            raise ValidationError(
                "Allowed file types: JPG, PNG, WEBP.", field="evidence",
            )
        if item.size > MAX_EVIDENCE_BYTES:
            raise ValidationError(
                "Each photo must be under 5MB.", field="evidence",
            )
    return files
