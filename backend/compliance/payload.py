"""
compliance.payload — Row sent to the compliance spreadsheet webhook.

The sheet shows the creation time in Indian local time, formatted as
``17/10/2026, 3:05:09 pm``, and an em-dash for empty optional fields.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

from django.conf import settings

from core.constants import SYNC_EMPTY_PLACEHOLDER


def _sync_timezone() -> ZoneInfo:
    return ZoneInfo(settings.COMPLIANCE_SYNC.get("TIMEZONE", "Asia/Kolkata"))


def format_sheet_date(value: datetime, tz: ZoneInfo | None = None) -> str:
    """``d/m/Y, h:mm:ss am`` in *tz*, day, month and hour unpadded."""
    local = value.astimezone(tz or _sync_timezone())
    hour = local.hour % 12 or 12
    meridiem = "am" if local.hour < 12 else "pm"
    return (
        f"{local.day}/{local.month}/{local.year}, "
        f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem}"
    )


def _or_placeholder(value: Any) -> Any:
    return value if value else SYNC_EMPTY_PLACEHOLDER


def build_sheet_payload(complaint) -> dict[str, Any]:
    return {
        "date": format_sheet_date(complaint.created_at),
        "train_number": complaint.train_number,
        "coach_number": complaint.coach_number,
        "class": complaint.coach_class,
        "configuration": complaint.configuration,
        "unit": complaint.unit,
        "position": complaint.position,
        "capacity": complaint.capacity,
        "pnr_number": complaint.pnr_number,
        "customer_name": complaint.customer_name,
        "berth_number": complaint.berth_number,
        "contact_number": _or_placeholder(complaint.contact_number),
        "issue_description": complaint.issue_description,
        "action_plan": complaint.action_plan,
        "action_during_service": _or_placeholder(complaint.action_during_service),
        "action_required_in_yard": _or_placeholder(complaint.action_required_in_yard),
        "status": complaint.status or "open",
        "reporter_name": complaint.reporter_name,
        "reporter_staff_number": complaint.reporter_staff_number,
    }
