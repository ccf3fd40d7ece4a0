"""
complaints.policies — Who may do what to a complaint.

The permission table is expressed twice, with the same rules:

1. As Python predicates (``can_edit_content``, ``can_edit_status``,
   ``can_delete``) evaluated by the lifecycle service against a freshly
   read complaint before it writes anything.
2. As ``Q`` row filters (``editable_rows_q``, ``deletable_rows_q``) that
   the repository attaches to its ``UPDATE`` / ``DELETE`` statements, so
   the database itself refuses rows the actor may not touch.

+-----------------+------------+--------------------------------------+--------------+
| Operation       | Privileged | Reporting officer (own)              | Other        |
+=================+============+======================================+==============+
| Edit content    | always     | status != resolved, age <= 24h       | never        |
| Edit status     | always     | never                                | never        |
| Delete          | always     | never                                | never        |
+-----------------+------------+--------------------------------------+--------------+
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable

from django.db.models import Q

from accounts.roles import RoleFlags
from core.constants import SELF_EDIT_WINDOW

from .models import Complaint, ComplaintStatus

# Matches no row.  Django short-circuits it without hitting the database.
_NO_ROWS = Q(pk__in=[])


@dataclass(frozen=True)
class ComplaintCapabilities:
    can_edit: bool
    can_edit_status: bool
    can_delete: bool


# ═══════════════════════════════════════════════════════════════════
#  Python predicates
# ═══════════════════════════════════════════════════════════════════


def within_self_edit_window(complaint: Complaint, now: datetime) -> bool:
    return now - complaint.created_at <= SELF_EDIT_WINDOW


def can_edit_content(
    complaint: Complaint, flags: RoleFlags, actor_id: Any, now: datetime,
) -> bool:
    if flags.is_privileged:
        return True
    return (
        actor_id is not None
        and complaint.reporter_user_id == actor_id
        and complaint.status != ComplaintStatus.RESOLVED
        and within_self_edit_window(complaint, now)
    )


def can_edit_status(complaint: Complaint, flags: RoleFlags) -> bool:
    return flags.is_privileged


def can_delete(complaint: Complaint, flags: RoleFlags) -> bool:
    return flags.is_privileged


def capabilities(
    complaint: Complaint, flags: RoleFlags, actor_id: Any, now: datetime,
) -> ComplaintCapabilities:
    return ComplaintCapabilities(
        can_edit=can_edit_content(complaint, flags, actor_id, now),
        can_edit_status=can_edit_status(complaint, flags),
        can_delete=can_delete(complaint, flags),
    )


# ═══════════════════════════════════════════════════════════════════
#  Row policies
# ═══════════════════════════════════════════════════════════════════


def editable_rows_q(
    flags: RoleFlags,
    actor_id: Any,
    now: datetime,
    fields: Iterable[str] = (),
) -> Q:
    """
    Rows *actor_id* may update, given the set of *fields* being written.

    A write touching ``status`` is restricted to privileged actors; any
    other write follows the content-edit rule.
    """
    if flags.is_privileged:
        return Q()
    if "status" in set(fields) or actor_id is None:
        return _NO_ROWS
    return (
        Q(reporter_user_id=actor_id)
        & ~Q(status=ComplaintStatus.RESOLVED)
        & Q(created_at__gte=now - SELF_EDIT_WINDOW)
    )


def deletable_rows_q(flags: RoleFlags) -> Q:
    if flags.is_privileged:
        return Q()
    return _NO_ROWS
