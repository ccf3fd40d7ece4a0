"""
Core constants — **Single Source of Truth** for project-wide magic numbers.

Any business rule that references a numeric constant should import it
from here instead of hardcoding.  This avoids drift between the service
layer, the serializers and the storage-level row policies.
"""

from datetime import timedelta

# ── Complaint lifecycle ─────────────────────────────────────────────
# A reporting officer may edit their own, non-resolved complaint for this
# long after creation.  Hard cutoff, measured from ``created_at``.
SELF_EDIT_WINDOW: timedelta = timedelta(hours=24)

# Listing endpoints never return more than this many rows; callers needing
# more must narrow their filters.
COMPLAINT_LIST_CAP: int = 500

# Dashboard summary: how many coaches the per-coach breakdown lists.
SUMMARY_TOP_COACHES: int = 12

# ── Evidence ────────────────────────────────────────────────────────
MAX_EVIDENCE_FILES: int = 3
MAX_EVIDENCE_BYTES: int = 5 * 1024 * 1024  # 5 MB per photo

# content type → stored file extension
EVIDENCE_CONTENT_TYPES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}

# Lifetime of a signed evidence download URL.
EVIDENCE_URL_TTL_SECONDS: int = 60

# ── Compliance sync ─────────────────────────────────────────────────
# Placeholder the spreadsheet shows for empty optional fields.
SYNC_EMPTY_PLACEHOLDER: str = "—"

# ── Accounts ────────────────────────────────────────────────────────
MIN_PASSWORD_LENGTH: int = 8
PHONE_MIN_DIGITS: int = 10
PHONE_MAX_DIGITS: int = 15
