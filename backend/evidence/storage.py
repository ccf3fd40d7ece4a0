"""
evidence.storage — Evidence Store Adapter.

Thin wrapper around the Django storage configured under
``settings.EVIDENCE_STORAGE_ALIAS`` (a ``STORAGES`` alias).  The bucket is
private: objects are only reachable through short-lived signed URLs
served by ``evidence.views.EvidenceDownloadView``.

Object keys follow::

    {user_id}/{complaint_id}/{timestamp_ms}_{index}.{ext}
"""

from __future__ import annotations

import logging
import time
from typing import Any

from django.conf import settings
from django.core import signing
from django.core.files.base import ContentFile, File
from django.core.files.storage import storages
from django.urls import reverse

from core.constants import EVIDENCE_CONTENT_TYPES, EVIDENCE_URL_TTL_SECONDS
from core.domain.exceptions import NotFound, PermissionDenied, StoreError

logger = logging.getLogger(__name__)

_SIGNING_SALT = "evidence.download"

# extension → content type, for serving downloads
CONTENT_TYPE_BY_EXTENSION: dict[str, str] = {
    ext: content_type for content_type, ext in EVIDENCE_CONTENT_TYPES.items()
}


def build_evidence_key(
    user_id: Any,
    complaint_id: Any,
    index: int,
    content_type: str,
    *,
    timestamp_ms: int | None = None,
) -> str:
    """Object key for the *index*-th file of one upload batch."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    ext = EVIDENCE_CONTENT_TYPES.get(content_type, "jpg")
    return f"{user_id}/{complaint_id}/{timestamp_ms}_{index}.{ext}"


class EvidenceStore:
    """
    Upload, sign and delete evidence objects.

    All storage failures surface as ``StoreError`` with the original
    exception chained.
    """

    def __init__(self, storage=None) -> None:
        self._storage = storage

    @property
    def storage(self):
        if self._storage is None:
            return storages[getattr(settings, "EVIDENCE_STORAGE_ALIAS", "evidence")]
        return self._storage

    # ── Writes ───────────────────────────────────────────────────────

    def upload(self, key: str, content, content_type: str) -> str:
        """
        Store *content* under *key*.  Never overwrites.

        *content* may be raw bytes or any Django ``File`` (an
        ``UploadedFile`` from a request included).
        """
        if isinstance(content, (bytes, bytearray)):
            content = ContentFile(bytes(content))
        elif not isinstance(content, File):
            content = File(content)

        storage = self.storage
        try:
            if storage.exists(key):
                raise StoreError(f"Evidence object {key} already exists.")
            stored_name = storage.save(key, content)
        except StoreError:
            raise
        except Exception as exc:
            raise StoreError(f"Evidence upload failed for {key}: {exc}") from exc

        if stored_name != key:
            # The backend picked another name; a concurrent writer got there first.
            self.delete(stored_name)
            raise StoreError(f"Evidence object {key} already exists.")

        logger.info("Evidence object stored: %s (%s)", key, content_type)
        return key

    def delete(self, key: str) -> bool:
        """
        Best-effort removal.  Returns ``False`` and logs when the backend
        refuses; never raises.
        """
        try:
            self.storage.delete(key)
        except Exception:
            logger.warning("Could not delete evidence object %s", key, exc_info=True)
            return False
        return True

    # ── Reads ────────────────────────────────────────────────────────

    def open(self, key: str) -> File:
        storage = self.storage
        try:
            if not storage.exists(key):
                raise NotFound("Evidence file not found.")
            return storage.open(key, "rb")
        except NotFound:
            raise
        except Exception as exc:
            raise StoreError(f"Evidence read failed for {key}: {exc}") from exc

    # ── Signed URLs ──────────────────────────────────────────────────

    def signed_url(
        self,
        key: str,
        ttl_seconds: int = EVIDENCE_URL_TTL_SECONDS,
        request=None,
    ) -> str:
        """
        Return a download URL for *key* that stops working after
        *ttl_seconds*.  Absolute when *request* is given.
        """
        token = signing.dumps(
            {"key": key, "exp": int(time.time()) + ttl_seconds},
            salt=_SIGNING_SALT,
        )
        path = reverse("evidence:download", kwargs={"token": token})
        if request is not None:
            return request.build_absolute_uri(path)
        return path

    @staticmethod
    def resolve_token(token: str) -> str:
        """Return the object key a token grants, or raise ``PermissionDenied``."""
        try:
            payload = signing.loads(token, salt=_SIGNING_SALT)
        except signing.BadSignature:
            raise PermissionDenied("Invalid evidence link.")
        if payload.get("exp", 0) < time.time():
            raise PermissionDenied("Evidence link has expired.")
        return payload["key"]
