"""
Evidence app views.

``EvidenceDownloadView`` serves one evidence object for a signed,
short-lived token minted by ``EvidenceStore.signed_url``.  The token is
the credential, so the view needs no session or JWT.
"""

from __future__ import annotations

import posixpath

from django.http import FileResponse
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.views import APIView

from .storage import CONTENT_TYPE_BY_EXTENSION, EvidenceStore


class EvidenceDownloadView(APIView):
    """GET /api/evidence/{token}/"""

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Download evidence",
        description="Stream an evidence photo for a signed link. Links expire after 60 seconds.",
        responses={
            (200, "image/*"): OpenApiTypes.BINARY,
            403: OpenApiResponse(description="Expired or tampered link."),
            404: OpenApiResponse(description="Object no longer exists."),
        },
        tags=["Evidence"],
    )
    def get(self, request: Request, token: str) -> FileResponse:
        store = EvidenceStore()
        key = store.resolve_token(token)
        ext = posixpath.splitext(key)[1].lstrip(".").lower()
        return FileResponse(
            store.open(key),
            content_type=CONTENT_TYPE_BY_EXTENSION.get(ext, "application/octet-stream"),
            filename=posixpath.basename(key),
        )
