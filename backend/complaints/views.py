"""
Complaints app ViewSets.

Views are intentionally thin:

    1. Parse / validate input shape via a serializer.
    2. Delegate to ``ComplaintLifecycleService``.
    3. Serialize the result and return a DRF ``Response``.

Permission checks, validation limits and the compliance sync all happen
in the service.  Domain exceptions are rendered by
``core.domain.exception_handler``.
"""

from __future__ import annotations

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from compliance.serializers import ComplianceSyncAttemptSerializer
from compliance.services import ComplianceSyncService

from .models import Complaint
from .serializers import (
    ComplaintCreateSerializer,
    ComplaintFilterSerializer,
    ComplaintSerializer,
    ComplaintUpdateSerializer,
    EvidenceLinkSerializer,
    EvidenceUploadSerializer,
    StatusSummarySerializer,
)
from .services import ComplaintLifecycleService

_FILTER_PARAMETERS = [
    OpenApiParameter(name="status", type=str, required=False, description="open, in_progress or resolved."),
    OpenApiParameter(name="train_number", type=str, required=False, description="Exact train number."),
    OpenApiParameter(name="coach_number", type=str, required=False, description="Exact coach number."),
    OpenApiParameter(name="created_after", type=str, required=False, description="ISO date, inclusive."),
    OpenApiParameter(name="created_before", type=str, required=False, description="ISO date, inclusive."),
]


class ComplaintViewSet(viewsets.ViewSet):
    """
    /api/complaints/

    Every authenticated user may list, read and file complaints.  Who may
    edit, change status or delete is decided per complaint by the
    service; each complaint in a response carries ``capabilities`` for
    the current user.
    """

    permission_classes = [IsAuthenticated]
    queryset = Complaint.objects.none()
    lookup_value_regex = "[0-9a-fA-F-]{32,36}"

    def get_service(self) -> ComplaintLifecycleService:
        return ComplaintLifecycleService()

    def _render(self, service, complaints, request, *, many=False) -> dict | list:
        items = complaints if many else [complaints]
        caps = service.capabilities_map(items, request.user)
        return ComplaintSerializer(
            complaints, many=many, context={"capabilities": caps},
        ).data

    # ── Standard CRUD ────────────────────────────────────────────────

    @extend_schema(
        summary="List complaints",
        description="Newest first, at most 500 rows.",
        parameters=_FILTER_PARAMETERS,
        responses={200: ComplaintSerializer(many=True)},
        tags=["Complaints"],
    )
    def list(self, request: Request) -> Response:
        """GET /api/complaints/"""
        filter_serializer = ComplaintFilterSerializer(data=request.query_params)
        if not filter_serializer.is_valid():
            return Response(filter_serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        service = self.get_service()
        complaints = service.list_complaints(filter_serializer.validated_data, request.user)
        return Response(
            self._render(service, complaints, request, many=True),
            status=status.HTTP_200_OK,
        )

    @extend_schema(
        summary="File a complaint",
        description=(
            "Create a complaint against a coach. Reporter identity and coach "
            "metadata are filled in by the server. Photos may be sent in the "
            "same multipart request under `evidence`."
        ),
        request={
            "application/json": ComplaintCreateSerializer,
            "multipart/form-data": ComplaintCreateSerializer,
        },
        responses={
            201: ComplaintSerializer,
            400: OpenApiResponse(description="Validation error."),
            404: OpenApiResponse(description="Unknown train/coach or missing staff profile."),
            503: OpenApiResponse(description="Storage failure; `complaint_id` set if the complaint was saved."),
        },
        tags=["Complaints"],
    )
    def create(self, request: Request) -> Response:
        """POST /api/complaints/"""
        serializer = ComplaintCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        draft = dict(serializer.validated_data)
        draft.pop("evidence", None)

        service = self.get_service()
        complaint = service.submit_complaint(
            draft, request.user, request.FILES.getlist("evidence"),
        )
        return Response(
            self._render(service, complaint, request),
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(
        summary="Retrieve a complaint",
        responses={200: ComplaintSerializer},
        tags=["Complaints"],
    )
    def retrieve(self, request: Request, pk: str = None) -> Response:
        """GET /api/complaints/{id}/"""
        service = self.get_service()
        complaint = service.get_complaint(pk, request.user)
        return Response(self._render(service, complaint, request), status=status.HTTP_200_OK)

    @extend_schema(
        summary="Edit a complaint",
        description=(
            "Patch case content and, for in-charge/admin users, status. "
            "Reporting officers may edit their own unresolved complaints "
            "for 24 hours after filing."
        ),
        request=ComplaintUpdateSerializer,
        responses={
            200: ComplaintSerializer,
            400: OpenApiResponse(description="Validation error."),
            403: OpenApiResponse(description="Not allowed to edit this complaint."),
        },
        tags=["Complaints"],
    )
    def partial_update(self, request: Request, pk: str = None) -> Response:
        """PATCH /api/complaints/{id}/"""
        serializer = ComplaintUpdateSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        service = self.get_service()
        complaint = service.update_complaint(pk, serializer.validated_data, request.user)
        return Response(self._render(service, complaint, request), status=status.HTTP_200_OK)

    @extend_schema(
        summary="Delete a complaint",
        responses={
            204: OpenApiResponse(description="Deleted."),
            403: OpenApiResponse(description="Only in-charge or admin users can delete."),
        },
        tags=["Complaints"],
    )
    def destroy(self, request: Request, pk: str = None) -> Response:
        """DELETE /api/complaints/{id}/"""
        self.get_service().delete_complaint(pk, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ── Extra actions ────────────────────────────────────────────────

    @action(detail=False, methods=["get"], url_path="summary")
    @extend_schema(
        summary="Complaint dashboard summary",
        parameters=_FILTER_PARAMETERS,
        responses={200: StatusSummarySerializer},
        tags=["Complaints"],
    )
    def summary(self, request: Request) -> Response:
        """GET /api/complaints/summary/"""
        filter_serializer = ComplaintFilterSerializer(data=request.query_params)
        if not filter_serializer.is_valid():
            return Response(filter_serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        counts = self.get_service().status_summary(
            filter_serializer.validated_data, request.user,
        )
        return Response(StatusSummarySerializer(counts).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["get", "post"], url_path="evidence")
    @extend_schema(
        summary="Evidence links / attach evidence",
        description=(
            "GET returns signed download URLs valid for 60 seconds. "
            "POST (multipart, `evidence`) attaches photos; a complaint holds at most 3."
        ),
        request={"multipart/form-data": EvidenceUploadSerializer},
        responses={
            200: EvidenceLinkSerializer(many=True),
            201: ComplaintSerializer,
            400: OpenApiResponse(description="Too many files, wrong type or too large."),
            403: OpenApiResponse(description="Not allowed to edit this complaint."),
        },
        tags=["Complaints"],
    )
    def evidence(self, request: Request, pk: str = None) -> Response:
        """GET|POST /api/complaints/{id}/evidence/"""
        service = self.get_service()
        if request.method == "GET":
            links = service.evidence_urls(pk, request.user, request=request)
            return Response(EvidenceLinkSerializer(links, many=True).data, status=status.HTTP_200_OK)

        complaint = service.attach_evidence(pk, request.FILES.getlist("evidence"), request.user)
        return Response(self._render(service, complaint, request), status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get"], url_path="sync-attempts")
    @extend_schema(
        summary="Compliance sync history",
        description="Every attempt to mirror this complaint to the compliance sheet, newest first.",
        responses={200: ComplianceSyncAttemptSerializer(many=True)},
        tags=["Complaints"],
    )
    def sync_attempts(self, request: Request, pk: str = None) -> Response:
        """GET /api/complaints/{id}/sync-attempts/"""
        service = self.get_service()
        complaint = service.get_complaint(pk, request.user)
        attempts = ComplianceSyncService.attempts_for(complaint.pk)
        return Response(
            ComplianceSyncAttemptSerializer(attempts, many=True).data,
            status=status.HTTP_200_OK,
        )
