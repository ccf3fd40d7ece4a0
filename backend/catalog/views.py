"""
Catalog app ViewSets.

Read-only.  The client uses these to populate the train and coach
pickers of the complaint form.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from .models import Train
from .serializers import CoachFormationSerializer, TrainSerializer
from .services import CatalogService


class TrainViewSet(viewsets.ViewSet):
    """
    /api/catalog/trains/

    Lookups are by ``train_number`` rather than primary key.
    """

    permission_classes = [IsAuthenticated]
    queryset = Train.objects.none()
    lookup_field = "train_number"
    lookup_value_regex = "[^/]+"

    @extend_schema(
        summary="List trains",
        responses={200: TrainSerializer(many=True)},
        tags=["Catalog"],
    )
    def list(self, request: Request) -> Response:
        """GET /api/catalog/trains/"""
        serializer = TrainSerializer(CatalogService.list_trains(), many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["get"], url_path="coaches")
    @extend_schema(
        summary="List coaches of a train",
        description="Coach formation of one train, ordered by position.",
        responses={
            200: CoachFormationSerializer(many=True),
            404: OpenApiResponse(description="Unknown train."),
        },
        tags=["Catalog"],
    )
    def coaches(self, request: Request, train_number: str = None) -> Response:
        """GET /api/catalog/trains/{train_number}/coaches/"""
        coaches = CatalogService.list_coaches(train_number)
        serializer = CoachFormationSerializer(coaches, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)
