"""
Catalog Service Layer.

Read-only lookups over the train catalog.  ``resolve_coach`` is what the
complaint engine uses to snapshot coach metadata at submission time.
"""

from __future__ import annotations

from django.db.models import QuerySet

from core.constants import COMPLAINT_LIST_CAP
from core.domain.exceptions import NotFound

from .models import CoachFormation, Train


class CatalogService:

    @staticmethod
    def list_trains() -> QuerySet[Train]:
        return Train.objects.order_by("train_number")

    @staticmethod
    def get_train(train_number: str) -> Train:
        try:
            return Train.objects.get(train_number=train_number)
        except Train.DoesNotExist:
            raise NotFound(f"Train {train_number} not found.")

    @staticmethod
    def list_coaches(train_number: str) -> QuerySet[CoachFormation]:
        """Coaches of one train in rake order."""
        train = CatalogService.get_train(train_number)
        return train.coaches.order_by("position")[:COMPLAINT_LIST_CAP]

    @staticmethod
    def resolve_coach(train_number: str, coach_number: str) -> CoachFormation:
        """
        Look up a coach by train and coach number.

        Raises
        ------
        NotFound
            If the train is unknown or has no such coach.
        """
        try:
            return CoachFormation.objects.select_related("train").get(
                train__train_number=train_number,
                coach_number=coach_number,
            )
        except CoachFormation.DoesNotExist:
            if not Train.objects.filter(train_number=train_number).exists():
                raise NotFound(f"Train {train_number} not found.")
            raise NotFound(
                f"Coach {coach_number} not found in train {train_number}."
            )
