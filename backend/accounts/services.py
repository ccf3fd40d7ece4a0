"""
Accounts Service Layer.

Views stay *thin*: they validate input through serializers, call a
service method, and return the result wrapped in a DRF ``Response``.

- ``UserRegistrationService`` — roster-backed officer self-registration.
- ``CurrentUserService``      — "Me" endpoint helpers.
"""

from __future__ import annotations

import logging
from typing import Any

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Exists, OuterRef, Q, QuerySet

from core.domain.exceptions import ValidationError

from .models import AppRole, OfficerRoster, Role
from .roles import RoleFlags, RoleResolver

logger = logging.getLogger(__name__)

User = get_user_model()

NOT_ON_ROSTER = "Staff number is not on the officer roster."
ALREADY_REGISTERED = "An account already exists for this staff number."


# ═══════════════════════════════════════════════════════════════════
#  Registration Service
# ═══════════════════════════════════════════════════════════════════


class UserRegistrationService:
    """
    Officers create their own account by picking their roster entry.

    The new account takes its ``full_name`` from the roster, uses the
    staff number as username and holds the ``officer`` role.  Privileged
    roles are only ever assigned by an administrator.
    """

    @staticmethod
    def open_roster() -> QuerySet[OfficerRoster]:
        """Roster entries that have no account yet, ordered by name."""
        claimed = User.objects.filter(staff_number=OuterRef("staff_number"))
        return OfficerRoster.objects.filter(~Exists(claimed))

    @staticmethod
    def register_officer(staff_number: str, password: str) -> User:
        """
        Raises
        ------
        core.domain.exceptions.ValidationError
            Unknown staff number, or one that already has an account.
        """
        staff_number = staff_number.strip()
        try:
            entry = OfficerRoster.objects.get(staff_number=staff_number)
        except OfficerRoster.DoesNotExist:
            raise ValidationError(NOT_ON_ROSTER, field="staff_number")

        if User.objects.filter(Q(staff_number=staff_number) | Q(username=staff_number)).exists():
            raise ValidationError(ALREADY_REGISTERED, field="staff_number")

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=staff_number,
                    password=password,
                    full_name=entry.full_name,
                    staff_number=staff_number,
                    role=_officer_role(),
                )
        except IntegrityError:
            raise ValidationError(ALREADY_REGISTERED, field="staff_number")

        logger.info("Officer %s registered from the roster", staff_number)
        return user


def _officer_role() -> Role:
    role, _ = Role.objects.get_or_create(
        name=AppRole.OFFICER,
        defaults={"hierarchy_level": 1},
    )
    return role


# ═══════════════════════════════════════════════════════════════════
#  Current User ("Me") Service
# ═══════════════════════════════════════════════════════════════════


class CurrentUserService:
    """
    Helpers for the "Me" endpoint.

    The client uses it to discover who the logged-in user is and whether
    they hold a privileged role, so it can hide edit, status and delete
    controls the server would refuse anyway.
    """

    @staticmethod
    def get_profile(user: User) -> tuple[User, RoleFlags]:
        """
        Re-fetch *user* with its role and resolve a fresh ``RoleFlags``
        snapshot for it.
        """
        profile = User.objects.select_related("role").get(pk=user.pk)
        return profile, RoleResolver().resolve(profile)

    @staticmethod
    def update_profile(user: User, validated_data: dict[str, Any]) -> tuple[User, RoleFlags]:
        """
        Update the user's own ``full_name`` and/or ``phone``.

        Complaints already filed keep the reporter name they were
        submitted with.
        """
        for field, value in validated_data.items():
            setattr(user, field, value)
        if validated_data:
            user.save(update_fields=list(validated_data.keys()))
        return CurrentUserService.get_profile(user)

    @staticmethod
    def change_password(user: User, new_password: str) -> None:
        user.set_password(new_password)
        user.save(update_fields=["password"])
        logger.info("User %s changed their password", user.pk)
