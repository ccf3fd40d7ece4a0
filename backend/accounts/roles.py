"""
accounts.roles — Role Resolver.

Turns an authenticated actor into a ``RoleFlags`` snapshot by asking the
configured authorization backend three independent questions:

    is_admin, is_in_charge, is_admin_or_in_charge

The snapshot is recomputed on every call and never cached.  Resolution
fails closed: an anonymous actor, or any error raised while answering
any of the questions, yields the ``denied`` snapshot (all flags false).

The backend is swappable through
``settings.COMPLAINTS_AUTHORIZATION_BACKEND`` (a dotted path).
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from django.conf import settings
from django.utils.module_loading import import_string

from .models import AppRole, Role

logger = logging.getLogger(__name__)

DEFAULT_AUTHORIZATION_BACKEND = "accounts.roles.RoleAuthorizationBackend"


class RoleResolution(enum.Enum):
    """Where a ``RoleFlags`` snapshot came from."""

    UNRESOLVED = "unresolved"
    DENIED = "denied"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class RoleFlags:
    """
    Privilege snapshot for one actor.

    Only a ``RESOLVED`` snapshot can be privileged.  ``unresolved()`` and
    ``denied()`` carry all-false flags and are never privileged, so a
    snapshot that was never filled in cannot grant anything.
    """

    resolution: RoleResolution
    is_admin: bool = False
    is_in_charge: bool = False
    is_admin_or_in_charge: bool = False

    @classmethod
    def unresolved(cls) -> RoleFlags:
        return cls(resolution=RoleResolution.UNRESOLVED)

    @classmethod
    def denied(cls) -> RoleFlags:
        return cls(resolution=RoleResolution.DENIED)

    @classmethod
    def resolved(
        cls,
        *,
        is_admin: bool,
        is_in_charge: bool,
        is_admin_or_in_charge: bool,
    ) -> RoleFlags:
        return cls(
            resolution=RoleResolution.RESOLVED,
            is_admin=bool(is_admin),
            is_in_charge=bool(is_in_charge),
            is_admin_or_in_charge=bool(is_admin_or_in_charge),
        )

    @property
    def is_privileged(self) -> bool:
        return self.resolution is RoleResolution.RESOLVED and self.is_admin_or_in_charge

    def as_dict(self) -> dict:
        return {
            "resolution": self.resolution.value,
            "is_admin": self.is_admin,
            "is_in_charge": self.is_in_charge,
            "is_admin_or_in_charge": self.is_admin_or_in_charge,
        }


class RoleAuthorizationBackend:
    """
    Answers role questions from the ``Role`` table.

    Each question is a fresh query so a role change takes effect on the
    actor's next request.  Superusers count as admins.
    """

    def _has_role(self, actor, *names: str) -> bool:
        return Role.objects.filter(users__pk=actor.pk, name__in=names).exists()

    def is_admin(self, actor) -> bool:
        return actor.is_superuser or self._has_role(actor, AppRole.ADMIN)

    def is_in_charge(self, actor) -> bool:
        return self._has_role(actor, AppRole.IN_CHARGE)

    def is_admin_or_in_charge(self, actor) -> bool:
        return actor.is_superuser or self._has_role(
            actor, AppRole.ADMIN, AppRole.IN_CHARGE,
        )


def get_authorization_backend():
    path = getattr(
        settings, "COMPLAINTS_AUTHORIZATION_BACKEND", DEFAULT_AUTHORIZATION_BACKEND,
    )
    return import_string(path)()


class RoleResolver:
    """Resolve an actor to ``RoleFlags`` using the configured backend."""

    def __init__(self, backend=None) -> None:
        self._backend = backend

    @property
    def backend(self):
        if self._backend is None:
            return get_authorization_backend()
        return self._backend

    def resolve(self, actor) -> RoleFlags:
        if actor is None or not getattr(actor, "is_authenticated", False):
            return RoleFlags.denied()

        try:
            backend = self.backend
            is_admin = backend.is_admin(actor)
            is_in_charge = backend.is_in_charge(actor)
            is_admin_or_in_charge = backend.is_admin_or_in_charge(actor)
        except Exception:
            logger.exception(
                "Role resolution failed for user %s; treating as unprivileged",
                getattr(actor, "pk", None),
            )
            return RoleFlags.denied()

        return RoleFlags.resolved(
            is_admin=is_admin,
            is_in_charge=is_in_charge,
            is_admin_or_in_charge=is_admin_or_in_charge,
        )


def resolve_role_flags(actor) -> RoleFlags:
    """Shortcut for ``RoleResolver().resolve(actor)``."""
    return RoleResolver().resolve(actor)
