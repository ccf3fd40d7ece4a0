"""
Role resolver tests — flag resolution, fail-closed behaviour and the
``setup_roles`` seeding command.
"""

from __future__ import annotations

import pytest
from django.contrib.auth.models import AnonymousUser
from django.core.management import call_command

from accounts.models import AppRole, Role
from accounts.roles import RoleFlags, RoleResolution, RoleResolver


class _FailingBackend:
    def is_admin(self, actor):
        return False

    def is_in_charge(self, actor):
        raise ConnectionError("role service unreachable")

    def is_admin_or_in_charge(self, actor):
        return True


class TestRoleFlags:

    def test_unresolved_and_denied_are_never_privileged(self):
        assert not RoleFlags.unresolved().is_privileged
        assert not RoleFlags.denied().is_privileged

    def test_only_resolved_admin_or_in_charge_is_privileged(self):
        assert RoleFlags.resolved(
            is_admin=False, is_in_charge=True, is_admin_or_in_charge=True,
        ).is_privileged
        assert not RoleFlags.resolved(
            is_admin=False, is_in_charge=False, is_admin_or_in_charge=False,
        ).is_privileged
        forged = RoleFlags(resolution=RoleResolution.DENIED, is_admin_or_in_charge=True)
        assert not forged.is_privileged


@pytest.mark.django_db
class TestRoleResolver:

    def test_anonymous_is_denied(self):
        flags = RoleResolver().resolve(AnonymousUser())
        assert flags == RoleFlags.denied()
        assert RoleResolver().resolve(None) == RoleFlags.denied()

    @pytest.mark.parametrize(
        "role_name,expected",
        [
            (AppRole.OFFICER, (False, False, False)),
            (AppRole.IN_CHARGE, (False, True, True)),
            (AppRole.ADMIN, (True, False, True)),
        ],
    )
    def test_flags_follow_role(self, create_user, roles, role_name, expected):
        user = create_user(role=roles[role_name])
        flags = RoleResolver().resolve(user)

        assert flags.resolution is RoleResolution.RESOLVED
        assert (flags.is_admin, flags.is_in_charge, flags.is_admin_or_in_charge) == expected

    def test_user_without_role_is_an_officer(self, create_user):
        flags = RoleResolver().resolve(create_user())
        assert flags.resolution is RoleResolution.RESOLVED
        assert not flags.is_privileged

    def test_superuser_counts_as_admin(self, create_user):
        flags = RoleResolver().resolve(create_user(is_superuser=True))
        assert flags.is_admin
        assert flags.is_privileged

    def test_backend_error_fails_closed(self, create_user, roles):
        user = create_user(role=roles[AppRole.ADMIN])
        flags = RoleResolver(backend=_FailingBackend()).resolve(user)
        assert flags == RoleFlags.denied()

    def test_backend_from_settings(self, create_user, roles, settings):
        settings.COMPLAINTS_AUTHORIZATION_BACKEND = "accounts.tests.test_roles._FailingBackend"
        flags = RoleResolver().resolve(create_user(role=roles[AppRole.ADMIN]))
        assert flags == RoleFlags.denied()


@pytest.mark.django_db
class TestSetupRolesCommand:

    def test_seeds_three_roles_idempotently(self):
        call_command("setup_roles")
        call_command("setup_roles")

        assert set(Role.objects.values_list("name", flat=True)) == set(AppRole.values)
        assert Role.objects.get(name=AppRole.ADMIN).hierarchy_level == 100
        assert Role.objects.get(name=AppRole.OFFICER).hierarchy_level == 1

    def test_restores_drifted_description(self):
        Role.objects.create(name=AppRole.IN_CHARGE, description="old", hierarchy_level=7)
        call_command("setup_roles")

        role = Role.objects.get(name=AppRole.IN_CHARGE)
        assert role.hierarchy_level == 50
        assert role.description != "old"
