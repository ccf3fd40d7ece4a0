"""
Root conftest.py — shared fixtures for the entire test suite.

Provides:
  - ``api_client`` fixture returning a DRF ``APIClient``.
  - ``create_user`` factory fixture for creating staff users.
  - ``auth_header`` fixture for authenticated requests (JWT).
  - ``roles`` fixture seeding the admin / in_charge / officer roles.
  - ``coach`` fixture with one train and one coach in the catalog.
"""

from __future__ import annotations

import pytest
from rest_framework.test import APIClient


@pytest.fixture()
def api_client() -> APIClient:
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture()
def roles(db) -> dict:
    """``{"admin": Role, "in_charge": Role, "officer": Role}``"""
    from accounts.models import AppRole, Role

    return {
        name: Role.objects.get_or_create(name=name)[0]
        for name in AppRole.values
    }


@pytest.fixture()
def create_user(db):
    """
    Factory fixture that creates a staff user with sensible defaults.

    Usage::

        def test_something(create_user, roles):
            officer = create_user(username="alice", role=roles["officer"])
    """
    from accounts.models import User

    _counter = 0

    def _factory(
        *,
        username: str | None = None,
        password: str = "TestPass123!",
        full_name: str | None = None,
        staff_number: str | None = None,
        role=None,
        is_active: bool = True,
        **kwargs,
    ) -> User:
        nonlocal _counter
        _counter += 1
        if username is None:
            username = f"testuser{_counter}"
        if full_name is None:
            full_name = f"Test User {_counter}"
        if staff_number is None:
            staff_number = f"STF{_counter:05d}"

        return User.objects.create_user(
            username=username,
            password=password,
            email=f"{username}@test.local",
            full_name=full_name,
            staff_number=staff_number,
            role=role,
            is_active=is_active,
            **kwargs,
        )

    return _factory


@pytest.fixture()
def auth_header(create_user):
    """
    Returns a helper that creates a user and returns an ``Authorization``
    header dict with a valid JWT access token.

    Usage::

        def test_protected(auth_header, api_client):
            header = auth_header(username="alice")
            api_client.credentials(HTTP_AUTHORIZATION=header["Authorization"])
            resp = api_client.get("/api/complaints/")
            assert resp.status_code != 401
    """
    from rest_framework_simplejwt.tokens import AccessToken

    def _make(*, username: str | None = None, role=None, **user_kwargs) -> dict[str, str]:
        user = create_user(username=username, role=role, **user_kwargs)
        token = AccessToken.for_user(user)
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture()
def coach(db):
    """Train 12951 with coach B1 (3A, position 5)."""
    from catalog.models import CoachFormation, Train

    train = Train.objects.create(train_number="12951")
    return CoachFormation.objects.create(
        train=train,
        coach_number="B1",
        coach_class="3A",
        unit="Mumbai Central",
        configuration="LHB",
        capacity=72,
        position=5,
    )
