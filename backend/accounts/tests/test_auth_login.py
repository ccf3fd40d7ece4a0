"""
Integration tests — login and current-user profile.

Endpoints under test:
    POST /api/accounts/auth/login/     (named URL: accounts:login)
    GET  /api/accounts/me/             (named URL: accounts:me)

Login payload:    {"identifier": "<username|staff_number>", "password": "..."}
Login response:   HTTP 200, {"access": "...", "refresh": "...", "user": {...}}
Failure response: HTTP 400 from CustomTokenObtainPairSerializer.validate
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import AppRole, Role

User = get_user_model()

# ── Constants ────────────────────────────────────────────────────────────────
_PASSWORD = "Str0ng!Pass99"


class TestLogin(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.role = Role.objects.create(name=AppRole.IN_CHARGE, hierarchy_level=50)
        cls.user = User.objects.create_user(
            username="coach_ic",
            password=_PASSWORD,
            full_name="Meera Iyer",
            staff_number="WR-40417",
            role=cls.role,
        )

    def setUp(self):
        self.client = APIClient()
        self.login_url = reverse("accounts:login")

    def _post_login(self, identifier: str, password: str):
        return self.client.post(
            self.login_url,
            {"identifier": identifier, "password": password},
            format="json",
        )

    def test_login_with_username(self):
        resp = self._post_login("coach_ic", _PASSWORD)

        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.assertIn("access", resp.data)
        self.assertIn("refresh", resp.data)
        self.assertEqual(resp.data["user"]["staff_number"], "WR-40417")
        self.assertEqual(resp.data["user"]["role_detail"]["name"], AppRole.IN_CHARGE)

    def test_login_with_staff_number(self):
        resp = self._post_login("WR-40417", _PASSWORD)
        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.assertEqual(resp.data["user"]["id"], self.user.pk)

    def test_token_carries_role_and_staff_number(self):
        resp = self._post_login("coach_ic", _PASSWORD)
        token = AccessToken(resp.data["access"])
        self.assertEqual(token["role"], AppRole.IN_CHARGE)
        self.assertEqual(token["staff_number"], "WR-40417")

    def test_wrong_password(self):
        resp = self._post_login("coach_ic", "wrong-password")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertNotIn("access", resp.data)

    def test_unknown_identifier(self):
        resp = self._post_login("nobody", _PASSWORD)
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_inactive_user_cannot_log_in(self):
        User.objects.filter(pk=self.user.pk).update(is_active=False)
        resp = self._post_login("coach_ic", _PASSWORD)
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)


class TestMeEndpoint(TestCase):

    @classmethod
    def setUpTestData(cls):
        roles = {name: Role.objects.create(name=name) for name in AppRole.values}
        cls.officer = User.objects.create_user(
            username="officer", password=_PASSWORD, full_name="Ravi Kumar",
            staff_number="WR-1", role=roles[AppRole.OFFICER],
        )
        cls.admin = User.objects.create_user(
            username="admin", password=_PASSWORD, full_name="Anil Desai",
            staff_number="WR-2", role=roles[AppRole.ADMIN],
        )

    def setUp(self):
        self.client = APIClient()
        self.me_url = reverse("accounts:me")

    def _authenticate(self, user):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(user)}")

    def test_requires_authentication(self):
        resp = self.client.get(self.me_url)
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_officer_flags(self):
        self._authenticate(self.officer)
        resp = self.client.get(self.me_url)

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["full_name"], "Ravi Kumar")
        self.assertEqual(
            resp.data["role_flags"],
            {
                "resolution": "resolved",
                "is_admin": False,
                "is_in_charge": False,
                "is_admin_or_in_charge": False,
            },
        )

    def test_admin_flags(self):
        self._authenticate(self.admin)
        resp = self.client.get(self.me_url)

        self.assertTrue(resp.data["role_flags"]["is_admin"])
        self.assertFalse(resp.data["role_flags"]["is_in_charge"])
        self.assertTrue(resp.data["role_flags"]["is_admin_or_in_charge"])

    def test_role_change_applies_on_next_request(self):
        self._authenticate(self.officer)
        self.assertFalse(self.client.get(self.me_url).data["role_flags"]["is_admin_or_in_charge"])

        User.objects.filter(pk=self.officer.pk).update(
            role=Role.objects.get(name=AppRole.IN_CHARGE),
        )
        flags = self.client.get(self.me_url).data["role_flags"]
        self.assertTrue(flags["is_in_charge"])
        self.assertTrue(flags["is_admin_or_in_charge"])
