"""
Integration tests — officer self-registration and profile self-service.

Endpoints under test:
    GET   /api/accounts/auth/roster/     (named URL: accounts:roster)
    POST  /api/accounts/auth/register/   (named URL: accounts:register)
    PATCH /api/accounts/me/              (named URL: accounts:me)
    POST  /api/accounts/me/password/     (named URL: accounts:me-password)
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from accounts.models import AppRole, OfficerRoster, Role

User = get_user_model()

# ── Constants ────────────────────────────────────────────────────────────────
_PASSWORD = "Str0ng!Pass77"


class TestOfficerRegistration(TestCase):

    @classmethod
    def setUpTestData(cls):
        OfficerRoster.objects.create(staff_number="WR-10001", full_name="Kavya Rao")
        OfficerRoster.objects.create(staff_number="WR-10002", full_name="Anil Desai")
        OfficerRoster.objects.create(staff_number="WR-10003", full_name="Bina Shah")
        User.objects.create_user(
            username="bina",
            password=_PASSWORD,
            full_name="Bina Shah",
            staff_number="WR-10003",
        )

    def setUp(self):
        self.client = APIClient()
        self.register_url = reverse("accounts:register")

    def _register(self, staff_number, password=_PASSWORD, confirm=None):
        return self.client.post(
            self.register_url,
            {
                "staff_number": staff_number,
                "password": password,
                "password_confirm": password if confirm is None else confirm,
            },
            format="json",
        )

    def test_roster_lists_unclaimed_entries_by_name(self):
        resp = self.client.get(reverse("accounts:roster"))

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [entry["staff_number"] for entry in resp.data],
            ["WR-10002", "WR-10001"],
        )
        self.assertEqual(resp.data[0]["full_name"], "Anil Desai")

    def test_register_creates_officer_from_roster(self):
        resp = self._register("WR-10001")

        self.assertEqual(resp.status_code, status.HTTP_201_CREATED, msg=resp.data)
        self.assertEqual(resp.data["full_name"], "Kavya Rao")
        self.assertEqual(resp.data["staff_number"], "WR-10001")
        user = User.objects.get(staff_number="WR-10001")
        self.assertEqual(user.role.name, AppRole.OFFICER)
        self.assertTrue(user.check_password(_PASSWORD))

    def test_registered_officer_can_log_in_with_staff_number(self):
        self._register("WR-10002")

        resp = self.client.post(
            reverse("accounts:login"),
            {"identifier": "WR-10002", "password": _PASSWORD},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.assertEqual(resp.data["user"]["full_name"], "Anil Desai")

    def test_register_reuses_seeded_officer_role(self):
        seeded = Role.objects.create(name=AppRole.OFFICER, hierarchy_level=1)
        self._register("WR-10001")
        self.assertEqual(User.objects.get(staff_number="WR-10001").role, seeded)

    def test_unknown_staff_number_is_400(self):
        resp = self._register("WR-99999")

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["field"], "staff_number")
        self.assertFalse(User.objects.filter(staff_number="WR-99999").exists())

    def test_second_registration_is_400(self):
        resp = self._register("WR-10003")

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.data["detail"], "An account already exists for this staff number.")
        self.assertEqual(User.objects.filter(staff_number="WR-10003").count(), 1)

    def test_short_password_is_400(self):
        resp = self._register("WR-10001", password="short")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password", resp.data)

    def test_mismatched_confirmation_is_400(self):
        resp = self._register("WR-10001", confirm="Different!Pass1")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password_confirm", resp.data)
        self.assertFalse(User.objects.filter(staff_number="WR-10001").exists())


class SelfServiceTestCase(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.user = User.objects.create_user(
            username="officer_k",
            password=_PASSWORD,
            full_name="Kavya Rao",
            staff_number="WR-20001",
            phone="9876543210",
        )

    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(self.user)


class TestProfileUpdate(SelfServiceTestCase):

    def _patch(self, payload):
        return self.client.patch(reverse("accounts:me"), payload, format="json")

    def test_update_name_and_phone(self):
        resp = self._patch({"full_name": "  Kavya R. Rao ", "phone": "+91 98765-43211"})

        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.assertEqual(resp.data["full_name"], "Kavya R. Rao")
        self.assertEqual(resp.data["phone"], "919876543211")
        self.assertIsNotNone(resp.data["role_flags"])
        self.user.refresh_from_db()
        self.assertEqual(self.user.full_name, "Kavya R. Rao")

    def test_blank_name_is_400(self):
        resp = self._patch({"full_name": "   "})

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("full_name", resp.data)
        self.user.refresh_from_db()
        self.assertEqual(self.user.full_name, "Kavya Rao")

    def test_phone_outside_ten_to_fifteen_digits_is_400(self):
        for phone in ("98765", "1234567890123456"):
            resp = self._patch({"phone": phone})
            self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST, msg=phone)
            self.assertIn("phone", resp.data)

    def test_empty_phone_clears_it(self):
        resp = self._patch({"phone": ""})

        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.user.refresh_from_db()
        self.assertEqual(self.user.phone, "")

    def test_staff_number_and_role_are_not_editable(self):
        resp = self._patch({"staff_number": "WR-00000", "role": None, "full_name": "Kavya"})

        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)
        self.user.refresh_from_db()
        self.assertEqual(self.user.staff_number, "WR-20001")

    def test_requires_authentication(self):
        self.client.force_authenticate(None)
        resp = self._patch({"full_name": "Someone"})
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)


class TestPasswordChange(SelfServiceTestCase):

    def _post(self, new_password, confirm_password=None):
        return self.client.post(
            reverse("accounts:me-password"),
            {
                "new_password": new_password,
                "confirm_password": new_password if confirm_password is None else confirm_password,
            },
            format="json",
        )

    def test_change_password(self):
        resp = self._post("N3w!Passw0rd")

        self.assertEqual(resp.status_code, status.HTTP_204_NO_CONTENT)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password("N3w!Passw0rd"))
        self.assertFalse(self.user.check_password(_PASSWORD))

    def test_new_password_logs_in(self):
        self._post("N3w!Passw0rd")
        resp = APIClient().post(
            reverse("accounts:login"),
            {"identifier": "WR-20001", "password": "N3w!Passw0rd"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK, msg=resp.data)

    def test_seven_characters_is_400(self):
        resp = self._post("Abc!123")

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("new_password", resp.data)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password(_PASSWORD))

    def test_mismatched_confirmation_is_400(self):
        resp = self._post("N3w!Passw0rd", "N3w!Passw0rx")

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("confirm_password", resp.data)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password(_PASSWORD))
