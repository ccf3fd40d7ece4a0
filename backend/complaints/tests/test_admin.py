"""
Django admin tests — complaints can be browsed there but never changed,
so status, content and deletion stay behind the lifecycle service.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.test import Client, TestCase
from django.urls import reverse

from complaints.models import Complaint, ComplaintStatus

User = get_user_model()


class TestComplaintAdmin(TestCase):

    @classmethod
    def setUpTestData(cls):
        cls.superuser = User.objects.create_superuser(
            username="root",
            email="root@example.test",
            password="Str0ng!Pass42",
            full_name="Site Root",
            staff_number="SN-root",
        )
        cls.complaint = Complaint.objects.create(
            reporter_user=cls.superuser,
            reporter_name="Site Root",
            reporter_staff_number="SN-root",
            train_number="12951",
            coach_number="B1",
            coach_class="3A",
            unit="Mumbai Central",
            configuration="LHB",
            capacity=72,
            position=5,
            pnr_number="4512345678",
            customer_name="R. Sharma",
            berth_number="34",
            issue_description="AC not cooling in bay 5",
            action_plan="Escalate to AC mechanic",
        )

    def setUp(self):
        self.client = Client()
        self.client.force_login(self.superuser)
        self.change_url = reverse(
            "admin:complaints_complaint_change", args=[self.complaint.pk],
        )

    def test_change_page_is_viewable(self):
        resp = self.client.get(self.change_url)
        self.assertEqual(resp.status_code, 200)

    def test_status_cannot_be_changed(self):
        resp = self.client.post(self.change_url, {
            "status": ComplaintStatus.RESOLVED,
            "issue_description": "Rewritten in the admin",
        })

        self.assertEqual(resp.status_code, 403)
        self.complaint.refresh_from_db()
        self.assertEqual(self.complaint.status, ComplaintStatus.OPEN)
        self.assertIsNone(self.complaint.resolved_at)
        self.assertEqual(self.complaint.issue_description, "AC not cooling in bay 5")

    def test_complaints_cannot_be_added(self):
        resp = self.client.get(reverse("admin:complaints_complaint_add"))
        self.assertEqual(resp.status_code, 403)

    def test_complaints_cannot_be_deleted(self):
        resp = self.client.post(
            reverse("admin:complaints_complaint_delete", args=[self.complaint.pk]),
            {"post": "yes"},
        )
        self.assertEqual(resp.status_code, 403)
        self.assertTrue(Complaint.objects.filter(pk=self.complaint.pk).exists())
