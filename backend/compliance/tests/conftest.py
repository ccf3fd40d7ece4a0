from __future__ import annotations

import pytest


@pytest.fixture()
def complaint(create_user, roles, coach):
    """One open complaint filed by an officer against coach B1 of 12951."""
    from complaints.models import Complaint

    reporter = create_user(username="reporter", full_name="Asha Verma", role=roles["officer"])
    return Complaint.objects.create(
        reporter_user=reporter,
        reporter_name=reporter.full_name,
        reporter_staff_number=reporter.staff_number,
        train_number=coach.train.train_number,
        coach_number=coach.coach_number,
        coach_class=coach.coach_class,
        unit=coach.unit,
        configuration=coach.configuration,
        capacity=coach.capacity,
        position=coach.position,
        pnr_number="4512345678",
        customer_name="R. Sharma",
        berth_number="34",
        issue_description="AC not cooling in bay 5",
        action_plan="Escalate to AC mechanic",
    )
