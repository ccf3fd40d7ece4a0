"""
Management command: resync_complaint
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Re-sends one or more complaints to the compliance spreadsheet and prints
the outcome.  Each run records exactly one new ``ComplianceSyncAttempt``
per complaint found.  Unknown ids are reported and skipped.  Failed syncs
are never retried automatically; this is the manual path.

Usage::

    python manage.py resync_complaint <complaint_id> [<complaint_id> ...]
"""

from django.core.management.base import BaseCommand, CommandError

from compliance.models import SyncOutcome
from compliance.services import ComplianceSyncService
from complaints.repository import ComplaintRepository
from core.domain.exceptions import NotFound


class Command(BaseCommand):
    help = "Re-dispatch the compliance sync of the given complaint(s), inline."

    def add_arguments(self, parser):
        parser.add_argument("complaint_ids", nargs="+", help="Complaint UUID(s).")

    def handle(self, *args, **options):
        repository = ComplaintRepository()
        service = ComplianceSyncService()
        failures = 0

        for raw_id in options["complaint_ids"]:
            try:
                complaint = repository.get(raw_id)
            except NotFound as exc:
                failures += 1
                self.stdout.write(self.style.ERROR(f"  ✘  {raw_id}: {exc}"))
                continue

            attempt = service.sync(complaint.pk)
            if attempt.outcome == SyncOutcome.SUCCESS:
                self.stdout.write(self.style.SUCCESS(f"  ✔  {complaint.pk}: synced"))
            else:
                failures += 1
                self.stdout.write(self.style.ERROR(f"  ✘  {complaint.pk}: {attempt.message}"))

        if failures:
            raise CommandError(f"{failures} complaint(s) failed to sync.")
