"""
SyncDispatcher tests — hand-off after commit, eager and thread modes,
bounded queue behaviour.
"""

from __future__ import annotations

import threading

import httpx
import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from compliance.dispatch import (
    MODE_EAGER,
    MODE_THREAD,
    QUEUE_FULL_MESSAGE,
    SyncDispatcher,
    get_sync_dispatcher,
    reset_sync_dispatcher,
)
from compliance.models import ComplianceSyncAttempt, SyncOutcome
from compliance.services import ComplianceSyncService


class RecordingSyncService:
    """Stands in for ComplianceSyncService without touching the database."""

    def __init__(self, block: threading.Event | None = None):
        self.synced = []
        self.failures = []
        self.started = threading.Event()
        self._block = block

    def sync(self, complaint_id):
        self.started.set()
        if self._block is not None:
            self._block.wait(timeout=5)
        self.synced.append(complaint_id)

    def record_failure(self, complaint_id, message):
        self.failures.append((complaint_id, message))


class ExplodingSyncService(RecordingSyncService):
    def sync(self, complaint_id):
        raise RuntimeError("boom")


@pytest.mark.django_db
class TestSyncDispatcher:

    def test_eager_runs_after_commit(self, django_capture_on_commit_callbacks):
        service = RecordingSyncService()
        dispatcher = SyncDispatcher(service, mode=MODE_EAGER)

        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            dispatcher.dispatch("c-1")
        assert service.synced == []

        for callback in callbacks:
            callback()
        assert service.synced == ["c-1"]

    def test_dispatch_never_raises(self, django_capture_on_commit_callbacks):
        dispatcher = SyncDispatcher(ExplodingSyncService(), mode=MODE_EAGER)
        with django_capture_on_commit_callbacks(execute=True):
            dispatcher.dispatch("c-1")

    def test_unexpected_error_still_records_one_attempt(
        self, complaint, django_capture_on_commit_callbacks,
    ):
        def handler(request):
            raise RuntimeError("socket wedged")

        service = ComplianceSyncService(
            webhook_url="https://sheets.example.test/hook",
            transport=httpx.MockTransport(handler),
        )
        dispatcher = SyncDispatcher(service, mode=MODE_EAGER)
        with django_capture_on_commit_callbacks(execute=True):
            dispatcher.dispatch(complaint.pk)

        attempt = ComplianceSyncAttempt.objects.get(complaint_id=complaint.pk)
        assert attempt.outcome == SyncOutcome.FAILED
        assert attempt.message == "RuntimeError: socket wedged"

    def test_thread_mode_drains(self, django_capture_on_commit_callbacks):
        service = RecordingSyncService()
        dispatcher = SyncDispatcher(service, mode=MODE_THREAD, queue_size=10)
        try:
            with django_capture_on_commit_callbacks(execute=True):
                for complaint_id in ("c-1", "c-2", "c-3"):
                    dispatcher.dispatch(complaint_id)
            dispatcher.drain()
            assert service.synced == ["c-1", "c-2", "c-3"]
        finally:
            dispatcher.stop()

    def test_full_queue_records_failure(self, django_capture_on_commit_callbacks):
        release = threading.Event()
        service = RecordingSyncService(block=release)
        dispatcher = SyncDispatcher(service, mode=MODE_THREAD, queue_size=1)
        try:
            with django_capture_on_commit_callbacks(execute=True):
                dispatcher.dispatch("c-1")
            # The worker now holds c-1, so the queue has room for one id.
            assert service.started.wait(timeout=5)

            with django_capture_on_commit_callbacks(execute=True):
                dispatcher.dispatch("c-2")
                dispatcher.dispatch("c-3")

            release.set()
            dispatcher.drain()
            assert service.synced == ["c-1", "c-2"]
            assert service.failures == [("c-3", QUEUE_FULL_MESSAGE)]
        finally:
            release.set()
            dispatcher.stop()

    def test_process_wide_dispatcher_is_shared(self, settings):
        reset_sync_dispatcher()
        try:
            first = get_sync_dispatcher()
            assert get_sync_dispatcher() is first
            assert first.mode == settings.COMPLIANCE_SYNC["MODE"]
        finally:
            reset_sync_dispatcher()


# ════════════════════════════════════════════════════════════════════
#  resync_complaint management command
# ════════════════════════════════════════════════════════════════════

@pytest.mark.django_db
class TestResyncCommand:

    @pytest.fixture()
    def patch_webhook(self, monkeypatch):
        def _patch(handler):
            monkeypatch.setattr(
                "compliance.management.commands.resync_complaint.ComplianceSyncService",
                lambda: ComplianceSyncService(transport=httpx.MockTransport(handler)),
            )
        return _patch

    def test_resync_success(self, complaint, patch_webhook, capsys):
        patch_webhook(lambda r: httpx.Response(200))

        call_command("resync_complaint", str(complaint.pk))

        assert "synced" in capsys.readouterr().out
        attempt = ComplianceSyncAttempt.objects.get(complaint_id=complaint.pk)
        assert attempt.outcome == SyncOutcome.SUCCESS

    def test_resync_failure_is_reported(self, complaint, patch_webhook):
        patch_webhook(lambda r: httpx.Response(503, text="Service Unavailable"))

        with pytest.raises(CommandError):
            call_command("resync_complaint", str(complaint.pk))

        attempt = ComplianceSyncAttempt.objects.get(complaint_id=complaint.pk)
        assert attempt.outcome == SyncOutcome.FAILED
        assert attempt.message == "HTTP 503: Service Unavailable"

    def test_unknown_complaint(self, patch_webhook, capsys):
        patch_webhook(lambda r: httpx.Response(200))
        with pytest.raises(CommandError, match="1 complaint"):
            call_command("resync_complaint", "8c2f5a4e-0000-4000-8000-000000000000")
        assert "not found" in capsys.readouterr().out

    def test_unknown_id_does_not_stop_the_batch(self, complaint, patch_webhook, capsys):
        patch_webhook(lambda r: httpx.Response(200))

        with pytest.raises(CommandError, match="1 complaint"):
            call_command(
                "resync_complaint", "not-a-uuid", str(complaint.pk),
            )

        out = capsys.readouterr().out
        assert "not-a-uuid" in out
        assert f"{complaint.pk}: synced" in out
        attempt = ComplianceSyncAttempt.objects.get(complaint_id=complaint.pk)
        assert attempt.outcome == SyncOutcome.SUCCESS
