"""
compliance.dispatch — Background hand-off of compliance syncs.

``SyncDispatcher.dispatch`` is fire-and-forget from the caller's point of
view.  The hand-off waits for the surrounding transaction to commit, then
puts the complaint id on a bounded queue drained by one daemon worker
thread.  In ``eager`` mode the sync runs inline in the commit hook
instead.

Delivery is best effort: ids still queued when the process exits are
lost, and a full queue records a failed attempt instead of blocking.
Nothing in here raises to the caller.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Any

from django.conf import settings
from django.db import close_old_connections, transaction

from .services import ComplianceSyncService

logger = logging.getLogger(__name__)

MODE_THREAD = "thread"
MODE_EAGER = "eager"

QUEUE_FULL_MESSAGE = "dispatch queue full"

_STOP = object()


class SyncDispatcher:

    def __init__(
        self,
        service: ComplianceSyncService | None = None,
        *,
        mode: str | None = None,
        queue_size: int | None = None,
    ) -> None:
        config = settings.COMPLIANCE_SYNC
        self.service = service or ComplianceSyncService()
        self.mode = mode or config.get("MODE", MODE_THREAD)
        self._queue: queue.Queue = queue.Queue(
            maxsize=queue_size or config.get("QUEUE_SIZE", 100),
        )
        self._worker: threading.Thread | None = None
        self._lock = threading.Lock()

    # ── Public API ───────────────────────────────────────────────────

    def dispatch(self, complaint_id: Any) -> None:
        """Schedule one sync of *complaint_id* once the transaction commits."""
        try:
            transaction.on_commit(lambda: self._hand_off(complaint_id))
        except Exception:
            logger.exception("Could not schedule compliance sync for complaint %s", complaint_id)

    def drain(self) -> None:
        """Block until every queued sync has been processed."""
        self._queue.join()

    def stop(self) -> None:
        with self._lock:
            worker, self._worker = self._worker, None
        if worker is not None and worker.is_alive():
            self._queue.put(_STOP)
            worker.join()

    # ── Internals ────────────────────────────────────────────────────

    def _hand_off(self, complaint_id: Any) -> None:
        if self.mode == MODE_EAGER:
            self._run(complaint_id)
            return

        self._ensure_worker()
        try:
            self._queue.put_nowait(complaint_id)
        except queue.Full:
            try:
                self.service.record_failure(complaint_id, QUEUE_FULL_MESSAGE)
            except Exception:
                logger.exception(
                    "Could not record dropped compliance sync for complaint %s",
                    complaint_id,
                )
            return
        logger.debug("Compliance sync queued for complaint %s", complaint_id)

    def _run(self, complaint_id: Any) -> None:
        try:
            self.service.sync(complaint_id)
        except Exception:
            logger.exception("Compliance sync crashed for complaint %s", complaint_id)

    def _ensure_worker(self) -> None:
        with self._lock:
            if self._worker is not None and self._worker.is_alive():
                return
            self._worker = threading.Thread(
                target=self._work,
                name="compliance-sync-worker",
                daemon=True,
            )
            self._worker.start()

    def _work(self) -> None:
        while True:
            complaint_id = self._queue.get()
            try:
                if complaint_id is _STOP:
                    return
                self._run(complaint_id)
            finally:
                close_old_connections()
                self._queue.task_done()


_dispatcher: SyncDispatcher | None = None
_dispatcher_lock = threading.Lock()


def get_sync_dispatcher() -> SyncDispatcher:
    """Process-wide dispatcher, built from settings on first use."""
    global _dispatcher
    with _dispatcher_lock:
        if _dispatcher is None:
            _dispatcher = SyncDispatcher()
        return _dispatcher


def reset_sync_dispatcher() -> None:
    """Stop and forget the process-wide dispatcher."""
    global _dispatcher
    with _dispatcher_lock:
        dispatcher, _dispatcher = _dispatcher, None
    if dispatcher is not None:
        dispatcher.stop()
