from __future__ import annotations

import itertools
import logging
from datetime import datetime
from typing import Callable

from PySide6.QtCore import QObject, QThread, QTimer, Signal, Slot

from fuzztester.draft import RequestDraft
from fuzztester.errors import (
    AttemptCancelledError,
    MissingUrlError,
    RequestTimeoutError,
    TransportError,
    error_from_result,
)
from fuzztester.models import RunState, TestRun
from fuzztester.notifier import NotificationEvent, NotificationKind
from fuzztester.workers import TestAttemptWorker

logger = logging.getLogger(__name__)

LOADING_MESSAGE = "Testing API..."
SUCCESS_MESSAGE = "API test completed!"

# Worker threads outliving their runner; QThread must not be destroyed while running.
_DETACHED_THREADS: list[tuple[QThread, TestAttemptWorker]] = []


class TestRunner(QObject):
    """Runs one test attempt at a time and emits its notification sequence.

    Every accepted ``start()`` produces a LOADING notice followed by exactly
    one terminal notice (SUCCESS or ERROR) flagged ``dismiss_previous``.
    A rejected draft produces a single ERROR notice and no run. Calls made
    while a run is pending are ignored.

    ``dispatch`` receives each ``TestAttemptWorker``; the default runs it on a
    ``QThread`` and the completion signal is delivered back on the runner's
    thread.
    """

    __test__ = False

    notified = Signal(object)
    state_changed = Signal(str)
    settled = Signal(object)

    def __init__(
        self,
        transport,
        timeout_ms: int = 0,
        dispatch: Callable[[TestAttemptWorker], None] | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.transport = transport
        self.timeout_ms = timeout_ms
        self._dispatch = dispatch or self._run_in_thread
        self._ids = itertools.count(1)
        self._run: TestRun | None = None
        self._threads: list[tuple[QThread, TestAttemptWorker]] = []
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self.expire)

    @property
    def current_run(self) -> TestRun | None:
        return self._run

    @property
    def state(self) -> RunState:
        if self._run is None:
            return RunState.IDLE
        return self._run.state

    def is_pending(self) -> bool:
        return self._run is not None and self._run.state is RunState.PENDING

    def submit(self, draft: RequestDraft) -> bool:
        return self.start(draft)

    def start(self, draft: RequestDraft) -> bool:
        if self.is_pending():
            logger.debug("start ignored, run %s still pending", self._run.run_id)
            return False
        try:
            draft.validate()
        except MissingUrlError as exc:
            logger.info("draft rejected: %s", exc.kind.value)
            self._emit(NotificationKind.ERROR, exc.message)
            return False

        run = TestRun(run_id=next(self._ids))
        self._run = run
        logger.info("run %s pending: %s %s", run.run_id, draft.method.value, draft.url)
        self.state_changed.emit(run.state.value)
        self._emit(NotificationKind.LOADING, LOADING_MESSAGE)

        worker = TestAttemptWorker(run.run_id, self.transport, draft.to_request())
        worker.finished.connect(self._on_attempt_finished)
        worker.error.connect(self._on_attempt_error)
        if self.timeout_ms > 0:
            self._timer.start(self.timeout_ms)
        self._dispatch(worker)
        return True

    @Slot()
    def expire(self) -> None:
        if not self.is_pending():
            return
        self._settle_failed(RequestTimeoutError(f"Request timed out after {self.timeout_ms} ms"))

    def cancel(self) -> None:
        if not self.is_pending():
            return
        self._settle_failed(AttemptCancelledError())

    def shutdown(self, wait_ms: int | None = None) -> list[QThread]:
        """Stop worker threads; without ``wait_ms`` block until each returns.

        Threads still running after ``wait_ms`` are detached from the runner
        and kept referenced until they finish, so the runner can be destroyed
        safely. They are returned to the caller.
        """
        self._timer.stop()
        _DETACHED_THREADS[:] = [entry for entry in _DETACHED_THREADS if not entry[0].isFinished()]
        detached: list[QThread] = []
        for thread, worker in list(self._threads):
            thread.quit()
            stopped = thread.wait() if wait_ms is None else thread.wait(wait_ms)
            if not stopped:
                logger.warning("worker thread still busy after %s ms, detaching it", wait_ms)
                thread.setParent(None)
                _DETACHED_THREADS.append((thread, worker))
                detached.append(thread)
        self._threads.clear()
        return detached

    @Slot(dict)
    def _on_attempt_finished(self, payload: dict) -> None:
        if not self._accepts(payload.get("run_id")):
            return
        response = payload.get("response") or {}
        if response.get("success") is True:
            self._settle_succeeded(response)
        else:
            self._settle_failed(error_from_result(response))

    @Slot(dict)
    def _on_attempt_error(self, error_info: dict) -> None:
        if not self._accepts(error_info.get("run_id")):
            return
        self._settle_failed(error_from_result(error_info))

    def _accepts(self, run_id) -> bool:
        if self.is_pending() and self._run.run_id == run_id:
            return True
        logger.info("ignoring completion of abandoned run %s", run_id)
        return False

    def _settle_succeeded(self, response: dict) -> None:
        run = self._run
        self._timer.stop()
        run.state = RunState.SUCCEEDED
        run.completed_at = datetime.now()
        run.result = response
        logger.info("run %s succeeded in %s ms", run.run_id, run.elapsed_ms)
        self.state_changed.emit(run.state.value)
        self._emit(NotificationKind.SUCCESS, SUCCESS_MESSAGE, dismiss_previous=True)
        self.settled.emit(run)

    def _settle_failed(self, error: TransportError) -> None:
        run = self._run
        self._timer.stop()
        run.state = RunState.FAILED
        run.completed_at = datetime.now()
        run.error = error.message
        run.error_kind = error.kind
        logger.warning("run %s failed (%s): %s", run.run_id, error.error_type, error.message)
        self.state_changed.emit(run.state.value)
        self._emit(NotificationKind.ERROR, error.message, dismiss_previous=True)
        self.settled.emit(run)

    def _emit(self, kind: NotificationKind, message: str, dismiss_previous: bool = False) -> None:
        self.notified.emit(NotificationEvent(kind, message, dismiss_previous))

    def _run_in_thread(self, worker: TestAttemptWorker) -> None:
        thread = QThread(self)
        worker.moveToThread(thread)
        thread.started.connect(worker.run)

        worker.finished.connect(thread.quit)
        worker.error.connect(thread.quit)
        worker.finished.connect(worker.deleteLater)
        worker.error.connect(worker.deleteLater)
        thread.finished.connect(self._prune_threads)

        self._threads.append((thread, worker))
        thread.start()

    @Slot()
    def _prune_threads(self) -> None:
        remaining = []
        for thread, worker in self._threads:
            if thread.isFinished():
                thread.deleteLater()
            else:
                remaining.append((thread, worker))
        self._threads = remaining
