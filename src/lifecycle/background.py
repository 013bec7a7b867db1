"""Background task budgeting.

When the application enters the background it gets one bounded window to
finish outstanding work (saving, uploading). The budgeter hands out a
single task handle, runs a countdown on a timer thread, and signals
expiry if the work does not call complete() in time.

Countdown, completion and the owning controller's transitions all
serialize on the controller's lock, so complete() arriving from a worker
thread can never race suspend().
"""

from __future__ import annotations

import itertools
import logging
import threading
import time
from typing import TYPE_CHECKING, Callable

from core.errors import NoBackgroundCapacity, TaskAlreadyOutstanding, UnknownTask
from lifecycle.states import ApplicationState

if TYPE_CHECKING:
    from lifecycle.application import ApplicationController

log = logging.getLogger("applife.lifecycle.background")

DEFAULT_BUDGET_S = 30.0


class BackgroundTask:
    """One unit of budgeted background work."""

    __slots__ = ("task_id", "budget", "on_expire", "started_at",
                 "completed", "expired", "cancelled", "_timer")

    def __init__(self, task_id: int, budget: float,
                 on_expire: Callable[[], None] | None):
        self.task_id = task_id
        self.budget = budget
        self.on_expire = on_expire
        self.started_at = time.monotonic()
        self.completed = False
        self.expired = False
        self.cancelled = False
        self._timer = None

    @property
    def finished(self) -> bool:
        return self.completed or self.expired or self.cancelled

    @property
    def remaining(self) -> float:
        """Seconds left in the budget (0.0 once finished)."""
        if self.finished:
            return 0.0
        return max(0.0, self.budget - (time.monotonic() - self.started_at))

    def __repr__(self) -> str:
        status = ("completed" if self.completed else "expired" if self.expired
                  else "cancelled" if self.cancelled else "running")
        return f"<BackgroundTask {self.task_id} {status} budget={self.budget}s>"


class BackgroundTaskBudgeter:
    """Grants at most one outstanding background task to its controller."""

    def __init__(self, app: ApplicationController,
                 default_budget_s: float = DEFAULT_BUDGET_S,
                 timer_factory: Callable = threading.Timer):
        self._app = app
        self._lock = app.lock
        self._timer_factory = timer_factory
        self.default_budget_s = default_budget_s
        self._ids = itertools.count(1)
        self._outstanding: BackgroundTask | None = None

    @property
    def outstanding(self) -> BackgroundTask | None:
        return self._outstanding

    @property
    def has_outstanding(self) -> bool:
        return self._outstanding is not None

    def begin(self, budget_seconds: float | None = None,
              on_expire: Callable[[], None] | None = None) -> BackgroundTask:
        """Start a budgeted task. Only allowed while in BACKGROUND."""
        budget = self.default_budget_s if budget_seconds is None else budget_seconds
        if budget <= 0:
            raise ValueError(f"budget must be positive, got {budget}")

        with self._lock:
            state = self._app.state
            if state is not ApplicationState.BACKGROUND:
                log.warning("begin() rejected in %s", state.name)
                raise NoBackgroundCapacity(state)
            if self._outstanding is not None:
                raise TaskAlreadyOutstanding(self._outstanding.task_id)

            task = BackgroundTask(next(self._ids), budget, on_expire)
            timer = self._timer_factory(budget, self._expire, args=(task,))
            timer.daemon = True
            task._timer = timer
            self._outstanding = task
            timer.start()

        log.info("Background task %d started (%.1fs budget)", task.task_id, budget)
        return task

    def complete(self, task: BackgroundTask) -> None:
        """Mark the outstanding task finished and stop its countdown.

        Raises UnknownTask if the handle already completed, expired or was
        cancelled.
        """
        with self._lock:
            if task is None or task is not self._outstanding:
                raise UnknownTask(getattr(task, "task_id", task))
            task.completed = True
            task._timer.cancel()
            self._outstanding = None

        log.info("Background task %d completed (%.2fs left)",
                 task.task_id, task.budget - (time.monotonic() - task.started_at))

    def cancel(self) -> BackgroundTask | None:
        """Drop the outstanding task without calling its expiry handler."""
        with self._lock:
            task = self._outstanding
            if task is None:
                return None
            task.cancelled = True
            task._timer.cancel()
            self._outstanding = None

        log.info("Background task %d cancelled", task.task_id)
        return task

    def _expire(self, task: BackgroundTask) -> None:
        with self._lock:
            # complete() or cancel() may have won the lock first
            if task is not self._outstanding or task.finished:
                return
            task.expired = True
            self._outstanding = None

        log.warning("Background task %d expired after %.1fs", task.task_id, task.budget)
        if task.on_expire is not None:
            try:
                task.on_expire()
            except Exception:
                log.exception("Error in expiry handler of background task %d",
                              task.task_id)
