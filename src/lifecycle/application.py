"""Application lifecycle controller.

Tracks the single process-wide run state of a hosted application and
dispatches lifecycle events to registered observers. The host (or a test
acting as the host) drives it by calling the transition methods.

willTerminate is not guaranteed to reach observers: a forced kill or a
suspended process skips it. Critical saves belong in willResignActive and
didEnterBackground.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Generator

from core.errors import InvalidTransition
from core.event_bus import EventBus
from lifecycle import events
from lifecycle.background import DEFAULT_BUDGET_S, BackgroundTaskBudgeter
from lifecycle.states import DORMANT_STATES, ApplicationState

log = logging.getLogger("applife.lifecycle.application")

S = ApplicationState

# Directed edge table
TRANSITIONS: dict[ApplicationState, list[ApplicationState]] = {
    S.NOT_RUNNING: [S.INACTIVE],
    S.INACTIVE: [S.ACTIVE, S.BACKGROUND, S.NOT_RUNNING],
    S.ACTIVE: [S.INACTIVE, S.NOT_RUNNING],
    S.BACKGROUND: [S.ACTIVE, S.SUSPENDED, S.NOT_RUNNING],
    S.SUSPENDED: [S.BACKGROUND, S.NOT_RUNNING],
}

# States each operation may be called from
ALLOWED_FROM: dict[str, frozenset[ApplicationState]] = {
    "launch": frozenset({S.NOT_RUNNING}),
    "resign_active": frozenset({S.ACTIVE}),
    "become_active": frozenset({S.INACTIVE, S.BACKGROUND}),
    "enter_background": frozenset({S.INACTIVE}),
    "suspend": frozenset({S.BACKGROUND}),
    "wake": frozenset({S.SUSPENDED}),
    "terminate": frozenset(set(S) - {S.NOT_RUNNING}),
}


class ApplicationController:
    """Process-wide application state machine.

    Transitions are atomic: a rejected call raises and leaves the state
    untouched. Observers for one event run in registration order before
    the transition call returns.
    """

    def __init__(self, name: str = "app", *,
                 background_budget_s: float = DEFAULT_BUDGET_S,
                 timer_factory: Callable = threading.Timer,
                 event_bus: EventBus | None = None):
        self.name = name
        self.lock = threading.RLock()
        self._state = S.NOT_RUNNING
        self._history: list[ApplicationState] = [S.NOT_RUNNING]
        self._bus = event_bus or EventBus(name)
        self._transitioning = False
        self._destroyed = False
        self.background = BackgroundTaskBudgeter(
            self, default_budget_s=background_budget_s, timer_factory=timer_factory)

    # --- Properties ---

    @property
    def state(self) -> ApplicationState:
        return self._state

    @property
    def history(self) -> list[ApplicationState]:
        """Every state entered since construction, oldest first."""
        return list(self._history)

    @property
    def is_running(self) -> bool:
        """True when application code may execute."""
        return self._state not in DORMANT_STATES

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    # --- Observers ---

    def on(self, event: str, callback: Callable) -> None:
        if event not in events.APPLICATION_EVENTS:
            raise ValueError(f"unknown application event: {event}")
        self._bus.subscribe(event, callback)

    def off(self, event: str, callback: Callable) -> None:
        self._bus.unsubscribe(event, callback)

    # --- Helpers ---

    def can(self, operation: str) -> bool:
        """Whether `operation` would currently be accepted."""
        if self._destroyed or self._transitioning:
            return False
        if self._state not in ALLOWED_FROM[operation]:
            return False
        if operation == "suspend" and self.background.has_outstanding:
            return False
        return True

    @contextmanager
    def _transition(self, operation: str) -> Generator[ApplicationState, None, None]:
        with self.lock:
            state = self._state
            if self._destroyed:
                raise InvalidTransition(operation, state, "controller destroyed")
            if self._transitioning:
                raise InvalidTransition(operation, state, "re-entrant transition")
            if state not in ALLOWED_FROM[operation]:
                log.warning("%s: %s() rejected in %s", self.name, operation, state.name)
                raise InvalidTransition(operation, state)

            self._transitioning = True
            try:
                yield state
            finally:
                self._transitioning = False

    def _set_state(self, new_state: ApplicationState) -> None:
        prev = self._state
        if new_state not in TRANSITIONS[prev]:
            raise InvalidTransition("set_state", prev, f"no edge to {new_state.name}")
        self._state = new_state
        self._history.append(new_state)
        log.debug("%s: state: %s -> %s", self.name, prev.name, new_state.name)

    def _dispatch(self, event: str, previous: ApplicationState) -> None:
        self._bus.publish(event, {
            "event": event,
            "state": self._state,
            "previous": previous,
            "source": self.name,
        })

    # --- Transitions ---

    def launch(self) -> None:
        """Cold start: NOT_RUNNING → INACTIVE → ACTIVE."""
        with self._transition("launch") as prev:
            self._set_state(S.INACTIVE)
            self._dispatch(events.DID_FINISH_LAUNCHING, prev)
            self._set_state(S.ACTIVE)
            self._dispatch(events.DID_BECOME_ACTIVE, S.INACTIVE)
        log.info("%s: launched", self.name)

    def resign_active(self) -> None:
        with self._transition("resign_active") as prev:
            self._set_state(S.INACTIVE)
            self._dispatch(events.WILL_RESIGN_ACTIVE, prev)

    def become_active(self) -> None:
        with self._transition("become_active") as prev:
            if prev is S.BACKGROUND:
                self._dispatch(events.WILL_ENTER_FOREGROUND, prev)
            self._set_state(S.ACTIVE)
            self._dispatch(events.DID_BECOME_ACTIVE, prev)

    def enter_background(self) -> None:
        """INACTIVE → BACKGROUND.

        didEnterBackground observers may call `self.background.begin()` to
        claim the finishing-work window.
        """
        with self._transition("enter_background") as prev:
            self._set_state(S.BACKGROUND)
            self._dispatch(events.DID_ENTER_BACKGROUND, prev)

    def suspend(self) -> None:
        """BACKGROUND → SUSPENDED, silently.

        Rejected while a background task is still counting down.
        """
        with self._transition("suspend") as prev:
            task = self.background.outstanding
            if task is not None:
                log.warning("%s: suspend() blocked by background task %d",
                            self.name, task.task_id)
                raise InvalidTransition(
                    "suspend", prev, f"background task {task.task_id} outstanding")
            self._set_state(S.SUSPENDED)
        log.info("%s: suspended", self.name)

    def wake(self) -> None:
        """SUSPENDED → BACKGROUND when the host revives the process."""
        with self._transition("wake") as prev:
            self._set_state(S.BACKGROUND)
            self._dispatch(events.WILL_ENTER_FOREGROUND, prev)

    def terminate(self) -> None:
        """Any running state → NOT_RUNNING.

        willTerminate goes out before the state change; a suspended process
        is killed without it. Any outstanding background task is cancelled
        without calling its expiry handler.
        """
        with self._transition("terminate") as prev:
            if prev is not S.SUSPENDED:
                self._dispatch(events.WILL_TERMINATE, prev)
            self.background.cancel()
            self._set_state(S.NOT_RUNNING)
        log.info("%s: terminated", self.name)

    def destroy(self) -> None:
        """Tear the controller down. Never raises; safe to call twice."""
        with self.lock:
            if self._destroyed:
                return
            self._destroyed = True
            self.background.cancel()
            self._bus.clear()
        log.debug("%s: destroyed", self.name)
