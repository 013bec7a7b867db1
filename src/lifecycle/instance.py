"""Shared machinery for per-instance lifecycle controllers (screens, scenes).

Each instance is tracked independently of its siblings but holds a
reference to the ApplicationController it lives under, so it can refuse
transitions the application state does not allow.
"""

from __future__ import annotations

import itertools
import logging
import threading
from contextlib import contextmanager
from enum import Enum
from typing import TYPE_CHECKING, Callable, Generator

from core.errors import InvalidTransition
from core.event_bus import EventBus

if TYPE_CHECKING:
    from lifecycle.application import ApplicationController

log = logging.getLogger("applife.lifecycle.instance")


class InstanceController:
    """Table-driven state machine with a terminal teardown state.

    Subclasses set:
        kind           -- label used for ids and logs
        initial_state  -- state on construction
        terminal_state -- state entered by teardown
        event_names    -- events observers may register for
        operations     -- {operation: (allowed source states, target, event)}
    """

    kind: str = "instance"
    initial_state: Enum
    terminal_state: Enum
    event_names: tuple[str, ...] = ()
    operations: dict[str, tuple[frozenset, Enum, str]] = {}

    _counter = itertools.count(1)

    def __init__(self, app: ApplicationController, instance_id: str | None = None):
        self.app = app
        self.id = instance_id or f"{self.kind}-{next(InstanceController._counter)}"
        self._state = self.initial_state
        self._bus = EventBus(self.id)
        self._lock = threading.RLock()
        self._transitioning = False
        self._log = logging.getLogger(f"applife.lifecycle.{self.kind}")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id} {self._state.name}>"

    @property
    def state(self) -> Enum:
        return self._state

    @property
    def is_torn_down(self) -> bool:
        return self._state is self.terminal_state

    # --- Observers ---

    def on(self, event: str, callback: Callable) -> None:
        if event not in self.event_names:
            raise ValueError(f"unknown {self.kind} event: {event}")
        self._bus.subscribe(event, callback)

    def off(self, event: str, callback: Callable) -> None:
        self._bus.unsubscribe(event, callback)

    # --- Transitions ---

    def _check_host(self, operation: str) -> None:
        """Hook for subclasses to veto a transition based on the app state."""

    @contextmanager
    def _transition(self, operation: str) -> Generator[Enum, None, None]:
        allowed, _, _ = self.operations[operation]
        with self._lock:
            state = self._state
            if self._transitioning:
                raise InvalidTransition(operation, state, "re-entrant transition")
            if state not in allowed:
                self._log.warning("%s: %s() rejected in %s", self.id, operation, state.name)
                raise InvalidTransition(operation, state)
            self._check_host(operation)

            self._transitioning = True
            try:
                yield state
            finally:
                self._transitioning = False

    def _run(self, operation: str) -> None:
        """Apply a table transition, then notify observers."""
        _, target, event = self.operations[operation]
        with self._transition(operation) as prev:
            self._state = target
            self._log.debug("%s: state: %s -> %s", self.id, prev.name, target.name)
            self._dispatch(event, prev)

    def _dispatch(self, event: str, previous: Enum) -> None:
        self._bus.publish(event, {
            "event": event,
            "state": self._state,
            "previous": previous,
            self.kind: self.id,
        })

    def _teardown(self, event: str) -> None:
        """Enter the terminal state once; later calls do nothing.

        Never raises, including when called from inside one of this
        instance's own observers.
        """
        with self._lock:
            prev = self._state
            if prev is self.terminal_state:
                return
            self._state = self.terminal_state
            self._log.debug("%s: state: %s -> %s", self.id, prev.name,
                            self.terminal_state.name)
            self._dispatch(event, prev)
            self._bus.clear()
