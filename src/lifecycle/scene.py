"""Scene (window instance) lifecycle controller.

A scene mirrors the application's foreground/background cycle for one
window. Several scenes can live under one application; each is tracked
on its own.
"""

from __future__ import annotations

from core.errors import InvalidTransition
from lifecycle import events
from lifecycle.instance import InstanceController
from lifecycle.states import DORMANT_STATES, ApplicationState, SceneState

S = SceneState


class SceneController(InstanceController):

    kind = "scene"
    initial_state = S.UNATTACHED
    terminal_state = S.DISCONNECTED
    event_names = events.SCENE_EVENTS
    operations = {
        "connect": (frozenset({S.UNATTACHED}), S.INACTIVE, events.WILL_CONNECT),
        "become_active": (frozenset({S.INACTIVE}), S.ACTIVE, events.DID_BECOME_ACTIVE),
        "resign_active": (frozenset({S.ACTIVE}), S.INACTIVE, events.WILL_RESIGN_ACTIVE),
        "enter_background": (frozenset({S.INACTIVE}), S.BACKGROUND,
                             events.DID_ENTER_BACKGROUND),
        "enter_foreground": (frozenset({S.BACKGROUND}), S.INACTIVE,
                             events.WILL_ENTER_FOREGROUND),
    }

    def _check_host(self, operation: str) -> None:
        app_state = self.app.state
        if operation == "become_active" and app_state is not ApplicationState.ACTIVE:
            raise InvalidTransition(operation, self._state,
                                    f"application is {app_state.name}")
        if operation in ("connect", "enter_foreground") and app_state in DORMANT_STATES:
            raise InvalidTransition(operation, self._state,
                                    f"application is {app_state.name}")

    def connect(self) -> None:
        self._run("connect")

    def become_active(self) -> None:
        self._run("become_active")

    def resign_active(self) -> None:
        self._run("resign_active")

    def enter_background(self) -> None:
        self._run("enter_background")

    def enter_foreground(self) -> None:
        self._run("enter_foreground")

    def disconnect(self) -> None:
        """Release the scene. Safe to call more than once."""
        self._teardown(events.DID_DISCONNECT)
