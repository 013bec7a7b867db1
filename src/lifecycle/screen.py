"""Screen lifecycle controller.

One controller per screen instance. The navigation layer drives it:

    load → willAppear → didAppear → willDisappear → didDisappear
             ↑                                          │
             └──────────────────────────────────────────┘

Start timers, animations and sensor polling from didAppear handlers, not
willAppear: the screen surface is only guaranteed ready once it has
appeared.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.errors import AlreadyLoaded, InvalidTransition
from lifecycle import events
from lifecycle.instance import InstanceController
from lifecycle.states import VISIBLE_HOST_STATES, ScreenState

if TYPE_CHECKING:
    from lifecycle.application import ApplicationController

S = ScreenState


class ScreenController(InstanceController):
    """Lifecycle of one screen.

    The application state is checked only on entry to VISIBLE
    (did_appear). A screen that is already visible stays VISIBLE when the
    application is later suspended or terminated; hide or destroy it from
    the application hooks if that matters.
    """

    kind = "screen"
    initial_state = S.UNLOADED
    terminal_state = S.DESTROYED
    event_names = events.SCREEN_EVENTS
    operations = {
        "load": (frozenset({S.UNLOADED}), S.LOADED, events.LOAD),
        "will_appear": (frozenset({S.LOADED, S.HIDDEN}), S.APPEARING, events.WILL_APPEAR),
        "did_appear": (frozenset({S.APPEARING}), S.VISIBLE, events.DID_APPEAR),
        "will_disappear": (frozenset({S.VISIBLE}), S.DISAPPEARING, events.WILL_DISAPPEAR),
        "did_disappear": (frozenset({S.DISAPPEARING}), S.HIDDEN, events.DID_DISAPPEAR),
    }

    def __init__(self, app: ApplicationController, screen_id: str | None = None):
        super().__init__(app, screen_id)
        self._loaded = False

    @property
    def loaded(self) -> bool:
        """True once load() has run, even after destroy()."""
        return self._loaded

    @property
    def visible(self) -> bool:
        return self._state is S.VISIBLE

    def _check_host(self, operation: str) -> None:
        if operation == "did_appear" and self.app.state not in VISIBLE_HOST_STATES:
            self._log.warning("%s: did_appear() rejected, application is %s",
                              self.id, self.app.state.name)
            raise InvalidTransition(
                operation, self._state, f"application is {self.app.state.name}")

    def load(self) -> None:
        """UNLOADED → LOADED, once per instance."""
        with self._lock:
            if self._loaded:
                raise AlreadyLoaded(self.id)
            self._run("load")
            self._loaded = True

    def will_appear(self) -> None:
        self._run("will_appear")

    def did_appear(self) -> None:
        """APPEARING → VISIBLE. The application must be ACTIVE or BACKGROUND."""
        self._run("did_appear")

    def will_disappear(self) -> None:
        self._run("will_disappear")

    def did_disappear(self) -> None:
        self._run("did_disappear")

    def destroy(self) -> None:
        """Final teardown; releases all observers. A second call is a no-op."""
        self._teardown(events.DESTROY)
