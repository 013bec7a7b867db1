"""Override-point base classes for lifecycle observers.

Subclass, override the hooks you care about, then `bind()` the instance
to a controller. Each hook receives the event payload dict
({"event", "state", "previous", ...}).

Controllers hold bound methods weakly, so the owner must keep the hooks
object alive for as long as it should receive events.
"""

from __future__ import annotations

from typing import Any

from lifecycle import events


class _Hooks:
    """Maps event names to hook method names and wires them up."""

    _hook_map: dict[str, str] = {}

    def __init__(self):
        self._bound_to: Any = None

    @property
    def bound_to(self) -> Any:
        return self._bound_to

    def bind(self, controller: Any) -> None:
        """Register every hook on `controller`."""
        if self._bound_to is not None:
            self.unbind()
        for event, method in self._hook_map.items():
            controller.on(event, getattr(self, method))
        self._bound_to = controller

    def unbind(self) -> None:
        if self._bound_to is None:
            return
        for event, method in self._hook_map.items():
            self._bound_to.off(event, getattr(self, method))
        self._bound_to = None


class AppHooks(_Hooks):
    """Application-level hooks."""

    _hook_map = {
        events.DID_FINISH_LAUNCHING: "on_did_finish_launching",
        events.DID_BECOME_ACTIVE: "on_did_become_active",
        events.WILL_RESIGN_ACTIVE: "on_will_resign_active",
        events.DID_ENTER_BACKGROUND: "on_did_enter_background",
        events.WILL_ENTER_FOREGROUND: "on_will_enter_foreground",
        events.WILL_TERMINATE: "on_will_terminate",
    }

    def on_did_finish_launching(self, data: dict) -> None:
        """Called once per launch, before the app becomes active."""

    def on_did_become_active(self, data: dict) -> None:
        """Called when the user can interact with the app."""

    def on_will_resign_active(self, data: dict) -> None:
        """Called when interaction is interrupted. Save user data here."""

    def on_did_enter_background(self, data: dict) -> None:
        """Called when the app is no longer visible. Begin finishing work here."""

    def on_will_enter_foreground(self, data: dict) -> None:
        """Called when coming back from the background."""

    def on_will_terminate(self, data: dict) -> None:
        """Best-effort notice before termination. Not guaranteed to run."""


class ScreenHooks(_Hooks):
    """Per-screen hooks."""

    _hook_map = {
        events.LOAD: "on_load",
        events.WILL_APPEAR: "on_will_appear",
        events.DID_APPEAR: "on_did_appear",
        events.WILL_DISAPPEAR: "on_will_disappear",
        events.DID_DISAPPEAR: "on_did_disappear",
        events.DESTROY: "on_destroy",
    }

    def on_load(self, data: dict) -> None:
        """Called once. Build UI that never changes."""

    def on_will_appear(self, data: dict) -> None:
        """Refresh data. Do not start timers or animations here."""

    def on_did_appear(self, data: dict) -> None:
        """Start animations, timers and sensors."""

    def on_will_disappear(self, data: dict) -> None:
        """Save user input, stop timers."""

    def on_did_disappear(self, data: dict) -> None:
        """Stop expensive work."""

    def on_destroy(self, data: dict) -> None:
        """Remove observers and release references."""


class SceneHooks(_Hooks):
    """Per-scene (window) hooks."""

    _hook_map = {
        events.WILL_CONNECT: "on_will_connect",
        events.DID_BECOME_ACTIVE: "on_did_become_active",
        events.WILL_RESIGN_ACTIVE: "on_will_resign_active",
        events.DID_ENTER_BACKGROUND: "on_did_enter_background",
        events.WILL_ENTER_FOREGROUND: "on_will_enter_foreground",
        events.DID_DISCONNECT: "on_did_disconnect",
    }

    def on_will_connect(self, data: dict) -> None:
        """Called when the scene is attached to a running application."""

    def on_did_become_active(self, data: dict) -> None:
        """Called when the scene takes input focus."""

    def on_will_resign_active(self, data: dict) -> None:
        """Called when the scene loses focus. Save its state here."""

    def on_did_enter_background(self, data: dict) -> None:
        """Called when the scene is no longer on screen."""

    def on_will_enter_foreground(self, data: dict) -> None:
        """Called when the scene comes back on screen."""

    def on_did_disconnect(self, data: dict) -> None:
        """Called once when the scene is released. Drop its references."""
