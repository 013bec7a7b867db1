import logging
import threading
import weakref
from typing import Any, Callable

log = logging.getLogger("applife.core.event_bus")


def _make_ref(callback: Callable) -> Callable[[], Callable | None]:
    """Weak reference for bound methods, strong for plain callables.

    Observers own their own lifetime, so a bound method must not keep its
    instance alive. A plain function or lambda has no owner to keep it
    alive, so it is held as-is.
    """
    if hasattr(callback, "__self__") and hasattr(callback, "__func__"):
        return weakref.WeakMethod(callback)
    return lambda: callback


class EventBus:
    """Thread-safe, ordered publish/subscribe registry.

    Callbacks for an event run synchronously in registration order. A
    callback unsubscribed (or cleared) by an earlier one is not called.
    """

    def __init__(self, name: str = "bus"):
        self.name = name
        self._subscribers: dict[str, list[Callable[[], Callable | None]]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_type: str, callback: Callable) -> None:
        with self._lock:
            if event_type not in self._subscribers:
                self._subscribers[event_type] = []
            self._subscribers[event_type].append(_make_ref(callback))
            log.debug("%s: subscribed to '%s': %s", self.name, event_type,
                      getattr(callback, "__name__", callback))

    def unsubscribe(self, event_type: str, callback: Callable) -> None:
        with self._lock:
            if event_type in self._subscribers:
                self._subscribers[event_type] = [
                    ref for ref in self._subscribers[event_type]
                    if ref() is not None and ref() != callback
                ]

    def subscribers(self, event_type: str) -> list[Callable]:
        """Live callbacks for an event, in registration order."""
        with self._lock:
            refs = list(self._subscribers.get(event_type, []))
        return [cb for cb in (ref() for ref in refs) if cb is not None]

    def clear(self) -> None:
        with self._lock:
            self._subscribers.clear()

    def _registered(self, event_type: str, ref: Callable) -> bool:
        with self._lock:
            return any(r is ref for r in self._subscribers.get(event_type, ()))

    def publish(self, event_type: str, data: Any = None) -> None:
        with self._lock:
            refs = self._subscribers.get(event_type, [])
            live = [ref for ref in refs if ref() is not None]
            if len(live) != len(refs):
                self._subscribers[event_type] = live

        for ref in live:
            # Skip callbacks removed by an earlier one (unsubscribe, clear)
            if not self._registered(event_type, ref):
                continue
            callback = ref()
            if callback is None:
                continue
            try:
                callback(data)
            except Exception:
                log.exception(
                    "%s: error in handler for '%s': %s",
                    self.name,
                    event_type,
                    getattr(callback, "__name__", callback),
                )
