# -*- coding: utf-8 -*-
from __future__ import annotations

import gc
import logging

from core.event_bus import EventBus


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Helpers
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class _Listener:

    def __init__(self):
        self.received = []

    def handle(self, data):
        self.received.append(data)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Tests - Publish / Subscribe
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TestEventBus:

    def test_publish_in_registration_order(self):
        """Callbacks run in the order they subscribed."""
        bus = EventBus()
        order = []
        bus.subscribe("tick", lambda data: order.append(("a", data)))
        bus.subscribe("tick", lambda data: order.append(("b", data)))
        bus.publish("tick", 1)
        assert order == [("a", 1), ("b", 1)]

    def test_publish_without_subscribers(self):
        """Publishing an event nobody listens to is harmless."""
        EventBus().publish("nothing", {"x": 1})

    def test_unsubscribe_bound_method(self):
        """A bound method can be removed with a fresh reference to it."""
        bus = EventBus()
        listener = _Listener()
        bus.subscribe("tick", listener.handle)
        bus.unsubscribe("tick", listener.handle)
        bus.publish("tick", 1)
        assert listener.received == []

    def test_bound_methods_held_weakly(self):
        """A listener that goes away is dropped from the bus."""
        bus = EventBus()
        listener = _Listener()
        bus.subscribe("tick", listener.handle)
        assert len(bus.subscribers("tick")) == 1

        del listener
        gc.collect()
        bus.publish("tick", 1)
        assert bus.subscribers("tick") == []

    def test_plain_functions_held_strongly(self):
        """Lambdas survive without an outside reference."""
        bus = EventBus()
        seen = []
        bus.subscribe("tick", lambda data: seen.append(data))
        gc.collect()
        bus.publish("tick", 2)
        assert seen == [2]

    def test_error_logged_and_isolated(self, caplog):
        """A failing callback is logged and the next one still runs."""
        bus = EventBus("test")
        seen = []

        def broken(data):
            raise ValueError("bad handler")

        bus.subscribe("tick", broken)
        bus.subscribe("tick", seen.append)
        with caplog.at_level(logging.ERROR, logger="applife.core.event_bus"):
            bus.publish("tick", 3)

        assert seen == [3]
        assert "broken" in caplog.text
        assert "bad handler" in caplog.text

    def test_clear(self):
        """clear() removes every subscription."""
        bus = EventBus()
        seen = []
        bus.subscribe("a", seen.append)
        bus.subscribe("b", seen.append)
        bus.clear()
        bus.publish("a", 1)
        bus.publish("b", 2)
        assert seen == []

    def test_subscribe_during_publish_not_called(self):
        """A callback added mid-publish waits for the next publish."""
        bus = EventBus()
        seen = []

        def adder(data):
            bus.subscribe("tick", lambda d: seen.append(("late", d)))

        bus.subscribe("tick", adder)
        bus.publish("tick", 1)
        assert seen == []
        bus.publish("tick", 2)
        assert ("late", 2) in seen

    def test_removed_during_publish_not_called(self):
        """A callback unsubscribed or cleared mid-publish is skipped."""
        bus = EventBus()
        seen = []

        def second(data):
            seen.append(("second", data))

        def first(data):
            bus.unsubscribe("tick", second)

        bus.subscribe("tick", first)
        bus.subscribe("tick", second)
        bus.publish("tick", 1)
        assert seen == []

        bus.subscribe("tick", second)
        bus.subscribe("tock", lambda d: bus.clear())
        bus.subscribe("tock", lambda d: seen.append(("tock", d)))
        bus.publish("tock", 2)
        assert seen == []
