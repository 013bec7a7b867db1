# -*- coding: utf-8 -*-
from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from lifecycle.application import ApplicationController  # noqa: E402


# Fixtures
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class FakeTimer:
    """threading.Timer stand-in that only fires when told to."""

    instances: list["FakeTimer"] = []

    def __init__(self, interval, function, args=None, kwargs=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.daemon = False
        self.started = False
        self.cancelled = False
        FakeTimer.instances.append(self)

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        """Simulate the countdown elapsing (ignored once cancelled)."""
        if not self.cancelled:
            self.function(*self.args, **self.kwargs)


class Recorder:
    """Observer that records (event, state) pairs."""

    def __init__(self):
        self.calls: list[tuple[str, object]] = []

    def __call__(self, data):
        self.calls.append((data["event"], data["state"]))

    @property
    def events(self) -> list[str]:
        return [event for event, _ in self.calls]

    def attach(self, controller, names) -> "Recorder":
        for name in names:
            controller.on(name, self)
        return self

    def clear(self) -> None:
        self.calls.clear()


@pytest.fixture
def fake_timers():
    FakeTimer.instances = []
    yield FakeTimer
    FakeTimer.instances = []


@pytest.fixture
def app(fake_timers):
    """ApplicationController whose background countdown is driven manually."""
    controller = ApplicationController("test-app", background_budget_s=30.0,
                                       timer_factory=fake_timers)
    yield controller
    controller.destroy()


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def recorder_factory():
    return Recorder
