"""Lifecycle states for the application, its screens and its scenes.

Application flow:
    NOT_RUNNING → INACTIVE → ACTIVE ⇄ INACTIVE → BACKGROUND → SUSPENDED
                                ↑                   │    ↑        │
                                └── (foreground) ───┘    └─ wake ─┘
    any running state → NOT_RUNNING (terminate)

Screen flow:
    UNLOADED → LOADED → APPEARING → VISIBLE → DISAPPEARING → HIDDEN
                            ↑                                  │
                            └──────────── (re-appear) ─────────┘
    any state → DESTROYED (terminal)
"""

from __future__ import annotations

from enum import Enum, auto


class ApplicationState(Enum):
    NOT_RUNNING = auto()
    INACTIVE = auto()
    ACTIVE = auto()
    BACKGROUND = auto()
    SUSPENDED = auto()


class ScreenState(Enum):
    UNLOADED = auto()
    LOADED = auto()
    APPEARING = auto()
    VISIBLE = auto()
    DISAPPEARING = auto()
    HIDDEN = auto()
    DESTROYED = auto()


class SceneState(Enum):
    UNATTACHED = auto()
    INACTIVE = auto()
    ACTIVE = auto()
    BACKGROUND = auto()
    DISCONNECTED = auto()


# No application code may run in these states.
DORMANT_STATES = frozenset({ApplicationState.NOT_RUNNING, ApplicationState.SUSPENDED})

# Screens may only become visible while the application is in one of these.
VISIBLE_HOST_STATES = frozenset({ApplicationState.ACTIVE, ApplicationState.BACKGROUND})
