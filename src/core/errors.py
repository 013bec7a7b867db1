"""Lifecycle error types.

Every error is raised synchronously to the caller of the rejected
operation. A rejected operation never changes controller state.
"""


class LifecycleError(Exception):
    """Base class for lifecycle violations."""


class InvalidTransition(LifecycleError):
    """A transition was requested from a state that does not allow it."""

    def __init__(self, operation: str, state, reason: str | None = None):
        self.operation = operation
        self.state = state
        self.reason = reason
        msg = f"{operation}() not allowed in state {getattr(state, 'name', state)}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class AlreadyLoaded(LifecycleError):
    """A screen's load() was called a second time."""

    def __init__(self, screen_id: str):
        self.screen_id = screen_id
        super().__init__(f"screen '{screen_id}' is already loaded")


class NoBackgroundCapacity(LifecycleError):
    """A background task was requested outside the Background state."""

    def __init__(self, state):
        self.state = state
        super().__init__(
            f"background tasks can only begin in BACKGROUND "
            f"(current: {getattr(state, 'name', state)})"
        )


class TaskAlreadyOutstanding(LifecycleError):
    """A second background task was requested while one is still running."""

    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"background task {task_id} is still outstanding")


class UnknownTask(LifecycleError):
    """complete() was given a handle that is not the outstanding task."""

    def __init__(self, task_id):
        self.task_id = task_id
        super().__init__(f"unknown or already finished background task: {task_id}")
