"""
In-flight action guard.

Rejects a second submission of the same action on the same target while
the first one is still processing. This is the only mutual exclusion the
backend applies; the database remains the source of truth.
"""

from contextlib import contextmanager
from typing import Iterator

from .exceptions import ConflictError


class ActionInProgressError(ConflictError):
    """Raised when the same action on the same target is already processing."""

    def __init__(self, action: str, key: str):
        super().__init__(
            f"Action '{action}' is already in progress for {key}",
            code="ACTION_IN_PROGRESS",
            details={"action": action, "key": key},
        )


class InFlightGuard:
    """Set of (action, key) pairs currently being processed."""

    def __init__(self) -> None:
        self._active: set[tuple[str, str]] = set()

    def is_active(self, action: str, key: str) -> bool:
        return (action, key) in self._active

    @contextmanager
    def hold(self, action: str, key: str) -> Iterator[None]:
        """
        Mark (action, key) as processing for the duration of the block.

        Raises:
            ActionInProgressError: If the pair is already held.
        """
        token = (action, key)
        if token in self._active:
            raise ActionInProgressError(action, key)
        self._active.add(token)
        try:
            yield
        finally:
            self._active.discard(token)
