"""
Transient status line with automatic clearing.

Every ``post()`` schedules its own clear ``clear_after`` seconds later and
cancels whatever clear was pending, so an older message's timer can never
hide a newer message. Time comes from an injectable clock.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum


class StatusKind(StrEnum):
    info = "info"
    error = "error"


@dataclass(frozen=True)
class StatusMessage:
    text: str
    kind: StatusKind
    posted_at: float


class StatusBoard:
    """Holds at most one visible status message.

    Args:
        clear_after: Seconds a message stays visible.
        clock: Monotonic time source, overridable in tests.
    """

    def __init__(
        self,
        clear_after: float = 3.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clear_after = clear_after
        self._clock = clock
        self._message: StatusMessage | None = None
        self._clear_at: float | None = None

    def post(self, text: str, kind: StatusKind = StatusKind.info) -> StatusMessage:
        """Show ``text`` and reschedule the clear from now."""
        now = self._clock()
        self._message = StatusMessage(text=text, kind=kind, posted_at=now)
        self._clear_at = now + self._clear_after
        return self._message

    def hold(self) -> None:
        """Cancel the pending clear; the message stays until replaced."""
        self._clear_at = None

    def schedule_clear(self) -> None:
        """(Re)start the clear countdown for the current message."""
        if self._message is not None:
            self._clear_at = self._clock() + self._clear_after

    def clear(self) -> None:
        self._message = None
        self._clear_at = None

    @property
    def pending_clear_at(self) -> float | None:
        return self._clear_at

    def current(self) -> StatusMessage | None:
        """Return the visible message, applying a due clear first."""
        if self._clear_at is not None and self._clock() >= self._clear_at:
            self.clear()
        return self._message
