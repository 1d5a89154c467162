"""Request deadlines and cancellation.

Store calls are blocking. A caller that gives up on a request (timeout
at the HTTP boundary, client disconnect) hands the adapter a
``Deadline``; the adapter checks it before each store call and between
documents while draining a cursor, so a cancelled request stops doing
I/O instead of running to completion.
"""

from __future__ import annotations

import threading
import time

from catalog.domain.exceptions import OperationCancelledError


class Deadline:

    def __init__(self, expires_at: float | None = None) -> None:
        # expires_at is on the time.monotonic() clock
        self._expires_at = expires_at
        self._cancelled = threading.Event()

    @classmethod
    def after(cls, seconds: float) -> Deadline:
        return cls(time.monotonic() + seconds)

    @classmethod
    def never(cls) -> Deadline:
        return cls(None)

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self._expires_at is not None and time.monotonic() >= self._expires_at

    def remaining(self) -> float | None:
        """Seconds left, or None when there is no time limit."""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - time.monotonic())

    def check(self) -> None:
        """Raise OperationCancelledError if the request should stop now."""
        if self.cancelled:
            raise OperationCancelledError("Operation cancelled by caller")
        if self.expired:
            raise OperationCancelledError("Operation deadline exceeded")


def check(deadline: Deadline | None) -> None:
    if deadline is not None:
        deadline.check()
