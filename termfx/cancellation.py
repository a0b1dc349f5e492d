"""Cooperative cancellation for running effects.

Effects check a CancellationToken once per frame. The token wraps a
threading.Event, so it may be set from another thread or a signal handler
while the effect blocks the main thread.
"""

from __future__ import annotations

import contextlib
import signal
import threading
from enum import Enum
from typing import TYPE_CHECKING, Any

from termfx.utils.logging_config import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = get_logger(__name__)


class EffectOutcome(str, Enum):
    """How an effect run ended."""

    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CancellationToken:
    """A one-shot flag requesting that a running effect stop early."""

    def __init__(self) -> None:
        """Initialize an uncancelled token."""
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        """Whether cancellation has been requested."""
        return self._event.is_set()

    def reset(self) -> None:
        """Clear the flag so the token can be reused."""
        self._event.clear()


@contextlib.contextmanager
def cancel_on_interrupt(token: CancellationToken) -> Iterator[CancellationToken]:
    """Turn SIGINT into a cancellation request for the block's duration.

    Only the main thread may install signal handlers; elsewhere the block
    runs with the default KeyboardInterrupt behaviour.
    """
    if threading.current_thread() is not threading.main_thread():
        yield token
        return

    def _handler(_signum: int, _frame: Any) -> None:
        logger.debug("Interrupt received, cancelling effect")
        token.cancel()

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield token
    finally:
        signal.signal(signal.SIGINT, previous)
