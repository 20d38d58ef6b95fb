"""Cooperative cancellation of the in-flight turn.

A request only flags the turn. The stream still runs to its end and every
event is applied; the turn runner acknowledges the request afterwards.
"""

import logging
from enum import Enum

from ..memory.lifecycle import ThreadManager
from .accumulator import MessageAccumulator

logger = logging.getLogger(__name__)


class CancelState(str, Enum):
    """Cancellation signal for the current turn."""

    NONE = "none"
    REQUESTED = "requested"
    CANCELED = "canceled"


class CancellationCoordinator:
    """Moves a turn from requested to canceled in memory and in the store."""

    def __init__(self, accumulator: MessageAccumulator, threads: ThreadManager):
        self._accumulator = accumulator
        self._threads = threads
        self._state = CancelState.NONE

    @property
    def state(self) -> CancelState:
        return self._state

    @property
    def is_requested(self) -> bool:
        """True once a cancel was requested for this turn, acknowledged or not."""
        return self._state != CancelState.NONE

    def request(self) -> bool:
        """Ask for the current turn to stop.

        Returns:
            True if this call moved the state out of ``none``
        """
        if self._state != CancelState.NONE:
            return False
        self._state = CancelState.REQUESTED
        logger.info("Cancel requested")
        return True

    async def acknowledge(self) -> None:
        """Mark the turn's message and last question canceled.

        Only acts on a pending request; calling it again is a no-op.
        """
        if self._state != CancelState.REQUESTED:
            return
        self._state = CancelState.CANCELED
        self._accumulator.mark_canceled()
        await self._threads.mark_last_question_canceled()

    def reset(self) -> None:
        """Clear the signal before a new turn starts."""
        self._state = CancelState.NONE
