"""Debounced invocation of async callbacks."""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class Debouncer:
    """Run only the last call made within a quiet window.

    Each `trigger` cancels the pending invocation and schedules a new one, so a
    burst of calls results in a single invocation with the final arguments.
    """

    delay_seconds: float
    callback: Callable[..., Awaitable[None]]
    _pending: asyncio.Task | None = field(default=None, init=False)
    _args: tuple[object, ...] = field(default=(), init=False)

    @property
    def pending(self) -> bool:
        """Return True while an invocation is scheduled."""
        return self._pending is not None and not self._pending.done()

    def trigger(self, *args: object) -> asyncio.Task:
        """Schedule the callback, replacing any pending invocation."""
        self.cancel()
        self._args = args
        self._pending = asyncio.create_task(self._run_later(args))
        return self._pending

    def cancel(self) -> None:
        """Drop the pending invocation without running it."""
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    async def flush(self) -> None:
        """Run the pending invocation immediately."""
        if not self.pending:
            return
        args = self._args
        self.cancel()
        await self.callback(*args)

    async def wait(self) -> None:
        """Wait for the pending invocation, if any, to finish."""
        task = self._pending
        if task is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run_later(self, args: tuple[object, ...]) -> None:
        await asyncio.sleep(self.delay_seconds)
        try:
            await self.callback(*args)
        except Exception:
            logger.exception("Debounced call failed")
