"""Periodic sweep that closes rooms past their maximum age."""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from mood_match.domain.events import Delivery
from mood_match.services.lifecycle import SessionLifecycleController

logger = logging.getLogger(__name__)

DeliverFn = Callable[[list[Delivery]], Awaitable[None]]


@dataclass
class StaleSessionReaper:
    """Background task expiring rooms whose teardown signal was lost."""

    controller: SessionLifecycleController
    deliver: DeliverFn
    interval_seconds: float = 30.0
    max_age_seconds: float = 120.0
    _task: asyncio.Task[None] | None = field(default=None, repr=False)

    async def sweep(self) -> int:
        """Expire stale rooms once and deliver the notifications."""
        deliveries = self.controller.expire_stale(self.max_age_seconds)
        if deliveries:
            await self.deliver(deliveries)
        return len(deliveries)

    async def run(self) -> None:
        """Sweep forever on a fixed period."""
        logger.info(
            "Reaper started",
            extra={
                "interval_seconds": self.interval_seconds,
                "max_age_seconds": self.max_age_seconds,
            },
        )
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.sweep()
            except Exception:
                logger.exception("Reaper sweep failed")

    def start(self) -> None:
        """Start the sweep loop on the running event loop."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Reaper stopped")
