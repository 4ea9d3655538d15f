"""
Background expiry sweep.

Runs on a fixed interval (minutes) against a multi-day session
lifetime, reclaiming sessions past their absolute expiry.  Expired
sessions are already rejected by the liveness checks, so a skipped or
late sweep never affects correctness, only memory.

The sweeper does nothing until ``start()`` is awaited; ``sweep()`` can
be called directly for a deterministic single pass.
"""

import asyncio
import logging
from datetime import timedelta

from authsession.core.clock import Clock
from authsession.services.session_store import SessionStore

logger = logging.getLogger(__name__)


class ExpirySweeper:
    def __init__(self, store: SessionStore, clock: Clock, interval: timedelta):
        self._store = store
        self._clock = clock
        self._interval = interval
        self._running = False
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._running

    def sweep(self) -> int:
        """Destroy every expired session.  Returns how many were removed."""
        # Collect first, destroy after: never iterate a map we mutate.
        expired = self._store.expired_ids(self._clock.now())
        removed = sum(1 for session_id in expired if self._store.remove(session_id))
        if removed:
            logger.info("Cleaned up %d expired session(s)", removed)
        return removed

    async def start(self) -> None:
        """Start the sweep loop on the running event loop."""
        if self._running:
            return

        self._running = True
        self._task = asyncio.create_task(self._sweep_loop())
        logger.info(
            "Expiry sweeper started (interval %ss)", int(self._interval.total_seconds())
        )

    async def stop(self) -> None:
        """Stop the sweep loop and wait for it to exit."""
        self._running = False
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
            logger.info("Expiry sweeper stopped")

    async def _sweep_loop(self) -> None:
        while self._running:
            await asyncio.sleep(self._interval.total_seconds())
            try:
                self.sweep()
            except Exception:
                logger.exception("Expiry sweep failed; retrying next interval")
