"""
Background dispatch of nearby tour notifications.

Tour creation must not wait on, or fail because of, notification delivery.
The route commits the tour, then hands the id to the dispatcher, which
runs the scan in its own task with its own session.
"""

import asyncio
import logging
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from .service import NotificationService

logger = logging.getLogger(__name__)


class NearbyTourDispatcher:
    """
    Fire-and-forget runner for NotificationService.notify_nearby_users.

    Usage:
        dispatcher = NearbyTourDispatcher(AsyncSessionLocal)
        dispatcher.dispatch(tour.id)
        # ... on shutdown ...
        await dispatcher.drain()
    """

    def __init__(self, db_factory: Callable[[], AsyncSession]):
        self._db_factory = db_factory
        # Keep strong references to running tasks to prevent GC
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending_count(self) -> int:
        return len(self._tasks)

    def dispatch(self, tour_id: str) -> asyncio.Task:
        """
        Schedule the nearby scan for a committed tour.

        Must be called from a running event loop.

        Returns:
            The scheduled task (callers normally ignore it)
        """
        task = asyncio.create_task(self._run(tour_id), name=f"notify-nearby-{tour_id}")
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    async def drain(self) -> None:
        """Wait for all scheduled scans to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _run(self, tour_id: str) -> int:
        async with self._db_factory() as db:
            created = await NotificationService(db).notify_nearby_users(tour_id)
        logger.info(f"Nearby scan for tour {tour_id} finished: {created} notifications")
        return created

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning(f"Nearby scan {task.get_name()} was cancelled")
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Nearby scan {task.get_name()} failed: {exc}", exc_info=exc)
