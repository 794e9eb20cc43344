"""
Background Tasks.

Periodic trash purge that runs on the editor's event loop.

Usage:
    scheduler = PurgeScheduler(trash_manager, interval_seconds=3600)
    scheduler.start()
    ...
    await scheduler.stop()
"""

import asyncio
from typing import Any

from scribe.backend.core.logging import get_logger, log_with_source
from scribe.backend.core.utils import utc_now
from scribe.editor.services.trash import TrashManager

logger = get_logger(__name__)

PURGE_INTERVAL_SECONDS = 3600.0


async def purge_expired_trash(manager: TrashManager) -> dict[str, Any]:
    """
    Remove trash items older than the retention window.

    Returns:
        Purge statistics
    """
    started = utc_now()
    purged = manager.purge_expired(now=started)

    result = {
        "status": "completed",
        "purged_count": len(purged),
        "purged_ids": [item.id for item in purged],
        "ran_at": started.isoformat(),
    }

    log_with_source(logger, "tasks", "info", "Trash purge completed", purged_count=len(purged))
    return result


class PurgeScheduler:
    """Runs purge_expired_trash immediately and then every interval_seconds."""

    def __init__(self, manager: TrashManager, interval_seconds: float = PURGE_INTERVAL_SECONDS) -> None:
        self.manager = manager
        self.interval_seconds = interval_seconds
        self._task: asyncio.Task | None = None
        self.runs = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Start the purge loop on the running event loop."""
        if not self.running:
            self._task = asyncio.create_task(self._run(), name="trash-purge")
            log_with_source(
                logger,
                "tasks",
                "debug",
                "Purge scheduler started",
                interval_seconds=self.interval_seconds,
            )
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _run(self) -> None:
        while True:
            await purge_expired_trash(self.manager)
            self.runs += 1
            await asyncio.sleep(self.interval_seconds)
