"""Cron-style scheduling of the expiration notification batch."""

import enum
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

_logger = logging.getLogger(__name__)

JOB_ID = "expiration-notifications"


class SchedulerState(enum.Enum):
    """Lifecycle state of the notification scheduler."""

    STOPPED = "stopped"
    RUNNING = "running"


@dataclass
class NotificationScheduler:
    """Runs a coroutine job at the times described by a crontab expression."""

    job: Callable[[], Awaitable[object]]
    cron: str
    timezone: str = "UTC"
    clock: Callable[[], datetime] = field(default=lambda: datetime.now(tz=UTC))
    state: SchedulerState = SchedulerState.STOPPED
    trigger: CronTrigger = field(init=False)
    _scheduler: AsyncIOScheduler | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.trigger = CronTrigger.from_crontab(self.cron, timezone=self.timezone)

    def start(self) -> bool:
        """Register the job and start the scheduler; a second call does nothing.

        Must be called from a running event loop.
        """
        if self.state is SchedulerState.RUNNING:
            _logger.info("Notification scheduler is already running")
            return False
        scheduler = AsyncIOScheduler(timezone=self.timezone)
        scheduler.add_job(
            self.run_once,
            self.trigger,
            id=JOB_ID,
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()
        self._scheduler = scheduler
        self.state = SchedulerState.RUNNING
        _logger.info(
            "Notification scheduler started with schedule %r (%s)",
            self.cron,
            self.timezone,
        )
        return True

    def stop(self) -> None:
        if self.state is SchedulerState.STOPPED:
            _logger.info("Notification scheduler is not running")
            return
        scheduler, self._scheduler = self._scheduler, None
        if scheduler is not None:
            scheduler.shutdown(wait=False)
        self.state = SchedulerState.STOPPED
        _logger.info("Notification scheduler stopped")

    def next_run(self, previous: datetime | None = None) -> datetime | None:
        """Return the first fire time after ``previous`` or the current time."""
        return self.trigger.get_next_fire_time(previous, self.clock())

    def scheduled_run(self) -> datetime | None:
        """Return the fire time of the registered job, if the scheduler runs."""
        if self._scheduler is None:
            return None
        job = self._scheduler.get_job(JOB_ID)
        return job.next_run_time if job is not None else None

    async def run_once(self) -> None:
        """Run the job, logging instead of raising on failure."""
        _logger.info("Running scheduled expiration notification check")
        try:
            await self.job()
        except Exception:
            _logger.exception("Scheduled notification check failed")
