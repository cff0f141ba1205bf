"""Scheduler: APScheduler-based one-shot jobs.

Used for deferred work such as completing a manually requested trend brief
a few seconds after the request returns.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.date import DateTrigger

logger = logging.getLogger(__name__)

_scheduler: AsyncIOScheduler | None = None


def get_scheduler() -> AsyncIOScheduler:
    global _scheduler
    if _scheduler is None:
        _scheduler = AsyncIOScheduler(timezone=timezone.utc)
    return _scheduler


def start_scheduler() -> None:
    """Start the background scheduler."""
    scheduler = get_scheduler()
    if scheduler.running:
        return
    scheduler.start()
    logger.info("Scheduler started")


def stop_scheduler() -> None:
    """Stop the background scheduler."""
    global _scheduler
    if _scheduler and _scheduler.running:
        _scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
    _scheduler = None


def schedule_once(
    job_id: str,
    func: Callable[..., Any],
    delay_seconds: float,
    args: tuple[Any, ...] = (),
) -> None:
    """Run ``func(*args)`` once, ``delay_seconds`` from now."""
    run_at = datetime.now(timezone.utc) + timedelta(seconds=delay_seconds)
    get_scheduler().add_job(
        func,
        trigger=DateTrigger(run_date=run_at),
        args=args,
        id=job_id,
        name=job_id,
        replace_existing=True,
    )
    logger.info("Scheduled job %s at %s", job_id, run_at.isoformat())
