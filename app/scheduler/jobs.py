"""APScheduler job definitions and scheduler management.

Runs the missed-interview sweep as a server-side interval job, independent
of any client session.  The first pass fires shortly after startup; later
passes follow ``MISSED_INTERVIEW_SWEEP_INTERVAL_SECONDS``.  The same
scheduler also executes queued interview notifications.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from app.core.config import settings
from app.services.missed_interviews import run_missed_interview_sweep

logger = logging.getLogger(__name__)

MISSED_INTERVIEW_JOB_ID = "missed_interview_sweep"

# Module-level scheduler instance (singleton)
scheduler = BackgroundScheduler()


def _missed_interview_job() -> None:
    """Wrapper that APScheduler calls on each interval tick."""
    run_missed_interview_sweep(trigger="scheduler")


def start_scheduler() -> None:
    """Register the sweep job and start the background scheduler."""
    first_run = datetime.now() + timedelta(
        seconds=settings.MISSED_INTERVIEW_INITIAL_DELAY_SECONDS
    )
    scheduler.add_job(
        _missed_interview_job,
        IntervalTrigger(seconds=settings.MISSED_INTERVIEW_SWEEP_INTERVAL_SECONDS),
        id=MISSED_INTERVIEW_JOB_ID,
        replace_existing=True,
        next_run_time=first_run,
        max_instances=1,
        coalesce=True,
    )
    scheduler.start()
    logger.info(
        "scheduler_started",
        extra={
            "interval_seconds": settings.MISSED_INTERVIEW_SWEEP_INTERVAL_SECONDS,
            "first_run": first_run.isoformat(),
        },
    )


def shutdown_scheduler() -> None:
    """Stop the scheduler on application shutdown, cancelling future ticks."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("scheduler_stopped")


def is_scheduler_running() -> bool:
    """Check if the scheduler is currently running."""
    return scheduler.running
