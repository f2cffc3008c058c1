"""Missed-interview detection.

A detection pass samples the clock once, scans ``interview_scheduled``
applications dated on or before today, and moves every one whose
date + time (naive local timestamp) is strictly before that instant to
``missed_interview``.  Each write is guarded on the status still being
``interview_scheduled``; a row that no longer matches was moved by a human
first and is simply left alone.

Passes are triggered by the scheduler interval job, by loading a
candidate's application list (scoped to that candidate), and manually.
``run_missed_interview_sweep`` serialises passes within the process.
"""

from __future__ import annotations

import logging
from datetime import datetime
from uuid import UUID, uuid4

from app.models.enums import ApplicationStatus, WorkflowEvent
from app.models.interview import SweepResult
from app.scheduler.lock import current_sweep, sweep_guard
from app.services.applications import conditional_update, list_scheduled_interviews
from app.services.workflow import as_local_naive, is_interview_missed, next_status

logger = logging.getLogger(__name__)

_last_sweep: SweepResult | None = None


def detect_missed_interviews(
    now: datetime | None = None,
    candidate_id: UUID | None = None,
    trigger: str = "scheduler",
    sweep_id: UUID | None = None,
) -> SweepResult:
    """Run one detection pass and return its summary.

    Parameters
    ----------
    now:
        Cut-over instant for the whole pass; defaults to the local clock.
    candidate_id:
        Restrict the pass to one candidate's applications.
    trigger:
        ``"scheduler"``, ``"candidate"`` or ``"manual"`` -- logged only.
    """
    cutoff = as_local_naive(now or datetime.now())
    result = SweepResult(
        sweep_id=sweep_id or uuid4(),
        trigger=trigger,
        swept_at=cutoff,
        candidate_id=candidate_id,
    )
    target = next_status(ApplicationStatus.interview_scheduled, WorkflowEvent.miss)

    scheduled = list_scheduled_interviews(cutoff.date(), candidate_id=candidate_id)
    result.checked = len(scheduled)

    for application in scheduled:
        if not is_interview_missed(application, cutoff):
            continue

        try:
            updated = conditional_update(
                application.id,
                {"status": target.value},
                expected_status=ApplicationStatus.interview_scheduled,
            )
        except RuntimeError:
            # Already logged by conditional_update; keep sweeping.
            result.errors += 1
            continue

        if updated is None:
            result.lost_race += 1
            logger.debug(
                "missed_interview_already_moved",
                extra={"application_id": str(application.id)},
            )
            continue

        result.transitioned.append(application.id)
        logger.info(
            "missed_interview_marked",
            extra={
                "application_id": str(application.id),
                "candidate_id": str(application.candidate_id),
                "interview_date": str(application.interview_date),
                "interview_time": application.interview_time,
            },
        )

    logger.info(
        "missed_interview_sweep_complete",
        extra={
            "sweep_id": str(result.sweep_id),
            "trigger": trigger,
            "checked": result.checked,
            "transitioned": len(result.transitioned),
            "lost_race": result.lost_race,
            "errors": result.errors,
        },
    )
    return result


def run_missed_interview_sweep(
    trigger: str = "scheduler",
    candidate_id: UUID | None = None,
    now: datetime | None = None,
) -> SweepResult:
    """Run a detection pass unless another one is in progress.

    A pass that cannot take the sweep lock returns immediately with
    ``skipped=True``; the running pass covers the same rows.
    """
    global _last_sweep

    sweep_id = uuid4()
    with sweep_guard(sweep_id, trigger) as acquired:
        if not acquired:
            holder = current_sweep()
            logger.info(
                "missed_interview_sweep_skipped",
                extra={
                    "sweep_id": str(sweep_id),
                    "trigger": trigger,
                    "running_sweep_id": str(holder.sweep_id) if holder else None,
                    "running_trigger": holder.trigger if holder else None,
                },
            )
            return SweepResult(
                sweep_id=sweep_id,
                trigger=trigger,
                swept_at=as_local_naive(now or datetime.now()),
                candidate_id=candidate_id,
                skipped=True,
            )

        result = detect_missed_interviews(
            now=now,
            candidate_id=candidate_id,
            trigger=trigger,
            sweep_id=sweep_id,
        )

    _last_sweep = result
    return result


def get_last_sweep() -> SweepResult | None:
    """Return the summary of the most recent completed pass, if any."""
    return _last_sweep
