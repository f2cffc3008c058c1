"""Missed-interview sweep trigger.

POST /missed/sweep -- run a detection pass now (409 if one is running).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from app.models.interview import SweepResult
from app.scheduler.lock import current_sweep
from app.services.missed_interviews import run_missed_interview_sweep

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/missed/sweep", response_model=SweepResult)
async def trigger_missed_interview_sweep() -> SweepResult:
    """Mark every scheduled interview whose time has passed as missed."""
    holder = current_sweep()
    if holder is not None:
        raise HTTPException(
            status_code=409,
            detail="Missed-interview sweep already in progress",
            headers={
                "X-Current-Sweep-Id": str(holder.sweep_id),
                "X-Current-Sweep-Trigger": holder.trigger,
            },
        )

    try:
        result = run_missed_interview_sweep(trigger="manual")
    except Exception as exc:
        logger.error(
            "manual_sweep_failed",
            extra={"error_message": str(exc)},
        )
        raise HTTPException(
            status_code=500, detail=f"Missed-interview sweep failed: {exc}"
        ) from exc

    if result.skipped:
        raise HTTPException(
            status_code=409, detail="Missed-interview sweep already in progress"
        )
    return result
