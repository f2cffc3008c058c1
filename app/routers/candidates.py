"""Candidate-facing read endpoints.

GET /{candidate_id}/applications        -- applications, newest first
GET /{candidate_id}/interviews/upcoming -- scheduled interviews from today on

Loading the application list first runs a missed-interview pass scoped to
the candidate, so interviews whose time has passed are already shown as
missed.
"""

from __future__ import annotations

import logging
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, HTTPException

from app.models.application import Application
from app.models.interview import UpcomingInterview
from app.services.applications import (
    list_candidate_applications,
    list_upcoming_interviews,
)
from app.services.calendar import build_calendar_invite, describe_time_until
from app.services.missed_interviews import run_missed_interview_sweep
from app.services.workflow import ScheduleValidationError, interview_datetime

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{candidate_id}/applications", response_model=list[Application])
async def candidate_applications(candidate_id: UUID) -> list[Application]:
    """Return the candidate's applications after reconciling missed interviews."""
    try:
        run_missed_interview_sweep(trigger="candidate", candidate_id=candidate_id)
    except Exception as exc:
        # The listing is still useful without the reconciliation pass.
        logger.warning(
            "candidate_sweep_failed",
            extra={"candidate_id": str(candidate_id), "error_message": str(exc)},
        )

    try:
        return list_candidate_applications(candidate_id)
    except Exception as exc:
        logger.error(
            "candidate_applications_failed",
            extra={"candidate_id": str(candidate_id), "error_message": str(exc)},
        )
        raise HTTPException(
            status_code=500, detail=f"Failed to load applications: {exc}"
        ) from exc


@router.get(
    "/{candidate_id}/interviews/upcoming",
    response_model=list[UpcomingInterview],
)
async def upcoming_interviews(candidate_id: UUID) -> list[UpcomingInterview]:
    """Return scheduled interviews dated today or later, soonest first."""
    now = datetime.now()
    try:
        applications = list_upcoming_interviews(candidate_id, now.date())
    except Exception as exc:
        logger.error(
            "upcoming_interviews_failed",
            extra={"candidate_id": str(candidate_id), "error_message": str(exc)},
        )
        raise HTTPException(
            status_code=500, detail=f"Failed to load interviews: {exc}"
        ) from exc

    upcoming: list[UpcomingInterview] = []
    for application in applications:
        try:
            scheduled_for = interview_datetime(
                application.interview_date, application.interview_time or ""
            )
        except (ScheduleValidationError, TypeError):
            logger.warning(
                "upcoming_interview_unparseable",
                extra={"application_id": str(application.id)},
            )
            continue
        upcoming.append(
            UpcomingInterview(
                application=application,
                time_until=describe_time_until(scheduled_for, now),
                calendar_url=build_calendar_invite(application).url,
            )
        )
    return upcoming
