"""Application workflow endpoints.

GET   /{application_id}                       -- fetch one application
PATCH /{application_id}/status                -- recruiter review / reject / hire
POST  /{application_id}/interview             -- schedule an interview
POST  /{application_id}/interview/reschedule  -- reschedule an interview
GET   /{application_id}/calendar              -- calendar invite link

Service errors map to HTTP as: validation 422, illegal transition or lost
race 409, unknown application 404, store failure 500.
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, HTTPException

from app.models.application import (
    Application,
    ApplicationStatusUpdate,
    InterviewRescheduleRequest,
    InterviewScheduleRequest,
)
from app.models.interview import CalendarInvite
from app.services.applications import (
    ApplicationNotFoundError,
    change_application_status,
    get_application,
)
from app.services.calendar import build_calendar_invite
from app.services.interviews import schedule_interview
from app.services.workflow import InvalidTransitionError, ScheduleValidationError

logger = logging.getLogger(__name__)

router = APIRouter()


def _run_schedule(
    application_id: UUID,
    request: InterviewScheduleRequest,
    is_reschedule: bool,
    reschedule_reason: str | None = None,
) -> Application:
    try:
        return schedule_interview(
            application_id,
            request,
            is_reschedule=is_reschedule,
            reschedule_reason=reschedule_reason,
        )
    except ScheduleValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except InvalidTransitionError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ApplicationNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except RuntimeError as exc:
        logger.error(
            "schedule_interview_failed",
            extra={
                "application_id": str(application_id),
                "is_reschedule": is_reschedule,
                "error_message": str(exc),
            },
        )
        raise HTTPException(
            status_code=500,
            detail="Failed to reschedule interview" if is_reschedule else "Failed to schedule interview",
        ) from exc


@router.get("/{application_id}", response_model=Application)
async def read_application(application_id: UUID) -> Application:
    """Return a single application with its interview details."""
    try:
        return get_application(application_id)
    except ApplicationNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.patch("/{application_id}/status", response_model=Application)
async def update_application_status(
    application_id: UUID, body: ApplicationStatusUpdate
) -> Application:
    """Move an application to ``under_review``, ``rejected`` or ``hired``.

    Only transitions present in the workflow table are accepted.
    """
    try:
        return change_application_status(application_id, body.status)
    except InvalidTransitionError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ApplicationNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except RuntimeError as exc:
        logger.error(
            "update_application_status_failed",
            extra={
                "application_id": str(application_id),
                "status": body.status.value,
                "error_message": str(exc),
            },
        )
        raise HTTPException(
            status_code=500, detail="Failed to update application status"
        ) from exc


@router.post("/{application_id}/interview", response_model=Application)
async def create_interview(
    application_id: UUID, body: InterviewScheduleRequest
) -> Application:
    """Schedule the first interview for an application under review."""
    return _run_schedule(application_id, body, is_reschedule=False)


@router.post("/{application_id}/interview/reschedule", response_model=Application)
async def reschedule_interview(
    application_id: UUID, body: InterviewRescheduleRequest
) -> Application:
    """Replace the interview schedule of a scheduled or missed interview."""
    request = InterviewScheduleRequest(
        **body.model_dump(exclude={"reschedule_reason"})
    )
    return _run_schedule(
        application_id,
        request,
        is_reschedule=True,
        reschedule_reason=body.reschedule_reason,
    )


@router.get("/{application_id}/calendar", response_model=CalendarInvite)
async def application_calendar(application_id: UUID) -> CalendarInvite:
    """Return a Google Calendar invite link for the application's interview."""
    try:
        application = get_application(application_id)
        return build_calendar_invite(application)
    except ApplicationNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
