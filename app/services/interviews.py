"""Interview scheduling and rescheduling.

``schedule_interview`` is the single entry point that moves an application
into ``interview_scheduled``:

1. Validate the submitted details (nothing is written on failure).
2. Check the transition against the workflow table.
3. Write all interview fields with one conditional update guarded on the
   status read in step 2 (and on the reschedule counter for reschedules).
4. Queue the candidate notification; its outcome never affects the result.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from app.models.application import Application, InterviewScheduleRequest
from app.models.enums import WorkflowEvent
from app.services.applications import conditional_update, get_application
from app.services.notifications import (
    build_notification_payload,
    queue_interview_notification,
)
from app.services.workflow import (
    InvalidTransitionError,
    as_local_naive,
    next_status,
    validate_schedule,
)

logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def schedule_interview(
    application_id: UUID,
    request: InterviewScheduleRequest,
    is_reschedule: bool = False,
    reschedule_reason: str | None = None,
    now: datetime | None = None,
) -> Application:
    """Schedule (or reschedule) the interview for an application.

    Parameters
    ----------
    application_id:
        Application to schedule.
    request:
        Date, time, mode and the mode-specific venue/link, plus notes.
    is_reschedule:
        ``True`` to replace an existing schedule; bumps
        ``interview_rescheduled_count`` and records *reschedule_reason*.
    reschedule_reason:
        Free-text reason, only stored on reschedules.
    now:
        Clock override; defaults to the current local time.

    Returns
    -------
    The updated ``Application``.

    Raises
    ------
    ScheduleValidationError
        Details are missing or invalid.
    InvalidTransitionError
        The application's status does not allow this action, or it changed
        between the read and the write.
    ApplicationNotFoundError
        Unknown *application_id*.
    RuntimeError
        The store write failed.
    """
    now = now or datetime.now().astimezone()
    interview_date, interview_time = validate_schedule(
        request, today=as_local_naive(now).date()
    )

    application = get_application(application_id)
    event = WorkflowEvent.reschedule if is_reschedule else WorkflowEvent.schedule
    new_status = next_status(application.status, event)

    changes: dict[str, Any] = {
        "status": new_status.value,
        "interview_date": interview_date.isoformat(),
        "interview_time": interview_time,
        "interview_mode": request.interview_mode.value,
        "interview_venue": _clean(request.interview_venue),
        "interview_link": _clean(request.interview_link),
        "interview_notes": _clean(request.interview_notes),
        "interview_scheduled_at": now.isoformat(),
    }
    guards: dict[str, Any] | None = None
    if is_reschedule:
        stored_count = application.interview_rescheduled_count
        changes["interview_rescheduled_count"] = (stored_count or 0) + 1
        changes["reschedule_reason"] = _clean(reschedule_reason)
        # a NULL count is matched with IS NULL
        guards = {"interview_rescheduled_count": stored_count}

    updated = conditional_update(
        application_id,
        changes,
        expected_status=application.status,
        guards=guards,
    )
    if updated is None:
        raise InvalidTransitionError(
            f"Application {application_id} changed before the interview "
            "could be scheduled; reload and retry"
        )

    logger.info(
        "interview_rescheduled" if is_reschedule else "interview_scheduled",
        extra={
            "application_id": str(application_id),
            "from_status": application.status.value,
            "interview_date": changes["interview_date"],
            "interview_time": changes["interview_time"],
            "interview_mode": changes["interview_mode"],
            "rescheduled_count": updated.interview_rescheduled_count,
        },
    )

    try:
        payload = build_notification_payload(
            updated, is_reschedule, changes.get("reschedule_reason")
        )
        queue_interview_notification(payload)
    except Exception as exc:
        logger.error(
            "interview_notification_not_queued",
            extra={
                "application_id": str(application_id),
                "error_message": str(exc),
            },
        )

    return updated
