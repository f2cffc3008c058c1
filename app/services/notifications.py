"""Interview notification dispatch.

After a schedule/reschedule commits, ``queue_interview_notification`` hands
the payload to the APScheduler executor so the request that performed the
write does not wait on delivery.  Delivery itself is best-effort: failures
are logged and reported as ``False``, never raised, never retried.

Two delivery paths:

- ``INTERVIEW_NOTIFICATION_URL`` set: POST the camelCase payload to that
  notification function with ``httpx``.
- otherwise: compose the message here and insert the ``notifications`` row
  directly (``deliver_interview_notification``, also served by
  ``POST /api/v1/notifications/interview``).
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import uuid4

import httpx

from app.core.config import settings
from app.core.constants import (
    APPLICATIONS_TABLE,
    CANDIDATES_TABLE,
    NOTIFICATION_SIGN_OFF,
    NOTIFICATION_TITLE_RESCHEDULED,
    NOTIFICATION_TITLE_SCHEDULED,
    NOTIFICATIONS_TABLE,
)
from app.db.supabase import get_supabase
from app.models.application import Application
from app.models.enums import InterviewMode, NotificationType
from app.models.notification import (
    InterviewNotificationPayload,
    NotificationCreate,
    NotificationResult,
)
from app.scheduler.jobs import scheduler
from app.services.calendar import format_long_date

logger = logging.getLogger(__name__)


def build_notification_payload(
    application: Application,
    is_reschedule: bool,
    reschedule_reason: str | None = None,
) -> InterviewNotificationPayload:
    """Build the notification body from a freshly scheduled application."""
    if application.interview_date is None or application.interview_time is None:
        raise ValueError(f"Application {application.id} has no interview scheduled")
    return InterviewNotificationPayload(
        candidate_id=application.candidate_id,
        application_id=application.id,
        interview_date=application.interview_date,
        interview_time=application.interview_time,
        interview_venue=application.interview_venue,
        interview_mode=application.interview_mode or InterviewMode.video,
        interview_link=application.interview_link,
        is_reschedule=is_reschedule,
        reschedule_reason=reschedule_reason,
    )


# ---------------------------------------------------------------------------
# Message composition
# ---------------------------------------------------------------------------

def compose_interview_notification(
    payload: InterviewNotificationPayload,
    job_title: str,
    company_name: str,
) -> tuple[str, str]:
    """Return ``(title, message)`` for a schedule or reschedule notification."""
    if payload.is_reschedule:
        title = NOTIFICATION_TITLE_RESCHEDULED
        message = (
            f"Your interview for {job_title} at {company_name} "
            "has been rescheduled.\n\n"
        )
    else:
        title = NOTIFICATION_TITLE_SCHEDULED
        message = (
            f"Great news! Your interview for {job_title} at {company_name} "
            "has been scheduled.\n\n"
        )

    message += f"\U0001f4c5 Date: {format_long_date(payload.interview_date)}\n"
    message += f"\U0001f552 Time: {payload.interview_time}\n"

    if payload.interview_mode == InterviewMode.in_person:
        message += f"\U0001f4cd Venue: {payload.interview_venue}\n"
    elif payload.interview_mode == InterviewMode.video:
        message += "\U0001f4bb Mode: Video Call\n"
        message += f"\U0001f517 Link: {payload.interview_link}\n"
    elif payload.interview_mode == InterviewMode.phone:
        message += "\U0001f4de Mode: Phone Interview\n"

    if payload.is_reschedule and payload.reschedule_reason:
        message += f"\n\U0001f4dd Reason: {payload.reschedule_reason}"

    message += f"\n\n{NOTIFICATION_SIGN_OFF}"
    return title, message


# ---------------------------------------------------------------------------
# Delivery
# ---------------------------------------------------------------------------

def _fetch_one(table: str, columns: str, row_id: str) -> dict[str, Any] | None:
    client = get_supabase()
    result = (
        client.table(table)
        .select(columns)
        .eq("id", row_id)
        .limit(1)
        .execute()
    )
    return result.data[0] if result.data else None


def deliver_interview_notification(
    payload: InterviewNotificationPayload,
) -> NotificationResult:
    """Insert the candidate-facing notification row for *payload*.

    Raises ``LookupError`` when the candidate or application does not exist.
    """
    candidate = _fetch_one(CANDIDATES_TABLE, "user_id, name", str(payload.candidate_id))
    application = _fetch_one(
        APPLICATIONS_TABLE,
        "job_id, job:jobs(title, company_name)",
        str(payload.application_id),
    )
    if not candidate or not application:
        raise LookupError("Candidate or application not found")

    job = application.get("job") or {}
    title, message = compose_interview_notification(
        payload,
        job_title=job.get("title") or "the position",
        company_name=job.get("company_name") or "the company",
    )

    notification = NotificationCreate(
        user_id=candidate["user_id"],
        candidate_id=payload.candidate_id,
        application_id=payload.application_id,
        type=(
            NotificationType.interview_rescheduled
            if payload.is_reschedule
            else NotificationType.interview_scheduled
        ),
        title=title,
        message=message,
    )
    get_supabase().table(NOTIFICATIONS_TABLE).insert(
        notification.model_dump(mode="json")
    ).execute()

    return NotificationResult(success=True, message="Notification sent successfully")


def _post_to_notification_function(payload: InterviewNotificationPayload) -> None:
    with httpx.Client(timeout=settings.NOTIFICATION_TIMEOUT_SECONDS) as client:
        response = client.post(
            settings.INTERVIEW_NOTIFICATION_URL,
            headers={
                "Authorization": f"Bearer {settings.SUPABASE_KEY}",
                "Content-Type": "application/json",
            },
            json=payload.model_dump(mode="json", by_alias=True),
        )
        response.raise_for_status()


def dispatch_interview_notification(payload: InterviewNotificationPayload) -> bool:
    """Deliver one notification; return whether it went through.

    Any failure is logged and swallowed -- the schedule it describes has
    already been committed.
    """
    try:
        if settings.INTERVIEW_NOTIFICATION_URL:
            _post_to_notification_function(payload)
        else:
            deliver_interview_notification(payload)
    except Exception as exc:
        logger.error(
            "interview_notification_failed",
            extra={
                "application_id": str(payload.application_id),
                "candidate_id": str(payload.candidate_id),
                "is_reschedule": payload.is_reschedule,
                "error_type": type(exc).__name__,
                "error_message": str(exc),
            },
        )
        return False

    logger.info(
        "interview_notification_sent",
        extra={
            "application_id": str(payload.application_id),
            "is_reschedule": payload.is_reschedule,
        },
    )
    return True


def queue_interview_notification(payload: InterviewNotificationPayload) -> None:
    """Emit the notification as a side effect of a committed schedule.

    Runs on the scheduler's executor when the scheduler is up, inline
    otherwise (e.g. with ``SCHEDULER_ENABLED=false``).
    """
    if scheduler.running:
        scheduler.add_job(
            dispatch_interview_notification,
            args=[payload],
            id=f"interview_notification_{payload.application_id}_{uuid4().hex}",
        )
        return
    dispatch_interview_notification(payload)
