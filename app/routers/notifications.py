"""Interview notification function.

POST /interview -- compose and store the candidate notification for a
schedule or reschedule.  Accepts the camelCase payload the dispatcher
sends.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from app.models.notification import InterviewNotificationPayload, NotificationResult
from app.services.notifications import deliver_interview_notification

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/interview", response_model=NotificationResult)
async def send_interview_notification(
    payload: InterviewNotificationPayload,
) -> NotificationResult:
    """Insert the notification row for an interview schedule event."""
    try:
        return deliver_interview_notification(payload)
    except LookupError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except Exception as exc:
        logger.error(
            "send_interview_notification_failed",
            extra={
                "application_id": str(payload.application_id),
                "error_message": str(exc),
            },
        )
        raise HTTPException(status_code=500, detail=str(exc)) from exc
