"""Pydantic models for interview notifications.

``InterviewNotificationPayload`` is the camelCase JSON contract sent to the
notification function; ``NotificationCreate`` is the ``notifications`` row.
"""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.models.enums import InterviewMode, NotificationType


class InterviewNotificationPayload(BaseModel):
    """Body of one schedule/reschedule notification."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    candidate_id: UUID
    application_id: UUID
    interview_date: date
    interview_time: str
    interview_venue: str | None = None
    interview_mode: InterviewMode
    interview_link: str | None = None
    is_reschedule: bool = False
    reschedule_reason: str | None = None


class NotificationCreate(BaseModel):
    """Payload for inserting a row into ``notifications``."""
    user_id: UUID
    candidate_id: UUID
    application_id: UUID
    type: NotificationType
    title: str
    message: str


class NotificationResult(BaseModel):
    """Response of the notification function."""
    success: bool
    message: str
