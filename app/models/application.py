"""Pydantic models for the ``applications`` table and its workflow payloads."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import ApplicationStatus, InterviewMode


class JobSummary(BaseModel):
    """Embedded ``jobs`` columns used for display and calendar export."""
    title: str | None = None
    company_name: str | None = None


class Application(BaseModel):
    """Full application record returned from the database."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    candidate_id: UUID
    job_id: UUID
    status: ApplicationStatus = ApplicationStatus.applied

    interview_date: date | None = None
    interview_time: str | None = None  # local time-of-day, "HH:MM[:SS]"
    interview_mode: InterviewMode | None = None
    interview_venue: str | None = None
    interview_link: str | None = None
    interview_notes: str | None = None
    interview_scheduled_at: datetime | None = None
    interview_rescheduled_count: int | None = Field(default=0, ge=0)  # NULL on legacy rows
    reschedule_reason: str | None = None

    applied_at: datetime | None = None
    updated_at: datetime | None = None

    job: JobSummary | None = None  # read-only embed


class InterviewScheduleRequest(BaseModel):
    """Interview details submitted by a recruiter.

    Date and time are optional here so that a missing value reaches
    ``validate_schedule`` and produces its user-facing message.
    """
    interview_date: date | None = None
    interview_time: str | None = None
    interview_mode: InterviewMode = InterviewMode.video
    interview_venue: str | None = None
    interview_link: str | None = None
    interview_notes: str | None = None


class InterviewRescheduleRequest(InterviewScheduleRequest):
    """Reschedule payload: the schedule fields plus an optional reason."""
    reschedule_reason: str | None = None


class ApplicationStatusUpdate(BaseModel):
    """Recruiter-driven status change."""
    status: ApplicationStatus
