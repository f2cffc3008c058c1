"""Response models for interview views, calendar export and sweeps."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from app.models.application import Application


class CalendarInvite(BaseModel):
    """A calendar-invite link derived from an application's interview."""
    application_id: UUID
    title: str
    start: datetime
    end: datetime
    location: str
    url: str


class UpcomingInterview(BaseModel):
    """An upcoming interview as shown to the candidate."""
    application: Application
    time_until: str
    calendar_url: str | None = None


class SweepResult(BaseModel):
    """Outcome of one missed-interview detection pass."""
    sweep_id: UUID
    trigger: str
    swept_at: datetime
    candidate_id: UUID | None = None
    checked: int = 0
    transitioned: list[UUID] = []
    lost_race: int = 0
    errors: int = 0
    skipped: bool = False
