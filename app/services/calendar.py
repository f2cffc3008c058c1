"""Calendar export and interview display helpers.

Pure functions over an ``Application``'s interview fields: a Google
Calendar invite link (start = interview time, end = start + configured
duration) whose location depends on the interview mode, and the
human-readable "time until interview" label.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from urllib.parse import quote

from app.core.config import settings
from app.core.constants import (
    CALENDAR_DATE_FORMAT,
    DEFAULT_COMPANY_NAME,
    DEFAULT_JOB_TITLE,
    DEFAULT_POSITION,
    GOOGLE_CALENDAR_RENDER_URL,
    IN_PERSON_LOCATION_FALLBACK,
    PHONE_LOCATION,
    VIDEO_LOCATION_FALLBACK,
)
from app.models.application import Application
from app.models.enums import InterviewMode
from app.models.interview import CalendarInvite
from app.services.workflow import interview_datetime, parse_interview_time

# Characters encodeURIComponent leaves alone besides alphanumerics and "-_.~"
_URI_COMPONENT_SAFE = "!*'()"


def format_long_date(value: date) -> str:
    """Format as e.g. ``Monday, March 10, 2025``."""
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def format_time_12h(value: str) -> str:
    """Format ``14:05`` / ``14:05:00`` as ``2:05 PM``."""
    parsed = parse_interview_time(value)
    return parsed.strftime("%I:%M %p").lstrip("0")


def interview_location(application: Application) -> str:
    """Calendar location for the interview's mode."""
    if application.interview_mode == InterviewMode.video:
        return application.interview_link or VIDEO_LOCATION_FALLBACK
    if application.interview_mode == InterviewMode.in_person:
        return application.interview_venue or IN_PERSON_LOCATION_FALLBACK
    return PHONE_LOCATION


def _describe(
    application: Application, interview_date: date, interview_time: str
) -> str:
    job = application.job
    job_title = job.title if job and job.title else DEFAULT_POSITION
    company = job.company_name if job and job.company_name else DEFAULT_COMPANY_NAME

    text = f"Interview for {job_title} at {company}\n\n"
    text += f"Date: {format_long_date(interview_date)}\n"
    text += f"Time: {format_time_12h(interview_time)}\n\n"

    if application.interview_mode == InterviewMode.video and application.interview_link:
        text += f"Join via: {application.interview_link}\n\n"
    elif application.interview_mode == InterviewMode.in_person and application.interview_venue:
        text += f"Location: {application.interview_venue}\n\n"
    elif application.interview_mode == InterviewMode.phone:
        text += "Mode: Phone Interview\n\n"

    if application.interview_notes:
        text += f"Notes: {application.interview_notes}"
    return text


def _to_calendar_utc(moment: datetime) -> str:
    # Naive local -> UTC, the form Google Calendar expects in ``dates``
    return moment.astimezone(timezone.utc).strftime(CALENDAR_DATE_FORMAT)


def build_calendar_invite(application: Application) -> CalendarInvite:
    """Build the calendar invite for *application*'s interview.

    Raises ``ValueError`` if the application has no interview date/time.
    """
    if application.interview_date is None or not application.interview_time:
        raise ValueError("Interview date or time not set")

    start = interview_datetime(application.interview_date, application.interview_time)
    end = start + timedelta(minutes=settings.CALENDAR_EVENT_DURATION_MINUTES)

    job = application.job
    title = f"Interview: {job.title if job and job.title else DEFAULT_JOB_TITLE}"
    location = interview_location(application)
    details = _describe(
        application, application.interview_date, application.interview_time
    )

    url = (
        f"{GOOGLE_CALENDAR_RENDER_URL}?action=TEMPLATE"
        f"&text={quote(title, safe=_URI_COMPONENT_SAFE)}"
        f"&dates={_to_calendar_utc(start)}/{_to_calendar_utc(end)}"
        f"&details={quote(details, safe=_URI_COMPONENT_SAFE)}"
        f"&location={quote(location, safe=_URI_COMPONENT_SAFE)}"
    )

    return CalendarInvite(
        application_id=application.id,
        title=title,
        start=start,
        end=end,
        location=location,
        url=url,
    )


def describe_time_until(interview_at: datetime, now: datetime) -> str:
    """Return ``Past``, ``in N days``, ``in N hours``, ``in N minutes`` or ``Starting now!``."""
    seconds = int((interview_at - now).total_seconds())
    if seconds < 0:
        return "Past"

    days, remainder = divmod(seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes = remainder // 60

    if days > 0:
        return f"in {days} day{'s' if days > 1 else ''}"
    if hours > 0:
        return f"in {hours} hour{'s' if hours > 1 else ''}"
    if minutes > 0:
        return f"in {minutes} minute{'s' if minutes > 1 else ''}"
    return "Starting now!"
