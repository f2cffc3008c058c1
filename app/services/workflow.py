"""Application status workflow: transition table and schedule validation.

Every component that changes an application's status goes through this
module -- the interview scheduler, the recruiter status endpoint and the
missed-interview sweep -- so the legal transitions live in exactly one place.

Transition table::

    applied             -> under_review, rejected
    under_review        -> interview_scheduled, rejected, hired
    interview_scheduled -> missed_interview (time-triggered), rejected, hired,
                           interview_scheduled (reschedule)
    missed_interview    -> interview_scheduled (reschedule), rejected, hired
    rejected, hired     -> (terminal)
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time

from app.core.constants import (
    MSG_DATE_IN_PAST,
    MSG_DATE_TIME_REQUIRED,
    MSG_LINK_REQUIRED,
    MSG_TIME_INVALID,
    MSG_VENUE_REQUIRED,
)
from app.models.application import Application, InterviewScheduleRequest
from app.models.enums import ApplicationStatus, InterviewMode, WorkflowEvent

logger = logging.getLogger(__name__)


class WorkflowError(ValueError):
    """Base class for workflow rule violations."""


class ScheduleValidationError(WorkflowError):
    """Interview details are incomplete or invalid; the message is user-facing."""


class InvalidTransitionError(WorkflowError):
    """The requested status change is not in the transition table."""


# ---------------------------------------------------------------------------
# Transition table
# ---------------------------------------------------------------------------

TRANSITIONS: dict[ApplicationStatus, dict[WorkflowEvent, ApplicationStatus]] = {
    ApplicationStatus.applied: {
        WorkflowEvent.review: ApplicationStatus.under_review,
        WorkflowEvent.reject: ApplicationStatus.rejected,
    },
    ApplicationStatus.under_review: {
        WorkflowEvent.schedule: ApplicationStatus.interview_scheduled,
        WorkflowEvent.reject: ApplicationStatus.rejected,
        WorkflowEvent.hire: ApplicationStatus.hired,
    },
    ApplicationStatus.interview_scheduled: {
        WorkflowEvent.miss: ApplicationStatus.missed_interview,
        WorkflowEvent.reject: ApplicationStatus.rejected,
        WorkflowEvent.hire: ApplicationStatus.hired,
        WorkflowEvent.reschedule: ApplicationStatus.interview_scheduled,
    },
    ApplicationStatus.missed_interview: {
        WorkflowEvent.reschedule: ApplicationStatus.interview_scheduled,
        WorkflowEvent.reject: ApplicationStatus.rejected,
        WorkflowEvent.hire: ApplicationStatus.hired,
    },
    ApplicationStatus.rejected: {},
    ApplicationStatus.hired: {},
}

TERMINAL_STATUSES: frozenset[ApplicationStatus] = frozenset(
    status for status, events in TRANSITIONS.items() if not events
)

# Statuses in which the interview sub-record must be populated
INTERVIEW_STATUSES: frozenset[ApplicationStatus] = frozenset(
    {ApplicationStatus.interview_scheduled, ApplicationStatus.missed_interview}
)

# Status changes a recruiter may request directly; scheduling and the
# missed-interview transition have their own entry points.
_RECRUITER_EVENTS: dict[ApplicationStatus, WorkflowEvent] = {
    ApplicationStatus.under_review: WorkflowEvent.review,
    ApplicationStatus.rejected: WorkflowEvent.reject,
    ApplicationStatus.hired: WorkflowEvent.hire,
}


def next_status(
    current: ApplicationStatus, event: WorkflowEvent
) -> ApplicationStatus:
    """Return the status reached by applying *event* to *current*.

    Raises ``InvalidTransitionError`` when the table has no such edge.
    """
    target = TRANSITIONS[current].get(event)
    if target is None:
        raise InvalidTransitionError(
            f"Cannot {event.value} an application that is {current.value}"
        )
    return target


def event_for_status(target: ApplicationStatus) -> WorkflowEvent:
    """Map a recruiter-requested status to the workflow event producing it."""
    event = _RECRUITER_EVENTS.get(target)
    if event is None:
        raise InvalidTransitionError(
            f"Status {target.value} cannot be set directly; "
            "use the interview scheduling endpoints"
        )
    return event


# ---------------------------------------------------------------------------
# Date / time helpers
# ---------------------------------------------------------------------------

def parse_interview_time(value: str) -> time:
    """Parse a ``HH:MM`` or ``HH:MM:SS`` time-of-day string."""
    cleaned = value.strip()
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(cleaned, fmt).time()
        except ValueError:
            continue
    raise ScheduleValidationError(MSG_TIME_INVALID)


def interview_datetime(interview_date: date, interview_time: str) -> datetime:
    """Combine date and time-of-day into one naive local timestamp.

    Seconds are dropped: the instant is midnight of *interview_date* plus the
    hour/minute offset.
    """
    parsed = parse_interview_time(interview_time)
    return datetime.combine(interview_date, time(parsed.hour, parsed.minute))


def as_local_naive(moment: datetime) -> datetime:
    """Express *moment* as a naive local timestamp.

    Aware datetimes are converted to the host's local zone first; naive ones
    are taken to be local already.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def is_interview_missed(application: Application, now: datetime) -> bool:
    """True if *application* is still scheduled and its interview has passed."""
    if application.status != ApplicationStatus.interview_scheduled:
        return False
    if application.interview_date is None or not application.interview_time:
        return False
    try:
        scheduled_for = interview_datetime(
            application.interview_date, application.interview_time
        )
    except ScheduleValidationError:
        logger.warning(
            "interview_time_unparseable",
            extra={
                "application_id": str(application.id),
                "interview_time": application.interview_time,
            },
        )
        return False
    return scheduled_for < as_local_naive(now)


# ---------------------------------------------------------------------------
# Schedule validation
# ---------------------------------------------------------------------------

def validate_schedule(
    request: InterviewScheduleRequest, today: date
) -> tuple[date, str]:
    """Check interview details before anything is written.

    Returns the interview date and the stripped time string.

    Raises ``ScheduleValidationError`` carrying a user-facing message when:

    - date or time is missing, or the time is not ``HH:MM[:SS]``;
    - the date is strictly before *today* (date-only comparison);
    - an in-person interview has no venue;
    - a video interview has no meeting link.

    A video link that does not look like an http(s) URL is accepted but
    logged.
    """
    interview_date = request.interview_date
    interview_time = (request.interview_time or "").strip()
    if interview_date is None or not interview_time:
        raise ScheduleValidationError(MSG_DATE_TIME_REQUIRED)

    parse_interview_time(interview_time)

    if interview_date < today:
        raise ScheduleValidationError(MSG_DATE_IN_PAST)

    if request.interview_mode == InterviewMode.in_person:
        if not (request.interview_venue or "").strip():
            raise ScheduleValidationError(MSG_VENUE_REQUIRED)

    elif request.interview_mode == InterviewMode.video:
        link = (request.interview_link or "").strip()
        if not link:
            raise ScheduleValidationError(MSG_LINK_REQUIRED)
        if not link.startswith(("http://", "https://")):
            logger.warning("interview_link_not_url", extra={"interview_link": link})

    return interview_date, interview_time
