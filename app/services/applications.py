"""Application record store access.

Thin layer over the Supabase ``applications`` table: point reads, the
candidate-scoped listing, the scheduled-interview scan used by the sweep,
and the status-guarded conditional update every workflow write goes
through.  Recruiter status changes (review / reject / hire) also live here
because they are nothing more than a validated conditional update.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any
from uuid import UUID

from app.core.constants import APPLICATION_SELECT, APPLICATIONS_TABLE
from app.db.supabase import get_supabase
from app.models.application import Application
from app.models.enums import ApplicationStatus
from app.services.workflow import (
    InvalidTransitionError,
    event_for_status,
    next_status,
)

logger = logging.getLogger(__name__)


class ApplicationNotFoundError(LookupError):
    """No application row matches the requested id."""


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

def get_application(application_id: UUID) -> Application:
    """Fetch one application (with its job summary) by id.

    Raises ``ApplicationNotFoundError`` if no row matches.
    """
    client = get_supabase()
    result = (
        client.table(APPLICATIONS_TABLE)
        .select(APPLICATION_SELECT)
        .eq("id", str(application_id))
        .limit(1)
        .execute()
    )
    if not result.data:
        raise ApplicationNotFoundError(f"Application not found: {application_id}")
    return Application(**result.data[0])


def list_candidate_applications(candidate_id: UUID) -> list[Application]:
    """Return a candidate's applications, newest first."""
    client = get_supabase()
    result = (
        client.table(APPLICATIONS_TABLE)
        .select(APPLICATION_SELECT)
        .eq("candidate_id", str(candidate_id))
        .order("applied_at", desc=True)
        .execute()
    )
    return [Application(**row) for row in result.data or []]


def list_scheduled_interviews(
    on_or_before: date,
    candidate_id: UUID | None = None,
) -> list[Application]:
    """Return ``interview_scheduled`` applications dated on or before a day.

    The date filter only narrows the scan; callers still compare the full
    date + time against their own clock.
    """
    client = get_supabase()
    query = (
        client.table(APPLICATIONS_TABLE)
        .select("*")
        .eq("status", ApplicationStatus.interview_scheduled.value)
        .lte("interview_date", on_or_before.isoformat())
    )
    if candidate_id is not None:
        query = query.eq("candidate_id", str(candidate_id))
    result = query.execute()
    return [Application(**row) for row in result.data or []]


def list_upcoming_interviews(candidate_id: UUID, today: date) -> list[Application]:
    """Return a candidate's scheduled interviews dated *today* or later."""
    client = get_supabase()
    result = (
        client.table(APPLICATIONS_TABLE)
        .select(APPLICATION_SELECT)
        .eq("candidate_id", str(candidate_id))
        .eq("status", ApplicationStatus.interview_scheduled.value)
        .gte("interview_date", today.isoformat())
        .order("interview_date")
        .execute()
    )
    return [Application(**row) for row in result.data or []]


# ---------------------------------------------------------------------------
# Conditional update
# ---------------------------------------------------------------------------

def conditional_update(
    application_id: UUID,
    changes: dict[str, Any],
    expected_status: ApplicationStatus,
    guards: dict[str, Any] | None = None,
) -> Application | None:
    """Apply *changes* only if the row still has *expected_status*.

    Issues ``UPDATE applications SET ... WHERE id = ? AND status = ?``
    (plus one condition per *guards* entry: equality, or ``IS NULL`` for
    a ``None`` value).  Returns the updated record, or
    ``None`` when no row matched -- i.e. someone else moved the application
    first.  Store failures are raised as ``RuntimeError``; nothing is
    written in that case.
    """
    client = get_supabase()
    payload = {"updated_at": _utc_now_iso(), **changes}

    query = (
        client.table(APPLICATIONS_TABLE)
        .update(payload)
        .eq("id", str(application_id))
        .eq("status", expected_status.value)
    )
    for column, value in (guards or {}).items():
        if value is None:
            query = query.is_(column, "null")
        else:
            query = query.eq(column, value)

    try:
        result = query.execute()
    except Exception as exc:
        logger.error(
            "application_update_failed",
            extra={
                "application_id": str(application_id),
                "expected_status": expected_status.value,
                "error_message": str(exc),
            },
        )
        raise RuntimeError(f"Failed to update application {application_id}: {exc}") from exc

    if not result.data:
        return None
    return Application(**result.data[0])


# ---------------------------------------------------------------------------
# Recruiter status changes
# ---------------------------------------------------------------------------

def change_application_status(
    application_id: UUID, target: ApplicationStatus
) -> Application:
    """Move an application to *target* (``under_review``, ``rejected`` or ``hired``).

    The change is checked against the transition table and written with a
    status guard, so it fails with ``InvalidTransitionError`` if the
    application changed underneath the caller.
    """
    application = get_application(application_id)
    new_status = next_status(application.status, event_for_status(target))

    updated = conditional_update(
        application_id,
        {"status": new_status.value},
        expected_status=application.status,
    )
    if updated is None:
        raise InvalidTransitionError(
            f"Application {application_id} changed status concurrently; reload and retry"
        )

    logger.info(
        "application_status_changed",
        extra={
            "application_id": str(application_id),
            "from_status": application.status.value,
            "to_status": new_status.value,
        },
    )
    return updated
