"""Tests for calendar invite links and interview display helpers."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from urllib.parse import parse_qs, urlsplit
from uuid import uuid4

import pytest

from app.models.application import Application, JobSummary
from app.models.enums import InterviewMode
from app.services.calendar import (
    build_calendar_invite,
    describe_time_until,
    format_long_date,
    format_time_12h,
    interview_location,
)


def _application(**overrides: object) -> Application:
    values: dict[str, object] = {
        "id": uuid4(),
        "candidate_id": uuid4(),
        "job_id": uuid4(),
        "status": "interview_scheduled",
        "interview_date": date(2025, 3, 10),
        "interview_time": "14:00",
        "interview_mode": InterviewMode.video,
        "interview_link": "https://meet.example/abc",
        "job": JobSummary(title="Backend Engineer", company_name="Acme"),
    }
    values.update(overrides)
    return Application(**values)


def _utc(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


class TestInterviewLocation:
    """Location follows the interview mode."""

    def test_video_uses_link(self) -> None:
        assert interview_location(_application()) == "https://meet.example/abc"

    def test_video_without_link(self) -> None:
        assert interview_location(_application(interview_link=None)) == "Video Call"

    def test_in_person_uses_venue(self) -> None:
        app = _application(interview_mode=InterviewMode.in_person, interview_venue="HQ")
        assert interview_location(app) == "HQ"

    def test_in_person_without_venue(self) -> None:
        app = _application(interview_mode=InterviewMode.in_person, interview_link=None)
        assert interview_location(app) == "Office"

    def test_phone(self) -> None:
        app = _application(interview_mode=InterviewMode.phone, interview_link="ignored")
        assert interview_location(app) == "Phone Interview"


class TestBuildCalendarInvite:
    def test_invite_fields(self) -> None:
        """Given a 14:00 interview, the invite spans one hour from local 14:00."""
        app = _application()

        invite = build_calendar_invite(app)

        assert invite.application_id == app.id
        assert invite.title == "Interview: Backend Engineer"
        assert invite.start == datetime(2025, 3, 10, 14, 0)
        assert invite.end == invite.start + timedelta(hours=1)
        assert invite.location == "https://meet.example/abc"

    def test_url_components(self) -> None:
        """Given an invite, its URL carries title, UTC dates, details and location."""
        app = _application(interview_notes="Bring ID")

        invite = build_calendar_invite(app)
        parts = urlsplit(invite.url)
        query = parse_qs(parts.query)

        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == (
            "https://calendar.google.com/calendar/render"
        )
        assert query["action"] == ["TEMPLATE"]
        assert query["text"] == ["Interview: Backend Engineer"]
        start = datetime(2025, 3, 10, 14, 0)
        assert query["dates"] == [f"{_utc(start)}/{_utc(start + timedelta(hours=1))}"]
        assert query["location"] == ["https://meet.example/abc"]

        details = query["details"][0]
        assert details.startswith("Interview for Backend Engineer at Acme")
        assert "Date: Monday, March 10, 2025" in details
        assert "Time: 2:00 PM" in details
        assert "Join via: https://meet.example/abc" in details
        assert details.endswith("Notes: Bring ID")

    def test_title_spaces_are_percent_encoded(self) -> None:
        invite = build_calendar_invite(_application())
        assert "text=Interview%3A%20Backend%20Engineer" in invite.url

    def test_defaults_without_job(self) -> None:
        app = _application(job=None, interview_mode=InterviewMode.phone, interview_link=None)

        invite = build_calendar_invite(app)
        details = parse_qs(urlsplit(invite.url).query)["details"][0]

        assert invite.title == "Interview: Job Interview"
        assert invite.location == "Phone Interview"
        assert details.startswith("Interview for position at Company")
        assert "Mode: Phone Interview" in details

    def test_seconds_are_dropped(self) -> None:
        invite = build_calendar_invite(_application(interview_time="09:30:45"))
        assert invite.start == datetime(2025, 3, 10, 9, 30)

    @pytest.mark.parametrize(
        "overrides", [{"interview_date": None}, {"interview_time": None}]
    )
    def test_missing_schedule_raises(self, overrides: dict) -> None:
        with pytest.raises(ValueError, match="not set"):
            build_calendar_invite(_application(**overrides))


class TestFormatting:
    def test_long_date(self) -> None:
        assert format_long_date(date(2025, 3, 10)) == "Monday, March 10, 2025"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("14:05", "2:05 PM"), ("09:00:00", "9:00 AM"), ("00:15", "12:15 AM"), ("12:00", "12:00 PM")],
    )
    def test_time_12h(self, value: str, expected: str) -> None:
        assert format_time_12h(value) == expected


class TestDescribeTimeUntil:
    NOW = datetime(2025, 3, 10, 12, 0)

    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (timedelta(minutes=-1), "Past"),
            (timedelta(days=1, hours=2), "in 1 day"),
            (timedelta(days=3), "in 3 days"),
            (timedelta(hours=1), "in 1 hour"),
            (timedelta(hours=5, minutes=30), "in 5 hours"),
            (timedelta(minutes=1), "in 1 minute"),
            (timedelta(minutes=45), "in 45 minutes"),
            (timedelta(seconds=30), "Starting now!"),
            (timedelta(0), "Starting now!"),
        ],
    )
    def test_labels(self, delta: timedelta, expected: str) -> None:
        assert describe_time_until(self.NOW + delta, self.NOW) == expected
