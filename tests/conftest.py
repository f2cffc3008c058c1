"""Shared test fixtures.

Seeds the environment ``Settings`` needs, keeps the background scheduler
off during tests, and provides a ``test_client`` and Supabase mocks for
the health router.
"""

import os
from collections.abc import Callable, Generator
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock, patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-key")
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["INTERVIEW_NOTIFICATION_URL"] = ""


def _chainable_table_mock(data: list | None = None) -> MagicMock:
    """Return a table mock supporting fluent chaining, executing to *data*."""
    m = MagicMock()
    for method in (
        "select", "insert", "upsert", "update", "eq", "limit",
        "in_", "gt", "gte", "lt", "lte", "is_", "order",
    ):
        getattr(m, method).return_value = m
    m.execute.return_value = MagicMock(data=data if data is not None else [])
    return m


@pytest.fixture()
def mock_supabase_module() -> Generator[MagicMock, None, None]:
    """Patch the Supabase client used by the health router."""
    mock_client = MagicMock()
    mock_client.table.return_value = _chainable_table_mock([{"id": "x"}])

    with patch("app.routers.health.get_supabase", return_value=mock_client):
        yield mock_client


@pytest.fixture()
def mock_supabase_disconnected() -> Generator[MagicMock, None, None]:
    """Patch ``get_supabase`` to simulate a disconnected database."""
    with patch(
        "app.routers.health.get_supabase",
        side_effect=Exception("Connection refused"),
    ):
        yield MagicMock()


@pytest.fixture()
def test_client() -> Generator[TestClient, None, None]:
    """Provide a FastAPI TestClient."""
    from app.main import app

    with TestClient(app) as client:
        yield client


@pytest.fixture(autouse=True)
def _release_sweep_lock() -> Generator[None, None, None]:
    """Make sure no test leaves the sweep lock held."""
    yield
    from app.scheduler.lock import release_sweep_lock

    release_sweep_lock()


# ---------------------------------------------------------------------------
# In-memory Supabase stand-in for workflow tests
# ---------------------------------------------------------------------------

def _norm(value: Any) -> str | None:
    return None if value is None else str(value)


class FakeQuery:
    """Minimal PostgREST query builder over a list of dict rows."""

    def __init__(self, rows: list[dict[str, Any]]) -> None:
        self._rows = rows
        self._filters: list[Callable[[dict[str, Any]], bool]] = []
        self._update: dict[str, Any] | None = None
        self._insert: dict[str, Any] | None = None
        self._order: tuple[str, bool] | None = None
        self._limit: int | None = None

    def select(self, *_args: Any, **_kwargs: Any) -> "FakeQuery":
        return self

    def update(self, payload: dict[str, Any]) -> "FakeQuery":
        self._update = dict(payload)
        return self

    def insert(self, payload: dict[str, Any]) -> "FakeQuery":
        self._insert = dict(payload)
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append(lambda row: _norm(row.get(column)) == _norm(value))
        return self

    def is_(self, column: str, value: str) -> "FakeQuery":
        # only the "null" form is used
        self._filters.append(lambda row: row.get(column) is None)
        return self

    def lte(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append(
            lambda row: row.get(column) is not None and str(row[column]) <= str(value)
        )
        return self

    def gte(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append(
            lambda row: row.get(column) is not None and str(row[column]) >= str(value)
        )
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self._order = (column, desc)
        return self

    def limit(self, count: int) -> "FakeQuery":
        self._limit = count
        return self

    def execute(self) -> SimpleNamespace:
        if self._insert is not None:
            self._rows.append(self._insert)
            return SimpleNamespace(data=[dict(self._insert)])

        matched = [row for row in self._rows if all(f(row) for f in self._filters)]
        if self._update is not None:
            for row in matched:
                row.update(self._update)
        if self._order is not None:
            column, desc = self._order
            matched.sort(key=lambda row: str(row.get(column) or ""), reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]
        return SimpleNamespace(data=[dict(row) for row in matched])


class FakeSupabase:
    """Holds named tables of dict rows; ``table()`` returns a fresh query."""

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.tables.setdefault(name, []))


@pytest.fixture()
def fake_store() -> Generator[FakeSupabase, None, None]:
    """Route the application store through an in-memory fake."""
    store = FakeSupabase()
    with patch("app.services.applications.get_supabase", return_value=store):
        yield store


@pytest.fixture()
def make_application_row() -> Callable[..., dict[str, Any]]:
    """Factory for ``applications`` rows; keyword overrides win."""

    def _make(**overrides: Any) -> dict[str, Any]:
        row: dict[str, Any] = {
            "id": str(uuid4()),
            "candidate_id": str(uuid4()),
            "job_id": str(uuid4()),
            "status": "under_review",
            "interview_date": None,
            "interview_time": None,
            "interview_mode": None,
            "interview_venue": None,
            "interview_link": None,
            "interview_notes": None,
            "interview_scheduled_at": None,
            "interview_rescheduled_count": 0,
            "reschedule_reason": None,
            "applied_at": "2025-02-01T09:00:00+00:00",
            "updated_at": "2025-02-01T09:00:00+00:00",
        }
        row.update(overrides)
        return row

    return _make
