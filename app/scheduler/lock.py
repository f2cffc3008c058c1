"""In-process guard against overlapping missed-interview passes.

The interval job, a candidate-scoped pass and the manual trigger can all
fire at once.  ``sweep_guard`` takes the lock without blocking and records
who holds it, so the manual endpoint can report the running pass.  Across
processes, the status-guarded update is what keeps writes correct.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import NamedTuple
from uuid import UUID


class ActiveSweep(NamedTuple):
    """The pass currently holding the lock."""
    sweep_id: UUID
    trigger: str
    started_at: datetime


_sweep_lock = threading.Lock()
_active: ActiveSweep | None = None


def acquire_sweep_lock(sweep_id: UUID, trigger: str = "manual") -> bool:
    """Take the lock for *sweep_id* if free; never waits."""
    global _active
    if not _sweep_lock.acquire(blocking=False):
        return False
    _active = ActiveSweep(sweep_id, trigger, datetime.now())
    return True


def release_sweep_lock() -> None:
    """Free the lock and forget the holder; a no-op when nothing holds it."""
    global _active
    _active = None
    if _sweep_lock.locked():
        _sweep_lock.release()


@contextmanager
def sweep_guard(sweep_id: UUID, trigger: str) -> Iterator[bool]:
    """Yield whether this pass got the lock; release it on exit if so."""
    acquired = acquire_sweep_lock(sweep_id, trigger)
    try:
        yield acquired
    finally:
        if acquired:
            release_sweep_lock()


def current_sweep() -> ActiveSweep | None:
    return _active


def get_current_sweep_id() -> UUID | None:
    return _active.sweep_id if _active else None


def is_sweep_running() -> bool:
    return _active is not None
