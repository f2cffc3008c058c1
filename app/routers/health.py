"""Health check endpoint.

Reports database connectivity, scheduler state and when the last
missed-interview sweep completed.
"""

import logging
from typing import Any

from fastapi import APIRouter
from starlette.responses import JSONResponse

from app.core.constants import APPLICATIONS_TABLE
from app.db.supabase import get_supabase
from app.scheduler.jobs import is_scheduler_running
from app.services.missed_interviews import get_last_sweep

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check() -> Any:
    """Return 200 when Supabase answers, 503 otherwise."""
    db_status = "disconnected"

    try:
        client = get_supabase()
        result = client.table(APPLICATIONS_TABLE).select("id").limit(1).execute()
        if result is not None:
            db_status = "connected"
    except Exception:
        logger.warning("Health check: Supabase connection failed", exc_info=True)

    last_sweep = get_last_sweep()

    payload: dict[str, str | None] = {
        "status": "ok" if db_status == "connected" else "degraded",
        "database": db_status,
        "scheduler": "running" if is_scheduler_running() else "stopped",
        "last_sweep": last_sweep.swept_at.isoformat() if last_sweep else None,
    }

    if db_status != "connected":
        return JSONResponse(status_code=503, content=payload)

    return payload
