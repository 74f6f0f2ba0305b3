import logging
import sqlite3
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from expense_assistant.core.config import Settings
from expense_assistant.db.dal import Database
from expense_assistant.routers.deps import get_app_settings, get_db

router = APIRouter(prefix="/api/health", tags=["health"])

logger = logging.getLogger("app.health")

_STARTED = time.monotonic()


def _check_database(db: Database) -> dict:
    started = time.perf_counter()
    try:
        db.ping()
    except sqlite3.Error as exc:
        logger.error("database health check failed: %s", exc)
        return {"status": "unhealthy", "error": str(exc)}
    elapsed_ms = round((time.perf_counter() - started) * 1000)
    return {"status": "healthy", "responseTime": f"{elapsed_ms}ms"}


@router.get("", summary="Service health and database connectivity")
async def health(
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    started = time.perf_counter()
    database = _check_database(db)
    healthy = database["status"] == "healthy"
    response_time = round((time.perf_counter() - started) * 1000)
    logger.info(
        "health check completed db=%s responseTime=%sms",
        database["status"],
        response_time,
    )
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.version,
            "uptime": round(time.monotonic() - _STARTED, 3),
            "responseTime": response_time,
            "services": {"database": database},
        },
    )
