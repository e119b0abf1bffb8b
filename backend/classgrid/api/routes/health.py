from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from classgrid.api.deps import get_db, get_schedule_controller
from classgrid.services.schedule_service import ScheduleController

router = APIRouter()

REQUIRED_TABLES = {"schedule_snapshots"}


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/health/live")
def health_live() -> dict:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/health/ready")
def health_ready(
    db: Session = Depends(get_db),
    controller: ScheduleController = Depends(get_schedule_controller),
) -> JSONResponse:
    db_ok = True
    missing_tables: list[str] = []
    db_error: str | None = None

    try:
        connection = db.connection()
        connection.execute(text("SELECT 1"))
        table_names = set(inspect(connection).get_table_names())
        missing_tables = sorted(REQUIRED_TABLES - table_names)
    except SQLAlchemyError as exc:  # pragma: no cover - environment dependent
        db_ok = False
        db_error = str(exc)

    ready = db_ok and not missing_tables
    payload = {
        "status": "ok" if ready else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": {
            "ok": db_ok,
            "missing_tables": missing_tables,
            "error": db_error,
        },
        "schedule": {
            "sessions": controller.schedule.count(),
        },
    }
    return JSONResponse(status_code=200 if ready else 503, content=payload)
