from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from classgrid.api.routes import (
    availability,
    catalog,
    conflicts,
    health,
    schedule,
)
from classgrid.core.config import get_settings
from classgrid.core.exceptions import AppError
from classgrid.core.middleware import RequestLoggingMiddleware, RequestSizeLimitMiddleware
from classgrid.db.base import Base
from classgrid.db.session import SessionLocal, engine
import classgrid.models  # noqa: F401
from classgrid.services.holidays import ConfiguredHolidaySource
from classgrid.services.persistence import ScheduleStore
from classgrid.services.schedule_service import ScheduleController

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    store = ScheduleStore(SessionLocal, key=settings.storage_key, version=settings.export_version)
    app.state.schedule_controller = ScheduleController(store)
    app.state.holiday_source = ConfiguredHolidaySource.from_settings(settings)
    logger.info(
        "Loaded schedule %s with %d sessions",
        settings.storage_key,
        app.state.schedule_controller.schedule.count(),
    )
    yield


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "details": exc.details},
    )

app = FastAPI(title=settings.project_name, lifespan=lifespan)
app.add_exception_handler(AppError, app_error_handler)

app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_request_size_bytes)
app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
app.include_router(catalog.router, prefix=f"{settings.api_prefix}/catalog", tags=["catalog"])
app.include_router(schedule.router, prefix=f"{settings.api_prefix}/schedule", tags=["schedule"])
app.include_router(availability.router, prefix=f"{settings.api_prefix}/availability", tags=["availability"])
app.include_router(conflicts.router, prefix=f"{settings.api_prefix}/conflicts", tags=["conflicts"])
