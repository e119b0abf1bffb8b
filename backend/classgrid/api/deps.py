from collections.abc import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from classgrid.db.session import SessionLocal
from classgrid.services.holidays import HolidaySource
from classgrid.services.schedule_service import ScheduleController


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_schedule_controller(request: Request) -> ScheduleController:
    return request.app.state.schedule_controller


def get_holiday_source(request: Request) -> HolidaySource:
    return request.app.state.holiday_source
