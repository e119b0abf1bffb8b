from datetime import date
import logging

from fastapi import APIRouter, Depends, Query, Request, Response, status

from classgrid.api.deps import get_holiday_source, get_schedule_controller
from classgrid.core.catalog import DAYS, TIME_SLOTS
from classgrid.core.config import get_settings
from classgrid.schemas.schedule import GridCell, Schedule, ScheduleGrid, SessionCreate, SessionMove, SessionRecord
from classgrid.services.availability import index_by_slot
from classgrid.services.export import export_filename, load_export, serialize
from classgrid.services.holidays import HolidaySource, date_for_day, is_holiday, week_start
from classgrid.services.schedule_service import ScheduleController

logger = logging.getLogger(__name__)

router = APIRouter()

settings = get_settings()


@router.get("", response_model=Schedule, response_model_exclude_none=True)
def get_schedule(controller: ScheduleController = Depends(get_schedule_controller)) -> Schedule:
    return controller.schedule


@router.get("/grid", response_model=ScheduleGrid, response_model_exclude_none=True)
def get_schedule_grid(
    week_of: date | None = Query(default=None),
    controller: ScheduleController = Depends(get_schedule_controller),
    holidays: HolidaySource = Depends(get_holiday_source),
) -> ScheduleGrid:
    index = index_by_slot(controller.schedule)
    cells: list[GridCell] = []
    for time in TIME_SLOTS:
        for day in DAYS:
            on = date_for_day(week_of, day) if week_of is not None else None
            cells.append(
                GridCell(
                    day=day,
                    time=time,
                    date=on,
                    holiday=on is not None and is_holiday(holidays, on),
                    sessions=index.get((day, time), []),
                )
            )
    return ScheduleGrid(
        week_of=week_start(week_of) if week_of is not None else None,
        days=DAYS,
        time_slots=TIME_SLOTS,
        cells=cells,
    )


@router.post("/sessions", response_model=SessionRecord, response_model_exclude_none=True, status_code=status.HTTP_201_CREATED)
def add_session(
    payload: SessionCreate,
    controller: ScheduleController = Depends(get_schedule_controller),
) -> SessionRecord:
    return controller.add(payload)


@router.put("/sessions/{session_id}", response_model=SessionRecord, response_model_exclude_none=True)
def move_session(
    session_id: str,
    payload: SessionMove,
    controller: ScheduleController = Depends(get_schedule_controller),
) -> SessionRecord:
    return controller.move(session_id, payload)


@router.delete("/sessions/{session_id}", response_model=Schedule, response_model_exclude_none=True)
def delete_session(
    session_id: str,
    controller: ScheduleController = Depends(get_schedule_controller),
) -> Schedule:
    return controller.remove(session_id)


@router.delete("", response_model=Schedule, response_model_exclude_none=True)
def clear_schedule(controller: ScheduleController = Depends(get_schedule_controller)) -> Schedule:
    return controller.clear()


@router.get("/export")
def export_schedule(controller: ScheduleController = Depends(get_schedule_controller)) -> Response:
    content = serialize(controller.schedule, version=settings.export_version)
    return Response(
        content=content,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )


@router.post("/import", response_model=Schedule, response_model_exclude_none=True)
async def import_schedule(
    request: Request,
    controller: ScheduleController = Depends(get_schedule_controller),
) -> Schedule:
    body = await request.body()
    schedule = load_export(body)
    logger.info("Importing schedule with %d sessions", schedule.count())
    return controller.replace(schedule)
