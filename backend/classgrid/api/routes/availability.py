from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from classgrid.api.deps import get_holiday_source, get_schedule_controller
from classgrid.core.catalog import DAYS, GROUPS, TIME_SLOTS, SessionType, pool_for
from classgrid.schemas.schedule import AvailabilityOut
from classgrid.services.availability import available_rooms, occupancy_at
from classgrid.services.holidays import HolidaySource, is_holiday, weekday_name
from classgrid.services.schedule_service import ScheduleController

router = APIRouter()


@router.get("", response_model=AvailabilityOut)
def get_availability(
    day: str = Query(...),
    time: str = Query(...),
    session_type: SessionType = Query(default=SessionType.amphitheater),
    on: date | None = Query(default=None, alias="date"),
    controller: ScheduleController = Depends(get_schedule_controller),
    holidays: HolidaySource = Depends(get_holiday_source),
) -> AvailabilityOut:
    if day not in DAYS:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=f"Unknown day {day!r}")
    if time not in TIME_SLOTS:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=f"Unknown time slot {time!r}")
    if on is not None and weekday_name(on) != day:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"{on.isoformat()} is not a {day}",
        )

    schedule = controller.schedule
    pool = pool_for(session_type)
    occupancy = occupancy_at(schedule, day, time)
    holiday = on is not None and is_holiday(holidays, on)

    return AvailabilityOut(
        day=day,
        time=time,
        session_type=session_type,
        date=on,
        holiday=holiday,
        occupied_rooms=[room for room in pool if room in occupancy.occupied_rooms],
        occupied_groups=[group for group in GROUPS if group in occupancy.occupied_groups],
        available_rooms=[] if holiday else available_rooms(schedule, day, time, pool),
        free_groups=[] if holiday else [group for group in GROUPS if group not in occupancy.occupied_groups],
    )
