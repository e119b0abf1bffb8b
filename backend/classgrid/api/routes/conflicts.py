from fastapi import APIRouter, Depends

from classgrid.api.deps import get_schedule_controller
from classgrid.schemas.schedule import ConflictAudit, ConflictResult, SessionCreate
from classgrid.services.conflict_service import ConflictService
from classgrid.services.schedule_service import ScheduleController

router = APIRouter()


@router.post("/check", response_model=ConflictResult, response_model_exclude_none=True)
def check_session(
    payload: SessionCreate,
    controller: ScheduleController = Depends(get_schedule_controller),
) -> ConflictResult:
    # Advisory only: the insert endpoint re-checks under the controller lock.
    return controller.check(payload)


@router.get("/audit", response_model=ConflictAudit, response_model_exclude_none=True)
def audit_schedule(controller: ScheduleController = Depends(get_schedule_controller)) -> ConflictAudit:
    return ConflictService(controller.schedule).audit()
