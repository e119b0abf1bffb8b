from __future__ import annotations

from datetime import date, datetime, timezone
import logging

from pydantic import ValidationError

from classgrid.core.catalog import SessionType
from classgrid.core.exceptions import InvalidSessionError, ScheduleImportError
from classgrid.schemas.schedule import Schedule, ScheduleEnvelope
from classgrid.services.conflict_service import ConflictService
from classgrid.services.sessions import validate_record

logger = logging.getLogger(__name__)

DEFAULT_VERSION = "1.0"


def build_envelope(schedule: Schedule, *, version: str = DEFAULT_VERSION, now: datetime | None = None) -> dict:
    stamp = (now or datetime.now(timezone.utc)).isoformat()
    return {"schedule": schedule.as_dict(), "timestamp": stamp, "version": version}


def serialize(schedule: Schedule, *, version: str = DEFAULT_VERSION, now: datetime | None = None) -> bytes:
    envelope = ScheduleEnvelope.model_validate(build_envelope(schedule, version=version, now=now))
    return envelope.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")


def deserialize(data: bytes | str) -> Schedule:
    """Parse an export envelope. Structural problems raise ScheduleImportError."""
    try:
        return ScheduleEnvelope.model_validate_json(data).schedule
    except ValidationError as exc:
        problems = [f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()]
        raise ScheduleImportError(problems) from exc


def export_filename(today: date | None = None) -> str:
    return f"school_schedule_{(today or date.today()).isoformat()}.json"


def validate_schedule(schedule: Schedule) -> Schedule:
    """Re-run every entity rule and both exclusivity checks over a whole schedule."""
    problems: list[str] = []

    for session_type in SessionType:
        for record in schedule.collection(session_type):
            try:
                validate_record(session_type, record)
            except InvalidSessionError as exc:
                problems.append(f"{session_type.value}/{record.id}: {exc.message}")

    service = ConflictService(schedule)
    for session_id in service.duplicate_ids():
        problems.append(f"duplicate session id {session_id}")
    if not problems:
        for collision in service.audit().collisions:
            problems.append(
                f"{collision.kind} on {collision.day} {collision.time}: "
                f"{collision.first.id} and {collision.second.id}"
            )

    if problems:
        logger.info("Rejected schedule import with %d problem(s)", len(problems))
        raise ScheduleImportError(problems)
    return schedule


def load_export(data: bytes | str) -> Schedule:
    return validate_schedule(deserialize(data))
