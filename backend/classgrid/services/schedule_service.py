from __future__ import annotations

import logging
from threading import Lock

from classgrid.core.catalog import SessionType
from classgrid.core.exceptions import ConflictError, SessionNotFoundError
from classgrid.schemas.schedule import ConflictResult, Schedule, SessionCreate, SessionMove, SessionRecord
from classgrid.services.conflict_service import check_conflict
from classgrid.services.persistence import ScheduleStore
from classgrid.services.sessions import create_session, session_from_payload, validate_record

logger = logging.getLogger(__name__)


# ================================================================
# Pure mutations: each returns a new Schedule, the input is untouched
# ================================================================

def insert(schedule: Schedule, candidate: SessionRecord, session_type: SessionType) -> Schedule:
    candidate = validate_record(session_type, candidate)
    result = check_conflict(schedule, candidate)
    if not result.ok:
        raise ConflictError(result.kind, result.existing.as_dict())
    collection = [*schedule.collection(session_type), candidate]
    return schedule.model_copy(update={session_type.value: collection})


def remove(schedule: Schedule, session_id: str) -> Schedule:
    if schedule.find(session_id) is None:
        return schedule
    return schedule.model_copy(
        update={
            session_type.value: [item for item in schedule.collection(session_type) if item.id != session_id]
            for session_type in SessionType
        }
    )


def clear(schedule: Schedule) -> Schedule:
    return Schedule()


# ================================================================
# Controller: single owner of the live schedule
# ================================================================

class ScheduleController:
    """Owns the mutable schedule. Every check-then-commit runs under one lock."""

    def __init__(self, store: ScheduleStore | None = None, *, schedule: Schedule | None = None) -> None:
        self._lock = Lock()
        self._store = store
        if schedule is not None:
            self._schedule = schedule
        elif store is not None:
            self._schedule = store.load()
        else:
            self._schedule = Schedule()

    @property
    def schedule(self) -> Schedule:
        return self._schedule

    def _commit(self, schedule: Schedule) -> None:
        self._schedule = schedule
        if self._store is not None:
            self._store.save(schedule)

    def check(self, payload: SessionCreate) -> ConflictResult:
        candidate = session_from_payload(payload)
        return check_conflict(self._schedule, candidate)

    def add(self, payload: SessionCreate) -> SessionRecord:
        candidate = session_from_payload(payload)
        with self._lock:
            try:
                updated = insert(self._schedule, candidate, payload.session_type)
            except ConflictError as exc:
                logger.info(
                    "Rejected %s session %s on %s %s: %s with %s",
                    payload.session_type.value,
                    candidate.subject,
                    candidate.day,
                    candidate.time,
                    exc.kind,
                    exc.existing.get("id"),
                )
                raise
            self._commit(updated)
        logger.info(
            "Added %s session %s (%s, %s %s, %s)",
            payload.session_type.value,
            candidate.id,
            candidate.subject,
            candidate.day,
            candidate.time,
            candidate.room,
        )
        return candidate

    def move(self, session_id: str, changes: SessionMove) -> SessionRecord:
        with self._lock:
            current = self._schedule.find(session_id)
            if current is None:
                raise SessionNotFoundError(session_id)

            data = changes.model_dump(exclude_unset=True)
            session_type = data.get("session_type") or current.session_type
            # Switching between group and sub-group replaces the other field.
            if "group" in data and "sub_group" not in data:
                data["sub_group"] = None
            if "sub_group" in data and "group" not in data:
                data["group"] = None
            candidate = create_session(
                session_type,
                subject=data.get("subject", current.session.subject),
                day=data.get("day", current.session.day),
                time=data.get("time", current.session.time),
                room=data.get("room", current.session.room),
                group=data.get("group", current.session.group),
                sub_group=data.get("sub_group", current.session.sub_group),
                session_id=session_id,
            )
            updated = insert(remove(self._schedule, session_id), candidate, session_type)
            self._commit(updated)
        logger.info("Moved session %s to %s %s (%s)", session_id, candidate.day, candidate.time, candidate.room)
        return candidate

    def remove(self, session_id: str) -> Schedule:
        with self._lock:
            updated = remove(self._schedule, session_id)
            if updated is not self._schedule:
                self._commit(updated)
                logger.info("Removed session %s", session_id)
            return self._schedule

    def clear(self) -> Schedule:
        with self._lock:
            self._schedule = clear(self._schedule)
            if self._store is not None:
                self._store.clear()
        logger.info("Schedule cleared")
        return self._schedule

    def replace(self, schedule: Schedule) -> Schedule:
        with self._lock:
            self._commit(schedule)
        logger.info("Schedule replaced by import (%d sessions)", schedule.count())
        return schedule
