from __future__ import annotations

from collections.abc import Callable
import logging

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from classgrid.core.exceptions import ScheduleImportError
from classgrid.models.schedule_snapshot import ScheduleSnapshot
from classgrid.schemas.schedule import Schedule
from classgrid.services.export import DEFAULT_VERSION, build_envelope, validate_schedule

logger = logging.getLogger(__name__)


class ScheduleStore:
    """Key-value snapshot of the schedule. Never raises: reads degrade to an empty schedule."""

    def __init__(self, session_factory: Callable[[], Session], *, key: str, version: str = DEFAULT_VERSION) -> None:
        self._session_factory = session_factory
        self._key = key
        self._version = version

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> Schedule:
        try:
            with self._session_factory() as db:
                record = db.get(ScheduleSnapshot, self._key)
                payload = None if record is None else record.payload
        except SQLAlchemyError:
            logger.exception("Error loading schedule snapshot %s", self._key)
            return Schedule()

        if not payload:
            return Schedule()
        try:
            schedule = Schedule.model_validate(payload.get("schedule") or {})
        except (AttributeError, ValidationError):
            logger.warning("Discarding unreadable schedule snapshot %s", self._key, exc_info=True)
            return Schedule()

        try:
            return validate_schedule(schedule)
        except ScheduleImportError as exc:
            logger.warning(
                "Discarding schedule snapshot %s: %s", self._key, "; ".join(exc.details.get("problems", []))
            )
            return Schedule()

    def save(self, schedule: Schedule) -> None:
        payload = build_envelope(schedule, version=self._version)
        try:
            with self._session_factory() as db:
                record = db.get(ScheduleSnapshot, self._key)
                if record is None:
                    db.add(ScheduleSnapshot(key=self._key, payload=payload))
                else:
                    record.payload = payload
                db.commit()
        except SQLAlchemyError:
            logger.exception("Error saving schedule snapshot %s", self._key)
            return
        logger.debug("Schedule snapshot %s saved (%d sessions)", self._key, schedule.count())

    def clear(self) -> None:
        try:
            with self._session_factory() as db:
                record = db.get(ScheduleSnapshot, self._key)
                if record is not None:
                    db.delete(record)
                    db.commit()
        except SQLAlchemyError:
            logger.exception("Error clearing schedule snapshot %s", self._key)
            return
        logger.info("Schedule snapshot %s cleared", self._key)
