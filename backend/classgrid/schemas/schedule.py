from __future__ import annotations

import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from classgrid.core.catalog import SessionType


class SessionRecord(BaseModel):
    """One scheduled class. The session type is implied by the collection holding it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1, max_length=64)
    subject: str = Field(min_length=1, max_length=200)
    day: str
    time: str
    room: str
    group: str | None = None
    sub_group: str | None = Field(default=None, alias="subGroup")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: object) -> object:
        # Exports from the browser build used millisecond timestamps as ids.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    def as_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class TypedSession(BaseModel):
    model_config = ConfigDict(frozen=True)

    session_type: SessionType
    session: SessionRecord


class Schedule(BaseModel):
    """The three session collections. Treated as an immutable value; mutations build a new Schedule."""

    model_config = ConfigDict(frozen=True)

    amphitheater: list[SessionRecord] = Field(default_factory=list)
    td: list[SessionRecord] = Field(default_factory=list)
    tp: list[SessionRecord] = Field(default_factory=list)

    def collection(self, session_type: SessionType) -> list[SessionRecord]:
        return getattr(self, session_type.value)

    def typed_sessions(self) -> list[TypedSession]:
        return [
            TypedSession(session_type=session_type, session=session)
            for session_type in SessionType
            for session in self.collection(session_type)
        ]

    def find(self, session_id: str) -> TypedSession | None:
        for item in self.typed_sessions():
            if item.session.id == session_id:
                return item
        return None

    def count(self) -> int:
        return len(self.amphitheater) + len(self.td) + len(self.tp)

    def as_dict(self) -> dict:
        return {session_type.value: [item.as_dict() for item in self.collection(session_type)] for session_type in SessionType}


class ScheduleEnvelope(BaseModel):
    schedule: Schedule
    timestamp: str
    version: str


class SessionCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_type: SessionType
    subject: str
    day: str
    time: str
    room: str
    group: str | None = None
    sub_group: str | None = Field(default=None, alias="subGroup")


class SessionMove(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_type: SessionType | None = None
    subject: str | None = None
    day: str | None = None
    time: str | None = None
    room: str | None = None
    group: str | None = None
    sub_group: str | None = Field(default=None, alias="subGroup")


class Occupancy(BaseModel):
    occupied_rooms: set[str] = Field(default_factory=set)
    occupied_groups: set[str] = Field(default_factory=set)


ConflictKind = Literal["ok", "room_conflict", "group_conflict"]


class ConflictResult(BaseModel):
    kind: ConflictKind = "ok"
    existing: SessionRecord | None = None
    existing_type: SessionType | None = None

    @property
    def ok(self) -> bool:
        return self.kind == "ok"


class Collision(BaseModel):
    kind: Literal["room_conflict", "group_conflict"]
    day: str
    time: str
    first: SessionRecord
    second: SessionRecord


class ConflictAudit(BaseModel):
    collisions: list[Collision] = Field(default_factory=list)


class AvailabilityOut(BaseModel):
    day: str
    time: str
    session_type: SessionType
    date: datetime.date | None = None
    holiday: bool = False
    occupied_rooms: list[str]
    occupied_groups: list[str]
    available_rooms: list[str]
    free_groups: list[str]


class GridCell(BaseModel):
    day: str
    time: str
    date: datetime.date | None = None
    holiday: bool = False
    sessions: list[TypedSession] = Field(default_factory=list)


class ScheduleGrid(BaseModel):
    week_of: datetime.date | None = None
    days: list[str]
    time_slots: list[str]
    cells: list[GridCell]
