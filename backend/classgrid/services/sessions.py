from __future__ import annotations

import uuid

from classgrid.core.catalog import (
    ALL_SUB_GROUPS,
    DAYS,
    FACILITY_POOLS,
    GROUPS,
    SESSION_TYPE_LABELS,
    TIME_SLOTS,
    SessionType,
)
from classgrid.core.exceptions import InvalidSessionError
from classgrid.schemas.schedule import SessionCreate, SessionRecord


def new_session_id() -> str:
    return uuid.uuid4().hex


def resolve_group(session: SessionRecord) -> str:
    """Top-level group of a session: `group` as-is, or the first character of `sub_group`."""
    if session.group:
        return session.group
    return session.sub_group[0]


def create_session(
    session_type: SessionType,
    *,
    subject: str,
    day: str,
    time: str,
    room: str,
    group: str | None = None,
    sub_group: str | None = None,
    session_id: str | None = None,
) -> SessionRecord:
    group = (group or "").strip() or None
    sub_group = (sub_group or "").strip() or None
    subject = (subject or "").strip()

    if group and sub_group:
        raise InvalidSessionError(
            "A session targets either a group or a sub-group, not both",
            details={"group": group, "subGroup": sub_group},
        )
    if not group and not sub_group:
        raise InvalidSessionError("A session must target a group or a sub-group")
    if group and group not in GROUPS:
        raise InvalidSessionError(f"Unknown group {group!r}", details={"group": group})
    if sub_group and sub_group not in ALL_SUB_GROUPS:
        raise InvalidSessionError(f"Unknown sub-group {sub_group!r}", details={"subGroup": sub_group})
    if not subject:
        raise InvalidSessionError("Subject is required")
    if day not in DAYS:
        raise InvalidSessionError(f"Unknown day {day!r}", details={"day": day})
    if time not in TIME_SLOTS:
        raise InvalidSessionError(f"Unknown time slot {time!r}", details={"time": time})
    if room not in FACILITY_POOLS[session_type]:
        raise InvalidSessionError(
            f"Room {room!r} is not a {SESSION_TYPE_LABELS[session_type]} facility",
            details={"room": room, "session_type": session_type.value},
        )

    return SessionRecord(
        id=session_id or new_session_id(),
        subject=subject,
        day=day,
        time=time,
        room=room,
        group=group,
        sub_group=sub_group,
    )


def session_from_payload(payload: SessionCreate, *, session_id: str | None = None) -> SessionRecord:
    return create_session(
        payload.session_type,
        subject=payload.subject,
        day=payload.day,
        time=payload.time,
        room=payload.room,
        group=payload.group,
        sub_group=payload.sub_group,
        session_id=session_id,
    )


def validate_record(session_type: SessionType, record: SessionRecord) -> SessionRecord:
    """Re-run the entity rules on a record that did not come from `create_session`."""
    return create_session(
        session_type,
        subject=record.subject,
        day=record.day,
        time=record.time,
        room=record.room,
        group=record.group,
        sub_group=record.sub_group,
        session_id=record.id,
    )
