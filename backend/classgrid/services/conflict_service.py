from __future__ import annotations

from typing import List

from classgrid.schemas.schedule import (
    Collision,
    ConflictAudit,
    ConflictResult,
    Schedule,
    SessionRecord,
    TypedSession,
)
from classgrid.services.availability import index_by_slot
from classgrid.services.sessions import resolve_group


def check_conflict(schedule: Schedule, candidate: SessionRecord) -> ConflictResult:
    """Decide whether `candidate` can join `schedule`.

    Room clashes win over group clashes: the whole schedule is scanned for a
    room clash before any group clash is reported. A session never clashes with
    itself (same id).
    """
    others = [
        item
        for item in schedule.typed_sessions()
        if item.session.id != candidate.id
        and item.session.day == candidate.day
        and item.session.time == candidate.time
    ]

    for item in others:
        if item.session.room == candidate.room:
            return ConflictResult(kind="room_conflict", existing=item.session, existing_type=item.session_type)

    candidate_group = resolve_group(candidate)
    for item in others:
        if resolve_group(item.session) == candidate_group:
            return ConflictResult(kind="group_conflict", existing=item.session, existing_type=item.session_type)

    return ConflictResult()


class ConflictService:
    def __init__(self, schedule: Schedule):
        self.schedule = schedule

    def check(self, candidate: SessionRecord) -> ConflictResult:
        return check_conflict(self.schedule, candidate)

    def audit(self) -> ConflictAudit:
        """List every pair of sessions already breaking room or group exclusivity."""
        collisions: List[Collision] = []

        for (day, time), cell in index_by_slot(self.schedule).items():
            n = len(cell)
            for i in range(n):
                s1: TypedSession = cell[i]
                for j in range(i + 1, n):
                    s2: TypedSession = cell[j]
                    if s1.session.id == s2.session.id:
                        continue
                    if s1.session.room == s2.session.room:
                        collisions.append(Collision(
                            kind="room_conflict", day=day, time=time,
                            first=s1.session, second=s2.session,
                        ))
                    elif resolve_group(s1.session) == resolve_group(s2.session):
                        collisions.append(Collision(
                            kind="group_conflict", day=day, time=time,
                            first=s1.session, second=s2.session,
                        ))

        return ConflictAudit(collisions=collisions)

    def duplicate_ids(self) -> list[str]:
        seen: set[str] = set()
        duplicates: list[str] = []
        for item in self.schedule.typed_sessions():
            if item.session.id in seen and item.session.id not in duplicates:
                duplicates.append(item.session.id)
            seen.add(item.session.id)
        return duplicates
