from __future__ import annotations

from collections import defaultdict
from typing import Iterable

from classgrid.core.catalog import GROUPS
from classgrid.schemas.schedule import Occupancy, Schedule, TypedSession
from classgrid.services.sessions import resolve_group


def index_by_slot(schedule: Schedule) -> dict[tuple[str, str], list[TypedSession]]:
    index: dict[tuple[str, str], list[TypedSession]] = defaultdict(list)
    for item in schedule.typed_sessions():
        index[(item.session.day, item.session.time)].append(item)
    return index


def sessions_at(schedule: Schedule, day: str, time: str) -> list[TypedSession]:
    return [item for item in schedule.typed_sessions() if item.session.day == day and item.session.time == time]


def occupancy_of(sessions: Iterable[TypedSession]) -> Occupancy:
    occupied_rooms: set[str] = set()
    occupied_groups: set[str] = set()
    for item in sessions:
        occupied_rooms.add(item.session.room)
        occupied_groups.add(resolve_group(item.session))
    return Occupancy(occupied_rooms=occupied_rooms, occupied_groups=occupied_groups)


def occupancy_at(schedule: Schedule, day: str, time: str) -> Occupancy:
    return occupancy_of(sessions_at(schedule, day, time))


def available_rooms(schedule: Schedule, day: str, time: str, pool: Iterable[str]) -> list[str]:
    """Rooms of `pool` not booked at (day, time), in the pool's own order."""
    occupied = occupancy_at(schedule, day, time).occupied_rooms
    return [room for room in pool if room not in occupied]


def free_groups(schedule: Schedule, day: str, time: str) -> list[str]:
    occupied = occupancy_at(schedule, day, time).occupied_groups
    return [group for group in GROUPS if group not in occupied]
