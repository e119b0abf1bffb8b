from __future__ import annotations

from enum import Enum

# Week grid

DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

TIME_SLOTS = ["08:30 - 10:00", "10:15 - 11:45", "14:00 - 15:30", "15:45 - 17:15"]

SUBJECTS = ["Calculus I", "Physics I", "Chemistry", "Programming", "Mathematics", "English"]


class SessionType(str, Enum):
    amphitheater = "amphitheater"
    td = "td"
    tp = "tp"


SESSION_TYPE_LABELS: dict[SessionType, str] = {
    SessionType.amphitheater: "Amphitheater",
    SessionType.td: "TD",
    SessionType.tp: "TP",
}

# Facility pools, in display order. Values are seat capacities.

AMPHITHEATERS: dict[str, int] = {
    "Aboutajdine": 400,
    "Zaoui": 400,
    "Ibn Khaldoun": 400,
}

TD_ROOMS: dict[str, int] = {
    "Class 1": 50,
    "Class 2": 50,
    "Class 3": 50,
    "Class 4": 50,
    "Class 5": 50,
}

TP_LABS: dict[str, int] = {
    "Lab 1": 25,
    "Lab 2": 25,
    "Lab 3": 25,
}

FACILITY_POOLS: dict[SessionType, dict[str, int]] = {
    SessionType.amphitheater: AMPHITHEATERS,
    SessionType.td: TD_ROOMS,
    SessionType.tp: TP_LABS,
}

# Group hierarchy. A sub-group belongs to the group named by its first character.

GROUPS = ["A", "B", "C", "D"]

SUB_GROUPS: dict[str, list[str]] = {group: [f"{group}{index}" for index in range(1, 5)] for group in GROUPS}

ALL_SUB_GROUPS = [sub_group for group in GROUPS for sub_group in SUB_GROUPS[group]]

GROUP_STUDENTS = 100

SUB_GROUP_STUDENTS = 25


def pool_for(session_type: SessionType) -> list[str]:
    return list(FACILITY_POOLS[session_type])
