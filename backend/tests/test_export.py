from datetime import date, datetime, timezone
import json

import pytest

from classgrid.core.catalog import SessionType
from classgrid.core.exceptions import ScheduleImportError
from classgrid.schemas.schedule import Schedule
from classgrid.services.export import deserialize, export_filename, load_export, serialize
from classgrid.services.schedule_service import insert
from classgrid.services.sessions import create_session


def populated() -> Schedule:
    schedule = Schedule()
    schedule = insert(schedule, create_session(SessionType.amphitheater, subject="Physics I", day="Monday", time="08:30 - 10:00", room="Zaoui", group="A"), SessionType.amphitheater)
    schedule = insert(schedule, create_session(SessionType.td, subject="Calculus I", day="Monday", time="08:30 - 10:00", room="Class 1", sub_group="B1"), SessionType.td)
    schedule = insert(schedule, create_session(SessionType.tp, subject="Programming", day="Saturday", time="15:45 - 17:15", room="Lab 3", sub_group="D4"), SessionType.tp)
    return schedule


def test_round_trip():
    schedule = populated()
    assert deserialize(serialize(schedule)) == schedule
    assert deserialize(serialize(Schedule())) == Schedule()


def test_envelope_shape():
    now = datetime(2025, 9, 1, 8, 0, tzinfo=timezone.utc)
    data = json.loads(serialize(populated(), version="1.0", now=now))

    assert data["timestamp"] == "2025-09-01T08:00:00+00:00"
    assert data["version"] == "1.0"
    assert set(data["schedule"]) == {"amphitheater", "td", "tp"}
    assert data["schedule"]["td"][0]["subGroup"] == "B1"
    assert "group" not in data["schedule"]["td"][0]


def test_export_filename():
    assert export_filename(date(2025, 9, 1)) == "school_schedule_2025-09-01.json"


def test_legacy_export_with_numeric_ids():
    legacy = {
        "schedule": {
            "amphitheater": [
                {"id": 1718000000000, "subject": "Physics I", "day": "Monday", "time": "08:30 - 10:00", "room": "Zaoui", "group": "A"}
            ],
            "td": [],
            "tp": [],
        },
        "timestamp": "2024-06-10T06:13:20.000Z",
        "version": "1.0",
    }
    schedule = load_export(json.dumps(legacy))
    assert schedule.amphitheater[0].id == "1718000000000"


def test_malformed_json_is_rejected():
    with pytest.raises(ScheduleImportError) as exc_info:
        deserialize(b"{not json")
    assert exc_info.value.status_code == 400
    assert exc_info.value.details["problems"]


def test_import_rejects_invalid_records():
    envelope = json.loads(serialize(populated()))
    envelope["schedule"]["tp"][0]["room"] = "Zaoui"
    envelope["schedule"]["td"][0]["group"] = "B"

    with pytest.raises(ScheduleImportError) as exc_info:
        load_export(json.dumps(envelope))
    assert len(exc_info.value.details["problems"]) == 2


def test_import_rejects_collisions():
    envelope = json.loads(serialize(populated()))
    clash = dict(envelope["schedule"]["amphitheater"][0], id="clash", group="C")
    envelope["schedule"]["amphitheater"].append(clash)

    with pytest.raises(ScheduleImportError) as exc_info:
        load_export(json.dumps(envelope))
    assert any("room_conflict" in problem for problem in exc_info.value.details["problems"])


def test_import_rejects_duplicate_ids():
    envelope = json.loads(serialize(populated()))
    copy = dict(envelope["schedule"]["amphitheater"][0], day="Friday")
    envelope["schedule"]["amphitheater"].append(copy)

    with pytest.raises(ScheduleImportError) as exc_info:
        load_export(json.dumps(envelope))
    assert any("duplicate session id" in problem for problem in exc_info.value.details["problems"])
