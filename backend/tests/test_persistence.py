from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from classgrid.core.catalog import SessionType
from classgrid.models.schedule_snapshot import ScheduleSnapshot
from classgrid.schemas.schedule import Schedule
from classgrid.services.availability import occupancy_at
from classgrid.services.persistence import ScheduleStore
from classgrid.services.schedule_service import insert
from classgrid.services.sessions import create_session


def populated() -> Schedule:
    lecture = create_session(SessionType.amphitheater, subject="Physics I", day="Monday", time="08:30 - 10:00", room="Zaoui", group="A")
    lab = create_session(SessionType.tp, subject="Chemistry", day="Monday", time="08:30 - 10:00", room="Lab 1", sub_group="B2")
    return insert(insert(Schedule(), lecture, SessionType.amphitheater), lab, SessionType.tp)


def broken_factory():
    # No tables: every query fails.
    engine = create_engine("sqlite+pysqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    return sessionmaker(bind=engine)


def test_load_without_snapshot_is_empty(store):
    assert store.load() == Schedule()


def test_save_then_load(store, session_factory):
    schedule = populated()
    store.save(schedule)

    assert store.load() == schedule
    with session_factory() as db:
        record = db.get(ScheduleSnapshot, "test_schedule")
        assert set(record.payload) == {"schedule", "timestamp", "version"}
        assert record.payload["version"] == "1.0"
        assert record.payload["schedule"]["tp"][0]["subGroup"] == "B2"


def test_save_overwrites(store):
    store.save(populated())
    store.save(Schedule())
    assert store.load() == Schedule()


def test_clear(store):
    store.save(populated())
    store.clear()
    store.clear()
    assert store.load() == Schedule()


def test_unreadable_snapshot_degrades_to_empty(store, session_factory):
    with session_factory() as db:
        db.add(ScheduleSnapshot(key="test_schedule", payload={"schedule": {"td": [{"id": "x"}]}}))
        db.commit()
    assert store.load() == Schedule()


def test_keys_are_isolated(store, session_factory):
    store.save(populated())
    assert ScheduleStore(session_factory, key="other").load() == Schedule()


def test_database_failures_are_not_raised(caplog):
    store = ScheduleStore(broken_factory(), key="test_schedule")

    assert store.load() == Schedule()
    store.save(populated())
    store.clear()
    assert "Error saving schedule snapshot" in caplog.text


def test_snapshot_breaking_entity_rules_degrades_to_empty(store, session_factory, caplog):
    # Parses fine, but has neither group nor sub-group and a lab room in the amphitheater list.
    with session_factory() as db:
        db.add(ScheduleSnapshot(
            key="test_schedule",
            payload={
                "schedule": {
                    "amphitheater": [
                        {"id": "1", "subject": "Physics I", "day": "Monday", "time": "08:30 - 10:00", "room": "Lab 1"}
                    ],
                    "td": [],
                    "tp": [],
                },
                "timestamp": "2025-01-01T00:00:00+00:00",
                "version": "1.0",
            },
        ))
        db.commit()

    schedule = store.load()

    assert schedule == Schedule()
    assert occupancy_at(schedule, "Monday", "08:30 - 10:00").occupied_rooms == set()
    assert "Discarding schedule snapshot test_schedule" in caplog.text


def test_snapshot_with_collisions_degrades_to_empty(store, session_factory):
    lecture = {"subject": "Physics I", "day": "Monday", "time": "08:30 - 10:00", "room": "Zaoui"}
    with session_factory() as db:
        db.add(ScheduleSnapshot(
            key="test_schedule",
            payload={"schedule": {"amphitheater": [dict(lecture, id="1", group="A"), dict(lecture, id="2", group="B")]}},
        ))
        db.commit()

    assert store.load() == Schedule()
