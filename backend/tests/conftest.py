import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from classgrid.api.deps import get_db, get_holiday_source, get_schedule_controller  # noqa: E402
from classgrid.db.base import Base  # noqa: E402
from classgrid.main import app  # noqa: E402
from classgrid.services.holidays import ConfiguredHolidaySource  # noqa: E402
from classgrid.services.persistence import ScheduleStore  # noqa: E402
from classgrid.services.schedule_service import ScheduleController  # noqa: E402


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def store(session_factory):
    return ScheduleStore(session_factory, key="test_schedule")


@pytest.fixture()
def holidays():
    # 2025-03-31 is a Monday, 2025-05-01 a Thursday.
    return ConfiguredHolidaySource(fixed=["05-01"], dates=["2025-03-31"])


@pytest.fixture()
def controller(store):
    return ScheduleController(store)


@pytest.fixture()
def client(session_factory, controller, holidays):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_schedule_controller] = lambda: controller
    app.dependency_overrides[get_holiday_source] = lambda: holidays

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
