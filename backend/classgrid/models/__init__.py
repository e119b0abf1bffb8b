from classgrid.models.schedule_snapshot import ScheduleSnapshot  # noqa: F401
