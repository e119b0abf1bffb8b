from __future__ import annotations

from datetime import date, timedelta
import logging
from typing import Iterable, Protocol

from classgrid.core.catalog import DAYS
from classgrid.core.config import Settings

logger = logging.getLogger(__name__)


class HolidaySource(Protocol):
    def holidays_for(self, year: int) -> set[date]: ...


class ConfiguredHolidaySource:
    """Holidays from configuration: fixed MM-DD dates every year plus explicit ISO dates.

    Malformed entries are logged and skipped.
    """

    def __init__(self, *, fixed: Iterable[str] = (), dates: Iterable[str] = ()) -> None:
        self._fixed: list[tuple[int, int]] = []
        for entry in fixed:
            try:
                month, day = (int(part) for part in entry.split("-"))
                date(2000, month, day)
            except ValueError:
                logger.warning("Ignoring malformed fixed holiday %r", entry)
                continue
            self._fixed.append((month, day))

        self._dates: set[date] = set()
        for entry in dates:
            try:
                self._dates.add(date.fromisoformat(entry))
            except ValueError:
                logger.warning("Ignoring malformed holiday date %r", entry)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConfiguredHolidaySource":
        return cls(fixed=settings.holiday_fixed, dates=settings.holiday_dates)

    def holidays_for(self, year: int) -> set[date]:
        result = {item for item in self._dates if item.year == year}
        for month, day in self._fixed:
            try:
                result.add(date(year, month, day))
            except ValueError:
                # 02-29 outside leap years
                continue
        return result


def is_holiday(source: HolidaySource, when: date) -> bool:
    try:
        return when in source.holidays_for(when.year)
    except Exception:  # pragma: no cover - collaborator dependent
        logger.warning("Holiday lookup failed for %s", when, exc_info=True)
        return False


def week_start(when: date) -> date:
    return when - timedelta(days=when.weekday())


def date_for_day(week_of: date, day: str) -> date:
    """Calendar date of weekday `day` in the week containing `week_of`."""
    return week_start(week_of) + timedelta(days=DAYS.index(day))


def weekday_name(when: date) -> str | None:
    index = when.weekday()
    return DAYS[index] if index < len(DAYS) else None
