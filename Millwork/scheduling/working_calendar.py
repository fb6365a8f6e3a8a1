"""Business calendar used to place production dates on working days.

A working day is any day that is neither a weekend day nor a registered
holiday.  The calendar is built from an immutable holiday snapshot and is
safe to share between threads.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Iterable

from .exceptions import ConfigurationError, InvalidInput

logger = logging.getLogger(__name__)

# ``date.weekday()`` numbering: Monday is 0, Saturday 5, Sunday 6.
DEFAULT_WEEKEND_DAYS = (5, 6)

ONE_DAY = datetime.timedelta(days=1)


@dataclass(frozen=True)
class Holiday:
    """A non-working calendar day.

    ``is_public`` marks statutory holidays; custom organisational closures
    (``is_custom``) are treated exactly the same by the calendar.
    """

    date: datetime.date
    name: str
    is_public: bool = True
    is_custom: bool = False
    description: str = ""


def _as_date(value: datetime.date) -> datetime.date:
    # Time of day never matters for calendar membership.
    if isinstance(value, datetime.datetime):
        return value.date()
    return value


class WorkingCalendar:
    """Answer working-day questions for a fixed set of holidays."""

    def __init__(
        self,
        holidays: Iterable[Holiday] = (),
        weekend_days: Iterable[int] = DEFAULT_WEEKEND_DAYS,
    ) -> None:
        weekend = frozenset(int(day) for day in weekend_days)
        if not weekend <= set(range(7)):
            raise ConfigurationError(f"Weekend days must be between 0 and 6, got {sorted(weekend)}.")
        if len(weekend) == 7:
            raise ConfigurationError("A calendar needs at least one working weekday.")
        self.weekend_days = weekend

        by_date: dict[datetime.date, Holiday] = {}
        for holiday in holidays:
            day = _as_date(holiday.date)
            if day in by_date:
                logger.warning(
                    "Duplicate holiday on %s (%r and %r); keeping the first.",
                    day, by_date[day].name, holiday.name,
                )
                continue
            by_date[day] = holiday
        self._holidays = by_date

    def __len__(self) -> int:
        return len(self._holidays)

    @property
    def holidays(self) -> tuple[Holiday, ...]:
        return tuple(self._holidays[day] for day in sorted(self._holidays))

    def holidays_in(self, year: int) -> list[Holiday]:
        return [holiday for holiday in self.holidays if holiday.date.year == year]

    def holiday_on(self, value: datetime.date) -> Holiday | None:
        return self._holidays.get(_as_date(value))

    def is_weekend(self, value: datetime.date) -> bool:
        return _as_date(value).weekday() in self.weekend_days

    def is_working_day(self, value: datetime.date) -> bool:
        day = _as_date(value)
        return day.weekday() not in self.weekend_days and day not in self._holidays

    def subtract_working_days(self, value: datetime.date, days: int) -> datetime.date:
        """Step backward from ``value`` until ``days`` working days are consumed.

        Only days that are working days count toward ``days``; the date that
        is returned is therefore always a working day when ``days > 0``.
        With ``days == 0`` the start date is returned unchanged, which is
        only meaningful when it is a working day itself.
        """
        if days < 0:
            raise InvalidInput(f"Working-day distance must be >= 0, got {days}.")
        current = _as_date(value)
        remaining = days
        try:
            while remaining > 0:
                current -= ONE_DAY
                if self.is_working_day(current):
                    remaining -= 1
        except OverflowError:
            raise InvalidInput(
                f"Cannot step {days} working days back from {_as_date(value)}: before the earliest date."
            ) from None
        return current

    def previous_working_day(self, value: datetime.date) -> datetime.date:
        """Return ``value`` if it is a working day, else the nearest earlier one."""
        day = _as_date(value)
        if self.is_working_day(day):
            return day
        return self.subtract_working_days(day, 1)
