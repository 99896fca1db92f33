"""Date range helpers for journal-level filters."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from zoneinfo import ZoneInfo

from ..errors import ValidationError

DateLike = date | datetime


def as_calendar_date(value: DateLike, tz: tzinfo | None = None) -> date:
    """Return the calendar date of ``value``.

    Timezone-aware datetimes are first converted to ``tz`` so the date is the
    one the user saw locally; naive datetimes are truncated as-is.
    """

    if isinstance(value, datetime):
        if value.tzinfo is not None and tz is not None:
            value = value.astimezone(tz)
        return value.date()
    if isinstance(value, date):
        return value
    raise ValidationError(f"Expected a date or datetime, got {type(value).__name__}")


@dataclass(frozen=True)
class DateRange:
    """Closed interval of calendar dates, both ends inclusive."""

    start: date
    end: date

    @classmethod
    def from_bounds(cls, start: DateLike, end: DateLike, tz: tzinfo | None = None) -> "DateRange":
        start_day = as_calendar_date(start, tz)
        end_day = as_calendar_date(end, tz)
        if start_day > end_day:
            raise ValidationError(f"Range start {start_day} is after end {end_day}")
        return cls(start=start_day, end=end_day)

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


def resolve_timezone(name: str | None) -> tzinfo | None:
    """Look up an IANA timezone name; ``None`` keeps datetimes untouched."""

    if not name:
        return None
    return ZoneInfo(name)
