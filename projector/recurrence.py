# projector/recurrence.py
from __future__ import annotations

from datetime import date, datetime, timedelta

from dateutil.relativedelta import FR, MO, SA, SU, TH, TU, WE, relativedelta

from .errors import InvalidAnchor, UnknownInterval
from .pattern import parse_weekly_pattern

DATE_FORMAT = "%Y-%m-%d"

INTERVALS = ("minute", "hour", "day", "week", "month", "year")

# indexed by Sunday = 0 weekday numbers
_RELATIVE_WEEKDAYS = (SU, MO, TU, WE, TH, FR, SA)

# Fixed-duration and calendar steps; "week" is handled separately because of patterns.
_STEPS = {
    "minute": timedelta(minutes=1),
    "hour": timedelta(hours=1),
    "day": relativedelta(days=+1),
    "month": relativedelta(months=+1),
    "year": relativedelta(years=+1),
}


def parse_anchor(value: str | date | datetime | None) -> datetime:
    """
    Turn a stored due date into a datetime at midnight.
    Raises InvalidAnchor when the value is missing or not YYYY-MM-DD.
    """
    if value is None or value == "":
        raise InvalidAnchor("no current due date")
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT)
    except (AttributeError, ValueError) as e:
        raise InvalidAnchor(f"invalid due date {value!r}: {e}") from e


def sunday_index(dt: date) -> int:
    # date.weekday() is Monday = 0; patterns count from Sunday = 0
    return (dt.weekday() + 1) % 7


def next_weekly_date(anchor: datetime, weekdays: tuple[int, ...] | list[int] = ()) -> datetime:
    if not weekdays:
        # every week on the same day
        return anchor + timedelta(days=7)

    days = sorted(set(weekdays))
    current = sunday_index(anchor)

    # next configured day later in the same week
    for day in days:
        if day > current:
            return anchor + timedelta(days=day - current)

    # otherwise the earliest configured day, wrapping into the following week
    return anchor + relativedelta(days=+1, weekday=_RELATIVE_WEEKDAYS[days[0]])


def next_due_date(
    anchor: str | date | datetime | None,
    interval: str,
    weekdays: tuple[int, ...] | list[int] = (),
) -> datetime:
    """
    Compute the next due date after `anchor` for the given interval kind.

    Month and year steps use dateutil's relativedelta, so a day-of-month that does
    not exist in the target month is clamped (Jan 31 + 1 month = Feb 28/29).
    Minute and hour steps are fixed durations added to the anchor's midnight.
    """
    start = parse_anchor(anchor)

    if interval == "week":
        return next_weekly_date(start, weekdays)

    step = _STEPS.get(interval)
    if step is None:
        raise UnknownInterval(interval)
    return start + step


def next_due_for(due_date: str | None, interval: str, pattern: str | None = "") -> datetime:
    """Convenience wrapper that parses the weekly pattern only when it matters."""
    weekdays = parse_weekly_pattern(pattern) if interval == "week" else ()
    return next_due_date(due_date, interval, weekdays)


def format_date(dt: date) -> str:
    # stored values are date-grained; sub-day precision is dropped here
    return dt.strftime(DATE_FORMAT)
