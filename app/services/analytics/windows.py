"""Resolve dashboard period selectors into absolute time windows.

All bounds are naive datetimes in the host's local time, matching how
``Order.created_at`` is stored.
"""
import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Optional

from app.core.errors import ValidationError

# Millisecond precision end-of-day, as dashboards have always used
END_OF_DAY = time(23, 59, 59, 999000)


class Period(str, Enum):
    """Sales reporting periods."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TimeWindow:
    """Closed interval [start, end] on order creation time."""

    start: datetime
    end: datetime


def today() -> date:
    """The current date on the host's local calendar."""
    return datetime.now().date()


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive host-local time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def day_window(day: date) -> TimeWindow:
    return TimeWindow(datetime.combine(day, time.min), datetime.combine(day, END_OF_DAY))


def week_window(day: date) -> TimeWindow:
    """Sunday midnight through the following Sunday midnight."""
    days_since_sunday = (day.weekday() + 1) % 7
    start = datetime.combine(day - timedelta(days=days_since_sunday), time.min)
    return TimeWindow(start, start + timedelta(days=7))


def month_window(day: date) -> TimeWindow:
    last_day = calendar.monthrange(day.year, day.month)[1]
    return TimeWindow(
        datetime.combine(day.replace(day=1), time.min),
        datetime.combine(day.replace(day=last_day), END_OF_DAY),
    )


def parse_period(period: Any) -> Period:
    """Coerce a period selector, rejecting anything outside Period."""
    try:
        return Period(period)
    except ValueError:
        valid = [p.value for p in Period]
        raise ValidationError(f"Invalid period {period!r}. Must be one of: {valid}")


def resolve_period(period: Any, day: date) -> TimeWindow:
    """
    Window for a period selector around a reference date.

    Raises:
        ValidationError: unrecognized period
    """
    selected = parse_period(period)
    if selected is Period.WEEK:
        return week_window(day)
    if selected is Period.MONTH:
        return month_window(day)
    return day_window(day)


def explicit_window(start: datetime, end: datetime) -> TimeWindow:
    """Caller-supplied bounds, used verbatim apart from timezone normalization."""
    return TimeWindow(to_local_naive(start), to_local_naive(end))


def resolve_range(
    day: Optional[date] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> TimeWindow:
    """Explicit window when both bounds are given, else the whole of `day` (default today)."""
    if start is not None and end is not None:
        return explicit_window(start, end)
    return day_window(day or today())
