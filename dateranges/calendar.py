"""Calendar arithmetic used by the date ranges.

Thin adapter over ``datetime`` and python-dateutil: parsing the accepted date
formats, stepping by calendar units, and snapping a date to the period that
contains it.
"""

import logging
from datetime import date, datetime, time, timedelta
from typing import Any

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from dateranges.util import DATE_FORMATS, DAY, PERIODS, STEP_UNITS

logger = logging.getLogger(__name__)


def parse(value: Any) -> date | None:
    """Return ``value`` as a date, or None if it is not a recognized date.

    Accepts ``date`` and ``datetime`` objects (the latter truncated to its
    day) and strings formatted as 'MM-DD-YYYY' or 'YYYY-MM-DD'.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(value, fmt).date()
            except ValueError:
                continue
    logger.debug("Rejected %r as a date", value)
    return None


def parse_datetime(value: Any) -> datetime | None:
    """Return ``value`` as a datetime, or None if it cannot be read as one."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        try:
            return isoparse(value)
        except ValueError:
            pass
    logger.debug("Rejected %r as a datetime", value)
    return None


def is_valid(value: Any) -> bool:
    return parse(value) is not None


def _delta(n: int, unit: str) -> relativedelta:
    key = unit.lower()
    if key.endswith("s"):
        key = key[:-1]
    if key not in STEP_UNITS:
        valid = ", ".join(STEP_UNITS)
        raise ValueError(f"Invalid unit '{unit}'. Valid units: {valid}")
    field, scale = STEP_UNITS[key]
    return relativedelta(**{field: n * scale})


def add(value: date, n: int, unit: str) -> date:
    """Move ``value`` forward by ``n`` units, clamping to the end of the month."""
    return value + _delta(n, unit)


def subtract(value: date, n: int, unit: str) -> date:
    return value - _delta(n, unit)


def is_same(a: date, b: date) -> bool:
    """True if both values fall on the same calendar day."""
    return parse(a) == parse(b)


def compare(a: date, b: date) -> int:
    return (a > b) - (a < b)


def duration_days(lower: date, upper: date) -> float:
    return (upper - lower).total_seconds() / DAY


def format_date(value: date) -> str:
    return value.isoformat()


def period_bounds(day: date, period: str = "day") -> tuple[date, date]:
    """Return the half-open ``(lower, upper)`` bounds of the period containing ``day``.

    Periods:
        day: the day itself
        week: ISO week, Monday through Sunday
        american_week: Sunday through Saturday
        month, quarter, year: calendar month, quarter and year
    """
    if period == "day":
        lower = day
        return lower, lower + timedelta(days=1)
    if period == "week":
        lower = day - timedelta(days=day.weekday())
        return lower, lower + timedelta(days=7)
    if period == "american_week":
        lower = day - timedelta(days=(day.weekday() + 1) % 7)
        return lower, lower + timedelta(days=7)
    if period == "month":
        lower = day.replace(day=1)
        return lower, lower + relativedelta(months=1)
    if period == "quarter":
        lower = day.replace(month=3 * ((day.month - 1) // 3) + 1, day=1)
        return lower, lower + relativedelta(months=3)
    if period == "year":
        lower = day.replace(month=1, day=1)
        return lower, lower + relativedelta(years=1)

    valid = ", ".join(PERIODS)
    raise ValueError(f"Invalid period '{period}'. Valid periods: {valid}")
