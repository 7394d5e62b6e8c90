"""Date, period and datetime ranges.

`DateRange` works on whole days: whatever inclusivity flags it is built with,
it is stored half-open as ``[lower, upper)``, and it can be iterated one
`step` at a time. `PeriodRange` is a `DateRange` snapped to a calendar period
(a week, a month, ...) that can walk to its neighbouring periods.
`DateTimeRange` keeps sub-day precision and its inclusivity flags as given.
"""

import logging
from collections.abc import Iterator
from datetime import date, datetime
from typing import Any, ClassVar

from typing_extensions import Self, override

from dateranges import calendar
from dateranges.core import (
    Bounds,
    ContinuousDomain,
    DiscreteDomain,
    OffsetableRangeMixin,
    Range,
)
from dateranges.errors import (
    InvalidBoundError,
    UnboundedIterationError,
    UnboundedLengthError,
    UnsupportedOperationError,
)
from dateranges.util import DEFAULT_STEP

logger = logging.getLogger(__name__)


class DateDomain(DiscreteDomain[date]):
    expected = "a date, or a string formatted as 'YYYY-MM-DD' or 'MM-DD-YYYY'"

    @override
    def parse(self, value: Any) -> date | None:
        return calendar.parse(value)

    # Normalization always moves by one day, whatever a range's step is
    @override
    def next(self, value: date) -> date:
        return calendar.add(value, 1, DEFAULT_STEP)

    @override
    def prev(self, value: date) -> date:
        return calendar.subtract(value, 1, DEFAULT_STEP)

    @override
    def normalize(
        self,
        lower: date | None,
        upper: date | None,
        lower_inc: bool,
        upper_inc: bool,
    ) -> Bounds[date]:
        bounds = super().normalize(lower, upper, lower_inc, upper_inc)
        if bounds.empty:
            logger.debug("Range %s..%s collapsed to empty", lower, upper)
        return bounds


class DateTimeDomain(ContinuousDomain[datetime]):
    expected = "a datetime, a date, or an ISO 8601 string"

    @override
    def parse(self, value: Any) -> datetime | None:
        return calendar.parse_datetime(value)

    @override
    def normalize(
        self,
        lower: datetime | None,
        upper: datetime | None,
        lower_inc: bool,
        upper_inc: bool,
    ) -> Bounds[datetime]:
        if lower is not None and upper is not None:
            if (lower.tzinfo is None) != (upper.tzinfo is None):
                raise InvalidBoundError(
                    "upper",
                    upper,
                    "a datetime that matches the timezone awareness of the lower bound",
                )
        return super().normalize(lower, upper, lower_inc, upper_inc)


class DateRange(OffsetableRangeMixin, Range[date]):
    """Range that operates on dates (not times).

    Args:
        lower: Lower end of the range: a date, or a string formatted as
            'YYYY-MM-DD' or 'MM-DD-YYYY'. None means unbounded.
        upper: Upper end of the range, same accepted forms as ``lower``.
        lower_inc: True if the lower end is included in the range.
        upper_inc: True if the upper end is included in the range.

    Example:
        >>> week = DateRange(lower="2020-01-01", upper="2020-01-07", upper_inc=True)
        >>> str(week)
        '[2020-01-01, 2020-01-08)'
        >>> len(week)
        7
    """

    domain: ClassVar[DateDomain] = DateDomain()
    type: ClassVar[str] = "date"

    # How far next/prev and iteration move; any unit accepted by calendar.add
    step: str = DEFAULT_STEP

    @override
    def replace(self, **settings: Any) -> Self:
        rng = super().replace(**settings)
        rng.step = self.step
        return rng

    def next(self, value: date) -> date:
        """Return ``value`` advanced by one step."""
        return calendar.add(value, 1, self.step)

    def prev(self, value: date) -> date:
        """Return ``value`` moved back by one step."""
        return calendar.subtract(value, 1, self.step)

    def last(self) -> date | None:
        """Return the last date in the range, or None if it has no upper bound."""
        if self.upper is None:
            return None
        return self.prev(self.upper)

    @override
    def endswith(self, other: Any) -> bool:
        # A date is compared with the last day, not the exclusive upper bound
        day = calendar.parse(other)
        if day is not None:
            last = self.last()
            return last is not None and calendar.is_same(last, day)
        return super().endswith(other)

    def __iter__(self) -> Iterator[date]:
        if self.is_empty:
            return iter(())
        if self.lower is None or self.upper is None:
            raise UnboundedIterationError(self.lower, self.upper)
        return self._iterate(self.lower, self.prev(self.upper), self.step)

    @staticmethod
    def _iterate(lower: date, last: date, step: str) -> Iterator[date]:
        # Each value is offset from lower so month steps don't drift at month end
        count = 0
        current = lower
        while current <= last:
            yield current
            count += 1
            current = calendar.add(lower, count, step)

    def length(self) -> int:
        """Return the number of days in the range."""
        if self.lower is None or self.upper is None:
            raise UnboundedLengthError(self.lower, self.upper)
        return round(calendar.duration_days(self.lower, self.upper))

    def __len__(self) -> int:
        return self.length()

    @classmethod
    def from_date(cls, day: Any, period: str = "day") -> Self:
        """Return the range covering the ``period`` that contains ``day``.

        Args:
            day: Anchor date, in any form accepted as a bound
            period: One of "day", "week" (Monday start), "american_week"
                (Sunday start), "month", "quarter" or "year"

        Example:
            >>> DateRange.from_date("2020-01-01", period="week")
            DateRange(lower=datetime.date(2019, 12, 30), upper=datetime.date(2020, 1, 6), lower_inc=True, upper_inc=False)
        """
        anchor = cls.domain.coerce(day, "anchor")
        if anchor is None:
            raise InvalidBoundError("anchor", day, cls.domain.expected)
        lower, upper = calendar.period_bounds(anchor, period)
        return cls(lower=lower, upper=upper)

    @classmethod
    def from_week(cls, year: int, iso_week: int) -> Self:
        return cls.from_date(date.fromisocalendar(year, iso_week, 1), period="week")

    @classmethod
    def from_month(cls, year: int, month: int) -> Self:
        return cls.from_date(date(year, month, 1), period="month")

    @classmethod
    def from_quarter(cls, year: int, quarter: int) -> Self:
        if not (1 <= quarter <= 4):
            raise ValueError(f"quarter must be 1-4, got {quarter}")
        return cls.from_date(date(year, 3 * quarter - 2, 1), period="quarter")

    @classmethod
    def from_year(cls, year: int) -> Self:
        return cls.from_date(date(year, 1, 1), period="year")


class PeriodRange(DateRange):
    """Range covering one calendar period, such as a week or a month.

    Build these with `from_date` (or `from_week`, `from_month`, ...). Set
    algebra is carried out on the equivalent `DateRange`, so results of
    union, intersection and difference are plain date ranges.
    """

    period: str | None = None

    def __init__(
        self,
        lower: Any = None,
        upper: Any = None,
        lower_inc: bool = True,
        upper_inc: bool = False,
    ):
        super().__init__(lower, upper, lower_inc, upper_inc)
        if self.is_empty:
            raise UnsupportedOperationError(
                f"PeriodRange does not support empty ranges.\n"
                f"Got: lower={lower!r}, upper={upper!r}\n"
                f"Hint: Use PeriodRange.from_date(day, period)"
            )

    @override
    @classmethod
    def empty(cls) -> Self:
        raise UnsupportedOperationError("PeriodRange does not support empty ranges")

    @override
    @classmethod
    def from_date(cls, day: Any, period: str = "day") -> Self:
        span = super().from_date(day, period)
        span.period = period
        return span

    @property
    def daterange(self) -> DateRange:
        """Plain `DateRange` with the same bounds."""
        rng = DateRange(
            lower=self.lower,
            upper=self.upper,
            lower_inc=self.lower_inc,
            upper_inc=self.upper_inc,
        )
        rng.step = self.step
        return rng

    @override
    def is_valid_range(self, other: Any) -> bool:
        return isinstance(other, DateRange)

    @override
    def replace(self, **settings: Any) -> DateRange:  # type: ignore[override]
        return self.daterange.replace(**settings)

    def _require_period(self) -> str:
        if self.period is None:
            raise UnsupportedOperationError(
                f"Period navigation needs a period range built with from_date.\n"
                f"Got: {self!r}"
            )
        return self.period

    def _unbounded(self, edge: str) -> UnsupportedOperationError:
        return UnsupportedOperationError(
            f"Cannot step past the unbounded {edge} end of a period range.\n"
            f"Got: {self!r}"
        )

    def next_period(self) -> "PeriodRange":
        """Return the period immediately after this one."""
        period = self._require_period()
        if self.upper is None:
            raise self._unbounded("upper")
        return self.from_date(self.upper, period)

    def prev_period(self) -> "PeriodRange":
        """Return the period immediately before this one."""
        period = self._require_period()
        if self.lower is None:
            raise self._unbounded("lower")
        return self.from_date(self.prev(self.lower), period)

    @override
    def union(self, other: Range[date]) -> Range[date]:
        return self.daterange.union(other)

    @override
    def intersection(self, other: Range[date]) -> Range[date]:
        return self.daterange.intersection(other)

    @override
    def difference(self, other: Range[date]) -> Range[date]:
        return self.daterange.difference(other)


class DateTimeRange(Range[datetime]):
    """Range over datetimes; bounds keep their inclusivity as given."""

    domain: ClassVar[DateTimeDomain] = DateTimeDomain()
    type: ClassVar[str] = "Date"
