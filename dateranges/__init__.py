from .core import Bounds, OffsetableRangeMixin, Range, intersection, union
from .dates import DateRange, DateTimeRange, PeriodRange
from .errors import (
    InvalidBoundError,
    RangeError,
    UnboundedIterationError,
    UnboundedLengthError,
    UnsupportedOperationError,
)
from .util import DAY, PERIODS, STEP_UNITS

__all__ = [
    "Range",
    "Bounds",
    "OffsetableRangeMixin",
    "DateRange",
    "PeriodRange",
    "DateTimeRange",
    "union",
    "intersection",
    "RangeError",
    "InvalidBoundError",
    "UnboundedLengthError",
    "UnboundedIterationError",
    "UnsupportedOperationError",
    "DAY",
    "STEP_UNITS",
    "PERIODS",
]
