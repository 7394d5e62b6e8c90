from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from functools import reduce, total_ordering
from typing import Any, ClassVar, Generic, TypeVar

from dateutil.relativedelta import relativedelta
from typing_extensions import Self, override

from dateranges.errors import Edge, InvalidBoundError

T = TypeVar("T")

_FIELDS = ("lower", "upper", "lower_inc", "upper_inc")


@dataclass(frozen=True, kw_only=True)
class Bounds(Generic[T]):
    """Canonical internal representation of a range."""

    lower: T | None
    upper: T | None
    lower_inc: bool
    upper_inc: bool
    empty: bool = False


EMPTY: Bounds[Any] = Bounds(
    lower=None, upper=None, lower_inc=False, upper_inc=False, empty=True
)


class Domain(ABC, Generic[T]):
    """Value space a range is built over.

    A domain reads raw bound values and folds user-supplied inclusivity flags
    into a canonical `Bounds`. Comparison uses the values' native ordering.
    """

    expected: str = "a comparable value"

    @abstractmethod
    def parse(self, value: Any) -> T | None:
        """Return ``value`` as a domain value, or None if it is not one."""
        pass

    @abstractmethod
    def normalize(
        self, lower: T | None, upper: T | None, lower_inc: bool, upper_inc: bool
    ) -> Bounds[T]:
        pass

    def coerce(self, value: Any, edge: Edge) -> T | None:
        if value is None:
            return None
        parsed = self.parse(value)
        if parsed is None:
            raise InvalidBoundError(edge, value, self.expected)
        return parsed


class ContinuousDomain(Domain[T]):
    """Domain where inclusivity flags are kept as given."""

    @override
    def normalize(
        self, lower: T | None, upper: T | None, lower_inc: bool, upper_inc: bool
    ) -> Bounds[T]:
        if lower is not None and upper is not None:
            if lower > upper or (  # type: ignore[operator]
                lower == upper and not (lower_inc and upper_inc)
            ):
                return EMPTY
        return Bounds(
            lower=lower,
            upper=upper,
            lower_inc=lower_inc and lower is not None,
            upper_inc=upper_inc and upper is not None,
        )


class DiscreteDomain(Domain[T]):
    """Domain with a successor, normalized to half-open ``[lower, upper)``."""

    @abstractmethod
    def next(self, value: T) -> T:
        pass

    @abstractmethod
    def prev(self, value: T) -> T:
        pass

    @override
    def normalize(
        self, lower: T | None, upper: T | None, lower_inc: bool, upper_inc: bool
    ) -> Bounds[T]:
        if lower is not None and not lower_inc:
            lower = self.next(lower)
        if upper is not None and upper_inc:
            upper = self.next(upper)
        if lower is not None and upper is not None and lower >= upper:  # type: ignore[operator]
            return EMPTY
        return Bounds(lower=lower, upper=upper, lower_inc=True, upper_inc=False)


# Edge keys order lower and upper edges: None is -inf for a lower edge and
# +inf for an upper edge, and an exclusive edge sits just inside its value.
def _lower_key(bounds: Bounds[Any]) -> tuple[Any, ...]:
    if bounds.lower is None:
        return (0, None, 0)
    return (1, bounds.lower, 0 if bounds.lower_inc else 1)


def _upper_key(bounds: Bounds[Any]) -> tuple[Any, ...]:
    if bounds.upper is None:
        return (2, None, 0)
    return (1, bounds.upper, 1 if bounds.upper_inc else 0)


def _from_lower_key(key: tuple[Any, ...]) -> tuple[Any, bool]:
    if key[0] == 0:
        return None, False
    return key[1], key[2] == 0


def _from_upper_key(key: tuple[Any, ...]) -> tuple[Any, bool]:
    if key[0] == 2:
        return None, False
    return key[1], key[2] == 1


def _spans(lower: tuple[Any, ...], upper: tuple[Any, ...]) -> bool:
    """True if the edges ``lower`` and ``upper`` enclose at least one point."""
    if lower[0] == 0 or upper[0] == 2:
        return True
    if lower[1] < upper[1]:
        return True
    return lower[1] == upper[1] and lower[2] == 0 and upper[2] == 1


@total_ordering
class Range(ABC, Generic[T]):
    """Contiguous range over an ordered domain.

    Subclasses pick a `Domain` which parses and normalizes bounds; the set
    algebra here works on the canonical `Bounds` alone.
    """

    domain: ClassVar[Domain[Any]]
    type: ClassVar[str]

    def __init__(
        self,
        lower: Any = None,
        upper: Any = None,
        lower_inc: bool = True,
        upper_inc: bool = False,
    ):
        lower = self.domain.coerce(lower, "lower")
        upper = self.domain.coerce(upper, "upper")
        self._range: Bounds[T] = self.domain.normalize(
            lower, upper, lower_inc, upper_inc
        )

    @classmethod
    def empty(cls) -> Self:
        """Return the canonical empty range."""
        rng = cls.__new__(cls)
        rng._range = EMPTY
        return rng

    @property
    def lower(self) -> T | None:
        return self._range.lower

    @property
    def upper(self) -> T | None:
        return self._range.upper

    @property
    def lower_inc(self) -> bool:
        return self._range.lower_inc

    @property
    def upper_inc(self) -> bool:
        return self._range.upper_inc

    @property
    def lower_inf(self) -> bool:
        return self._range.lower is None and not self._range.empty

    @property
    def upper_inf(self) -> bool:
        return self._range.upper is None and not self._range.empty

    @property
    def is_empty(self) -> bool:
        return self._range.empty

    def replace(self, **settings: Any) -> Self:
        """Return a new range with the given bound fields replaced."""
        unknown = set(settings) - set(_FIELDS)
        if unknown:
            raise TypeError(
                f"replace() got unexpected field(s): {', '.join(sorted(unknown))}\n"
                f"Valid fields: {', '.join(_FIELDS)}"
            )
        if self.is_empty:
            current: dict[str, Any] = {
                "lower": None,
                "upper": None,
                "lower_inc": True,
                "upper_inc": False,
            }
        else:
            current = {name: getattr(self._range, name) for name in _FIELDS}
        current.update(settings)
        return self.__class__(**current)

    def is_valid_range(self, other: Any) -> bool:
        return isinstance(other, type(self))

    def _check_range(self, other: Any, operation: str) -> None:
        if not self.is_valid_range(other):
            raise TypeError(
                f"Cannot {operation} {type(self).__name__} with {type(other).__name__}.\n"
                f"Got: {other!r}"
            )

    def _scalar(self, item: Any) -> T:
        value = self.domain.parse(item)
        if value is None:
            raise TypeError(
                f"Unsupported type to test against {type(self).__name__}: "
                f"{type(item).__name__!r}\n"
                f"Expected a range of the same kind or {self.domain.expected}."
            )
        return value

    def contains(self, item: Any) -> bool:
        """True if ``item`` (a scalar or a range) lies entirely within this range."""
        if self.is_valid_range(item):
            if item.is_empty:
                return True
            if self.is_empty:
                return False
            return _lower_key(self._range) <= _lower_key(item._range) and _upper_key(
                item._range
            ) <= _upper_key(self._range)

        value = self._scalar(item)
        if self.is_empty:
            return False
        point = Bounds(lower=value, upper=value, lower_inc=True, upper_inc=True)
        return _lower_key(self._range) <= _lower_key(point) and _upper_key(
            point
        ) <= _upper_key(self._range)

    def __contains__(self, item: Any) -> bool:
        return self.contains(item)

    def within(self, other: "Range[T]") -> bool:
        self._check_range(other, "test containment of")
        return other.contains(self)

    def overlap(self, other: "Range[T]") -> bool:
        self._check_range(other, "test overlap of")
        if self.is_empty or other.is_empty:
            return False
        return _spans(
            max(_lower_key(self._range), _lower_key(other._range)),
            min(_upper_key(self._range), _upper_key(other._range)),
        )

    def adjacent(self, other: "Range[T]") -> bool:
        """True if the ranges touch without overlapping."""
        self._check_range(other, "test adjacency of")
        if self.is_empty or other.is_empty:
            return False

        def touches(left: Bounds[T], right: Bounds[T]) -> bool:
            return (
                left.upper is not None
                and left.upper == right.lower
                and left.upper_inc != right.lower_inc
            )

        return touches(self._range, other._range) or touches(
            other._range, self._range
        )

    def left_of(self, other: "Range[T]") -> bool:
        """True if every point of this range is before every point of ``other``."""
        self._check_range(other, "order")
        if self.is_empty or other.is_empty:
            return False
        if self.upper is None or other.lower is None:
            return False
        return self.upper < other.lower or (  # type: ignore[operator]
            self.upper == other.lower and not (self.upper_inc and other.lower_inc)
        )

    def right_of(self, other: "Range[T]") -> bool:
        self._check_range(other, "order")
        return other.left_of(self)

    def startswith(self, other: Any) -> bool:
        if self.is_valid_range(other):
            return (
                self.lower == other.lower
                and self.lower_inc == other.lower_inc
                and self.is_empty == other.is_empty
            )
        value = self._scalar(other)
        return self.lower_inc and self.lower == value

    def endswith(self, other: Any) -> bool:
        if self.is_valid_range(other):
            return (
                self.upper == other.upper
                and self.upper_inc == other.upper_inc
                and self.is_empty == other.is_empty
            )
        value = self._scalar(other)
        return self.upper_inc and self.upper == value

    def _from_keys(self, lower: tuple[Any, ...], upper: tuple[Any, ...]) -> "Range[T]":
        lower_value, lower_inc = _from_lower_key(lower)
        upper_value, upper_inc = _from_upper_key(upper)
        return self.replace(
            lower=lower_value,
            upper=upper_value,
            lower_inc=lower_inc,
            upper_inc=upper_inc,
        )

    def union(self, other: "Range[T]") -> "Range[T]":
        """Merge two overlapping or adjacent ranges into one."""
        self._check_range(other, "union")
        if self.is_empty:
            return other
        if other.is_empty:
            return self
        if not self.overlap(other) and not self.adjacent(other):
            raise ValueError(
                f"Ranges must be either adjacent or overlapping to union.\n"
                f"Got: {self} | {other}"
            )
        return self._from_keys(
            min(_lower_key(self._range), _lower_key(other._range)),
            max(_upper_key(self._range), _upper_key(other._range)),
        )

    def intersection(self, other: "Range[T]") -> "Range[T]":
        self._check_range(other, "intersect")
        if not self.overlap(other):
            return self.empty()
        return self._from_keys(
            max(_lower_key(self._range), _lower_key(other._range)),
            min(_upper_key(self._range), _upper_key(other._range)),
        )

    def difference(self, other: "Range[T]") -> "Range[T]":
        """Return the part of this range not covered by ``other``.

        Raises ValueError when ``other`` lies strictly inside this range, since
        the remainder would be two disjoint ranges.
        """
        self._check_range(other, "take the difference of")
        if not self.overlap(other):
            return self
        if other.contains(self):
            return self.empty()

        lower, upper = _lower_key(self._range), _upper_key(self._range)
        other_lower, other_upper = _lower_key(other._range), _upper_key(other._range)
        if other_lower > lower and other_upper < upper:
            raise ValueError(
                f"Other range must not be within this range.\n"
                f"Got: {self} - {other}\n"
                f"Hint: Split first: (a - b) needs b to overlap an end of a"
            )

        if other_lower <= lower:
            # Cut from the front: start right after other's upper edge
            return self.replace(
                lower=other.upper,
                upper=self.upper,
                lower_inc=not other.upper_inc,
                upper_inc=self.upper_inc,
            )
        return self.replace(
            lower=self.lower,
            upper=other.lower,
            lower_inc=self.lower_inc,
            upper_inc=not other.lower_inc,
        )

    def __or__(self, other: "Range[T]") -> "Range[T]":
        return self.union(other)

    def __and__(self, other: "Range[T]") -> "Range[T]":
        return self.intersection(other)

    def __sub__(self, other: "Range[T]") -> "Range[T]":
        return self.difference(other)

    def __lshift__(self, other: "Range[T]") -> bool:
        return self.left_of(other)

    def __rshift__(self, other: "Range[T]") -> bool:
        return self.right_of(other)

    def __bool__(self) -> bool:
        return not self.is_empty

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        return self.type == other.type and self._range == other._range

    def __lt__(self, other: "Range[T]") -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        if self.is_empty or other.is_empty:
            return self.is_empty and not other.is_empty
        return (_lower_key(self._range), _upper_key(self._range)) < (
            _lower_key(other._range),
            _upper_key(other._range),
        )

    @override
    def __hash__(self) -> int:
        return hash((self.type, self._range))

    @override
    def __repr__(self) -> str:
        name = type(self).__name__
        if self.is_empty:
            return f"{name}.empty()"
        return (
            f"{name}(lower={self.lower!r}, upper={self.upper!r}, "
            f"lower_inc={self.lower_inc}, upper_inc={self.upper_inc})"
        )

    @override
    def __str__(self) -> str:
        """Interval notation, e.g. ``[2020-01-01, 2020-01-05)``."""
        if self.is_empty:
            return "empty"
        lower = "" if self.lower is None else str(self.lower)
        upper = "" if self.upper is None else str(self.upper)
        left = "[" if self.lower_inc else "("
        right = "]" if self.upper_inc else ")"
        return f"{left}{lower}, {upper}{right}"


class OffsetableRangeMixin:
    """Adds `offset` to a range whose values support duration arithmetic."""

    offset_type: ClassVar[str] = "duration"

    def offset(self, delta: timedelta | relativedelta) -> Any:
        """Shift both bounds by ``delta``; an empty range is returned as is."""
        rng: Range[Any] = self  # type: ignore[assignment]
        if rng.is_empty:
            return rng
        return rng.replace(
            lower=None if rng.lower is None else rng.lower + delta,
            upper=None if rng.upper is None else rng.upper + delta,
        )


def union(*ranges: Range[T]) -> Range[T]:
    """Merge ranges left to right (equivalent to chaining `|`)."""

    if not ranges:
        raise ValueError(
            f"union() requires at least one range argument.\n"
            f"Example: union(week_one, week_two)"
        )

    def reducer(acc: Range[T], nxt: Range[T]) -> Range[T]:
        return acc | nxt

    return reduce(reducer, ranges)


def intersection(*ranges: Range[T]) -> Range[T]:
    """Intersect ranges left to right (equivalent to chaining `&`)."""

    if not ranges:
        raise ValueError(
            f"intersection() requires at least one range argument.\n"
            f"Example: intersection(january, first_half)"
        )

    def reducer(acc: Range[T], nxt: Range[T]) -> Range[T]:
        return acc & nxt

    return reduce(reducer, ranges)
