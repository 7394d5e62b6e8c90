"""Exceptions raised by dateranges."""

from typing import Any, Literal

Edge = Literal["lower", "upper", "anchor"]


class RangeError(Exception):
    """Base class for every error raised by this package."""


class InvalidBoundError(RangeError, ValueError):
    def __init__(self, edge: Edge, value: Any, expected: str):
        self.edge: Edge = edge
        self.value: Any = value
        super().__init__(
            f"Invalid type of {edge} bound: {value!r}\n"
            f"Expected {expected}, or None for an unbounded {edge} end."
        )


class UnboundedLengthError(RangeError, ValueError):
    def __init__(self, lower: Any, upper: Any):
        super().__init__(
            f"Unbounded ranges do not have a length (lower={lower!r}, upper={upper!r}).\n"
            f"Hint: Give both bounds, e.g. DateRange(lower='2020-01-01', upper='2020-02-01')"
        )


class UnboundedIterationError(RangeError, ValueError):
    def __init__(self, lower: Any, upper: Any):
        super().__init__(
            f"Cannot iterate a range without both bounds (lower={lower!r}, upper={upper!r}).\n"
            f"Hint: Narrow it first: rng & DateRange(lower=..., upper=...)\n"
            f"      or take a prefix with itertools.islice over an explicit sequence."
        )


class UnsupportedOperationError(RangeError, NotImplementedError):
    pass
