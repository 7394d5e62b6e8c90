from datetime import date

import pytest

from dateranges import DateRange, PeriodRange, UnsupportedOperationError


def test_from_date_snaps_to_week() -> None:
    week = PeriodRange.from_date("2020-01-01", "week")

    assert isinstance(week, PeriodRange)
    assert week.period == "week"
    assert week.lower == date(2019, 12, 30)
    assert week.upper == date(2020, 1, 6)
    assert len(week) == 7


def test_from_date_can_be_called_on_an_instance() -> None:
    week = PeriodRange().from_date("2020-01-01", "week")

    assert week == PeriodRange.from_date("2020-01-01", "week")


def test_next_period_is_the_following_week() -> None:
    week = PeriodRange.from_date("2020-01-01", "week")
    following = week.next_period()

    assert following.period == "week"
    assert following.lower == date(2020, 1, 6)
    assert following.upper == date(2020, 1, 13)
    assert week.adjacent(following)


def test_prev_period() -> None:
    assert PeriodRange.from_date("2020-03-15", "month").prev_period() == DateRange(
        lower="2020-02-01", upper="2020-03-01"
    )
    assert PeriodRange.from_date("2020-01-01").prev_period().lower == date(2019, 12, 31)


@pytest.mark.parametrize(
    "period", ["day", "week", "american_week", "month", "quarter", "year"]
)
def test_next_then_prev_period_round_trips(period: str) -> None:
    original = PeriodRange.from_date("2020-02-29", period)
    back = original.next_period().prev_period()

    assert back == original
    assert (back.lower, back.upper, back.period) == (
        original.lower,
        original.upper,
        original.period,
    )


def test_period_factories_carry_period() -> None:
    assert PeriodRange.from_month(2020, 2).period == "month"
    assert PeriodRange.from_week(2020, 1).period == "week"
    assert PeriodRange.from_quarter(2020, 1).next_period() == PeriodRange.from_quarter(2020, 2)
    assert PeriodRange.from_year(2020).next_period() == PeriodRange.from_year(2021)


def test_empty_is_unsupported() -> None:
    with pytest.raises(UnsupportedOperationError):
        PeriodRange.empty()
    with pytest.raises(UnsupportedOperationError, match="does not support empty"):
        PeriodRange(lower="2020-01-05", upper="2020-01-01")


def test_navigation_requires_period() -> None:
    rng = PeriodRange(lower="2020-01-01", upper="2020-01-08")

    assert rng.period is None
    with pytest.raises(UnsupportedOperationError, match="from_date"):
        rng.next_period()


def test_navigation_requires_bounds() -> None:
    open_ended = PeriodRange(lower="2020-01-06")
    open_ended.period = "week"
    with pytest.raises(UnsupportedOperationError, match="unbounded upper end"):
        open_ended.next_period()

    open_started = PeriodRange(upper="2020-01-06")
    open_started.period = "week"
    with pytest.raises(UnsupportedOperationError, match="unbounded lower end"):
        open_started.prev_period()


def test_daterange_view() -> None:
    week = PeriodRange.from_date("2020-01-01", "week")
    view = week.daterange

    assert type(view) is DateRange
    assert view == week
    assert list(view) == list(week)


def test_replace_returns_plain_date_range() -> None:
    week = PeriodRange.from_date("2020-01-01", "week")
    longer = week.replace(upper="2020-01-20")

    assert type(longer) is DateRange
    assert longer == DateRange(lower="2019-12-30", upper="2020-01-20")


def test_algebra_delegates_to_date_range() -> None:
    week = PeriodRange.from_date("2020-01-01", "week")
    following = week.next_period()

    merged = week | following
    assert type(merged) is DateRange
    assert merged == DateRange(lower="2019-12-30", upper="2020-01-13")

    overlap = week & DateRange(lower="2020-01-03", upper="2020-02-01")
    assert type(overlap) is DateRange
    assert overlap == DateRange(lower="2020-01-03", upper="2020-01-06")

    assert (week & following).is_empty

    rest = week - DateRange(lower="2020-01-04", upper="2020-02-01")
    assert type(rest) is DateRange
    assert rest == DateRange(lower="2019-12-30", upper="2020-01-04")


def test_is_valid_range_accepts_date_ranges() -> None:
    week = PeriodRange.from_date("2020-01-01", "week")

    assert week.is_valid_range(DateRange(lower="2020-01-01"))
    assert week.is_valid_range(week)
    assert not week.is_valid_range("2020-01-01")
    assert DateRange(lower="2020-01-01", upper="2020-01-03") in week
