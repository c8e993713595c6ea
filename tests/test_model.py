"""Tests for the schedule data model."""

import datetime

from pydantic import ValidationError
import pytest

from localtz.model import (
    MAX_DATE,
    MIN_DATE,
    RawDstRecord,
    Schedule,
    TransitionRule,
    TransitionTime,
)

TWO_AM = datetime.time(2, 0, 0)
START = TransitionTime(month=3, day=10, time_of_day=TWO_AM)
END = TransitionTime(month=11, day=3, time_of_day=TWO_AM)
HOUR = datetime.timedelta(hours=1)


def make_rule(start: datetime.date, end: datetime.date) -> TransitionRule:
    """Create a rule over the date range with a fixed policy."""
    return TransitionRule(
        start_date=start,
        end_date=end,
        delta=HOUR,
        start_transition=START,
        end_transition=END,
    )


def test_fixed_date() -> None:
    """Test creating a fixed date transition."""
    transition = TransitionTime.fixed_date(datetime.time(1, 30), 4, 5)
    assert transition.month == 4
    assert transition.day == 5
    assert transition.time_of_day == datetime.time(1, 30)
    assert transition.on(1999) == datetime.datetime(1999, 4, 5, 1, 30)


def test_fixed_date_drops_tzinfo() -> None:
    """Test the transition time of day is always a wall clock time."""
    transition = TransitionTime.fixed_date(
        datetime.time(1, 30, tzinfo=datetime.timezone.utc), 4, 5
    )
    assert transition.time_of_day.tzinfo is None


@pytest.mark.parametrize(
    "month,day,match",
    [
        (0, 1, "month"),
        (13, 1, "month"),
        (1, 0, "day"),
        (1, 32, "day"),
    ],
)
def test_fixed_date_invalid(month: int, day: int, match: str) -> None:
    """Test validation of the transition month and day."""
    with pytest.raises(ValueError, match=match):
        TransitionTime.fixed_date(TWO_AM, month, day)


def test_transition_end_of_month() -> None:
    """Test a day past the end of the month is clamped to the last day."""
    transition = TransitionTime.fixed_date(TWO_AM, 2, 29)
    assert transition.on(2024) == datetime.datetime(2024, 2, 29, 2, 0, 0)
    assert transition.on(2023) == datetime.datetime(2023, 2, 28, 2, 0, 0)

    transition = TransitionTime.fixed_date(TWO_AM, 4, 31)
    assert transition.on(2023) == datetime.datetime(2023, 4, 30, 2, 0, 0)


def test_rule_range() -> None:
    """Test the dates covered by a rule."""
    rule = make_rule(datetime.date(2000, 1, 1), datetime.date(2000, 12, 31))
    assert rule.covers(datetime.date(2000, 1, 1))
    assert rule.covers(datetime.date(2000, 12, 31))
    assert not rule.covers(datetime.date(1999, 12, 31))
    assert not rule.covers(datetime.date(2001, 1, 1))


def test_rule_invalid_range() -> None:
    """Test a rule that ends before it starts."""
    with pytest.raises(ValueError, match="after end date"):
        make_rule(datetime.date(2001, 1, 1), datetime.date(2000, 12, 31))


def test_schedule_rule_for() -> None:
    """Test finding the rule that covers a date."""
    rules = (
        make_rule(MIN_DATE, datetime.date(1999, 12, 31)),
        make_rule(datetime.date(2000, 1, 1), datetime.date(2000, 12, 31)),
        make_rule(datetime.date(2001, 1, 1), MAX_DATE),
    )
    schedule = Schedule(rules)
    assert len(schedule) == 3
    assert list(schedule) == list(rules)
    assert schedule[1] is rules[1]

    assert schedule.rule_for(MIN_DATE) is rules[0]
    assert schedule.rule_for(datetime.date(1999, 12, 31)) is rules[0]
    assert schedule.rule_for(datetime.date(2000, 1, 1)) is rules[1]
    assert schedule.rule_for(datetime.date(2000, 6, 15)) is rules[1]
    assert schedule.rule_for(datetime.date(2001, 1, 1)) is rules[2]
    assert schedule.rule_for(MAX_DATE) is rules[2]


def test_schedule_rule_for_gaps() -> None:
    """Test dates outside a partial schedule have no rule."""
    schedule = Schedule(
        (
            make_rule(datetime.date(2000, 1, 1), datetime.date(2000, 12, 31)),
            make_rule(datetime.date(2002, 1, 1), datetime.date(2002, 12, 31)),
        )
    )
    assert schedule.rule_for(datetime.date(1999, 12, 31)) is None
    assert schedule.rule_for(datetime.date(2001, 6, 1)) is None
    assert schedule.rule_for(datetime.date(2003, 1, 1)) is None
    assert Schedule(()).rule_for(datetime.date(2000, 1, 1)) is None


def test_raw_record() -> None:
    """Test parsing a raw record from serialized values."""
    record = RawDstRecord.model_validate(
        {
            "year": 1970,
            "dst_start": "1970-04-05T02:00:00",
            "dst_end": "1970-10-25T02:00:00",
            "base_utc_offset": -18000,
            "dst_delta": "PT1H",
        }
    )
    assert record.dst_start == datetime.datetime(1970, 4, 5, 2, 0, 0)
    assert record.dst_end == datetime.datetime(1970, 10, 25, 2, 0, 0)
    assert record.base_utc_offset == datetime.timedelta(hours=-5)
    assert record.dst_delta == HOUR
    assert record.standard_name == ""
    assert record.daylight_name == ""


def test_raw_record_immutable() -> None:
    """Test a raw record can't be modified after creation."""
    record = RawDstRecord(
        year=1970,
        dst_start=datetime.datetime(1970, 4, 5, 2, 0, 0),
        dst_end=datetime.datetime(1970, 10, 25, 2, 0, 0),
        base_utc_offset=datetime.timedelta(hours=-5),
        dst_delta=HOUR,
    )
    with pytest.raises(ValidationError):
        record.year = 1971  # type: ignore[misc]


def test_raw_record_invalid() -> None:
    """Test a record missing required values."""
    with pytest.raises(ValidationError):
        RawDstRecord.model_validate({"year": 1970})
