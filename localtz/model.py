"""Data model for daylight saving time schedules.

A schedule is a list of adjustment rules that together cover every
representable date. Each rule applies a single daylight saving policy, a
fixed-date start and end transition plus the amount of time added to the
standard offset, to a range of dates.
"""

from __future__ import annotations

import bisect
import calendar
import datetime
from collections.abc import Iterator
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict

__all__ = [
    "MIN_DATE",
    "MAX_DATE",
    "DEFAULT_START_YEAR",
    "DEFAULT_END_YEAR",
    "RawDstRecord",
    "TransitionTime",
    "TransitionRule",
    "Schedule",
]

MIN_DATE = datetime.date.min
MAX_DATE = datetime.date.max

# The default range is the span supported by the legacy mktime based
# platform conversion used by operating system providers.
DEFAULT_START_YEAR = 1970
DEFAULT_END_YEAR = 2037


class RawDstRecord(BaseModel):
    """Daylight saving data for a single year as reported by a provider."""

    model_config = ConfigDict(frozen=True)

    year: int
    """The year this record describes."""

    dst_start: datetime.datetime
    """Wall clock time when daylight saving time starts."""

    dst_end: datetime.datetime
    """Wall clock time when daylight saving time ends."""

    base_utc_offset: datetime.timedelta
    """UTC offset of standard time."""

    dst_delta: datetime.timedelta
    """Time added to the standard offset while daylight saving time is in effect."""

    standard_name: str = ""
    """Name of the timezone when not in daylight saving time e.g. EST."""

    daylight_name: str = ""
    """Name of the timezone during daylight saving time e.g. EDT."""


@dataclass(frozen=True)
class TransitionTime:
    """A transition that happens on the same month and day every year."""

    month: int
    day: int
    time_of_day: datetime.time

    @classmethod
    def fixed_date(
        cls, time_of_day: datetime.time, month: int, day: int
    ) -> TransitionTime:
        """Create a fixed date transition, validating the month and day."""
        if not 1 <= month <= 12:
            raise ValueError(f"Transition month must be between 1 and 12: {month}")
        if not 1 <= day <= 31:
            raise ValueError(f"Transition day must be between 1 and 31: {day}")
        return cls(month=month, day=day, time_of_day=time_of_day.replace(tzinfo=None))

    def on(self, year: int) -> datetime.datetime:
        """Return the wall clock time of this transition in the specified year."""
        day = min(self.day, calendar.monthrange(year, self.month)[1])
        return datetime.datetime.combine(
            datetime.date(year, self.month, day), self.time_of_day
        )


@dataclass(frozen=True)
class TransitionRule:
    """A daylight saving policy that applies to an inclusive range of dates."""

    start_date: datetime.date
    end_date: datetime.date
    delta: datetime.timedelta
    start_transition: TransitionTime
    end_transition: TransitionTime

    def __post_init__(self) -> None:
        """Verify the rule covers a non-empty range of dates."""
        if self.start_date > self.end_date:
            raise ValueError(
                f"Rule start date {self.start_date} is after end date {self.end_date}"
            )

    def covers(self, day: datetime.date) -> bool:
        """Return true if the date is within this rule."""
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class Schedule:
    """An ordered sequence of rules covering all representable dates."""

    rules: tuple[TransitionRule, ...]

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[TransitionRule]:
        return iter(self.rules)

    def __getitem__(self, index: int) -> TransitionRule:
        return self.rules[index]

    def rule_for(self, day: datetime.date) -> TransitionRule | None:
        """Return the rule in effect for the date, if any."""
        index = bisect.bisect_right(self.rules, day, key=lambda rule: rule.start_date)
        if index == 0:
            return None
        rule = self.rules[index - 1]
        return rule if rule.covers(day) else None
