"""Library for parsing POSIX TZ rule strings.

TZ supports these two formats

No DST: std offset
  - std: Name of the timezone
  - offset: Time added to local time to get UTC
  Example: EST+5

DST: std offset dst [offset],start[/time],end[/time]
  - dst: Name of the Daylight savings time timezone
  - offset: Defaults to 1 hour ahead of STD offset if not specified
  - start & end: Time period when DST is in effect. The start/end have
    the following formats:
      Jn: A julian day between 1 and 365 (Feb 29th never counted)
      n: A zero based day between 0 and 365 (Feb 29th is counted in leap years)
      Mm.w.d:
          m: Month between 1 and 12
          w: Between 1 and 5. Week 1 is first week d occurs, 5 is the last
          d: Between 0 (Sunday) and 6 (Saturday)
      The time field is in hh:mm:ss. The hour can be 167 to -167.
"""

from __future__ import annotations

import calendar
import datetime
import re
from dataclasses import dataclass
from typing import Optional, Union

from dateutil import rrule

__all__ = [
    "Rule",
    "RuleDate",
    "RuleDay",
    "RuleOccurrence",
    "parse_tz_rule",
]

_ZERO = datetime.timedelta(seconds=0)
_DEFAULT_TIME_DELTA = datetime.timedelta(hours=2)
_LEAP_DAY_OF_YEAR = 60


def _parse_time(values: dict[str, Optional[str]]) -> datetime.timedelta | None:
    """Convert a [+/-]hh[:mm[:ss]] match into a timedelta."""
    if (hour := values["hour"]) is None:
        return None
    sign = -1 if hour.startswith("-") else 1
    return sign * datetime.timedelta(
        hours=int(hour.lstrip("+-")),
        minutes=int(values.get("minutes") or 0),
        seconds=int(values.get("seconds") or 0),
    )


@dataclass
class RuleDay:
    """A date referenced in a timezone rule as a day of the year."""

    day_of_year: int
    """Julian day 1 to 365, or a zero based day 0 to 365 when leap days are counted."""

    time: datetime.timedelta
    """Local time of day when the rule goes into effect, default of 02:00:00."""

    leap_day_counted: bool = False
    """True for the zero based form where Feb 29th is counted in leap years."""

    def resolve(self, year: int) -> datetime.datetime:
        """Return the wall clock time of this day in the specified year."""
        offset = self.day_of_year
        if not self.leap_day_counted:
            offset -= 1
            if calendar.isleap(year) and self.day_of_year >= _LEAP_DAY_OF_YEAR:
                offset += 1
        return datetime.datetime(year, 1, 1) + datetime.timedelta(days=offset) + self.time


@dataclass
class RuleDate:
    """A date referenced in a timezone rule by month, week and weekday."""

    month: int
    """A month between 1 and 12."""

    week_of_month: int
    """A week number of the month (1 to 5) based on the first occurrence of day_of_week."""

    day_of_week: int
    """A day of the week between 0 (Sunday) and 6 (Saturday)."""

    time: datetime.timedelta
    """Local time of day when the rule goes into effect, default of 02:00:00."""

    def as_rrule(self, year: int) -> rrule.rrule:
        """Return a yearly recurrence of the transition day starting in the year."""
        week = -1 if self.week_of_month == 5 else self.week_of_month
        return rrule.rrule(
            freq=rrule.YEARLY,
            bymonth=self.month,
            byweekday=rrule.weekdays[(self.day_of_week - 1) % 7](week),
            dtstart=datetime.datetime(year, 1, 1),
        )

    def resolve(self, year: int) -> datetime.datetime:
        """Return the wall clock time of this date in the specified year."""
        return next(iter(self.as_rrule(year))) + self.time


@dataclass
class RuleOccurrence:
    """A named standard or daylight saving time offset."""

    name: str
    """The name of the timezone occurrence e.g. EST."""

    offset: datetime.timedelta
    """UTC offset for this timezone occurrence (not time added to local time)."""


@dataclass
class Rule:
    """A rule for evaluating yearly timezone transitions."""

    std: RuleOccurrence
    """An occurrence of a timezone transition for standard time."""

    dst: Optional[RuleOccurrence] = None
    """An occurrence of a timezone transition for daylight saving time."""

    dst_start: Union[RuleDate, RuleDay, None] = None
    """Describes when dst goes into effect."""

    dst_end: Union[RuleDate, RuleDay, None] = None
    """Describes when dst ends (std starts)."""


_OFFSET_RE_PATTERN: re.Pattern[str] = re.compile(
    r"(?P<name>(\<[+\-]?\d+\>|[a-zA-Z]{3,}))"
    r"((?P<hour>[+-]?\d+)(?::(?P<minutes>\d{1,2})(?::(?P<seconds>\d{1,2}))?)?)?"
)
_START_END_RE_PATTERN: re.Pattern[str] = re.compile(
    r",(J(?P<julian_day>\d+)|(?P<day_of_year>\d+)"
    r"|M(?P<month>\d{1,2})\.(?P<week_of_month>\d)\.(?P<day_of_week>\d))"
    r"(\/(?P<hour>[+-]?\d+)(?::(?P<minutes>\d{1,2})(?::(?P<seconds>\d{1,2}))?)?)?"
)


def _occurrence_from_match(
    match: re.Match[str], default: datetime.timedelta | None = None
) -> RuleOccurrence:
    """Create an occurrence, converting time added to local time into a UTC offset."""
    added = _parse_time(match.groupdict())
    if added is None:
        if default is None:
            raise ValueError(f"Unable to parse TZ string, missing offset: {match.string}")
        return RuleOccurrence(name=match.group("name"), offset=default)
    return RuleOccurrence(name=match.group("name"), offset=_ZERO - added)


def _rule_date_from_match(match: re.Match[str]) -> Union[RuleDay, RuleDate]:
    """Create a rule date from a start or end match."""
    time = _parse_time(match.groupdict())
    if time is None:
        time = _DEFAULT_TIME_DELTA
    if match["julian_day"] is not None:
        day = int(match["julian_day"])
        if not 1 <= day <= 365:
            raise ValueError(f"Unable to parse TZ string, invalid julian day: {day}")
        return RuleDay(day_of_year=day, time=time)
    if match["day_of_year"] is not None:
        day = int(match["day_of_year"])
        if not 0 <= day <= 365:
            raise ValueError(f"Unable to parse TZ string, invalid day of year: {day}")
        return RuleDay(day_of_year=day, time=time, leap_day_counted=True)
    rule_date = RuleDate(
        month=int(match["month"]),
        week_of_month=int(match["week_of_month"]),
        day_of_week=int(match["day_of_week"]),
        time=time,
    )
    if (
        not 1 <= rule_date.month <= 12
        or not 1 <= rule_date.week_of_month <= 5
        or not 0 <= rule_date.day_of_week <= 6
    ):
        raise ValueError(f"Unable to parse TZ string, invalid date: {match.group(0)}")
    return rule_date


def parse_tz_rule(tz_str: str) -> Rule:
    """Parse the TZ string into a Rule object."""
    buffer = tz_str
    if (std_match := _OFFSET_RE_PATTERN.match(buffer)) is None:
        raise ValueError(f"Unable to parse TZ string: {tz_str}")
    buffer = buffer[std_match.end() :]
    std = _occurrence_from_match(std_match)

    dst: RuleOccurrence | None = None
    if (dst_match := _OFFSET_RE_PATTERN.match(buffer)) is not None:
        buffer = buffer[dst_match.end() :]
        dst = _occurrence_from_match(
            dst_match, default=std.offset + datetime.timedelta(hours=1)
        )

    dst_start: Union[RuleDate, RuleDay, None] = None
    dst_end: Union[RuleDate, RuleDay, None] = None
    if (start_match := _START_END_RE_PATTERN.match(buffer)) is not None:
        buffer = buffer[start_match.end() :]
        dst_start = _rule_date_from_match(start_match)
    if (end_match := _START_END_RE_PATTERN.match(buffer)) is not None:
        buffer = buffer[end_match.end() :]
        dst_end = _rule_date_from_match(end_match)

    if (dst_start is None) != (dst_end is None):
        raise ValueError(
            f"Unable to parse TZ string, should have both or neither start and end dates: {tz_str}"
        )
    if dst_start is not None and dst is None:
        raise ValueError(f"Unable to parse TZ string, dates without dst name: {tz_str}")
    if buffer:
        raise ValueError(f"Unable to parse TZ string, unexpected trailing data: {tz_str}")
    return Rule(std=std, dst=dst, dst_start=dst_start, dst_end=dst_end)
