"""A custom timezone built from a daylight saving schedule.

This is an implementation of tzinfo that applies a fixed base UTC offset plus
the daylight saving rule that covers the date being converted. Transition
times are wall clock times. During the repeated hour at the end of daylight
saving time the first occurrence is daylight saving time and the second,
with fold=1, is standard time. Conversion from UTC sets fold accordingly.
"""

from __future__ import annotations

import datetime
import logging

from .model import DEFAULT_END_YEAR, DEFAULT_START_YEAR, Schedule, TransitionRule
from .provider import DstRecordProvider
from .schedule import build_schedule, read_record

__all__ = [
    "CustomTimeZone",
    "create_custom_timezone",
    "create_local_timezone",
    "format_display_name",
]

_LOGGER = logging.getLogger(__name__)

_ZERO = datetime.timedelta(0)


def format_display_name(offset: datetime.timedelta) -> str:
    """Return a display name for a timezone with the UTC offset e.g. (GMT-05:00) Local Time."""
    sign = "+" if offset >= _ZERO else "-"
    minutes = int(abs(offset).total_seconds()) // 60
    return f"(GMT{sign}{minutes // 60:02}:{minutes % 60:02}) Local Time"


def _within(
    start: datetime.datetime, end: datetime.datetime, local: datetime.datetime
) -> bool:
    """Return true if the time is in [start, end), wrapping over the new year."""
    if start < end:
        return start <= local < end
    # Daylight saving time spans the new year e.g. in the southern hemisphere
    return not end <= local < start


def _transitions(
    rule: TransitionRule, year: int
) -> tuple[datetime.datetime, datetime.datetime] | None:
    """Return the wall clock start and end of daylight saving time in the year."""
    if not rule.delta:
        return None
    start = rule.start_transition.on(year)
    end = rule.end_transition.on(year)
    if start == end:
        return None
    return start, end


def _in_daylight_time(rule: TransitionRule, local: datetime.datetime) -> bool:
    """Return true if the wall clock time is within the rule's daylight saving period.

    The repeated hour at the end of daylight saving time is daylight saving
    time for the first occurrence (fold=0) and standard time for the second.
    """
    if (transitions := _transitions(rule, local.year)) is None:
        return False
    start, end = transitions
    if local.fold and end - rule.delta <= local < end:
        return False
    return _within(start, end, local)


class CustomTimeZone(datetime.tzinfo):
    """A tzinfo with a base UTC offset and a schedule of daylight saving rules."""

    def __init__(
        self,
        key: str,
        base_utc_offset: datetime.timedelta,
        display_name: str,
        standard_name: str,
        daylight_name: str,
        schedule: Schedule,
    ) -> None:
        """Initialize CustomTimeZone."""
        self._key = key
        self._base_utc_offset = base_utc_offset
        self._display_name = display_name
        self._standard_name = standard_name
        self._daylight_name = daylight_name
        self._schedule = schedule

    @property
    def key(self) -> str:
        """Return the identifier of the timezone."""
        return self._key

    @property
    def base_utc_offset(self) -> datetime.timedelta:
        """Return the UTC offset of standard time."""
        return self._base_utc_offset

    @property
    def display_name(self) -> str:
        """Return the display name of the timezone."""
        return self._display_name

    @property
    def standard_name(self) -> str:
        """Return the name of the timezone during standard time."""
        return self._standard_name

    @property
    def daylight_name(self) -> str:
        """Return the name of the timezone during daylight saving time."""
        return self._daylight_name

    @property
    def schedule(self) -> Schedule:
        """Return the daylight saving rules of the timezone."""
        return self._schedule

    @property
    def supports_daylight_saving_time(self) -> bool:
        """Return true if any rule adjusts the base offset."""
        return any(rule.delta for rule in self._schedule)

    def utcoffset(self, dt: datetime.datetime | None) -> datetime.timedelta:
        """Return offset of local time from UTC, as a timedelta object."""
        if dt is None:
            return self._base_utc_offset
        return self._base_utc_offset + self.dst(dt)

    def dst(self, dt: datetime.datetime | None) -> datetime.timedelta:
        """Return the daylight saving time (DST) adjustment, if applicable."""
        if dt is None:
            return _ZERO
        local = dt.replace(tzinfo=None)
        rule = self._schedule.rule_for(local.date())
        if rule is None or not _in_daylight_time(rule, local):
            return _ZERO
        return rule.delta

    def fromutc(self, dt: datetime.datetime) -> datetime.datetime:
        """Convert a UTC time to local time, marking the repeated hour with fold."""
        if not isinstance(dt, datetime.datetime):
            raise TypeError("fromutc() requires a datetime argument")
        if dt.tzinfo is not self:
            raise ValueError("dt.tzinfo is not self")
        standard = dt.replace(tzinfo=None) + self._base_utc_offset
        rule = self._schedule.rule_for(standard.date())
        if rule is None or (transitions := _transitions(rule, standard.year)) is None:
            return standard.replace(tzinfo=self)
        start, end = transitions
        # The end transition is a daylight saving wall clock time
        if _within(start, end - rule.delta, standard):
            return (standard + rule.delta).replace(tzinfo=self)
        fold = 1 if end - rule.delta <= standard < end else 0
        return standard.replace(tzinfo=self, fold=fold)

    def tzname(self, dt: datetime.datetime | None) -> str:
        """Return the time zone name for the datetime."""
        if dt is not None and self.dst(dt):
            return self._daylight_name
        return self._standard_name

    def __str__(self) -> str:
        """Return the string representation of the timezone."""
        return self._key

    def __repr__(self) -> str:
        """Return the string representation of the timezone."""
        return f"CustomTimeZone({self._key}, {self._display_name})"


def create_custom_timezone(
    key: str,
    base_utc_offset: datetime.timedelta,
    display_name: str,
    standard_name: str,
    daylight_name: str,
    schedule: Schedule,
) -> CustomTimeZone:
    """Create a timezone from a schedule and its names."""
    return CustomTimeZone(
        key, base_utc_offset, display_name, standard_name, daylight_name, schedule
    )


def create_local_timezone(
    provider: DstRecordProvider,
    *,
    year: int | None = None,
    start_year: int = DEFAULT_START_YEAR,
    end_year: int = DEFAULT_END_YEAR,
    key: str = "local",
) -> CustomTimeZone:
    """Create the local timezone from a provider of daylight saving records.

    The base offset and names come from the record for the specified year,
    the current year by default, and the rules from the schedule over the
    year range.
    """
    if year is None:
        year = datetime.date.today().year
    current = read_record(provider, year)
    schedule = build_schedule(provider, start_year, end_year)
    display_name = format_display_name(current.base_utc_offset)
    _LOGGER.debug("Created local timezone %s from %s records", display_name, year)
    return create_custom_timezone(
        key,
        current.base_utc_offset,
        display_name,
        current.standard_name,
        current.daylight_name,
        schedule,
    )
