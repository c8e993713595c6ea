"""Providers of per-year daylight saving records."""

from __future__ import annotations

import datetime
import logging
from typing import Protocol

from .model import RawDstRecord
from .tz_rule import Rule, parse_tz_rule

__all__ = [
    "DstRecordProvider",
    "TzRuleProvider",
]

_LOGGER = logging.getLogger(__name__)

_ZERO = datetime.timedelta(0)


class DstRecordProvider(Protocol):
    """A source of raw daylight saving data, one year at a time."""

    def get_dst_record(self, year: int) -> RawDstRecord | None:
        """Return the record for the year, or None when it is not available."""


class TzRuleProvider:
    """A provider that computes records from a POSIX TZ rule string.

    The same rule is applied to every year, so records only differ in
    the dates the transitions fall on.
    """

    def __init__(self, tz_str: str) -> None:
        """Initialize TzRuleProvider, raising ValueError on an invalid rule."""
        self._rule: Rule = parse_tz_rule(tz_str)

    def get_dst_record(self, year: int) -> RawDstRecord:
        """Return the record for the year."""
        rule = self._rule
        if rule.dst is None or rule.dst_start is None or rule.dst_end is None:
            no_dst = datetime.datetime(year, 1, 1)
            return RawDstRecord(
                year=year,
                dst_start=no_dst,
                dst_end=no_dst,
                base_utc_offset=rule.std.offset,
                dst_delta=_ZERO,
                standard_name=rule.std.name,
                daylight_name=rule.dst.name if rule.dst else rule.std.name,
            )
        record = RawDstRecord(
            year=year,
            dst_start=rule.dst_start.resolve(year),
            dst_end=rule.dst_end.resolve(year),
            base_utc_offset=rule.std.offset,
            dst_delta=rule.dst.offset - rule.std.offset,
            standard_name=rule.std.name,
            daylight_name=rule.dst.name,
        )
        _LOGGER.debug("Computed record for %s: %s", year, record)
        return record
