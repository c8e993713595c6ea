"""Library for building a daylight saving time schedule.

A provider reports daylight saving data one year at a time. The schedule
turns each year into a fixed-date rule covering that calendar year, then
extends the first and last known policies to cover all time before and
after the requested range.
"""

from __future__ import annotations

import datetime
import logging

from .exceptions import DataUnavailable
from .model import (
    DEFAULT_END_YEAR,
    DEFAULT_START_YEAR,
    MAX_DATE,
    MIN_DATE,
    RawDstRecord,
    Schedule,
    TransitionRule,
    TransitionTime,
)
from .provider import DstRecordProvider

__all__ = [
    "build_schedule",
    "read_record",
    "rule_from_record",
]

_LOGGER = logging.getLogger(__name__)


def read_record(provider: DstRecordProvider, year: int) -> RawDstRecord:
    """Request the record for a year, raising DataUnavailable on any failure."""
    try:
        record = provider.get_dst_record(year)
    except DataUnavailable:
        raise
    except (LookupError, OSError, ValueError) as err:
        raise DataUnavailable(year, f"Unable to read record for year {year}: {err}") from err
    if record is None:
        raise DataUnavailable(year)
    return record


def rule_from_record(
    record: RawDstRecord, start_date: datetime.date, end_date: datetime.date
) -> TransitionRule:
    """Create a fixed date rule over the date range from a raw record.

    Only the month, day and wall clock time of the record transitions are
    kept, so the same record may be applied to any range of years.
    """
    return TransitionRule(
        start_date=start_date,
        end_date=end_date,
        delta=record.dst_delta,
        start_transition=TransitionTime.fixed_date(
            record.dst_start.time(), record.dst_start.month, record.dst_start.day
        ),
        end_transition=TransitionTime.fixed_date(
            record.dst_end.time(), record.dst_end.month, record.dst_end.day
        ),
    )


def build_schedule(
    provider: DstRecordProvider,
    start_year: int = DEFAULT_START_YEAR,
    end_year: int = DEFAULT_END_YEAR,
) -> Schedule:
    """Build a schedule of rules covering all dates from per-year provider records.

    The result has one rule per year in the inclusive range plus a rule before
    the range using the first year's policy and a rule after the range using
    the last year's policy.
    """
    if start_year > end_year:
        raise ValueError(f"Start year {start_year} is after end year {end_year}")
    if start_year <= MIN_DATE.year or end_year >= MAX_DATE.year:
        raise ValueError(
            f"Year range {start_year}-{end_year} must be within "
            f"{MIN_DATE.year + 1}-{MAX_DATE.year - 1}"
        )
    _LOGGER.debug("Building schedule for years %s-%s", start_year, end_year)

    rules: list[TransitionRule] = []
    for year in range(start_year, end_year + 1):
        record = read_record(provider, year)
        if year == start_year:
            rules.append(
                rule_from_record(
                    record, MIN_DATE, datetime.date(start_year - 1, 12, 31)
                )
            )
        rules.append(
            rule_from_record(
                record, datetime.date(year, 1, 1), datetime.date(year, 12, 31)
            )
        )
        if year == end_year:
            rules.append(
                rule_from_record(record, datetime.date(end_year + 1, 1, 1), MAX_DATE)
            )

    _LOGGER.debug("Built schedule with %d rules", len(rules))
    return Schedule(tuple(rules))
