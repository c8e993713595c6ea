"""Process-wide configuration of the local timezone.

The local timezone is set once at startup with `set_local_timezone` and
read thereafter. `use_local_timezone` overrides it for the current context,
which is mostly useful in tests.
"""

from __future__ import annotations

import contextlib
import contextvars
import datetime
import logging
from collections.abc import Generator

from .exceptions import LocalTimezoneNotConfigured

__all__ = [
    "get_local_timezone",
    "reset_local_timezone",
    "set_local_timezone",
    "to_local",
    "use_local_timezone",
]

_LOGGER = logging.getLogger(__name__)

_local_timezone: datetime.tzinfo | None = None
_local_timezone_override: contextvars.ContextVar[datetime.tzinfo | None] = (
    contextvars.ContextVar("local_timezone_override", default=None)
)


def set_local_timezone(tz: datetime.tzinfo) -> None:
    """Set the process-wide local timezone."""
    global _local_timezone  # pylint: disable=global-statement
    _LOGGER.debug("Setting local timezone: %s", tz)
    _local_timezone = tz


def reset_local_timezone() -> None:
    """Clear the process-wide local timezone."""
    global _local_timezone  # pylint: disable=global-statement
    _local_timezone = None


def get_local_timezone() -> datetime.tzinfo:
    """Return the local timezone, raising if it has not been configured."""
    if (tz := _local_timezone_override.get()) is not None:
        return tz
    if _local_timezone is None:
        raise LocalTimezoneNotConfigured("Local timezone has not been configured")
    return _local_timezone


@contextlib.contextmanager
def use_local_timezone(tz: datetime.tzinfo) -> Generator[datetime.tzinfo]:
    """Context manager to use a different local timezone in the current context."""
    token = _local_timezone_override.set(tz)
    try:
        yield tz
    finally:
        _local_timezone_override.reset(token)


def to_local(dt: datetime.datetime) -> datetime.datetime:
    """Convert an aware datetime to the local timezone."""
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise ValueError(f"Unable to convert naive datetime to local time: {dt}")
    return dt.astimezone(get_local_timezone())
