"""Test fixtures."""

from collections.abc import Generator
import datetime

import pytest

from localtz import local
from localtz.model import RawDstRecord


class FakeProvider:
    """Provider returning a fixed daylight saving policy, recording requested years."""

    def __init__(
        self,
        dst_start: datetime.datetime = datetime.datetime(1970, 4, 5, 2, 0, 0),
        dst_end: datetime.datetime = datetime.datetime(1970, 10, 25, 2, 0, 0),
        base_utc_offset: datetime.timedelta = datetime.timedelta(hours=-5),
        dst_delta: datetime.timedelta = datetime.timedelta(hours=1),
        missing_years: set[int] | None = None,
    ) -> None:
        self.dst_start = dst_start
        self.dst_end = dst_end
        self.base_utc_offset = base_utc_offset
        self.dst_delta = dst_delta
        self.missing_years = missing_years or set()
        self.requested_years: list[int] = []

    def get_dst_record(self, year: int) -> RawDstRecord | None:
        self.requested_years.append(year)
        if year in self.missing_years:
            return None
        return RawDstRecord(
            year=year,
            dst_start=self.dst_start.replace(year=year),
            dst_end=self.dst_end.replace(year=year),
            base_utc_offset=self.base_utc_offset,
            dst_delta=self.dst_delta,
            standard_name="EST",
            daylight_name="EDT",
        )


@pytest.fixture
def provider() -> FakeProvider:
    """Fixture for a provider of a northern hemisphere policy."""
    return FakeProvider()


@pytest.fixture(autouse=True)
def reset_local_timezone() -> Generator[None, None, None]:
    """Clear the process-wide local timezone after each test."""
    yield
    local.reset_local_timezone()


@pytest.fixture
def provider_factory() -> type[FakeProvider]:
    """Fixture to create providers with a custom policy."""
    return FakeProvider
