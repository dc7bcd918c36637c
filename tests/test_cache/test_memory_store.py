"""Tests for the single-slot report cache."""

import threading
from datetime import datetime, timedelta, timezone

import pytest

from swellwatch.cache import CacheEntry, ReportCache
from swellwatch.models import NormalizedReport

T0 = datetime(2024, 3, 15, 18, 5, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


def make_report(wave_height_ft: float | None = 3.9) -> NormalizedReport:
    return NormalizedReport(
        station_id="LJPC1",
        name="Scripps Pier, La Jolla, CA",
        source_url="https://www.ndbc.noaa.gov/data/realtime2/LJPC1.txt",
        updated=datetime(2024, 3, 15, 18, 0, tzinfo=timezone.utc),
        wave_height_ft=wave_height_ft,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ReportCache(ttl_seconds=300, clock=clock)


class TestReportCache:
    """TTL and replace-on-write behavior."""

    def test_starts_empty(self, cache):
        assert cache.read() is None
        assert cache.peek() is None

    def test_write_then_read(self, cache, clock):
        report = make_report()
        entry = cache.write(report, warnings=["Unusual period: 2s"])

        assert isinstance(entry, CacheEntry)
        assert entry.stored_at == clock.now
        assert cache.read().report is report
        assert cache.read().warnings == ("Unusual period: 2s",)

    def test_fresh_within_ttl(self, cache, clock):
        cache.write(make_report())
        clock.advance(minutes=4, seconds=59)
        assert cache.read() is not None

    def test_expires_at_ttl(self, cache, clock):
        cache.write(make_report())
        clock.advance(minutes=5)
        assert cache.read() is None

    def test_expired_entry_is_not_deleted(self, cache, clock):
        """Expiry is decided at read time; the slot keeps the entry."""
        report = make_report()
        cache.write(report)
        clock.advance(hours=2)
        assert cache.read() is None
        assert cache.peek().report is report

    def test_write_replaces_wholesale(self, cache, clock):
        cache.write(make_report(3.9), warnings=["old"])
        clock.advance(minutes=1)
        cache.write(make_report(None))

        entry = cache.read()
        assert entry.report.wave_height_ft is None
        assert entry.warnings == ()
        assert entry.stored_at == clock.now

    def test_rejects_non_positive_ttl(self):
        with pytest.raises(ValueError):
            ReportCache(ttl_seconds=0)

    def test_concurrent_writers_leave_one_whole_entry(self, clock):
        """Parallel writes never leave a torn entry."""
        cache = ReportCache(ttl_seconds=300, clock=clock)
        reports = [make_report(float(i)) for i in range(20)]

        threads = [threading.Thread(target=cache.write, args=(r, [str(r.wave_height_ft)])) for r in reports]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        entry = cache.read()
        assert entry.report in reports
        assert entry.warnings == (str(entry.report.wave_height_ft),)
