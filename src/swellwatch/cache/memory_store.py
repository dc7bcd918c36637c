"""Single-slot in-memory cache for the last good report.

Holds at most one entry. A write replaces the entry wholesale; a read
returns it only while it is younger than the TTL. Entries are immutable once
stored, so concurrent readers see either the previous entry or the new one,
never a mix. Nothing is ever deleted: an old entry is superseded by the next
write or simply ignored once it expires.

Usage:
    cache = ReportCache(ttl_seconds=300)
    cache.write(report, warnings=["Unusual period: 2s"])
    entry = cache.read()  # None once five minutes have passed
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from swellwatch.models import NormalizedReport

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheEntry:
    """A stored report and the instant it was produced."""

    report: NormalizedReport
    stored_at: datetime
    warnings: tuple[str, ...] = ()

    def age(self, now: datetime) -> timedelta:
        return now - self.stored_at


class ReportCache:
    """Thread-safe single-slot report cache with a fixed TTL.

    Args:
        ttl_seconds: Maximum entry age served by read() (default: 300)
        clock: Callable returning the current aware datetime
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._entry: CacheEntry | None = None
        self._lock = threading.Lock()

    def read(self) -> CacheEntry | None:
        """Return the current entry if it is younger than the TTL."""
        with self._lock:
            entry = self._entry
        if entry is None:
            return None
        age = entry.age(self._clock())
        if age >= self.ttl:
            logger.debug("Cache entry expired (age %.0fs)", age.total_seconds())
            return None
        return entry

    def peek(self) -> CacheEntry | None:
        """Return the current entry regardless of age."""
        with self._lock:
            return self._entry

    def write(self, report: NormalizedReport, warnings: list[str] | tuple[str, ...] = ()) -> CacheEntry:
        """Replace the stored entry with a fresh one stamped now."""
        entry = CacheEntry(report=report, stored_at=self._clock(), warnings=tuple(warnings))
        with self._lock:
            self._entry = entry
        return entry
