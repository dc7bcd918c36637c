"""In-memory report cache for Swellwatch.

Single-slot, replace-on-write storage of the last good report with a TTL.
"""

from swellwatch.cache.memory_store import CacheEntry, ReportCache

__all__ = ["CacheEntry", "ReportCache"]
