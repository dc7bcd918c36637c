"""Upstream client layer for Swellwatch.

Async HTTP clients for fetching raw station reports from:
- NOAA NDBC: realtime2 and 5day standard meteorological text feeds
"""

from swellwatch.clients.base import BaseAsyncClient
from swellwatch.clients.ndbc import NDBCClient

__all__ = [
    "BaseAsyncClient",
    "NDBCClient",
]
