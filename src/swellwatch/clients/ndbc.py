"""NOAA National Data Buoy Center (NDBC) feed client.

Standard meteorological observations are published as plain text under
/data/realtime2 (45 days) and /data/5day. File names are case-sensitive on
some mirrors, so both spellings of the station id are candidates.

Usage:
    from swellwatch.clients.ndbc import NDBCClient

    urls = NDBCClient.candidate_urls("LJPC1")
    async with NDBCClient(user_agent="Swellwatch/0.1") as client:
        text = await client.get_text(urls[0])
"""

from swellwatch.clients.base import BaseAsyncClient


DEFAULT_BASE_URL = "https://www.ndbc.noaa.gov/data"


class NDBCClient(BaseAsyncClient):
    """Async client for NDBC realtime text feeds.

    Args:
        user_agent: User-Agent header sent with every request
        timeout: Request timeout in seconds (default: 10)
    """

    def __init__(self, user_agent: str = "Swellwatch/0.1", timeout: float = 10.0) -> None:
        super().__init__(
            headers={"User-Agent": user_agent, "Accept": "text/plain"},
            timeout=timeout,
        )

    @staticmethod
    def candidate_urls(station_id: str, base_url: str = DEFAULT_BASE_URL) -> list[str]:
        """Ordered candidate locations for a station's standard met feed.

        Args:
            station_id: NDBC station identifier (any case)
            base_url: Root of the NDBC data tree

        Returns:
            URLs in order of preference: realtime2 then 5day, upper-case id
            first, then lower-case.
        """
        base = base_url.rstrip("/")
        upper = station_id.upper()
        lower = station_id.lower()
        return [
            f"{base}/realtime2/{upper}.txt",
            f"{base}/5day/{upper}_5day.txt",
            f"{base}/realtime2/{lower}.txt",
            f"{base}/5day/{lower}_5day.txt",
        ]
