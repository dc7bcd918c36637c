"""Fetcher — ordered candidate sources → raw feed text.

Tries each candidate URL strictly in sequence and returns the first body that
arrives successfully within the per-attempt timeout. A failed candidate is
recorded as an outcome and the next one is tried; nothing is retried.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field

from swellwatch.clients.base import BaseAsyncClient
from swellwatch.errors import SourceError, UpstreamUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttemptOutcome:
    """Result of trying a single candidate source."""

    url: str
    ok: bool
    reason: str | None = None
    status_code: int | None = None
    elapsed_ms: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "url": self.url,
            "ok": self.ok,
            "reason": self.reason,
            "status_code": self.status_code,
            "elapsed_ms": round(self.elapsed_ms, 1),
        }


@dataclass(frozen=True)
class FetchResult:
    """Raw feed text plus the trail of attempts that produced it."""

    text: str
    source_url: str
    attempts: tuple[AttemptOutcome, ...] = field(default_factory=tuple)


class Fetcher:
    """Fetches a raw report from the first responsive candidate source.

    The client must already be open (entered as an async context manager).

    Usage:
        async with NDBCClient() as client:
            fetcher = Fetcher(client, timeout=10.0)
            result = await fetcher.fetch(NDBCClient.candidate_urls("LJPC1"))
            print(result.source_url)
    """

    def __init__(self, client: BaseAsyncClient, timeout: float = 10.0) -> None:
        """Initialize fetcher.

        Args:
            client: Open client used for every attempt
            timeout: Per-attempt bound in seconds, enforced by cancellation
        """
        self.client = client
        self.timeout = timeout

    async def _attempt(self, url: str) -> tuple[AttemptOutcome, str | None]:
        """Try one candidate and describe what happened."""
        started = time.perf_counter()
        try:
            async with asyncio.timeout(self.timeout):
                text = await self.client.get_text(url)
        except TimeoutError:
            reason = f"Request timeout after {self.timeout:g}s"
            status = None
            text = None
        except SourceError as e:
            reason = str(e)
            status = e.status_code
            text = None
        else:
            elapsed = (time.perf_counter() - started) * 1000
            return AttemptOutcome(url=url, ok=True, elapsed_ms=elapsed), text

        elapsed = (time.perf_counter() - started) * 1000
        return (
            AttemptOutcome(url=url, ok=False, reason=reason, status_code=status, elapsed_ms=elapsed),
            None,
        )

    async def fetch(self, candidates: list[str]) -> FetchResult:
        """Return the body of the first candidate that succeeds.

        Args:
            candidates: Source URLs in order of preference

        Returns:
            FetchResult with the text, the URL that served it and every attempt

        Raises:
            UpstreamUnavailable: If every candidate failed (carries the failures)
        """
        if not candidates:
            raise ValueError("At least one candidate URL is required")

        attempts: list[AttemptOutcome] = []

        for url in candidates:
            logger.info("Attempting fetch from %s", url)
            outcome, text = await self._attempt(url)
            attempts.append(outcome)

            if outcome.ok and text is not None:
                logger.info("Fetched %s in %.0fms", url, outcome.elapsed_ms)
                return FetchResult(text=text, source_url=url, attempts=tuple(attempts))

            logger.warning("Fetch failed for %s — %s", url, outcome.reason)

        raise UpstreamUnavailable(attempts)
