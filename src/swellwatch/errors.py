"""Exception taxonomy for the report-ingestion pipeline.

Pipeline-level failures derive from PipelineError and end a run. SourceError
describes a single failed candidate and is absorbed by the Fetcher, which
records it as an attempt outcome and moves on.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from swellwatch.pipeline.fetcher import AttemptOutcome


class PipelineError(Exception):
    """Base exception for a failed pipeline run."""


class UpstreamUnavailable(PipelineError):
    """Every candidate source failed or timed out.

    Args:
        failures: Per-candidate outcomes, in the order they were tried
    """

    def __init__(self, failures: "list[AttemptOutcome]") -> None:
        self.failures = list(failures)
        summary = " | ".join(f"{f.url} -> {f.reason}" for f in self.failures)
        super().__init__(f"All {len(self.failures)} candidate sources failed: {summary}")


class MalformedFeed(PipelineError):
    """Header or data row could not be located in the feed."""


class MissingTimestamp(PipelineError):
    """Year, month, day or hour could not be resolved to a valid instant."""


class SourceError(Exception):
    """Transport-level failure of one candidate source."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
