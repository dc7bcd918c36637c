"""Orchestrator — one request lifecycle from cache check to response.

    CacheCheck ─ hit ──────────────────────────────────────────────▶ Respond
               └ miss ▶ Fetch ▶ Parse ▶ Extract ▶ Normalize ▶ Validate ▶ Store ▶ Respond

Any step from Fetch through Normalize may fail the run with a PipelineError.
A failed run never touches the cache, so a previous good report keeps being
served until its TTL runs out. There is no retry loop: resilience comes from
the Fetcher's ordered fallback and from the cache absorbing repeat requests.

Usage:
    orchestrator = Orchestrator()
    result = await orchestrator.run()
    print(result.report.wave_height_ft)

    response = await orchestrator.respond()  # never raises PipelineError
"""

import logging
import time
from collections.abc import Callable

from swellwatch.cache import ReportCache
from swellwatch.clients.base import BaseAsyncClient
from swellwatch.clients.ndbc import NDBCClient
from swellwatch.config import Settings, settings as default_settings
from swellwatch.errors import PipelineError
from swellwatch.models import PipelineResult, ReportMeta, ServiceResponse
from swellwatch.parsing.feed import parse_feed
from swellwatch.parsing.fields import build_field_index, extract_fields, resolve_columns
from swellwatch.pipeline.fetcher import Fetcher
from swellwatch.pipeline.normalize import normalize
from swellwatch.validation import validate_report

logger = logging.getLogger(__name__)


class Orchestrator:
    """Main pipeline orchestrator for one station.

    Owns the report cache. A fresh HTTP client is opened for each pipeline
    run that misses the cache.

    Usage:
        orchestrator = Orchestrator(settings=Settings(station_id="46225"))
        result = await orchestrator.run()
        if result.from_cache:
            print("served from cache")
    """

    def __init__(
        self,
        settings: Settings | None = None,
        cache: ReportCache | None = None,
        client_factory: Callable[[], BaseAsyncClient] | None = None,
    ) -> None:
        """Initialize orchestrator with its components.

        Args:
            settings: Station and pipeline configuration (default: global settings)
            cache: Report cache (default: new empty cache with configured TTL)
            client_factory: Builds an unopened client per run (default: NDBCClient)
        """
        self.settings = settings or default_settings
        self.cache = cache or ReportCache(ttl_seconds=self.settings.cache_ttl_seconds)
        self._client_factory = client_factory or self._default_client

    def _default_client(self) -> BaseAsyncClient:
        return NDBCClient(
            user_agent=self.settings.user_agent,
            timeout=self.settings.fetch_timeout_seconds,
        )

    async def run(self) -> PipelineResult:
        """Produce the current report, from cache when possible.

        Returns:
            PipelineResult with the report, advisory warnings and diagnostics

        Raises:
            UpstreamUnavailable: Every candidate source failed
            MalformedFeed: No header or no usable data row
            MissingTimestamp: The latest row has no valid timestamp
        """
        station_id = self.settings.station_id

        # --- CacheCheck ---
        entry = self.cache.read()
        if entry is not None:
            logger.info("Cache hit for %s", station_id)
            return PipelineResult(
                report=entry.report,
                warnings=entry.warnings,
                from_cache=True,
            )

        started = time.perf_counter()
        candidates = self.settings.resolve_candidate_urls()

        # --- Fetch ---
        async with self._client_factory() as client:
            fetcher = Fetcher(client, timeout=self.settings.fetch_timeout_seconds)
            fetched = await fetcher.fetch(candidates)

        # --- Parse → Extract → Normalize ---
        feed = parse_feed(fetched.text)
        observation = extract_fields(feed)
        report = normalize(
            observation,
            station_id=station_id,
            station_name=self.settings.station_name,
            source_url=fetched.source_url,
        )

        # --- Validate → Store ---
        warnings = validate_report(report)
        self.cache.write(report, warnings)

        index = build_field_index(feed.header)
        meta = ReportMeta(
            urls_tried=tuple(candidates),
            attempts=tuple(a.to_dict() for a in fetched.attempts),
            header=feed.header,
            latest_row=feed.row,
            field_indices=index,
            resolved_columns=resolve_columns(index),
            fetch_time_ms=(time.perf_counter() - started) * 1000,
        )

        logger.info(
            "Processed %s from %s in %.0fms (%d warnings)",
            station_id, fetched.source_url, meta.fetch_time_ms, len(warnings),
        )

        return PipelineResult(report=report, warnings=tuple(warnings), meta=meta)

    async def respond(self) -> ServiceResponse:
        """Run the pipeline and map the outcome to a boundary response.

        Every pipeline failure collapses to one generic 500 body. Internal
        detail is attached only when settings.debug is set.
        """
        started = time.perf_counter()
        try:
            result = await self.run()
        except PipelineError as e:
            elapsed = (time.perf_counter() - started) * 1000
            logger.error(
                "Pipeline failed for %s (%.0fms): %s",
                self.settings.station_id, elapsed, e,
            )
            body = {"error": f"Failed to fetch {self.settings.station_id} buoy data"}
            if self.settings.debug:
                body["detail"] = str(e)
            return ServiceResponse(status_code=500, body=body)

        return ServiceResponse(
            status_code=200,
            body=result.to_dict(include_meta=self.settings.debug),
            warnings=result.warnings,
        )
