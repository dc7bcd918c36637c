"""Tests for Orchestrator — request lifecycle and cache interplay.

Upstream is mocked with respx so the full Fetch → Parse → Extract →
Normalize → Validate → Store chain runs for real.
"""

from datetime import datetime, timedelta, timezone

import httpx
import pytest

from swellwatch.cache import ReportCache
from swellwatch.config import Settings
from swellwatch.errors import MalformedFeed, MissingTimestamp, UpstreamUnavailable
from swellwatch.pipeline.orchestrator import Orchestrator

BASE = "https://mirror.example.com/data"
URLS = [
    f"{BASE}/realtime2/LJPC1.txt",
    f"{BASE}/5day/LJPC1_5day.txt",
    f"{BASE}/realtime2/ljpc1.txt",
    f"{BASE}/5day/ljpc1_5day.txt",
]

SCENARIO_FEED = """\
#YY MM DD hh mm WD WSPD GST WVHT DPD APD WTMP
#yr mo dy hr mn degT m/s m/s m sec sec degC
24 03 15 18 00 270 5.1 6.3 1.20 11 9 999.0
24 03 15 17 50 265 4.9 6.0 1.10 12 8 15.0
"""

ODD_FEED = """\
#YY MM DD hh mm WVHT DPD WTMP
24 03 15 18 00 17.0 2 14.0
"""


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 3, 15, 18, 10, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now


def make_settings(**overrides) -> Settings:
    """Helper to build settings pointing at the mock mirror."""
    base = dict(station_id="LJPC1", source_base_url=BASE)
    base.update(overrides)
    return Settings(**base)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def orchestrator(clock):
    settings = make_settings()
    cache = ReportCache(ttl_seconds=settings.cache_ttl_seconds, clock=clock)
    return Orchestrator(settings=settings, cache=cache)


class TestOrchestratorInit:
    """Test Orchestrator initialization."""

    def test_creates_components(self):
        orch = Orchestrator(settings=make_settings(cache_ttl_seconds=60))
        assert orch.cache is not None
        assert orch.cache.ttl == timedelta(seconds=60)
        assert orch.cache.peek() is None


class TestRun:
    """Cache miss / hit paths through the pipeline."""

    @pytest.mark.asyncio
    async def test_reference_scenario(self, orchestrator, respx_mock):
        respx_mock.get(URLS[0]).mock(return_value=httpx.Response(200, text=SCENARIO_FEED))

        result = await orchestrator.run()
        report = result.report

        assert not result.from_cache
        assert report.updated == datetime(2024, 3, 15, 18, 0, tzinfo=timezone.utc)
        assert report.to_dict()["updatedIso"] == "2024-03-15T18:00:00Z"
        assert report.wind_dir_deg == 270
        assert report.wind_kts == pytest.approx(9.917, abs=0.01)
        assert report.wave_height_ft == pytest.approx(3.937, abs=0.001)
        assert report.dominant_period_sec == 11
        assert report.water_temp_f is None
        assert report.source_url == URLS[0]
        assert result.warnings == ()

    @pytest.mark.asyncio
    async def test_meta_describes_run(self, orchestrator, respx_mock):
        respx_mock.get(URLS[0]).mock(return_value=httpx.Response(200, text=SCENARIO_FEED))

        result = await orchestrator.run()

        assert result.meta.urls_tried == tuple(URLS)
        assert result.meta.header[5] == "WD"
        assert result.meta.latest_row[-1] == "999.0"
        assert result.meta.resolved_columns["wind_dir"] == "WD"
        assert result.meta.field_indices["WTMP"] == 11

    @pytest.mark.asyncio
    async def test_second_run_within_ttl_is_cached(self, orchestrator, clock, respx_mock):
        """Two runs inside the TTL give identical output and fetch once."""
        route = respx_mock.get(URLS[0]).mock(return_value=httpx.Response(200, text=SCENARIO_FEED))

        first = await orchestrator.run()
        clock.now += timedelta(minutes=4)
        second = await orchestrator.run()

        assert route.call_count == 1
        assert second.from_cache
        assert second.report.model_dump_json(by_alias=True) == first.report.model_dump_json(by_alias=True)

    @pytest.mark.asyncio
    async def test_refetches_after_ttl(self, orchestrator, clock, respx_mock):
        route = respx_mock.get(URLS[0]).mock(return_value=httpx.Response(200, text=SCENARIO_FEED))

        await orchestrator.run()
        clock.now += timedelta(minutes=5)
        result = await orchestrator.run()

        assert route.call_count == 2
        assert not result.from_cache

    @pytest.mark.asyncio
    async def test_fallback_source_is_reported(self, orchestrator, respx_mock):
        first = respx_mock.get(URLS[0]).mock(return_value=httpx.Response(404, text="Not Found"))
        respx_mock.get(URLS[1]).mock(return_value=httpx.Response(200, text=SCENARIO_FEED))

        result = await orchestrator.run()

        assert result.report.source_url == URLS[1]
        assert first.call_count == 1

    @pytest.mark.asyncio
    async def test_all_sources_fail(self, orchestrator, respx_mock):
        """Four failures are recorded and the cache is left untouched."""
        for url in URLS:
            respx_mock.get(url).mock(return_value=httpx.Response(500, text="boom"))

        with pytest.raises(UpstreamUnavailable) as exc_info:
            await orchestrator.run()

        assert len(exc_info.value.failures) == 4
        assert orchestrator.cache.peek() is None

    @pytest.mark.asyncio
    async def test_malformed_feed(self, orchestrator, respx_mock):
        respx_mock.get(URLS[0]).mock(
            return_value=httpx.Response(200, text="<html>maintenance</html>\n")
        )

        with pytest.raises(MalformedFeed):
            await orchestrator.run()

        assert orchestrator.cache.peek() is None

    @pytest.mark.asyncio
    async def test_missing_timestamp(self, orchestrator, respx_mock):
        feed = "#YY MM DD hh mm WVHT\n24 03 15 MM 00 1.2\n"
        respx_mock.get(URLS[0]).mock(return_value=httpx.Response(200, text=feed))

        with pytest.raises(MissingTimestamp):
            await orchestrator.run()

    @pytest.mark.asyncio
    async def test_year_out_of_range_is_missing_timestamp(self, orchestrator, respx_mock):
        feed = "#YY MM DD hh mm WVHT\n1e10 03 15 18 00 1.2\n"
        respx_mock.get(URLS[0]).mock(return_value=httpx.Response(200, text=feed))

        with pytest.raises(MissingTimestamp):
            await orchestrator.run()

        assert orchestrator.cache.peek() is None

    @pytest.mark.asyncio
    async def test_failed_run_keeps_previous_entry(self, orchestrator, clock, respx_mock):
        """A failure after expiry never overwrites the last good report."""
        route = respx_mock.get(URLS[0])
        route.side_effect = [
            httpx.Response(200, text=SCENARIO_FEED),
            httpx.Response(200, text="garbage\n"),
        ]

        good = await orchestrator.run()
        clock.now += timedelta(minutes=10)

        with pytest.raises(MalformedFeed):
            await orchestrator.run()

        assert orchestrator.cache.peek().report == good.report

    @pytest.mark.asyncio
    async def test_out_of_range_values_warn_but_pass(self, orchestrator, respx_mock):
        respx_mock.get(URLS[0]).mock(return_value=httpx.Response(200, text=ODD_FEED))

        result = await orchestrator.run()

        assert result.report.wave_height_ft == pytest.approx(55.774, abs=0.01)
        assert result.report.dominant_period_sec == 2
        assert len(result.warnings) == 2

    @pytest.mark.asyncio
    async def test_cache_hit_carries_warnings(self, orchestrator, respx_mock):
        respx_mock.get(URLS[0]).mock(return_value=httpx.Response(200, text=ODD_FEED))

        first = await orchestrator.run()
        second = await orchestrator.run()

        assert second.from_cache
        assert second.warnings == first.warnings

    @pytest.mark.asyncio
    async def test_explicit_candidate_urls(self, clock, respx_mock):
        url = "https://other.example.com/feed.txt"
        respx_mock.get(url).mock(return_value=httpx.Response(200, text=SCENARIO_FEED))
        orch = Orchestrator(
            settings=make_settings(candidate_urls=[url]),
            cache=ReportCache(clock=clock),
        )

        result = await orch.run()

        assert result.report.source_url == url


class TestRespond:
    """Boundary mapping to a generic response."""

    @pytest.mark.asyncio
    async def test_success_body(self, orchestrator, respx_mock):
        respx_mock.get(URLS[0]).mock(return_value=httpx.Response(200, text=SCENARIO_FEED))

        response = await orchestrator.respond()

        assert response.ok
        assert response.status_code == 200
        assert response.body["stationId"] == "LJPC1"
        assert response.body["name"] == "Scripps Pier, La Jolla, CA"
        assert "meta" not in response.body

    @pytest.mark.asyncio
    async def test_failure_is_generic(self, orchestrator, respx_mock):
        for url in URLS:
            respx_mock.get(url).mock(return_value=httpx.Response(404))

        response = await orchestrator.respond()

        assert response.status_code == 500
        assert response.body == {"error": "Failed to fetch LJPC1 buoy data"}

    @pytest.mark.asyncio
    async def test_debug_exposes_detail_and_meta(self, clock, respx_mock):
        orch = Orchestrator(settings=make_settings(debug=True), cache=ReportCache(clock=clock))
        respx_mock.get(URLS[0]).mock(
            side_effect=[httpx.Response(404), httpx.Response(200, text=SCENARIO_FEED)]
        )
        for url in URLS[1:]:
            respx_mock.get(url).mock(return_value=httpx.Response(404))

        failure = await orch.respond()
        assert "404" in failure.body["detail"]

        success = await orch.respond()
        assert success.body["meta"]["parseHeader"][0] == "YY"

    @pytest.mark.asyncio
    async def test_unrepresentable_timestamp_is_generic_failure(self, orchestrator, respx_mock):
        feed = "#YY MM DD hh mm WVHT\n1e10 03 15 18 00 1.2\n"
        respx_mock.get(URLS[0]).mock(return_value=httpx.Response(200, text=feed))

        response = await orchestrator.respond()

        assert response.status_code == 500
        assert response.body == {"error": "Failed to fetch LJPC1 buoy data"}
