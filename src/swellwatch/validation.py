"""Validator — plausible-range checks on a normalized report.

Out-of-range values are reported, never rejected or nulled: upstream data
quality problems should stay visible to monitoring without blocking the
response. Unknown (None) fields are skipped.
"""

import logging
from dataclasses import dataclass

from swellwatch.models import NormalizedReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlausibleRange:
    """Inclusive bounds for one report field."""

    field: str
    low: float
    high: float
    label: str
    unit: str

    def contains(self, value: float) -> bool:
        return self.low <= value <= self.high


RANGES: tuple[PlausibleRange, ...] = (
    PlausibleRange("wave_height_ft", 0, 50, "wave height", "ft"),
    PlausibleRange("dominant_period_sec", 3, 30, "period", "s"),
    PlausibleRange("average_period_sec", 3, 30, "average period", "s"),
    PlausibleRange("swell_dir_deg", 0, 360, "swell direction", "°"),
    PlausibleRange("wind_dir_deg", 0, 360, "wind direction", "°"),
    PlausibleRange("wind_kts", 0, 100, "wind speed", "kts"),
    PlausibleRange("wind_gust_kts", 0, 100, "wind gust", "kts"),
    PlausibleRange("water_temp_f", 32, 120, "water temp", "°F"),
    PlausibleRange("air_temp_f", -40, 130, "air temp", "°F"),
    PlausibleRange("barometric_pressure_hpa", 850, 1100, "pressure", "hPa"),
)


def validate_report(report: NormalizedReport) -> list[str]:
    """Check present fields against their plausible ranges.

    Args:
        report: Normalized report to inspect (not modified)

    Returns:
        Human-readable advisory warnings, empty when everything is plausible
    """
    warnings: list[str] = []

    for bounds in RANGES:
        value = getattr(report, bounds.field)
        if value is None or bounds.contains(value):
            continue
        warnings.append(f"Unusual {bounds.label}: {value:g}{bounds.unit}")

    if warnings:
        logger.warning(
            "Data validation warnings for %s: %s",
            report.station_id, "; ".join(warnings),
        )

    return warnings
