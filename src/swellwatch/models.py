"""Public record types for Swellwatch.

NormalizedReport is the one entity handed to consumers. Its JSON form uses
camelCase keys; an unknown measurement is null, never a sentinel number.

ReportMeta and PipelineResult carry diagnostics and advisory warnings beside
the report. They are not part of the record contract.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_STALE_AFTER = timedelta(hours=1)


class NormalizedReport(BaseModel):
    """Latest station observation in public units.

    Speeds are knots, heights feet (meters kept alongside), temperatures
    Fahrenheit (Celsius kept alongside), directions degrees true, periods
    seconds, pressure hPa.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )

    station_id: str
    name: str
    source_url: str
    updated: datetime = Field(alias="updatedIso")

    wind_dir_deg: float | None = None
    wind_kts: float | None = None
    wind_gust_kts: float | None = None

    wave_height_m: float | None = None
    wave_height_ft: float | None = None
    dominant_period_sec: float | None = None
    average_period_sec: float | None = None
    swell_dir_deg: float | None = None

    barometric_pressure_hpa: float | None = None
    air_temp_c: float | None = None
    air_temp_f: float | None = None
    water_temp_c: float | None = None
    water_temp_f: float | None = None

    @field_validator("updated")
    @classmethod
    def validate_updated(cls, v: datetime) -> datetime:
        """Require an aware timestamp and store it in UTC."""
        if v.tzinfo is None:
            raise ValueError("updated must be timezone-aware")
        return v.astimezone(timezone.utc)

    def age(self, now: datetime | None = None) -> timedelta:
        """Time elapsed since the observation."""
        now = now or datetime.now(timezone.utc)
        return now - self.updated

    def is_stale(
        self,
        now: datetime | None = None,
        threshold: timedelta = DEFAULT_STALE_AFTER,
    ) -> bool:
        """Display-sense staleness: older than threshold.

        Independent of the cache TTL; a stale report may still be cached.
        """
        return self.age(now) > threshold

    def to_dict(self) -> dict[str, Any]:
        """Public JSON-compatible form with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class ReportMeta:
    """Diagnostics describing how a report was produced."""

    urls_tried: tuple[str, ...]
    attempts: tuple[dict, ...]
    header: tuple[str, ...]
    latest_row: tuple[str, ...]
    field_indices: dict[str, int]
    resolved_columns: dict[str, str | None]
    fetch_time_ms: float

    @property
    def temperature_columns(self) -> list[str]:
        """Header columns that look like temperatures."""
        return [
            c for c in self.header
            if "TMP" in c or "TEMP" in c or c in ("AT", "WT")
        ]

    @property
    def swell_direction_columns(self) -> list[str]:
        """Header columns that look like wave directions."""
        return [
            c for c in self.header
            if "MWD" in c or "WVDIR" in c or "WAVE" in c or "DIR" in c
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "urlsTried": list(self.urls_tried),
            "attempts": list(self.attempts),
            "parseHeader": list(self.header),
            "fetchTimeMs": round(self.fetch_time_ms, 1),
            "availableFields": {
                "temperature": self.temperature_columns,
                "swellDirection": self.swell_direction_columns,
                "allFields": list(self.header),
            },
            "resolvedColumns": dict(self.resolved_columns),
            "latestDataRow": list(self.latest_row),
            "fieldIndices": dict(self.field_indices),
        }


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of one successful run: the report plus side channels."""

    report: NormalizedReport
    warnings: tuple[str, ...] = ()
    from_cache: bool = False
    meta: ReportMeta | None = None

    def to_dict(self, include_meta: bool = False) -> dict[str, Any]:
        """Report body, optionally with diagnostic meta attached."""
        body = self.report.to_dict()
        if include_meta and self.meta is not None:
            body["meta"] = self.meta.to_dict()
        return body


@dataclass(frozen=True)
class ServiceResponse:
    """Status code and JSON body returned at the request boundary."""

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)
    warnings: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.status_code == 200
