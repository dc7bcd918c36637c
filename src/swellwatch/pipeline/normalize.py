"""Unit Normalizer — RawObservation (source units) → NormalizedReport."""

from swellwatch.models import NormalizedReport
from swellwatch.parsing.fields import RawObservation
from swellwatch.units import (
    celsius_to_fahrenheit,
    meters_to_feet,
    ms_to_knots,
    to_utc_timestamp,
)


def normalize(
    obs: RawObservation,
    station_id: str,
    station_name: str,
    source_url: str,
) -> NormalizedReport:
    """Convert an observation into the public unit system.

    Directions and periods pass through unchanged; unknown values stay None.

    Raises:
        MissingTimestamp: If the date parts do not form a valid instant
    """
    return NormalizedReport(
        station_id=station_id,
        name=station_name,
        source_url=source_url,
        updated=to_utc_timestamp(obs.year, obs.month, obs.day, obs.hour, obs.minute),
        wind_dir_deg=obs.wind_dir_deg,
        wind_kts=ms_to_knots(obs.wind_speed_ms),
        wind_gust_kts=ms_to_knots(obs.wind_gust_ms),
        wave_height_m=obs.wave_height_m,
        wave_height_ft=meters_to_feet(obs.wave_height_m),
        dominant_period_sec=obs.dominant_period_sec,
        average_period_sec=obs.average_period_sec,
        swell_dir_deg=obs.swell_dir_deg,
        barometric_pressure_hpa=obs.pressure_hpa,
        air_temp_c=obs.air_temp_c,
        air_temp_f=celsius_to_fahrenheit(obs.air_temp_c),
        water_temp_c=obs.water_temp_c,
        water_temp_f=celsius_to_fahrenheit(obs.water_temp_c),
    )
