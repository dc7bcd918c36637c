"""Field Extractor — header-driven column mapping and token conversion.

Each logical field has a static, ordered list of column aliases. The list is
resolved once per feed against the header: the first alias present wins, and
the field then reads only that column.

Missing-value rules are applied before numeric conversion:
    - exact reserved tokens ("MM", plus "NaN" and "N/A" seen on mirrors)
    - all-nines tokens with an optional zero fraction ("99", "999.0", "9999")

Zero is a real reading and is never treated as missing.
"""

import logging
import math
import re
from dataclasses import dataclass

from swellwatch.errors import MissingTimestamp
from swellwatch.parsing.feed import ParsedFeed

logger = logging.getLogger(__name__)

MISSING_TOKENS = frozenset({"MM", "NaN", "N/A"})
ALL_NINES = re.compile(r"^9+(\.0+)?$")

# Logical field -> column aliases, canonical name first
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "year": ("YYYY", "YY"),
    "month": ("MM",),
    "day": ("DD",),
    "hour": ("hh", "HH"),
    "minute": ("mm",),
    "wind_dir": ("WDIR", "WD"),
    "wind_speed": ("WSPD",),
    "wind_gust": ("GST",),
    "wave_height": ("WVHT",),
    "dominant_period": ("DPD",),
    "average_period": ("APD",),
    "swell_dir": ("MWD", "MWWD", "WVDIR", "WAVE_DIR"),
    "pressure": ("BARO", "PRES"),
    "air_temp": ("ATMP", "AT", "AIR_TEMP", "TEMP"),
    "water_temp": ("WTMP", "WT", "WATER_TEMP", "SEA_TEMP"),
}

TIMESTAMP_FIELDS = ("year", "month", "day", "hour")


@dataclass(frozen=True)
class RawObservation:
    """One observation in source units. None means not reported."""

    year: float
    month: float
    day: float
    hour: float
    minute: float = 0.0
    wind_dir_deg: float | None = None
    wind_speed_ms: float | None = None
    wind_gust_ms: float | None = None
    wave_height_m: float | None = None
    dominant_period_sec: float | None = None
    average_period_sec: float | None = None
    swell_dir_deg: float | None = None
    pressure_hpa: float | None = None
    air_temp_c: float | None = None
    water_temp_c: float | None = None


def parse_token(token: str | None) -> float | None:
    """Convert a raw token to a number, or None if it encodes a missing value.

    Examples:
        >>> parse_token("1.20")
        1.2
        >>> parse_token("0.0")
        0.0
        >>> parse_token("999.0") is None
        True
        >>> parse_token("9.5")
        9.5
    """
    if token is None:
        return None
    value = token.strip()
    if not value or value in MISSING_TOKENS:
        return None
    if ALL_NINES.match(value):
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def build_field_index(header: tuple[str, ...] | list[str]) -> dict[str, int]:
    """Map column name → position. Duplicate names keep their first position."""
    index: dict[str, int] = {}
    for position, name in enumerate(header):
        index.setdefault(name, position)
    return index


def resolve_columns(index: dict[str, int]) -> dict[str, str | None]:
    """Pick, for every logical field, the first alias present in the header."""
    resolved: dict[str, str | None] = {}
    for name, aliases in FIELD_ALIASES.items():
        resolved[name] = next((alias for alias in aliases if alias in index), None)
    return resolved


def _value(
    row: tuple[str, ...],
    index: dict[str, int],
    column: str | None,
) -> float | None:
    """Read and convert one resolved column from the row."""
    if column is None:
        return None
    position = index[column]
    if position >= len(row):
        return None
    return parse_token(row[position])


def extract_fields(feed: ParsedFeed) -> RawObservation:
    """Resolve every logical field of the latest row to a typed value.

    Args:
        feed: Parsed header and data row

    Returns:
        RawObservation in source units

    Raises:
        MissingTimestamp: If year, month, day or hour is absent or missing
    """
    index = build_field_index(feed.header)
    columns = resolve_columns(index)
    values = {name: _value(feed.row, index, column) for name, column in columns.items()}

    unresolved = [name for name in TIMESTAMP_FIELDS if values[name] is None]
    if unresolved:
        raise MissingTimestamp(f"Missing or invalid timestamp fields: {', '.join(unresolved)}")

    for name, column in columns.items():
        if column is None:
            logger.debug("No column for %s (tried %s)", name, ", ".join(FIELD_ALIASES[name]))

    minute = values["minute"]

    return RawObservation(
        year=values["year"],
        month=values["month"],
        day=values["day"],
        hour=values["hour"],
        minute=minute if minute is not None else 0.0,
        wind_dir_deg=values["wind_dir"],
        wind_speed_ms=values["wind_speed"],
        wind_gust_ms=values["wind_gust"],
        wave_height_m=values["wave_height"],
        dominant_period_sec=values["dominant_period"],
        average_period_sec=values["average_period"],
        swell_dir_deg=values["swell_dir"],
        pressure_hpa=values["pressure"],
        air_temp_c=values["air_temp"],
        water_temp_c=values["water_temp"],
    )
