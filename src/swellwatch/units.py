"""Unit conversions from NDBC source units to the public unit system.

Every conversion is pure and passes None through untouched, so a value that
was not reported stays unknown instead of turning into a converted sentinel.

Conversions:
    - length: meters → feet (× 3.28084)
    - speed: meters/second → knots (× 1.94384)
    - temperature: Celsius → Fahrenheit (c × 9/5 + 32)
    - timestamp: (year, month, day, hour, minute) → UTC datetime
"""

from datetime import datetime, timezone

from swellwatch.errors import MissingTimestamp

FEET_PER_METER = 3.28084
KNOTS_PER_MS = 1.94384


def meters_to_feet(m: float | None) -> float | None:
    """Convert meters to feet."""
    return None if m is None else m * FEET_PER_METER


def ms_to_knots(ms: float | None) -> float | None:
    """Convert meters per second to knots."""
    return None if ms is None else ms * KNOTS_PER_MS


def celsius_to_fahrenheit(c: float | None) -> float | None:
    """Convert degrees Celsius to degrees Fahrenheit."""
    return None if c is None else c * 9 / 5 + 32


def _as_int(name: str, value: float) -> int:
    if not float(value).is_integer():
        raise MissingTimestamp(f"Timestamp field {name} is not a whole number: {value}")
    return int(value)


def to_utc_timestamp(
    year: float,
    month: float,
    day: float,
    hour: float,
    minute: float = 0,
) -> datetime:
    """Build a UTC instant from feed date parts.

    Two-digit years (older NDBC files use YY) are taken as 20YY.

    Raises:
        MissingTimestamp: If the parts are fractional or not a valid date
            (including years outside the datetime range)
    """
    y = _as_int("year", year)
    if y < 100:
        y += 2000
    try:
        return datetime(
            y,
            _as_int("month", month),
            _as_int("day", day),
            _as_int("hour", hour),
            _as_int("minute", minute),
            0,
            tzinfo=timezone.utc,
        )
    except (ValueError, OverflowError) as e:
        raise MissingTimestamp(f"Invalid timestamp fields: {e}") from e
