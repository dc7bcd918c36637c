"""Text-feed parsing for Swellwatch.

- feed: locate the header line and the latest data row
- fields: alias resolution and missing-value aware token conversion
"""

from swellwatch.parsing.feed import ParsedFeed, parse_feed
from swellwatch.parsing.fields import (
    FIELD_ALIASES,
    RawObservation,
    build_field_index,
    extract_fields,
    parse_token,
    resolve_columns,
)

__all__ = [
    "ParsedFeed",
    "parse_feed",
    "FIELD_ALIASES",
    "RawObservation",
    "build_field_index",
    "extract_fields",
    "parse_token",
    "resolve_columns",
]
