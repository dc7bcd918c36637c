"""Feed Parser — raw text → header + most recent data row.

NDBC standard met files look like:

    #YY  MM DD hh mm WDIR WSPD GST  WVHT   DPD   APD MWD   PRES  ATMP  WTMP
    #yr  mo dy hr mn degT m/s  m/s     m   sec   sec degT   hPa  degC  degC
    2024 03 15 18 00 270  5.1  6.3   1.2    11   9.0 265 1016.2  15.1  14.8
    2024 03 15 17 50 ...

The first comment line naming the date columns is the header; the units line
that follows is ignored. Rows are newest-first, so the first data line wide
enough to cover the header is the latest observation.
"""

import logging
import re
from dataclasses import dataclass

from swellwatch.errors import MalformedFeed

logger = logging.getLogger(__name__)

COMMENT_MARKER = "#"

# A header must name all three date columns; the year may be two or four digits
YEAR_COLUMNS = ("YYYY", "YY")
REQUIRED_DATE_COLUMNS = ("MM", "DD")

_LINE_SPLIT = re.compile(r"\r?\n")


@dataclass(frozen=True)
class ParsedFeed:
    """Header columns and the latest observation's raw tokens."""

    header: tuple[str, ...]
    row: tuple[str, ...]


def _is_header(tokens: list[str]) -> bool:
    """Check whether comment tokens name the year, month and day columns."""
    has_year = any(col in tokens for col in YEAR_COLUMNS)
    return has_year and all(col in tokens for col in REQUIRED_DATE_COLUMNS)


def _strip_marker(line: str, marker: str) -> str:
    """Remove the leading run of comment markers and surrounding whitespace."""
    return line.lstrip(marker).strip()


def parse_feed(text: str, marker: str = COMMENT_MARKER) -> ParsedFeed:
    """Locate the header line and the most recent data row.

    Args:
        text: Full body of one fetched feed
        marker: Character that starts a comment line

    Returns:
        ParsedFeed with header column names and the first sufficiently wide row

    Raises:
        MalformedFeed: If no header is found or no data row covers it
    """
    lines = [line.strip() for line in _LINE_SPLIT.split(text)]
    lines = [line for line in lines if line]

    header: list[str] | None = None

    for line in lines:
        if line.startswith(marker):
            if header is None:
                tokens = _strip_marker(line, marker).split()
                if _is_header(tokens):
                    header = tokens
                    logger.debug("Found header with %d fields: %s", len(tokens), ", ".join(tokens))
            continue

        # Data lines before the header cannot be mapped to columns
        if header is None:
            continue

        tokens = line.split()
        if len(tokens) >= len(header):
            return ParsedFeed(header=tuple(header), row=tuple(tokens))

        logger.debug("Skipping short row (%d < %d tokens)", len(tokens), len(header))

    if header is None:
        raise MalformedFeed("Could not find a header line naming the date columns")
    raise MalformedFeed(f"No data row with at least {len(header)} tokens follows the header")
