"""Swellwatch — NDBC station report ingestion.

Fetches a buoy's fixed-format text report, parses the latest observation,
normalizes units, flags implausible values and serves the result through a
short-lived cache.
"""

__version__ = "0.1.0"
