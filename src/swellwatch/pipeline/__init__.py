"""Report-ingestion pipeline — Fetch → Parse → Extract → Normalize → Validate → Cache.

The pipeline coordinates one request:
1. Serve from cache while the last good report is fresh
2. Fetch raw text from the first responsive candidate source
3. Parse header and latest row, extract typed fields
4. Normalize units and flag implausible values
5. Store and return the report

Components:
- Orchestrator: Main coordinator
- Fetcher: Candidate URLs → raw feed text
- normalize: RawObservation → NormalizedReport
"""

from swellwatch.pipeline.orchestrator import Orchestrator

__all__ = ["Orchestrator"]
