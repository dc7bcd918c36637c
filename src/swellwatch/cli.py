"""Command-line interface for Swellwatch.

Fetches and prints the latest normalized report for one station.

Usage:
    swellwatch report
    swellwatch report --station 46225
    swellwatch report --format json --debug
"""

import argparse
import asyncio
import json
import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import ValidationError

from swellwatch import __version__
from swellwatch.config import Settings, settings
from swellwatch.errors import PipelineError
from swellwatch.models import PipelineResult
from swellwatch.pipeline.orchestrator import Orchestrator

logger = logging.getLogger(__name__)

_executor = ThreadPoolExecutor(max_workers=1)

_COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)


def degrees_to_compass(deg: float | None) -> str:
    """Map a bearing in degrees to a 16-point compass label ("---" if unknown)."""
    if deg is None:
        return "---"
    return _COMPASS_POINTS[round(deg / 22.5) % 16]


def format_age(age: timedelta) -> str:
    """Short relative age, e.g. "12 min ago"."""
    minutes = int(age.total_seconds() // 60)
    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes} min ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours} hr ago"
    days = hours // 24
    return f"{days} day{'s' if days > 1 else ''} ago"


def _fmt(value: float | None, unit: str, digits: int = 1) -> str:
    if value is None:
        return "--"
    return f"{value:.{digits}f}{unit}"


def format_text(
    result: PipelineResult,
    stale_after: timedelta,
    now: datetime | None = None,
) -> str:
    """Render a report as a short human-readable summary."""
    report = result.report
    now = now or datetime.now(timezone.utc)
    stale = " [STALE]" if report.is_stale(now, threshold=stale_after) else ""

    lines = [
        f"{report.name} ({report.station_id})",
        f"Updated: {report.updated.isoformat()} ({format_age(report.age(now))}){stale}",
        f"Waves:   {_fmt(report.wave_height_ft, ' ft')} @ {_fmt(report.dominant_period_sec, ' s', 0)}"
        f" from {degrees_to_compass(report.swell_dir_deg)}",
        f"Wind:    {_fmt(report.wind_kts, ' kts')} gusting {_fmt(report.wind_gust_kts, ' kts')}"
        f" from {degrees_to_compass(report.wind_dir_deg)}",
        f"Water:   {_fmt(report.water_temp_f, ' °F')}",
        f"Air:     {_fmt(report.air_temp_f, ' °F')}",
        f"Source:  {report.source_url}",
    ]
    for warning in result.warnings:
        lines.append(f"Warning: {warning}")
    return "\n".join(lines)


def create_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser.

    Returns:
        Configured ArgumentParser with all commands and arguments.
    """
    parser = argparse.ArgumentParser(
        prog="swellwatch",
        description="Swellwatch — NDBC buoy report ingestion",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  swellwatch report
  swellwatch report --station 46225
  swellwatch report --format json --debug
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # report command
    report_parser = subparsers.add_parser(
        "report",
        help="Fetch the latest normalized report for a station",
        description="Fetch, parse, normalize and validate the latest observation",
    )
    report_parser.add_argument(
        "--station",
        type=str,
        default=None,
        help="NDBC station id (default: STATION_ID setting)",
    )
    report_parser.add_argument(
        "--name",
        type=str,
        default=None,
        help="Station display name (default: STATION_NAME, or the id for --station)",
    )
    report_parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    report_parser.add_argument(
        "--debug",
        action="store_true",
        help="Include diagnostic meta and error detail",
    )

    # version command
    subparsers.add_parser(
        "version",
        help="Show version information",
    )

    return parser


def _run_async(coro):
    """Run an async coroutine from synchronous CLI context.

    Spins up a new event loop in a dedicated thread to avoid conflicts
    with any existing event loop.
    """
    def _target():
        loop = asyncio.new_event_loop()
        try:
            return loop.run_until_complete(coro)
        finally:
            loop.close()

    future = _executor.submit(_target)
    return future.result()


def _settings_for(args: argparse.Namespace) -> Settings:
    """Apply command-line overrides to the loaded settings.

    A station other than the configured one is labelled by --name, or by its
    id when no name is given.
    """
    overrides = {}
    if args.station and args.station.strip().upper() != settings.station_id:
        overrides["station_id"] = args.station
        overrides["station_name"] = args.name or args.station.strip().upper()
    elif args.name:
        overrides["station_name"] = args.name
    if args.debug:
        overrides["debug"] = True
    if not overrides:
        return settings
    return Settings(**{**settings.model_dump(), **overrides})


def cmd_report(args: argparse.Namespace) -> int:
    """Execute the report command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    try:
        run_settings = _settings_for(args)
        logger.info("Fetching report for %s", run_settings.station_id)

        orchestrator = Orchestrator(settings=run_settings)
        result = _run_async(orchestrator.run())

        if args.format == "json":
            print(json.dumps(result.to_dict(include_meta=run_settings.debug), indent=2))
        else:
            stale_after = timedelta(seconds=run_settings.stale_after_seconds)
            print(format_text(result, stale_after=stale_after))

        return 0

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130
    except ValidationError as e:
        logger.error("Invalid settings: %s", e)
        print(f"Error: invalid option: {e}", file=sys.stderr)
        return 1
    except PipelineError as e:
        logger.error("Report failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_version(args: argparse.Namespace) -> int:
    """Execute the version command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    print(f"Swellwatch v{__version__}")
    print("NDBC buoy report ingestion")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    parser = create_parser()
    args = parser.parse_args(argv)

    # Route to command handler
    if args.command == "report":
        return cmd_report(args)
    elif args.command == "version":
        return cmd_version(args)
    else:
        # No command specified
        parser.print_help()
        return 0


def cli_entry() -> None:
    """Console script entry point for setuptools."""
    sys.exit(main())


if __name__ == "__main__":
    cli_entry()
