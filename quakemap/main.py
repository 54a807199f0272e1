"""Command-line Entry Point.

Fetches the USGS feed once and renders the active earthquakes to a PNG
snapshot or an interactive HTML page.

Usage:
    # Render the past week to a PNG
    quakemap --output quakes.png

    # Last 6 hours as an HTML map centered on Japan
    quakemap --output quakes.html --max-age-minutes 360 --center 36,138 --zoom 5

    # Print a summary line per active event
    quakemap --list

Environment:
    CONFIG_PATH: Path to config file (default: config/config.yaml)
    LOG_LEVEL: Logging level (default: INFO)
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from quakemap.core.config import MAX_ZOOM, Config, validate_config, validate_max_age
from quakemap.core.earthquake import sort_newest_first
from quakemap.core.formatter import format_earthquake_summary
from quakemap.core.projection import Viewport
from quakemap.session import MapSession
from quakemap.shell.config_loader import load_config
from quakemap.shell.html_map_client import HtmlMapClient
from quakemap.shell.static_map_client import StaticMapClient


logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _parse_center(value: str) -> tuple[float, float]:
    """Parse 'LAT,LON' into a coordinate pair."""
    parts = value.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected LAT,LON, got {value!r}")
    try:
        return (float(parts[0].strip()), float(parts[1].strip()))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected numeric LAT,LON, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="quakemap",
        description="Map USGS earthquakes (M2.5+, past 7 days)",
    )
    parser.add_argument("--config", help="Path to YAML config file")
    parser.add_argument("--output", help="Output file (.png or .html)")
    parser.add_argument(
        "--max-age-minutes",
        type=int,
        help="Only show events from the last N minutes (5-10080)",
    )
    parser.add_argument("--zoom", type=int, help=f"Map zoom level (0-{MAX_ZOOM})")
    parser.add_argument("--center", type=_parse_center, help="Map center as LAT,LON")
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print one summary line per active event",
    )
    return parser


def build_viewport(config: Config, args: argparse.Namespace) -> Viewport:
    """Build the view from configuration and command-line overrides."""
    view = config.viewport
    latitude, longitude = args.center or (view.center_latitude, view.center_longitude)
    return Viewport(
        center_latitude=latitude,
        center_longitude=longitude,
        zoom=args.zoom if args.zoom is not None else view.zoom,
        width=view.width,
        height=view.height,
    )


def _write_output(session: MapSession, viewport: Viewport, output: Path) -> bool:
    """Render the active events to a file by extension."""
    suffix = output.suffix.lower()
    earthquakes = session.active_events()

    if suffix == ".html":
        client = HtmlMapClient(tile_url=session.config.tile_url)
        try:
            client.save_map(earthquakes, viewport, output, session.config.tier_styles, session.tz)
        except OSError as e:
            logger.error("Failed to write %s: %s", output, e)
            return False
        return True

    if suffix == ".png":
        result = StaticMapClient(tile_url=session.config.tile_url).render_markers(
            earthquakes, viewport, session.config.tier_styles
        )
        if not result.success:
            return False
        try:
            output.write_bytes(result.image_bytes)
        except OSError as e:
            logger.error("Failed to write %s: %s", output, e)
            return False
        logger.info("Wrote map image to %s", output)
        return True

    logger.error("Unsupported output type %r (use .png or .html)", suffix)
    return False


def main(argv: list[str] | None = None) -> int:
    """Run one fetch-and-render cycle.

    Returns:
        Process exit status
    """
    _configure_logging()

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.max_age_minutes is not None and validate_max_age(args.max_age_minutes, "max_age_minutes"):
        parser.error("--max-age-minutes must be between 5 and 10080")

    if args.zoom is not None and not 0 <= args.zoom <= MAX_ZOOM:
        parser.error(f"--zoom must be between 0 and {MAX_ZOOM}")

    config = load_config(args.config)
    validation = validate_config(config)
    for warning in validation.warnings:
        logger.warning("Config %s: %s", warning.field, warning.message)
    if not validation.valid:
        for error in validation.critical_errors:
            print(f"Config error in {error.field}: {error.message}", file=sys.stderr)
        return 1

    viewport = build_viewport(config, args)

    with MapSession(config) as session:
        result = session.fetch_now()
        if not result.success:
            # Not fatal: continue with an empty map
            print(result.summary, file=sys.stderr)

        session.set_max_age(
            args.max_age_minutes if args.max_age_minutes is not None else config.max_age_minutes
        )

        if args.list:
            for earthquake in sort_newest_first(session.active_events()):
                print(format_earthquake_summary(earthquake, session.tz))

        if args.output and not _write_output(session, viewport, Path(args.output)):
            return 1

    logger.info("Completed: %d of %d events shown", len(session.active_events()), len(session.earthquakes))
    return 0


if __name__ == "__main__":
    sys.exit(main())
