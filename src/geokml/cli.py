"""Command line entry point: GeoJSON geometry in, KML fragment out.

Usage:
    geokml shape.geojson --precision 6 --extrude --altitude-mode absolute
    cat shape.geojson | geokml - --z 0

Flags left unset fall back to GEOKML_* environment variables;
--no-extrude and --no-strict switch those off again.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger

from geokml.config import WriterSettings
from geokml.errors import GeoKMLError
from geokml.geojson import geometry_from_geojson
from geokml.writer import KMLWriter


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geokml",
        description="Write a GeoJSON geometry as a KML geometry fragment.",
    )
    parser.add_argument("input", help="GeoJSON file, or - for stdin")
    parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    parser.add_argument("--line-prefix", dest="line_prefix", default=None)
    parser.add_argument(
        "--max-per-line", dest="max_coordinates_per_line", type=int, default=None,
        help="Coordinates per output line",
    )
    parser.add_argument("--z", dest="z_override", type=float, default=None,
                        help="Z value written for every coordinate")
    parser.add_argument("--precision", type=int, default=None,
                        help="Maximum decimal places")
    parser.add_argument("--extrude", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--altitude-mode", dest="altitude_mode", default=None)
    parser.add_argument("--strict", action=argparse.BooleanOptionalAction, default=None,
                        help="Fail on unsupported geometry kinds")
    parser.add_argument("--log-level", dest="log_level", default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = WriterSettings()

    logger.remove()
    logger.add(sys.stderr, level=(args.log_level or settings.log_level).upper())

    config = settings.to_config(
        line_prefix=args.line_prefix,
        max_coordinates_per_line=args.max_coordinates_per_line,
        z_override=args.z_override,
        precision=args.precision,
        extrude=args.extrude,
        altitude_mode=args.altitude_mode,
        strict=args.strict,
    )
    writer = KMLWriter(config)

    try:
        if args.input == "-":
            content = sys.stdin.read()
        else:
            content = Path(args.input).read_text(encoding="utf-8")
        geometry = geometry_from_geojson(content)

        if args.output:
            with open(args.output, "w", encoding="utf-8") as f:
                writer.write_to(geometry, f)
            logger.info(f"Wrote KML to {args.output}")
        else:
            writer.write_to(geometry, sys.stdout)
    except (OSError, GeoKMLError) as e:
        logger.error(f"geokml failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
