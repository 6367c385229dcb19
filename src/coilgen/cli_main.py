"""coilgen CLI: write a round planar transformer footprint.

Run without arguments to write ``<footprint_name>.kicad_mod`` for the
default preset into the working directory.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .api import generate_footprint
from .kicad import deterministic_uuid_factory
from .spec import DEFAULT_PRESET, PRESETS, get_preset, load_spec

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the coilgen CLI."""
    parser = argparse.ArgumentParser(
        prog="coilgen",
        description="KiCad footprint generator for round planar PCB transformers",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--preset",
        choices=sorted(PRESETS),
        default=DEFAULT_PRESET,
        help=f"Named parameter set (default: {DEFAULT_PRESET})",
    )
    source.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML or JSON file overriding fields of the default preset",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=Path("."),
        help="Output directory (default: working directory)",
    )
    parser.add_argument(
        "--uuid-seed",
        type=str,
        default=None,
        help="Derive reproducible record uuids from this seed instead of random ones",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be repeated)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the coilgen CLI.

    I/O errors are not caught: they end the run with a traceback.

    Args:
        argv: Command line arguments (defaults to sys.argv).

    Returns:
        Exit code (0 for success).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    log_level = logging.WARNING
    if args.verbose >= 1:
        log_level = logging.INFO
    if args.verbose >= 2:
        log_level = logging.DEBUG
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    spec = load_spec(args.config) if args.config is not None else get_preset(args.preset)
    uuid_factory = deterministic_uuid_factory(args.uuid_seed) if args.uuid_seed is not None else None

    sys.stdout.write(f"Generating file {spec.output_filename}\n")
    result = generate_footprint(spec, args.out_dir, uuid_factory=uuid_factory)
    logger.info("%d arcs, %d pads", result.arc_count, result.pad_count)
    sys.stdout.write("Done\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
