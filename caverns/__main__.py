# caverns/__main__.py
# Command line front end: generate one dungeon and print a summary.

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

import structlog
import yaml

from caverns.config import DungeonConfig, load_config
from caverns.generator import DungeonGenerator
from utils.logging_utils import LOG_FORMATS, setup_logging

log = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="caverns",
        description="Generate a BSP cave dungeon and print a summary.",
    )
    parser.add_argument("--config", help="YAML file with dungeon settings.")
    parser.add_argument("--width", type=int, help="Dungeon width in tiles.")
    parser.add_argument("--height", type=int, help="Dungeon height in tiles.")
    parser.add_argument("--min-node-size", type=int, help="Minimum BSP node size.")
    parser.add_argument("--max-node-size", type=int, help="Maximum BSP node size.")
    parser.add_argument("--seed", type=int, help="Seed for the RNG (default: random).")
    parser.add_argument(
        "--show-map", action="store_true", help="Print the map as text after generating."
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Logging level",
    )
    parser.add_argument("--log-format", choices=LOG_FORMATS, default="console")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def resolve_config(args: argparse.Namespace) -> DungeonConfig:
    """Config file values, overridden by any size or seed flags given."""
    config = load_config(args.config) if args.config else DungeonConfig()
    overrides = {
        name: getattr(args, name)
        for name in ("width", "height", "min_node_size", "max_node_size", "seed")
        if getattr(args, name) is not None
    }
    return replace(config, **overrides)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    log_level = (
        logging.DEBUG
        if args.verbose
        else getattr(logging, args.log_level.upper(), logging.INFO)
    )
    setup_logging(log_level, args.log_format)

    try:
        config = resolve_config(args)
    except (OSError, ValueError, yaml.YAMLError) as e:
        log.error("Could not load configuration", error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1

    generator = DungeonGenerator.from_config(config)
    dungeon = generator.generate_dungeon()

    print(f"Seed: {dungeon.seed}")
    print(f"Size: {dungeon.width}x{dungeon.height}")
    print(f"Rooms: {len(dungeon.rooms)}")
    print(f"Corridors: {len(dungeon.corridors)}")
    print(f"Floor tiles: {dungeon.floor_count()}")
    if args.show_map:
        print(dungeon.grid.to_text())
    return 0


if __name__ == "__main__":
    sys.exit(main())
