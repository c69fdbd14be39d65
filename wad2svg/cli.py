#!/usr/bin/env python
"""
Generate an SVG map from a Doom/Doom II WAD file.

Usage:
    wad2svg DOOM.WAD E1M1 > e1m1.svg
    wad2svg DOOM2.WAD MAP01 -o map01.svg --show-mp --no-monsters
    wad2svg DOOM.WAD --list-maps
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional
from loguru import logger

from wad2svg.core.config import get_default_style, load_style
from wad2svg.core.errors import WadError
from wad2svg.generation.svg_generator import RenderOptions, SVGGenerator
from wad2svg.parsers.wad_parser import WADParser


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wad2svg",
        description="Generate SVG files from Doom and Doom2 WAD files",
    )
    parser.add_argument("wad_file", help="Path to a WAD file")
    parser.add_argument("map_name", nargs="?", help="Map name, e.g. E1M1 or MAP01")
    parser.add_argument("-o", "--output", help="Write SVG to this file instead of stdout")
    parser.add_argument("--image-width", type=int, default=None,
                        help="Width of generated SVG image (default 1280)")
    parser.add_argument("--image-height", type=int, default=None,
                        help="Height of generated SVG image (default 1024)")
    parser.add_argument("--list-maps", action="store_true",
                        help="Print the maps in the WAD to stderr and exit")
    parser.add_argument("--style", help="JSON style file overriding the default colours")
    parser.add_argument("--no-ammo", dest="show_ammo", action="store_false",
                        help="Do not show ammunition")
    parser.add_argument("--no-artifacts", dest="show_artifacts", action="store_false",
                        help="Do not show items")
    parser.add_argument("--no-keys", dest="show_keys", action="store_false",
                        help="Do not show keys")
    parser.add_argument("--no-monsters", dest="show_monsters", action="store_false",
                        help="Do not show monsters")
    parser.add_argument("--no-powerups", dest="show_powerups", action="store_false",
                        help="Do not show powerups")
    parser.add_argument("--no-weapons", dest="show_weapons", action="store_false",
                        help="Do not show weapons")
    parser.add_argument("--show-mp", dest="show_multiplayer", action="store_true",
                        help="Show multiplayer-only things")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def configure_logging(verbose: bool) -> None:
    """Send log output to stderr; stdout is reserved for the SVG."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    wad_path = Path(args.wad_file)
    parser = WADParser(str(wad_path))

    try:
        if args.list_maps:
            for name in parser.list_levels():
                print(name, file=sys.stderr)
            return 0

        if not args.map_name:
            logger.error("A map name is required unless --list-maps is given")
            return 1

        style = load_style(args.style) if args.style else get_default_style()
        options = RenderOptions(
            wad_name=wad_path.name,
            map_name=args.map_name,
            image_width=(
                style.image_default("width", 1280) if args.image_width is None else args.image_width
            ),
            image_height=(
                style.image_default("height", 1024) if args.image_height is None else args.image_height
            ),
            show_ammo=args.show_ammo,
            show_artifacts=args.show_artifacts,
            show_keys=args.show_keys,
            show_monsters=args.show_monsters,
            show_powerups=args.show_powerups,
            show_weapons=args.show_weapons,
            show_multiplayer=args.show_multiplayer,
        )

        level = parser.parse(args.map_name)
        generator = SVGGenerator(level, options=options, style=style)
        if args.output:
            generator.write(args.output)
        else:
            sys.stdout.write(generator.render())
    except (WadError, OSError, ValueError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
