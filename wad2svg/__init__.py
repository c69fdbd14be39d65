"""
wad2svg - SVG maps from Doom-engine WAD archives

Decodes a level's lumps and stitches each sector's boundary lines into
closed paths for rendering.
"""

__version__ = "0.1.0"

from wad2svg.parsers.wad_parser import WADParser, parse_wad
from wad2svg.parsers.directory import list_levels, locate_level
from wad2svg.geometry.stitcher import RegionStitcher, group_segments, stitch_region
from wad2svg.generation.svg_generator import RenderOptions, SVGGenerator, generate_svg

__all__ = [
    "WADParser",
    "parse_wad",
    "list_levels",
    "locate_level",
    "RegionStitcher",
    "group_segments",
    "stitch_region",
    "RenderOptions",
    "SVGGenerator",
    "generate_svg",
]
