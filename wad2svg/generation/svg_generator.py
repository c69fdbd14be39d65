"""
SVG generator for assembled levels.

Draws every region as a filled path built from its stitched chains,
overlays special lines in category colours, then places thing markers.
"""

import io
from pathlib import Path
from typing import List, Optional
import svgwrite
from pydantic import BaseModel, Field
from loguru import logger

from wad2svg.core import categories
from wad2svg.core.categories import ThingCategory
from wad2svg.core.config import StyleConfig, get_default_style
from wad2svg.core.models import Level, Line, Point, Region, Thing
from wad2svg.geometry.stitcher import RegionStitcher


class RenderOptions(BaseModel):
    """What to draw and at which output size."""
    wad_name: str = ""
    map_name: str = ""
    image_width: int = Field(default=1280, gt=0)
    image_height: int = Field(default=1024, gt=0)
    show_ammo: bool = True
    show_artifacts: bool = True
    show_keys: bool = True
    show_monsters: bool = True
    show_powerups: bool = True
    show_weapons: bool = True
    show_multiplayer: bool = False

    def shows(self, category: ThingCategory) -> bool:
        return {
            ThingCategory.AMMO: self.show_ammo,
            ThingCategory.ARTIFACT: self.show_artifacts,
            ThingCategory.KEY: self.show_keys,
            ThingCategory.MONSTER: self.show_monsters,
            ThingCategory.POWERUP: self.show_powerups,
            ThingCategory.WEAPON: self.show_weapons,
        }[category]


def path_data(paths: List[List[Point]]) -> str:
    """
    SVG path data for stitched polylines: one "M x y L x y x y ..." sub-path
    per chain.
    """
    parts: List[str] = []
    for points in paths:
        if not points:
            continue
        first, rest = points[0], points[1:]
        parts.append(f"M {first.x} {first.y} L")
        parts.extend(f"{p.x} {p.y}" for p in rest)
    return " ".join(parts)


def special_line_category(line: Line) -> str:
    """Category of a line with a non-zero special, for stroke colouring."""
    if line.is_door():
        return "door"
    if line.is_teleporter():
        return "teleporter"
    if line.is_lift():
        return "lift"
    if line.is_exit():
        return "exit"
    if line.is_secret():
        return "secret"
    return "other"


class SVGGenerator:
    """
    Renders one Level as an SVG document.

    Regions are drawn in index order inside a single even-odd group so
    inner loops (pillars, holes) render as gaps.
    """

    def __init__(
        self,
        level: Level,
        options: Optional[RenderOptions] = None,
        style: Optional[StyleConfig] = None,
    ):
        """
        Initialize SVG generator.

        Args:
            level: Assembled level
            options: Render options (defaults draw everything but multiplayer things)
            style: Style configuration (defaults to the bundled style)
        """
        self.level = level
        self.options = options or RenderOptions(map_name=level.name)
        self.style = style or get_default_style()
        self.stitcher = RegionStitcher(level)

    def build(self) -> svgwrite.Drawing:
        """
        Build the SVG drawing.

        Raises:
            IndexOutOfRange: If the level has dangling point or side references
        """
        bbox = self.level.bounds()
        logger.info(
            f"Rendering {self.level.name}: {len(self.level.regions)} regions, "
            f"{len(self.level.things)} things"
        )
        logger.debug(
            f"MinX: {bbox.min_x} MaxX: {bbox.max_x} Width: {bbox.width} "
            f"MinY: {bbox.min_y} MaxY: {bbox.max_y} Height: {bbox.height}"
        )

        # Style values come from user JSON, so attribute validation is off
        dwg = svgwrite.Drawing(
            size=(self.options.image_width, self.options.image_height),
            viewBox=f"{bbox.min_x} {bbox.min_y} {bbox.width} {bbox.height}",
            debug=False,
        )
        dwg.set_desc(title=f"{self.options.wad_name} - {self.options.map_name}")

        map_group = dwg.g(fill_rule="evenodd")
        for region_index, region in enumerate(self.level.regions):
            map_group.add(self._region_group(dwg, region_index, region))
        for thing in self.level.things:
            marker = self._thing_marker(dwg, thing)
            if marker is not None:
                map_group.add(marker)
        dwg.add(map_group)
        return dwg

    def render(self) -> str:
        """Build the drawing and serialize it, XML prolog included."""
        buffer = io.StringIO()
        self.build().write(buffer)
        return buffer.getvalue()

    def write(self, output_path: str) -> str:
        """
        Render and write the SVG document to a file.

        Args:
            output_path: Path for the output .svg file

        Returns:
            The SVG document
        """
        svg = self.render()
        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(svg, encoding="utf-8")
        logger.success(f"Wrote SVG file: {output}")
        return svg

    def _region_group(self, dwg: svgwrite.Drawing, region_index: int, region: Region):
        style = self.style.region_style(region.region_type)
        group = dwg.g(
            fill=style["fill"],
            stroke=style["stroke"],
            fill_opacity=style["opacity"],
            stroke_width=self.style.region_stroke_width(),
        )
        group.set_desc(title=f"Sector {region_index}", desc=f"Sector Type: {region.region_type}")

        d = path_data(self.stitcher.paths(region_index))
        if d:
            group.add(dwg.path(d=d))

        for segment in self.stitcher.boundary(region_index):
            if segment.line.special != 0:
                group.add(self._special_line(dwg, segment.line_index, segment.line))
        return group

    def _special_line(self, dwg: svgwrite.Drawing, line_index: int, line: Line):
        owner = f"line {line_index}"
        start = self.level.point(line.start_point, owner=owner)
        end = self.level.point(line.end_point, owner=owner)
        stroke = dwg.path(
            d=f"M {start.x} {start.y} L {end.x} {end.y}",
            stroke=self.style.special_line_colour(special_line_category(line)),
            stroke_width=self.style.special_line_width(),
        )
        stroke.set_desc(title=f"Type {line.special}")
        return stroke

    def _thing_marker(self, dwg: svgwrite.Drawing, thing: Thing):
        """Circle for a monster, square for anything else; None when hidden."""
        if thing.is_multiplayer() and not self.options.show_multiplayer:
            return None

        category = categories.thing_category(thing.thing_type)
        if category is None or not self.options.shows(category):
            return None

        if category is ThingCategory.MONSTER:
            marker = dwg.circle(
                center=(thing.x, thing.y),
                r=categories.MONSTER_RADII[thing.thing_type],
                fill=self.style.thing_colour(category.value),
            )
        else:
            size = self.style.thing_marker_size()
            marker = dwg.rect(insert=(thing.x - size // 2, thing.y - size // 2), size=(size, size))
            if category is ThingCategory.KEY:
                marker["fill"] = categories.KEY_COLOURS[thing.thing_type]
            else:
                marker["fill"] = self.style.thing_colour(category.value)
                marker["stroke"] = "black"

        label = categories.thing_label(thing.thing_type)
        marker.set_desc(title=f"{label} [{thing.skill_label()}]")
        return marker


def generate_svg(
    level: Level,
    output_path: Optional[str] = None,
    options: Optional[RenderOptions] = None,
    style: Optional[StyleConfig] = None,
) -> str:
    """
    Render a level to SVG, optionally writing it to a file.

    Args:
        level: Assembled level
        output_path: Where to write the SVG (None = don't write)
        options: Render options
        style: Style configuration

    Returns:
        The SVG document
    """
    generator = SVGGenerator(level, options=options, style=style)
    if output_path:
        return generator.write(output_path)
    return generator.render()
