import json
import os
import sys
import tempfile
import unittest
import xml.etree.ElementTree as ET
from pathlib import Path

THIS_DIR = os.path.dirname(__file__)
if THIS_DIR not in sys.path:
    sys.path.insert(0, THIS_DIR)

from wad_builder import room_with_pillar_level, square_room_level

from wad2svg.core.config import StyleConfig, get_default_style, load_style
from wad2svg.core.models import Line, Point, Region, Thing
from wad2svg.generation.svg_generator import (
    RenderOptions,
    SVGGenerator,
    generate_svg,
    path_data,
    special_line_category,
)

SVG_NS = "{http://www.w3.org/2000/svg}"


def _parse(svg: str) -> ET.Element:
    return ET.fromstring(svg.split("\n", 1)[1])


class PathDataTests(unittest.TestCase):
    def test_one_subpath_per_chain(self):
        d = path_data([
            [Point(x=0, y=0), Point(x=64, y=0), Point(x=64, y=64), Point(x=0, y=0)],
            [Point(x=8, y=8), Point(x=16, y=8)],
        ])
        self.assertEqual(d, "M 0 0 L 64 0 64 64 0 0 M 8 8 L 16 8")

    def test_no_paths(self):
        self.assertEqual(path_data([]), "")


class SpecialLineCategoryTests(unittest.TestCase):
    def test_categories(self):
        self.assertEqual(special_line_category(Line(start_point=0, end_point=1, special=1)), "door")
        self.assertEqual(special_line_category(Line(start_point=0, end_point=1, special=97)), "teleporter")
        self.assertEqual(special_line_category(Line(start_point=0, end_point=1, special=88)), "lift")
        self.assertEqual(special_line_category(Line(start_point=0, end_point=1, special=11)), "exit")
        self.assertEqual(
            special_line_category(Line(start_point=0, end_point=1, special=48, flags=0x20)), "secret"
        )
        self.assertEqual(special_line_category(Line(start_point=0, end_point=1, special=48)), "other")


class SVGGeneratorTests(unittest.TestCase):
    def test_document_structure(self):
        options = RenderOptions(wad_name="DOOM.WAD", map_name="E1M1")
        svg = SVGGenerator(square_room_level(), options=options).render()

        self.assertTrue(svg.startswith('<?xml version="1.0" encoding="utf-8" ?>'))
        root = _parse(svg)
        self.assertEqual(root.get("width"), "1280")
        self.assertEqual(root.get("height"), "1024")
        self.assertEqual(root.get("viewBox"), "0 0 64 64")
        self.assertEqual(root.find(f"{SVG_NS}title").text, "DOOM.WAD - E1M1")

        group = root.find(f"{SVG_NS}g")
        self.assertEqual(group.get("fill-rule"), "evenodd")
        regions = group.findall(f"{SVG_NS}g")
        self.assertEqual(len(regions), 1)
        self.assertEqual(regions[0].find(f"{SVG_NS}title").text, "Sector 0")
        self.assertEqual(regions[0].find(f"{SVG_NS}desc").text, "Sector Type: 0")

        paths = regions[0].findall(f"{SVG_NS}path")
        self.assertEqual(paths[0].get("d"), "M 0 0 L 64 0 64 64 0 64 0 0")

    def test_special_lines_are_stroked(self):
        svg = SVGGenerator(square_room_level()).render()
        region = _parse(svg).find(f"{SVG_NS}g").find(f"{SVG_NS}g")
        door = region.findall(f"{SVG_NS}path")[1]
        self.assertEqual(door.get("d"), "M 64 0 L 64 64")
        self.assertEqual(door.get("stroke"), "green")
        self.assertEqual(door.get("stroke-width"), "3")

    def test_pillar_renders_as_second_subpath(self):
        svg = SVGGenerator(room_with_pillar_level()).render()
        regions = _parse(svg).find(f"{SVG_NS}g").findall(f"{SVG_NS}g")

        room_path = regions[0].find(f"{SVG_NS}path").get("d")
        self.assertEqual(room_path.count("M "), 2)
        # Region type 9 (secret) is tinted aqua
        self.assertEqual(regions[1].get("fill"), "aqua")
        self.assertEqual(regions[1].get("fill-opacity"), "0.5")

    def test_unknown_region_type_uses_default_style(self):
        level = square_room_level().model_copy(update={"regions": [Region(region_type=300)]})
        region = _parse(SVGGenerator(level).render()).find(f"{SVG_NS}g").find(f"{SVG_NS}g")
        self.assertEqual(region.get("fill"), "white")
        self.assertEqual(region.get("stroke"), "black")

    def test_monsters_and_multiplayer_things(self):
        svg = SVGGenerator(square_room_level()).render()
        group = _parse(svg).find(f"{SVG_NS}g")

        circles = group.findall(f"{SVG_NS}circle")
        self.assertEqual(len(circles), 1)
        self.assertEqual((circles[0].get("cx"), circles[0].get("cy"), circles[0].get("r")), ("16", "16", "20"))
        self.assertEqual(circles[0].find(f"{SVG_NS}title").text, "Imp [12345]")
        # The clip is multiplayer-only
        self.assertEqual(group.findall(f"{SVG_NS}rect"), [])

        options = RenderOptions(show_multiplayer=True)
        group = _parse(SVGGenerator(square_room_level(), options=options).render()).find(f"{SVG_NS}g")
        rects = group.findall(f"{SVG_NS}rect")
        self.assertEqual(len(rects), 1)
        self.assertEqual((rects[0].get("x"), rects[0].get("y")), ("38", "38"))
        self.assertEqual(rects[0].get("fill"), "aqua")
        self.assertEqual(rects[0].find(f"{SVG_NS}title").text, "Clip [12345M]")

    def test_category_toggles(self):
        level = square_room_level().model_copy(update={"things": [
            Thing(x=0, y=0, thing_type=3001, flags=7),
            Thing(x=0, y=0, thing_type=5, flags=7),
            Thing(x=0, y=0, thing_type=2001, flags=7),
        ]})
        options = RenderOptions(show_monsters=False, show_weapons=False)
        group = _parse(SVGGenerator(level, options=options).render()).find(f"{SVG_NS}g")

        self.assertEqual(group.findall(f"{SVG_NS}circle"), [])
        rects = group.findall(f"{SVG_NS}rect")
        self.assertEqual(len(rects), 1)
        self.assertEqual(rects[0].get("fill"), "blue")
        self.assertIsNone(rects[0].get("stroke"))

    def test_custom_style(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "style.json"
            path.write_text(json.dumps({
                "name": "test",
                "special_lines": {"stroke_width": 5, "colours": {"door": "pink"}},
            }))
            style = StyleConfig(str(path))
        svg = SVGGenerator(square_room_level(), style=style).render()
        door = _parse(svg).find(f"{SVG_NS}g").find(f"{SVG_NS}g").findall(f"{SVG_NS}path")[1]
        self.assertEqual(door.get("stroke"), "pink")
        self.assertEqual(door.get("stroke-width"), "5")

    def test_generate_svg_writes_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            output = Path(tmp) / "out" / "e1m1.svg"
            svg = generate_svg(square_room_level(), str(output))
            self.assertEqual(output.read_text(encoding="utf-8"), svg)


class StyleConfigTests(unittest.TestCase):
    def test_default_style(self):
        style = get_default_style()
        self.assertEqual(style.region_style(0), {"fill": "white", "stroke": "black", "opacity": "1.0"})
        self.assertEqual(style.region_style(4)["fill"], "red")
        self.assertEqual(style.region_style(99)["fill"], "white")
        self.assertEqual(style.special_line_colour("teleporter"), "red")
        self.assertEqual(style.special_line_colour("unknown"), "orange")
        self.assertEqual(style.thing_marker_size(), 20)
        self.assertEqual(style.image_default("width"), 1280)

    def test_missing_style_file(self):
        with self.assertRaises(FileNotFoundError):
            StyleConfig("/nonexistent/style.json")

    def test_colours_with_markup_characters_stay_well_formed(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "style.json"
            path.write_text(json.dumps({
                "regions": {"default": {"fill": "url(\"#a\")", "stroke": "a&b"}},
                "special_lines": {"colours": {"door": "<green>"}},
                "things": {"colours": {"monsters": "\"red\""}},
            }))
            style = load_style(str(path))
        group = _parse(SVGGenerator(square_room_level(), style=style).render()).find(f"{SVG_NS}g")

        region = group.find(f"{SVG_NS}g")
        self.assertEqual(region.get("fill"), 'url("#a")')
        self.assertEqual(region.get("stroke"), "a&b")
        self.assertEqual(region.findall(f"{SVG_NS}path")[1].get("stroke"), "<green>")
        self.assertEqual(group.find(f"{SVG_NS}circle").get("fill"), '"red"')


if __name__ == "__main__":
    unittest.main()
