import os
import sys
import tempfile
import unittest
from pathlib import Path

THIS_DIR = os.path.dirname(__file__)
if THIS_DIR not in sys.path:
    sys.path.insert(0, THIS_DIR)

from wad_builder import build_wad, level_lumps, level_to_wad, room_with_pillar_level, square_room_level

from wad2svg.core.errors import IndexOutOfRange, LevelNotFound, MalformedLump, TruncatedLump
from wad2svg.core.models import Line, LumpEntry, LumpKind, Point, Region, Side
from wad2svg.geometry.stitcher import stitch_region
from wad2svg.parsers.wad_parser import WADParser, decode_lump, parse_wad


class AssembleLevelTests(unittest.TestCase):
    def test_round_trip_through_archive(self):
        level = room_with_pillar_level()
        parsed = WADParser.from_bytes(level_to_wad(level)).parse("MAP01")

        self.assertEqual(parsed.name, "MAP01")
        self.assertEqual(parsed.points, level.points)
        self.assertEqual(parsed.lines, level.lines)
        self.assertEqual(parsed.sides, level.sides)
        self.assertEqual(parsed.regions, level.regions)

    def test_records_keep_file_order(self):
        level = square_room_level()
        parsed = WADParser.from_bytes(level_to_wad(level)).parse("E1M1")

        self.assertEqual([l.start_point for l in parsed.lines], [0, 1, 2, 3])
        self.assertEqual([t.thing_type for t in parsed.things], [1, 3001, 2007])
        self.assertEqual(parsed.point(2), Point(x=64, y=64))

    def test_level_not_found_returns_no_level(self):
        parser = WADParser.from_bytes(level_to_wad(square_room_level()))
        with self.assertRaises(LevelNotFound):
            parser.parse("E2M1")
        self.assertIsNone(parser.level)

    def test_list_levels(self):
        parser = WADParser.from_bytes(level_to_wad(square_room_level("MAP07")))
        self.assertEqual(parser.list_levels(), ["MAP07"])


class MalformedLumpTests(unittest.TestCase):
    def test_lines_lump_not_multiple_of_record_size(self):
        blocks = level_lumps("E1M1", points=[Point(x=0, y=0)], regions=[Region()])
        blocks = [(name, b"\x00" * 15 if name == "LINEDEFS" else data) for name, data in blocks]
        parser = WADParser.from_bytes(build_wad(blocks))

        with self.assertRaises(MalformedLump) as ctx:
            parser.parse("E1M1")
        self.assertEqual(ctx.exception.kind, "LINEDEFS")
        self.assertEqual(ctx.exception.size, 15)
        self.assertEqual(ctx.exception.record_size, 14)
        self.assertIsNone(parser.level)

    def test_remainder_detected_before_decoding(self):
        # Two valid records plus one stray byte: nothing is decoded.
        entry = LumpEntry(offset=0, size=29, name="LINEDEFS")
        with self.assertRaises(MalformedLump):
            decode_lump(b"\x00" * 29, entry, LumpKind.LINEDEFS)

    def test_lump_past_end_of_archive(self):
        entry = LumpEntry(offset=8, size=28, name="LINEDEFS")
        with self.assertRaises(TruncatedLump) as ctx:
            decode_lump(b"\x00" * 20, entry, LumpKind.LINEDEFS)
        self.assertEqual(ctx.exception.offset, 8)
        self.assertEqual(ctx.exception.size, 28)

    def test_empty_lump(self):
        entry = LumpEntry(offset=4, size=0, name="THINGS")
        self.assertEqual(decode_lump(b"\x00" * 4, entry, LumpKind.THINGS), [])


class LazyIndexValidationTests(unittest.TestCase):
    def test_bad_point_index_surfaces_at_stitch_time(self):
        lines = [
            Line(start_point=0, end_point=1, right_side=0),
            Line(start_point=1, end_point=99, right_side=0),
        ]
        data = level_to_wad(square_room_level().model_copy(update={
            "lines": lines,
            "sides": [Side(region_index=0)],
            "things": [],
        }))
        level = WADParser.from_bytes(data).parse("E1M1")
        self.assertEqual(len(level.lines), 2)

        with self.assertRaises(IndexOutOfRange) as ctx:
            stitch_region(level, 0)
        self.assertEqual(ctx.exception.kind, "point")
        self.assertEqual(ctx.exception.index, 99)
        self.assertEqual(ctx.exception.owner, "line 1")


class ParseWadFileTests(unittest.TestCase):
    def test_parse_wad_from_disk(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "test.wad"
            path.write_bytes(level_to_wad(square_room_level()))
            level = parse_wad(str(path), "E1M1")
        self.assertEqual(len(level.regions), 1)
        self.assertEqual(len(level.lines), 4)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            parse_wad("/nonexistent/doom.wad", "E1M1")


if __name__ == "__main__":
    unittest.main()
