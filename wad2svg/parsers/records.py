"""
Fixed-width record codecs for WAD level lumps.

Each decoder reads exactly one little-endian record from ``buffer`` at
``offset`` and returns it with the offset just past it. Decoders never
interpret field values; the matching encoders reproduce the raw bytes.
"""

import struct
from typing import Tuple

from wad2svg.core.errors import TruncatedLump
from wad2svg.core.models import (
    Line,
    LumpEntry,
    Point,
    Region,
    Side,
    Thing,
    WadHeader,
)

NO_SIDE = 0xFFFF
NAME_SIZE = 8

HEADER = struct.Struct("<4sII")
DIRECTORY_ENTRY = struct.Struct("<II8s")
LINE = struct.Struct("<7H")
SIDE = struct.Struct("<hh8s8s8sH")
POINT = struct.Struct("<hh")
REGION = struct.Struct("<hh8s8sHHH")
THING = struct.Struct("<hhHHH")

HEADER_SIZE = HEADER.size  # 12
DIRECTORY_ENTRY_SIZE = DIRECTORY_ENTRY.size  # 16
LINE_SIZE = LINE.size  # 14
SIDE_SIZE = SIDE.size  # 30
POINT_SIZE = POINT.size  # 4
REGION_SIZE = REGION.size  # 26
THING_SIZE = THING.size  # 10


def decode_name(raw: bytes) -> str:
    """Strip trailing zero padding from an 8-byte name field."""
    return raw.rstrip(b"\x00").decode("latin-1")


def encode_name(name: str) -> bytes:
    """Zero-pad a name to 8 bytes."""
    raw = name.encode("latin-1")
    if len(raw) > NAME_SIZE:
        raise ValueError(f"Name longer than {NAME_SIZE} bytes: {name!r}")
    return raw.ljust(NAME_SIZE, b"\x00")


def _side_ref(raw: int):
    return None if raw == NO_SIDE else raw


def _raw_side_ref(side) -> int:
    return NO_SIDE if side is None else side


def _unpack(record: struct.Struct, kind: str, buffer, offset: int) -> tuple:
    try:
        return record.unpack_from(buffer, offset)
    except struct.error:
        raise TruncatedLump(kind, offset, record.size, len(buffer)) from None


def decode_header(buffer) -> WadHeader:
    identification, lump_count, directory_offset = _unpack(HEADER, "header", buffer, 0)
    return WadHeader(
        identification=identification.decode("latin-1"),
        lump_count=lump_count,
        directory_offset=directory_offset,
    )


def decode_directory_entry(buffer, offset: int) -> Tuple[LumpEntry, int]:
    lump_offset, size, raw_name = _unpack(DIRECTORY_ENTRY, "directory", buffer, offset)
    entry = LumpEntry(offset=lump_offset, size=size, name=decode_name(raw_name), raw_name=raw_name)
    return entry, offset + DIRECTORY_ENTRY_SIZE


def decode_line(buffer, offset: int) -> Tuple[Line, int]:
    start, end, flags, special, tag, right, left = _unpack(LINE, "LINEDEFS", buffer, offset)
    line = Line(
        start_point=start,
        end_point=end,
        flags=flags,
        special=special,
        tag=tag,
        right_side=_side_ref(right),
        left_side=_side_ref(left),
    )
    return line, offset + LINE_SIZE


def decode_side(buffer, offset: int) -> Tuple[Side, int]:
    x_off, y_off, upper, lower, middle, region = _unpack(SIDE, "SIDEDEFS", buffer, offset)
    side = Side(
        x_offset=x_off,
        y_offset=y_off,
        upper_texture=decode_name(upper),
        lower_texture=decode_name(lower),
        middle_texture=decode_name(middle),
        region_index=region,
    )
    return side, offset + SIDE_SIZE


def decode_point(buffer, offset: int) -> Tuple[Point, int]:
    x, y = _unpack(POINT, "VERTEXES", buffer, offset)
    return Point(x=x, y=-y), offset + POINT_SIZE


def decode_region(buffer, offset: int) -> Tuple[Region, int]:
    floor, ceiling, floor_tex, ceiling_tex, light, region_type, tag = _unpack(
        REGION, "SECTORS", buffer, offset
    )
    region = Region(
        floor_height=floor,
        ceiling_height=ceiling,
        floor_texture=decode_name(floor_tex),
        ceiling_texture=decode_name(ceiling_tex),
        light_level=light,
        region_type=region_type,
        tag_number=tag,
    )
    return region, offset + REGION_SIZE


def decode_thing(buffer, offset: int) -> Tuple[Thing, int]:
    x, y, angle, thing_type, flags = _unpack(THING, "THINGS", buffer, offset)
    thing = Thing(x=x, y=-y, angle=angle, thing_type=thing_type, flags=flags)
    return thing, offset + THING_SIZE


def encode_header(header: WadHeader) -> bytes:
    return HEADER.pack(
        header.identification.encode("latin-1"),
        header.lump_count,
        header.directory_offset,
    )


def encode_directory_entry(entry: LumpEntry) -> bytes:
    raw_name = entry.raw_name or encode_name(entry.name)
    return DIRECTORY_ENTRY.pack(entry.offset, entry.size, raw_name)


def encode_line(line: Line) -> bytes:
    return LINE.pack(
        line.start_point,
        line.end_point,
        line.flags,
        line.special,
        line.tag,
        _raw_side_ref(line.right_side),
        _raw_side_ref(line.left_side),
    )


def encode_side(side: Side) -> bytes:
    return SIDE.pack(
        side.x_offset,
        side.y_offset,
        encode_name(side.upper_texture),
        encode_name(side.lower_texture),
        encode_name(side.middle_texture),
        side.region_index,
    )


def encode_point(point: Point) -> bytes:
    # -(-32768) decodes to 32768, which negates back into int16 range
    return POINT.pack(point.x, -point.y)


def encode_region(region: Region) -> bytes:
    return REGION.pack(
        region.floor_height,
        region.ceiling_height,
        encode_name(region.floor_texture),
        encode_name(region.ceiling_texture),
        region.light_level,
        region.region_type,
        region.tag_number,
    )


def encode_thing(thing: Thing) -> bytes:
    return THING.pack(thing.x, -thing.y, thing.angle, thing.thing_type, thing.flags)
