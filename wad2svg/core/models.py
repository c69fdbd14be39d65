"""
Core data models for wad2svg.

All records use Pydantic and are frozen once built: a Level is assembled
once from an archive and is then shared read-only by the stitcher and the
renderer. Cross-references are plain integer indices into the Level's
sequences.
"""

from enum import Enum, IntFlag
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from wad2svg.core import categories
from wad2svg.core.errors import IndexOutOfRange


class LineFlag(IntFlag):
    """Line flag bits."""
    BLOCKS_MONSTERS_AND_PLAYERS = 1 << 0
    BLOCKS_MONSTERS = 1 << 1
    TWO_SIDED = 1 << 2
    UPPER_TEXTURE_UNPEGGED = 1 << 3
    LOWER_TEXTURE_UNPEGGED = 1 << 4
    SECRET = 1 << 5
    BLOCKS_SOUND = 1 << 6
    NEVER_SHOWN_ON_AUTOMAP = 1 << 7
    ALWAYS_SHOWN_ON_AUTOMAP = 1 << 8
    CAN_ACTIVATE_MORE_THAN_ONCE = 1 << 9
    ACTIVATED_WHEN_USED_BY_PLAYER = 1 << 10
    ACTIVATED_WHEN_CROSSED_BY_MONSTER = 1 << 11
    ACTIVATED_WHEN_BUMPED_BY_PLAYER = 1 << 12
    CAN_BE_ACTIVATED_BY_MONSTERS_OR_PLAYER = 1 << 13
    UNUSED = 1 << 14
    BLOCKS_EVERYTHING = 1 << 15


class ThingFlag(IntFlag):
    """Thing spawn flag bits."""
    SKILL_1_2 = 1
    SKILL_3 = 2
    SKILL_4_5 = 4
    DEAF = 8
    MULTIPLAYER_ONLY = 16


class LumpKind(str, Enum):
    """Level data lumps consumed by the assembler, in block order."""
    THINGS = "THINGS"
    LINEDEFS = "LINEDEFS"
    SIDEDEFS = "SIDEDEFS"
    VERTEXES = "VERTEXES"
    SECTORS = "SECTORS"

    @property
    def raw_name(self) -> bytes:
        """Directory name as stored: zero-padded to 8 bytes."""
        return self.value.encode("ascii").ljust(8, b"\x00")


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class Point(_Record):
    """2D vertex; y is the archive Y negated so rendered Y grows downward."""
    x: int
    y: int


class Line(_Record):
    """Directed wall segment between two points (a linedef)."""
    start_point: int
    end_point: int
    flags: int = 0
    special: int = 0
    tag: int = 0
    right_side: Optional[int] = None
    left_side: Optional[int] = None

    def flip(self) -> "Line":
        """Reverse direction; right and left sides swap with it."""
        return self.model_copy(update={
            "start_point": self.end_point,
            "end_point": self.start_point,
            "right_side": self.left_side,
            "left_side": self.right_side,
        })

    def has_flag(self, flag: LineFlag) -> bool:
        return self.flags & flag == flag

    def is_door(self) -> bool:
        return self.special in categories.DOOR_SPECIALS

    def is_teleporter(self) -> bool:
        return self.special in categories.TELEPORTER_SPECIALS

    def is_lift(self) -> bool:
        return self.special in categories.LIFT_SPECIALS

    def is_exit(self) -> bool:
        return self.special in categories.EXIT_SPECIALS

    def is_secret(self) -> bool:
        return self.has_flag(LineFlag.SECRET)


class Side(_Record):
    """Per-face texture data plus the region the face looks into (a sidedef)."""
    x_offset: int = 0
    y_offset: int = 0
    upper_texture: str = "-"
    lower_texture: str = "-"
    middle_texture: str = "-"
    region_index: int


class Region(_Record):
    """Enclosed floor/ceiling area (a sector)."""
    floor_height: int = 0
    ceiling_height: int = 0
    floor_texture: str = ""
    ceiling_texture: str = ""
    light_level: int = 0
    region_type: int = 0
    tag_number: int = 0

    def is_secret(self) -> bool:
        return self.region_type == categories.SECRET_REGION_TYPE

    def is_damage(self) -> bool:
        return self.region_type in categories.DAMAGE_REGION_TYPES


class Thing(_Record):
    """Placed object; y is negated like Point.y."""
    x: int
    y: int
    angle: int = 0
    thing_type: int
    flags: int = 0

    def is_multiplayer(self) -> bool:
        return self.flags & ThingFlag.MULTIPLAYER_ONLY == ThingFlag.MULTIPLAYER_ONLY

    def skill_label(self) -> str:
        """
        Compact marker of the skills/modes a thing spawns in.

        Returns:
            Concatenation of "12", "3", "45", "D" (deaf) and "M" (multiplayer)
        """
        label = ""
        if self.flags & ThingFlag.SKILL_1_2:
            label += "12"
        if self.flags & ThingFlag.SKILL_3:
            label += "3"
        if self.flags & ThingFlag.SKILL_4_5:
            label += "45"
        if self.flags & ThingFlag.DEAF:
            label += "D"
        if self.flags & ThingFlag.MULTIPLAYER_ONLY:
            label += "M"
        return label


class WadHeader(_Record):
    """Archive header (first 12 bytes)."""
    identification: str
    lump_count: int
    directory_offset: int


class LumpEntry(_Record):
    """One 16-byte lump directory entry."""
    offset: int
    size: int
    name: str
    raw_name: bytes = b""


class LevelLumps(_Record):
    """Directory entries holding one level's data lumps."""
    level_name: str
    things: LumpEntry
    lines: LumpEntry
    sides: LumpEntry
    points: LumpEntry
    regions: LumpEntry


class BoundingBox(_Record):
    """Axis-aligned bounding box in rendered coordinates."""
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y


class Level(_Record):
    """
    Decoded map: parallel sequences of lines, sides, points, regions and
    things, in file order.

    Indices are validated lazily: the checked accessors raise
    IndexOutOfRange at the point of dereference.
    """
    name: str
    lines: List[Line] = Field(default_factory=list)
    sides: List[Side] = Field(default_factory=list)
    points: List[Point] = Field(default_factory=list)
    regions: List[Region] = Field(default_factory=list)
    things: List[Thing] = Field(default_factory=list)

    def line(self, index: int, owner: Optional[str] = None) -> Line:
        return _checked(self.lines, "line", index, owner)

    def side(self, index: int, owner: Optional[str] = None) -> Side:
        return _checked(self.sides, "side", index, owner)

    def point(self, index: int, owner: Optional[str] = None) -> Point:
        return _checked(self.points, "point", index, owner)

    def region(self, index: int, owner: Optional[str] = None) -> Region:
        return _checked(self.regions, "region", index, owner)

    def bounds(self) -> BoundingBox:
        """Bounding box of all points (all zero for a level without points)."""
        if not self.points:
            return BoundingBox(min_x=0, min_y=0, max_x=0, max_y=0)

        return BoundingBox(
            min_x=min(p.x for p in self.points),
            min_y=min(p.y for p in self.points),
            max_x=max(p.x for p in self.points),
            max_y=max(p.y for p in self.points),
        )

    def __str__(self) -> str:
        return (f"Level({self.name}, lines={len(self.lines)}, sides={len(self.sides)}, "
                f"points={len(self.points)}, regions={len(self.regions)}, "
                f"things={len(self.things)})")


class Segment(_Record):
    """A line as oriented inside a chain, remembering its Level index."""
    line_index: int
    line: Line

    @property
    def start(self) -> int:
        return self.line.start_point

    @property
    def end(self) -> int:
        return self.line.end_point

    def flip(self) -> "Segment":
        return Segment(line_index=self.line_index, line=self.line.flip())


class Chain(_Record):
    """Maximal run of point-adjacent segments; closed when it ends where it starts."""
    segments: List[Segment]

    @property
    def is_closed(self) -> bool:
        return bool(self.segments) and self.segments[-1].end == self.segments[0].start

    def point_indices(self) -> List[int]:
        """First segment's start followed by every segment's end."""
        if not self.segments:
            return []
        return [self.segments[0].start] + [segment.end for segment in self.segments]

    def points(self, level: Level) -> List[Point]:
        """
        Resolve the chain to coordinates.

        Raises:
            IndexOutOfRange: If a segment's line references a missing point
        """
        if not self.segments:
            return []

        first = self.segments[0]
        coords = [level.point(first.start, owner=f"line {first.line_index}")]
        for segment in self.segments:
            coords.append(level.point(segment.end, owner=f"line {segment.line_index}"))
        return coords

    def __len__(self) -> int:
        return len(self.segments)


def _checked(sequence: list, kind: str, index: int, owner: Optional[str]):
    if not 0 <= index < len(sequence):
        raise IndexOutOfRange(kind, index, len(sequence), owner)
    return sequence[index]
