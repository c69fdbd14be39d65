"""
WAD level parser.

Locates a level's lumps in the directory and decodes every record into a
Level. Cross-references are not checked here; bad indices surface as
IndexOutOfRange when the stitcher or renderer dereferences them.
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple
from loguru import logger

from wad2svg.core.errors import MalformedLump, TruncatedLump
from wad2svg.core.models import Level, LevelLumps, LumpEntry, LumpKind
from wad2svg.parsers import records
from wad2svg.parsers.directory import list_levels, locate_level

Decoder = Callable[[bytes, int], Tuple[object, int]]

_DECODERS: Dict[LumpKind, Tuple[Decoder, int]] = {
    LumpKind.THINGS: (records.decode_thing, records.THING_SIZE),
    LumpKind.LINEDEFS: (records.decode_line, records.LINE_SIZE),
    LumpKind.SIDEDEFS: (records.decode_side, records.SIDE_SIZE),
    LumpKind.VERTEXES: (records.decode_point, records.POINT_SIZE),
    LumpKind.SECTORS: (records.decode_region, records.REGION_SIZE),
}


def decode_lump(data: bytes, entry: LumpEntry, kind: LumpKind) -> list:
    """
    Decode every record of one lump, in file order.

    Args:
        data: Whole archive contents
        entry: Directory entry of the lump
        kind: Which record layout the lump holds

    Returns:
        List of decoded records

    Raises:
        MalformedLump: If the lump size is not a multiple of the record size
        TruncatedLump: If the lump extends past the end of the archive
    """
    decoder, record_size = _DECODERS[kind]

    count, remainder = divmod(entry.size, record_size)
    if remainder:
        raise MalformedLump(kind.value, entry.size, record_size, entry.offset)
    if entry.offset + entry.size > len(data):
        raise TruncatedLump(kind.value, entry.offset, entry.size, len(data))

    logger.debug(f"Reading {count} {kind.value.lower()}")

    decoded = []
    offset = entry.offset
    for _ in range(count):
        record, offset = decoder(data, offset)
        decoded.append(record)
    return decoded


def assemble_level(data: bytes, lumps: LevelLumps) -> Level:
    """Decode all five lumps of a located level into a Level."""
    return Level(
        name=lumps.level_name,
        things=decode_lump(data, lumps.things, LumpKind.THINGS),
        lines=decode_lump(data, lumps.lines, LumpKind.LINEDEFS),
        sides=decode_lump(data, lumps.sides, LumpKind.SIDEDEFS),
        points=decode_lump(data, lumps.points, LumpKind.VERTEXES),
        regions=decode_lump(data, lumps.regions, LumpKind.SECTORS),
    )


class WADParser:
    """Reads a WAD archive once and assembles levels from it."""

    def __init__(self, file_path: str):
        """
        Initialize WAD parser.

        Args:
            file_path: Path to WAD file
        """
        self.file_path = Path(file_path)
        self.data: Optional[bytes] = None
        self.level: Optional[Level] = None

    @classmethod
    def from_bytes(cls, data: bytes, name: str = "<memory>") -> "WADParser":
        """Build a parser over an in-memory archive."""
        parser = cls(name)
        parser.data = data
        return parser

    def load(self) -> bytes:
        """
        Read the whole archive into memory (once).

        Raises:
            FileNotFoundError: If the WAD file doesn't exist
        """
        if self.data is None:
            if not self.file_path.exists():
                raise FileNotFoundError(f"WAD file not found: {self.file_path}")
            logger.info(f"Reading WAD file: {self.file_path}")
            self.data = self.file_path.read_bytes()
        return self.data

    def parse(self, level_name: str) -> Level:
        """
        Locate and decode one level.

        Args:
            level_name: Level marker name, e.g. "E1M1" or "MAP01"

        Returns:
            Fully assembled Level

        Raises:
            LevelNotFound: If the archive has no such level
            TruncatedDirectory, TruncatedLump, MalformedLump: On malformed archives
        """
        data = self.load()
        lumps = locate_level(data, level_name)
        self.level = assemble_level(data, lumps)
        logger.success(f"Assembled {self.level}")
        return self.level

    def list_levels(self) -> List[str]:
        """Names of all levels in the archive, in directory order."""
        return list_levels(self.load())


def parse_wad(file_path: str, level_name: str) -> Level:
    """
    Parse one level from a WAD file.

    Args:
        file_path: Path to WAD file
        level_name: Level marker name

    Returns:
        Assembled Level
    """
    return WADParser(file_path).parse(level_name)
