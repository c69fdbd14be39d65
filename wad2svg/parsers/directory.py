"""
Lump directory reader.

Walks the archive's directory of 16-byte entries to find a level marker
and the data lumps that follow it.
"""

from typing import Dict, Iterator, List
from loguru import logger

from wad2svg.core.errors import LevelNotFound, MissingLump, TruncatedDirectory
from wad2svg.core.models import LevelLumps, LumpEntry, LumpKind, WadHeader
from wad2svg.parsers.records import (
    DIRECTORY_ENTRY_SIZE,
    HEADER_SIZE,
    NAME_SIZE,
    decode_directory_entry,
    decode_header,
    encode_name,
)

_KIND_BY_RAW_NAME: Dict[bytes, LumpKind] = {kind.raw_name: kind for kind in LumpKind}


def read_header(data: bytes) -> WadHeader:
    """
    Decode the 12-byte archive header.

    The identification ("IWAD"/"PWAD") is reported but not validated.

    Raises:
        TruncatedDirectory: If the archive is shorter than a header
    """
    if len(data) < HEADER_SIZE:
        raise TruncatedDirectory(0, len(data))
    return decode_header(data)


def iter_directory(data: bytes, header: WadHeader) -> Iterator[LumpEntry]:
    """
    Yield directory entries in order, starting at the header's directory offset.

    Raises:
        TruncatedDirectory: If an entry would extend past the end of the archive
    """
    offset = header.directory_offset
    for _ in range(header.lump_count):
        if offset + DIRECTORY_ENTRY_SIZE > len(data):
            raise TruncatedDirectory(offset, len(data))
        entry, offset = decode_directory_entry(data, offset)
        yield entry


def locate_level(data: bytes, level_name: str) -> LevelLumps:
    """
    Find a level marker and the data lumps of its block.

    Scanning starts at the directory offset. After the entry whose raw name
    equals the zero-padded level name, the first entry of each level-data
    kind is taken; later duplicates are ignored. Scanning stops right after
    the SECTORS lump.

    Args:
        data: Whole archive contents
        level_name: Case-sensitive level name, at most 8 characters (e.g. "E1M1")

    Returns:
        LevelLumps with one directory entry per kind

    Raises:
        ValueError: If level_name is longer than 8 characters
        LevelNotFound: If no entry matches level_name
        MissingLump: If the block ends without one of the kinds
        TruncatedDirectory: If the directory runs past the end of the archive
    """
    if len(level_name) > NAME_SIZE:
        raise ValueError(f"Level name longer than {NAME_SIZE} characters: {level_name!r}")

    target = encode_name(level_name)
    header = read_header(data)
    logger.debug(
        f"{header.identification}: {header.lump_count} lumps, "
        f"directory at offset {header.directory_offset}"
    )

    in_level = False
    found: Dict[LumpKind, LumpEntry] = {}

    for entry in iter_directory(data, header):
        if not in_level:
            if entry.raw_name == target:
                logger.info(f"Found level {level_name}")
                in_level = True
            continue

        kind = _KIND_BY_RAW_NAME.get(entry.raw_name)
        if kind is None or kind in found:
            continue

        found[kind] = entry
        if kind is LumpKind.SECTORS:
            break

    if not in_level:
        raise LevelNotFound(level_name)

    for kind in LumpKind:
        if kind not in found:
            raise MissingLump(kind.value, level_name)

    return LevelLumps(
        level_name=level_name,
        things=found[LumpKind.THINGS],
        lines=found[LumpKind.LINEDEFS],
        sides=found[LumpKind.SIDEDEFS],
        points=found[LumpKind.VERTEXES],
        regions=found[LumpKind.SECTORS],
    )


def list_levels(data: bytes) -> List[str]:
    """
    List level names in directory order.

    A level marker is any entry immediately followed by a THINGS lump.
    """
    header = read_header(data)
    levels: List[str] = []
    previous = None
    for entry in iter_directory(data, header):
        if previous is not None and entry.raw_name == LumpKind.THINGS.raw_name:
            levels.append(previous.name)
        previous = entry

    logger.debug(f"Found {len(levels)} level(s)")
    return levels
