"""
Exception hierarchy for WAD parsing and level assembly.

Every failure reflects malformed or mismatched input, so none of these
are retried. Each error keeps its context (lump kind, byte offset,
offending index) as attributes as well as in its message.
"""

from typing import Optional


class WadError(Exception):
    """Base class for all archive and level errors."""


class LevelNotFound(WadError):
    """Requested level name is absent from the lump directory."""

    def __init__(self, level_name: str):
        self.level_name = level_name
        super().__init__(f"Level {level_name!r} not found in lump directory")


class TruncatedDirectory(WadError):
    """A header or directory read would run past the end of the archive."""

    def __init__(self, offset: int, archive_size: int):
        self.offset = offset
        self.archive_size = archive_size
        super().__init__(
            f"Directory read at offset {offset} exceeds archive size {archive_size}"
        )


class TruncatedLump(WadError):
    """A lump's data would run past the end of the archive."""

    def __init__(self, kind: str, offset: int, size: int, archive_size: Optional[int] = None):
        self.kind = kind
        self.offset = offset
        self.size = size
        self.archive_size = archive_size
        message = f"{kind} lump at offset {offset} (size {size}) exceeds archive bounds"
        if archive_size is not None:
            message += f" ({archive_size} bytes)"
        super().__init__(message)


class MalformedLump(WadError):
    """Lump byte size is not a multiple of its record width."""

    def __init__(self, kind: str, size: int, record_size: int, offset: Optional[int] = None):
        self.kind = kind
        self.size = size
        self.record_size = record_size
        self.offset = offset
        location = f" at offset {offset}" if offset is not None else ""
        super().__init__(
            f"{kind} lump{location} has size {size}, "
            f"not a multiple of record size {record_size}"
        )


class MissingLump(MalformedLump):
    """A level block ended without one of its required lumps."""

    def __init__(self, kind: str, level_name: str):
        self.kind = kind
        self.level_name = level_name
        self.size = 0
        self.record_size = 0
        self.offset = None
        WadError.__init__(self, f"Level {level_name!r} has no {kind} lump")


class IndexOutOfRange(WadError):
    """A decoded cross-reference points outside its target sequence."""

    def __init__(self, kind: str, index: int, length: int, owner: Optional[str] = None):
        self.kind = kind
        self.index = index
        self.length = length
        self.owner = owner
        message = f"{kind} index {index} out of range [0, {length})"
        if owner:
            message = f"{owner}: {message}"
        super().__init__(message)
