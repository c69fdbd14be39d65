"""
Region boundary stitching.

Turns the unordered, unoriented set of lines bounding a region into
maximal point-adjacent chains, each emitted as a polyline for an SVG path.
Regions with holes yield one chain per loop; the renderer's fill rule
turns the inner loops into gaps.
"""

from collections import defaultdict, deque
from typing import Deque, Dict, List, Optional, Sequence
from loguru import logger

from wad2svg.core.models import Chain, Level, Point, Segment


class _EndpointIndex:
    """
    Point index -> positions of live segments starting/ending there.

    Buckets hold boundary positions in ascending order; taken segments are
    dropped lazily from the front of a bucket when it is next consulted.
    """

    def __init__(self, segments: Sequence[Segment]):
        self.alive = [True] * len(segments)
        self.starts: Dict[int, Deque[int]] = defaultdict(deque)
        self.ends: Dict[int, Deque[int]] = defaultdict(deque)
        for position, segment in enumerate(segments):
            self.starts[segment.start].append(position)
            self.ends[segment.end].append(position)
        self._next_seed = 0

    def take(self, position: int) -> None:
        self.alive[position] = False

    def first_starting_at(self, point: int) -> Optional[int]:
        return self._first_alive(self.starts.get(point))

    def first_ending_at(self, point: int) -> Optional[int]:
        return self._first_alive(self.ends.get(point))

    def next_seed(self) -> Optional[int]:
        """Earliest live position, or None once every segment is taken."""
        while self._next_seed < len(self.alive) and not self.alive[self._next_seed]:
            self._next_seed += 1
        if self._next_seed == len(self.alive):
            return None
        return self._next_seed

    def _first_alive(self, bucket: Optional[Deque[int]]) -> Optional[int]:
        if bucket is None:
            return None
        while bucket and not self.alive[bucket[0]]:
            bucket.popleft()
        return bucket[0] if bucket else None


def group_segments(segments: Sequence[Segment]) -> List[Chain]:
    """
    Greedily group segments into maximal connected chains.

    Each chain is seeded with the earliest remaining segment and grown at
    both ends until nothing attaches. A remaining segment attaches when:

    1. its start is the chain's end point: appended as is;
    2. its end is the chain's start point: prepended as is;
    3. its end is the chain's end point: appended flipped;
    4. its start is the chain's start point: prepended flipped.

    When several segments could attach, the earliest one in boundary order
    wins, and the rules are tried for it in the order above. This is the
    same choice as rescanning the remaining pool from the beginning after
    every attachment.

    Args:
        segments: Boundary segments in boundary order

    Returns:
        Chains in the order they were completed
    """
    index = _EndpointIndex(segments)
    chains: List[Chain] = []

    seed = index.next_seed()
    while seed is not None:
        index.take(seed)
        chain: Deque[Segment] = deque([segments[seed]])

        while True:
            head_end = chain[-1].end
            tail_start = chain[0].start

            candidates = [
                position
                for position in (
                    index.first_starting_at(head_end),
                    index.first_ending_at(tail_start),
                    index.first_ending_at(head_end),
                    index.first_starting_at(tail_start),
                )
                if position is not None
            ]
            if not candidates:
                break

            position = min(candidates)
            index.take(position)
            segment = segments[position]

            if segment.start == head_end:
                chain.append(segment)
            elif segment.end == tail_start:
                chain.appendleft(segment)
            elif segment.end == head_end:
                chain.append(segment.flip())
            else:
                chain.appendleft(segment.flip())

        chains.append(Chain(segments=list(chain)))
        seed = index.next_seed()

    return chains


class RegionStitcher:
    """
    Stitches region boundaries of one Level.

    The Level is only read; flipped lines are new records, never written
    back. Side and region lookups are indexed once per Level.
    """

    def __init__(self, level: Level):
        """
        Args:
            level: Assembled level

        Raises:
            IndexOutOfRange: If a line references a side that does not exist
        """
        self.level = level
        self._lines_by_side: Dict[int, List[int]] = defaultdict(list)
        self._sides_by_region: Dict[int, List[int]] = defaultdict(list)

        for line_index, line in enumerate(level.lines):
            owner = f"line {line_index}"
            for side_index in (line.right_side, line.left_side):
                if side_index is None:
                    continue
                level.side(side_index, owner=owner)
                bucket = self._lines_by_side[side_index]
                # right_side == left_side lists the line once for that side
                if not bucket or bucket[-1] != line_index:
                    bucket.append(line_index)

        for side_index, side in enumerate(level.sides):
            self._sides_by_region[side.region_index].append(side_index)

    def boundary(self, region_index: int) -> List[Segment]:
        """
        Lines bounding a region, in boundary order.

        Sides facing the region are visited in file order, and for each,
        the lines referencing it in file order. A line with both sides in
        the region appears once per side.

        Raises:
            IndexOutOfRange: If region_index is not a region of the level
        """
        self.level.region(region_index)

        segments: List[Segment] = []
        for side_index in self._sides_by_region.get(region_index, ()):
            for line_index in self._lines_by_side.get(side_index, ()):
                segments.append(Segment(line_index=line_index, line=self.level.lines[line_index]))
        return segments

    def chains(self, region_index: int) -> List[Chain]:
        """Group a region's boundary into chains."""
        segments = self.boundary(region_index)
        chains = group_segments(segments)
        logger.debug(
            f"Region {region_index}: {len(segments)} lines -> {len(chains)} chain(s), "
            f"{sum(1 for chain in chains if chain.is_closed)} closed"
        )
        return chains

    def paths(self, region_index: int) -> List[List[Point]]:
        """
        Region boundary as polylines, one per chain.

        Raises:
            IndexOutOfRange: If a boundary line references a missing point
        """
        return [chain.points(self.level) for chain in self.chains(region_index)]


def stitch_region(level: Level, region_index: int) -> List[List[Point]]:
    """
    Stitch one region of a level into polylines.

    Args:
        level: Assembled level
        region_index: Index of the region

    Returns:
        One point list per chain, in chain order
    """
    return RegionStitcher(level).paths(region_index)
