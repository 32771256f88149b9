"""Slot locking and neighbour merging on drag release."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from jigsaw_shapes import CellEdges, EdgeSign

from .state import PuzzleState, Tile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Direction:
    """A grid neighbour direction seen from tile A.

    Attributes:
        name: "right", "left", "top" or "bottom".
        d_row: Row step from A to its neighbour B.
        d_col: Column step from A to B.
        side: A's side facing B.
        opposite: B's side facing A.
        a_sign: Sign A's side must carry for a merge.
        b_sign: Sign B's side must carry for a merge.
    """

    name: str
    d_row: int
    d_col: int
    side: str
    opposite: str
    a_sign: EdgeSign
    b_sign: EdgeSign

    def interlocks(self, a_edges: CellEdges, b_edges: CellEdges) -> bool:
        return a_edges.side(self.side) == self.a_sign and b_edges.side(self.opposite) == self.b_sign


# The tab sits on the left or upper piece of every mergeable pair.
DIRECTIONS = (
    Direction("right", 0, 1, "right", "left", EdgeSign.TAB, EdgeSign.BLANK),
    Direction("left", 0, -1, "left", "right", EdgeSign.BLANK, EdgeSign.TAB),
    Direction("top", -1, 0, "top", "bottom", EdgeSign.BLANK, EdgeSign.TAB),
    Direction("bottom", 1, 0, "bottom", "top", EdgeSign.TAB, EdgeSign.BLANK),
)


@dataclass
class SnapResult:
    """Outcome of one drag release.

    Attributes:
        locked: Ids of tiles that locked onto their home slot.
        merges: (kept group id, absorbed tile id) for every merge, in order.
        finalized: True if the fully assembled puzzle was locked as a whole.
        solved: True if every tile is locked afterwards.
    """

    locked: List[int] = field(default_factory=list)
    merges: List[Tuple[int, int]] = field(default_factory=list)
    finalized: bool = False
    solved: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.locked or self.merges or self.finalized)


class SnapEngine:
    """Resolves a drag release into slot locks and group merges.

    Args:
        state: The puzzle state to mutate.
        snap_tolerance: Maximum per-axis distance from the home slot for a lock.
    """

    def __init__(self, state: PuzzleState, snap_tolerance: float):
        self.state = state
        self.snap_tolerance = snap_tolerance

    @property
    def merge_tolerance(self) -> float:
        layout = self.state.layout
        return max(10.0, 0.18 * min(layout.tile_width, layout.tile_height))

    @property
    def assembly_tolerance(self) -> float:
        layout = self.state.layout
        return max(25.0, 0.35 * min(layout.tile_width, layout.tile_height))

    # ---- slot locking ----

    def should_lock(self, tile: Tile) -> bool:
        if tile.locked or tile.angle % 360 != 0:
            return False
        slot_x, slot_y = self.state.slot_of(tile)
        return abs(tile.x - slot_x) <= self.snap_tolerance and abs(tile.y - slot_y) <= self.snap_tolerance

    def try_lock(self, tile: Tile) -> bool:
        """Lock ``tile`` onto its home slot if it is close enough and unrotated."""
        if not self.should_lock(tile):
            return False
        self.state.lock(tile)
        logger.debug("Tile %s locked at (%s, %s)", tile.id, tile.x, tile.y)
        return True

    # ---- merging ----

    def expected_offset(self, direction: Direction) -> Tuple[float, float]:
        layout = self.state.layout
        return (direction.d_col * layout.tile_width, direction.d_row * layout.tile_height)

    def neighbour(self, tile: Tile, direction: Direction) -> Optional[Tile]:
        return self.state.tile_at(tile.row + direction.d_row, tile.col + direction.d_col)

    def can_merge(self, a: Tile, b: Tile, direction: Direction) -> bool:
        """Check whether B's group may join A's group across ``direction``."""
        if a.locked or b.locked or self.state.same_group(a, b):
            return False
        if self.state.group_has_locked(a.id) or self.state.group_has_locked(b.id):
            return False
        if a.angle % 360 != b.angle % 360:
            return False
        if not direction.interlocks(self.state.edges_of(a), self.state.edges_of(b)):
            return False
        exp_x, exp_y = self.expected_offset(direction)
        tol = self.merge_tolerance
        return abs(b.x - a.x - exp_x) <= tol and abs(b.y - a.y - exp_y) <= tol

    def merge(self, a: Tile, b: Tile, direction: Direction) -> List[Tile]:
        """Absorb B's group into A's and close the gap between A and B exactly.

        Returns:
            Every tile whose position may have changed.
        """
        exp_x, exp_y = self.expected_offset(direction)
        dx = a.x + exp_x - b.x
        dy = a.y + exp_y - b.y
        absorbed = self.state.merge_groups(a, b)
        for tile in absorbed:
            tile.x += dx
            tile.y += dy
            tile.angle = a.angle
        b.x, b.y = a.x + exp_x, a.y + exp_y
        logger.debug("Merged group of tile %s into group %s (%s tiles)", b.id, a.group_id, len(absorbed))

        members = self.state.group_members(a.id)
        cdx, cdy = self.state.layout.clamp_delta([t.position for t in members], 0.0, 0.0)
        if cdx or cdy:
            self.state.translate(members, cdx, cdy)
            return members
        return absorbed

    def resolve_merges(self, tile_ids: Iterable[int]) -> List[Tuple[int, int]]:
        """Merge the given tiles with qualifying neighbours until nothing changes.

        After every pass the scan set grows to all members of the groups the
        scanned tiles belong to, so tiles that joined in one pass get their
        other sides checked in the next and one release can cascade across
        several neighbours.
        """
        merges: List[Tuple[int, int]] = []
        scan: Set[int] = set(tile_ids)
        merged = True
        while merged:
            merged = False
            for tile_id in sorted(scan):
                a = self.state.tile(tile_id)
                if a is None or a.locked:
                    continue
                for direction in DIRECTIONS:
                    b = self.neighbour(a, direction)
                    if b is None or not self.can_merge(a, b, direction):
                        continue
                    self.merge(a, b, direction)
                    merges.append((self.state.group_id(a.id), b.id))
                    merged = True
            scan = {t.id for tile_id in scan for t in self.state.group_members(tile_id)}
        return merges

    # ---- whole puzzle ----

    def finalize_if_assembled(self) -> bool:
        """Lock a single group that contains every tile in correct relative placement."""
        total = len(self.state.tiles)
        if total < 2 or self.state.solved():
            return False
        groups: Dict[int, List[Tile]] = self.state.groups()
        group = next((members for members in groups.values() if len(members) == total), None)
        if group is None or any(t.angle % 360 != 0 for t in group):
            return False
        layout = self.state.layout
        first = group[0]
        base_x = first.x - first.col * layout.tile_width
        base_y = first.y - first.row * layout.tile_height
        tol = self.assembly_tolerance
        fits = all(
            abs(t.x - (base_x + t.col * layout.tile_width)) <= tol
            and abs(t.y - (base_y + t.row * layout.tile_height)) <= tol
            for t in group
        )
        if not fits:
            return False
        for tile in group:
            self.state.lock(tile)
        logger.info("Puzzle assembled; locked all %s tiles", total)
        return True

    def resolve(self, dragged_ids: Iterable[int]) -> SnapResult:
        """Run the full release sequence: slot locks, merges, whole-puzzle check."""
        ids = list(dragged_ids)
        result = SnapResult()
        for tile_id in ids:
            tile = self.state.tile(tile_id)
            if tile is not None and self.try_lock(tile):
                result.locked.append(tile_id)
        result.merges = self.resolve_merges(ids)
        result.finalized = self.finalize_if_assembled()
        result.solved = self.state.solved()
        return result
