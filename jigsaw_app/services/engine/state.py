"""Live tile collection of one puzzle."""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from jigsaw_shapes import CellEdges, EdgeMatrix, is_border_cell

from .layout import BoardLayout
from .union_find import UnionFind

logger = logging.getLogger(__name__)


def normalize_angle(angle: float) -> int:
    """Map an angle onto 0, 90, 180 or 270.

    Other angles round to the nearest quarter turn; halfway values go to the
    even one (45 becomes 0, 135 becomes 180).
    """
    return int(round(angle / 90.0)) * 90 % 360


@dataclass
class Tile:
    """A single puzzle piece on the board.

    ``row``/``col`` are the designed (home) cell and never change; ``x``/``y``
    is the top-left corner of the tile cell in board coordinates.
    """

    id: int
    row: int
    col: int
    x: float
    y: float
    angle: int = 0
    locked: bool = False
    selected: bool = False
    group_id: int = -1

    def __post_init__(self) -> None:
        if self.group_id < 0:
            self.group_id = self.id

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class TileView:
    """Read-only snapshot of a tile handed to renderers."""

    id: int
    row: int
    col: int
    x: float
    y: float
    angle: int
    locked: bool
    group_id: int
    selected: bool
    outline_path: str


class PuzzleState:
    """Owns the tiles, their group partition and the board layout.

    Mutation happens only through the methods below, which the drag
    controller and snap engine call; nothing here reads user input.
    """

    def __init__(self, layout: BoardLayout, edges: EdgeMatrix):
        self.layout = layout
        self.edges = edges
        self.tiles: List[Tile] = []
        self._by_cell: Dict[Tuple[int, int], Tile] = {}
        self._groups = UnionFind()

    @property
    def rows(self) -> int:
        return self.layout.rows

    @property
    def cols(self) -> int:
        return self.layout.cols

    def reset(self, positions: List[Tuple[float, float]]) -> None:
        """Recreate every tile as a floating singleton at the given positions."""
        self.tiles = []
        for r in range(self.rows):
            for c in range(self.cols):
                tile_id = r * self.cols + c
                x, y = self.layout.clamp_position(*positions[tile_id])
                self.tiles.append(Tile(id=tile_id, row=r, col=c, x=x, y=y))
        self._by_cell = {(t.row, t.col): t for t in self.tiles}
        self._groups = UnionFind(t.id for t in self.tiles)

    # ---- lookups ----

    def tile(self, tile_id: int) -> Optional[Tile]:
        if 0 <= tile_id < len(self.tiles):
            return self.tiles[tile_id]
        return None

    def tile_at(self, row: int, col: int) -> Optional[Tile]:
        return self._by_cell.get((row, col))

    def edges_of(self, tile: Tile) -> CellEdges:
        return self.edges[tile.row][tile.col]

    def slot_of(self, tile: Tile) -> Tuple[float, float]:
        return self.layout.slot_position(tile.row, tile.col)

    def is_border(self, tile: Tile) -> bool:
        return is_border_cell(tile.row, tile.col, self.rows, self.cols)

    # ---- groups ----

    def group_id(self, tile_id: int) -> int:
        return self._groups.find(tile_id)

    def group_members(self, tile_id: int) -> List[Tile]:
        return [self.tiles[i] for i in sorted(self._groups.members(tile_id))]

    def groups(self) -> Dict[int, List[Tile]]:
        return {root: [self.tiles[i] for i in sorted(ids)] for root, ids in self._groups.groups().items()}

    def same_group(self, a: Tile, b: Tile) -> bool:
        return self._groups.connected(a.id, b.id)

    def group_has_locked(self, tile_id: int) -> bool:
        return any(t.locked for t in self.group_members(tile_id))

    def merge_groups(self, keep: Tile, absorb: Tile) -> List[Tile]:
        """Union ``absorb``'s group into ``keep``'s group.

        Returns:
            The tiles that changed group (the former members of ``absorb``'s group).
        """
        moved = self.group_members(absorb.id)
        root = self._groups.union(keep.id, absorb.id)
        for tile in self.group_members(root):
            tile.group_id = root
        return moved

    # ---- selection ----

    def selected_tiles(self) -> List[Tile]:
        return [t for t in self.tiles if t.selected]

    def toggle_group_selection(self, tile_id: int) -> bool:
        """Flip selection for the whole group containing ``tile_id``.

        Returns:
            The new selection state of the group; always False for unknown
            or locked tiles, which cannot be selected.
        """
        tile = self.tile(tile_id)
        if tile is None or tile.locked:
            logger.debug("Ignoring selection of tile %s", tile_id)
            return False
        will_select = not tile.selected
        for member in self.group_members(tile_id):
            member.selected = will_select and not member.locked
        return will_select

    def select_only_group(self, tile_id: int) -> None:
        group = self.group_id(tile_id)
        for tile in self.tiles:
            tile.selected = not tile.locked and self._groups.find(tile.id) == group

    # ---- mutation ----

    def translate(self, tiles: Iterable[Tile], dx: float, dy: float) -> None:
        """Move unlocked tiles by (dx, dy)."""
        for tile in tiles:
            if not tile.locked:
                tile.x += dx
                tile.y += dy

    def rotate(self, tiles: Iterable[Tile], delta: int) -> List[int]:
        """Rotate unlocked tiles by ``delta`` degrees (a multiple of 90).

        Returns:
            Ids of the tiles that actually rotated.
        """
        step = normalize_angle(delta)
        rotated = []
        for tile in tiles:
            if tile.locked:
                continue
            tile.angle = normalize_angle(tile.angle + step)
            rotated.append(tile.id)
        return rotated

    def lock(self, tile: Tile) -> None:
        """Freeze a tile on its home slot."""
        tile.x, tile.y = self.slot_of(tile)
        tile.angle = 0
        tile.locked = True
        tile.selected = False

    # ---- queries ----

    def solved(self) -> bool:
        return bool(self.tiles) and all(t.locked for t in self.tiles)

    def render_order(self) -> List[Tile]:
        """Locked tiles first so floating ones are drawn on top."""
        return sorted(self.tiles, key=lambda t: (not t.locked, t.id))
