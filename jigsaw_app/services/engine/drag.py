"""Pointer driven movement of tile groups."""

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .layout import clamp
from .state import PuzzleState, Tile

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

# The magnet engages within this multiple of the snap tolerance.
MAGNET_RANGE_FACTOR = 1.5


@dataclass
class DragSession:
    """Bookkeeping for one pointer-down .. pointer-up interaction.

    Attributes:
        anchor_id: The tile the pointer went down on.
        tile_ids: Every tile moving with the pointer.
        origin: Pointer position at drag start.
        start_positions: Tile positions at drag start, keyed by tile id.
        last_pointer: Most recent finite pointer position.
    """

    anchor_id: int
    tile_ids: List[int]
    origin: Point
    start_positions: Dict[int, Point] = field(default_factory=dict)
    last_pointer: Optional[Point] = None


def _finite(value: float, fallback: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    return number if math.isfinite(number) else fallback


class DragController:
    """Translates pointer input into rigid movement of unlocked tiles."""

    def __init__(self, state: PuzzleState):
        self.state = state
        self.session: Optional[DragSession] = None

    @property
    def active(self) -> bool:
        return self.session is not None

    def begin(self, tile_id: int, pointer: Point, capture_mode: bool = False) -> List[int]:
        """Start dragging from ``tile_id``.

        In the default mode the drag set is the tile's group, which also
        becomes the selection. In capture mode the drag set is the current
        selection; pressing a tile outside it adds that tile's group first.

        Returns:
            Ids of the tiles being dragged (empty if nothing can move).
        """
        tile = self.state.tile(tile_id)
        if tile is None or tile.locked:
            logger.debug("Drag refused for tile %s (missing or locked)", tile_id)
            self.session = None
            return []

        if capture_mode:
            if not tile.selected:
                self.state.toggle_group_selection(tile_id)
        else:
            self.state.select_only_group(tile_id)

        dragged = [t for t in self.state.selected_tiles() if not t.locked]
        px = _finite(pointer[0], tile.x)
        py = _finite(pointer[1], tile.y)
        self.session = DragSession(
            anchor_id=tile_id,
            tile_ids=[t.id for t in dragged],
            origin=(px, py),
            start_positions={t.id: t.position for t in dragged},
            last_pointer=(px, py),
        )
        logger.debug("Drag started on tile %s moving %s", tile_id, self.session.tile_ids)
        return list(self.session.tile_ids)

    def dragged_tiles(self) -> List[Tile]:
        if self.session is None:
            return []
        tiles = (self.state.tile(i) for i in self.session.tile_ids)
        return [t for t in tiles if t is not None and not t.locked]

    def move(self, pointer: Point, snap_tolerance: float = 0.0, magnet: float = 0.0) -> None:
        """Move the drag set so it follows the pointer.

        Every dragged tile is shifted by the same pointer delta; the delta is
        clamped so the whole set stays inside the extended board bounds, which
        keeps the set rigid even at the edges. Non-finite coordinates reuse
        the previous pointer position.
        """
        session = self.session
        if session is None:
            return
        last = session.last_pointer or session.origin
        px = _finite(pointer[0], last[0])
        py = _finite(pointer[1], last[1])
        session.last_pointer = (px, py)

        tiles = self.dragged_tiles()
        if not tiles:
            return
        dx = px - session.origin[0]
        dy = py - session.origin[1]
        starts = [session.start_positions[t.id] for t in tiles]
        dx, dy = self.state.layout.clamp_delta(starts, dx, dy)

        if magnet > 0 and snap_tolerance > 0:
            dx, dy = self._magnet_pull(session, starts, dx, dy, snap_tolerance, magnet)

        for tile in tiles:
            sx, sy = session.start_positions[tile.id]
            tile.x = sx + dx
            tile.y = sy + dy

    def _magnet_pull(
        self,
        session: DragSession,
        starts: List[Point],
        dx: float,
        dy: float,
        snap_tolerance: float,
        magnet: float,
    ) -> Point:
        """Bend the delta toward the anchor tile's home slot when it is close."""
        anchor = self.state.tile(session.anchor_id)
        if anchor is None or anchor.locked or anchor.angle % 360 != 0:
            return (dx, dy)
        sx, sy = session.start_positions[anchor.id]
        slot_x, slot_y = self.state.slot_of(anchor)
        off_x = slot_x - (sx + dx)
        off_y = slot_y - (sy + dy)
        magnet_range = snap_tolerance * MAGNET_RANGE_FACTOR
        distance = max(abs(off_x), abs(off_y))
        if distance > magnet_range:
            return (dx, dy)
        strength = clamp((magnet_range - distance) / magnet_range, 0.0, 1.0) * magnet
        return self.state.layout.clamp_delta(starts, dx + off_x * strength, dy + off_y * strength)

    def finish(self) -> List[int]:
        """End the drag and return the ids that were being dragged."""
        if self.session is None:
            return []
        ids = [t.id for t in self.dragged_tiles()]
        self.session = None
        return ids

    def cancel(self) -> None:
        """Abandon any in-flight drag without touching tile positions."""
        if self.session is not None:
            logger.debug("Abandoning drag on tile %s", self.session.anchor_id)
        self.session = None
