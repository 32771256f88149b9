"""Puzzle options as received from the UI layer."""

import logging
import math
from dataclasses import asdict, dataclass, field, replace
from typing import Any

from jigsaw_shapes import puzzle_seed

from jigsaw_app.config import settings

logger = logging.getLogger(__name__)

# Options whose change invalidates the edge matrix and the tile set.
REBUILD_FIELDS = ("image_url", "rows", "cols", "board_width", "board_height", "knob_ratio")


def _as_int(value: Any, default: int, low: int, high: int) -> int:
    """Coerce to an int in [low, high]; non-numeric or non-positive values fall back to ``default``."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number) or number < 1:
        return default
    return int(min(high, max(low, int(number))))


def _as_float(value: Any, default: float, low: float, high: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return min(high, max(low, number))


@dataclass
class PuzzleOptions:
    """Configuration of one puzzle.

    Attributes:
        image_url: Source image; part of the edge matrix seed.
        rows: Number of piece rows.
        cols: Number of piece columns.
        snap_tolerance: Slot-lock distance in pixels.
        edges_only: Hide interior unlocked tiles from ``visible_tiles``.
        rotation_mode: Whether rotation is reachable from user input.
        capture_mode: Click-to-select, then drag the selected set.
        magnet: Pull strength (0 to 1) toward the home slot while dragging; 0 disables.
        board_width: Total board width in pixels.
        board_height: Total board height in pixels.
        knob_ratio: Knob radius relative to the shorter tile side.
    """

    image_url: str = ""
    rows: int = field(default_factory=lambda: settings.DEFAULT_ROWS)
    cols: int = field(default_factory=lambda: settings.DEFAULT_COLS)
    snap_tolerance: float = field(default_factory=lambda: float(settings.DEFAULT_SNAP_TOLERANCE))
    edges_only: bool = False
    rotation_mode: bool = False
    capture_mode: bool = False
    magnet: float = 0.0
    board_width: int = field(default_factory=lambda: settings.BOARD_WIDTH)
    board_height: int = field(default_factory=lambda: settings.BOARD_HEIGHT)
    knob_ratio: float = field(default_factory=lambda: settings.KNOB_RATIO)

    @property
    def seed(self) -> str:
        return puzzle_seed(self.image_url, self.rows, self.cols)

    def sanitized(self) -> "PuzzleOptions":
        """Return a copy with every value clamped to something playable.

        A broken board is worse than a best-effort one, so invalid values are
        replaced by defaults instead of raising.
        """
        clean = replace(
            self,
            image_url=str(self.image_url or ""),
            rows=_as_int(self.rows, settings.DEFAULT_ROWS, 1, settings.MAX_GRID_SIZE),
            cols=_as_int(self.cols, settings.DEFAULT_COLS, 1, settings.MAX_GRID_SIZE),
            snap_tolerance=_as_float(
                self.snap_tolerance,
                float(settings.DEFAULT_SNAP_TOLERANCE),
                float(settings.MIN_SNAP_TOLERANCE),
                float(settings.MAX_SNAP_TOLERANCE),
            ),
            edges_only=bool(self.edges_only),
            rotation_mode=bool(self.rotation_mode),
            capture_mode=bool(self.capture_mode),
            magnet=_as_float(self.magnet, 0.0, 0.0, 1.0),
            board_width=_as_int(self.board_width, settings.BOARD_WIDTH, 1, 100_000),
            board_height=_as_int(self.board_height, settings.BOARD_HEIGHT, 1, 100_000),
            knob_ratio=_as_float(self.knob_ratio, settings.KNOB_RATIO, 0.05, 0.35),
        )
        if clean != self:
            logger.debug("Clamped puzzle options %s -> %s", asdict(self), asdict(clean))
        return clean

    def needs_rebuild(self, other: "PuzzleOptions") -> bool:
        """True if switching from ``self`` to ``other`` requires new edges and tiles."""
        return any(getattr(self, name) != getattr(other, name) for name in REBUILD_FIELDS)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
