"""Board geometry: slots, staging bounds and spawn positions.

Coordinates are board pixels with the origin at the top-left corner of the
play area, so the home slot of a tile is simply ``(col * tile_width, row *
tile_height)``. The staging margin around the play area has negative (or
beyond-board) coordinates.
"""

import math
from dataclasses import dataclass
from typing import List, Tuple

from jigsaw_shapes import SeededRandom, default_knob_size

Point = Tuple[float, float]

# Play area side length limits in pixels.
MIN_PLAY_SIZE = 400
MAX_PLAY_SIZE = 720
PLAY_FRACTION = 0.75


@dataclass(frozen=True)
class Rect:
    """Axis aligned rectangle."""

    x: float
    y: float
    w: float
    h: float

    def overlaps(self, other: "Rect", gap: float = 0.0) -> bool:
        return not (
            self.x + self.w + gap <= other.x
            or other.x + other.w + gap <= self.x
            or self.y + self.h + gap <= other.y
            or other.y + other.h + gap <= self.y
        )


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class BoardLayout:
    """Pixel geometry of one puzzle board.

    Attributes:
        rows: Number of piece rows.
        cols: Number of piece columns.
        tile_width: Width of a piece cell in pixels.
        tile_height: Height of a piece cell in pixels.
        offset_x: Width of the staging band left of the play area.
        offset_y: Height of the staging band above the play area.
        board_width: Total board width (play area plus staging bands).
        board_height: Total board height.
        knob_size: Knob radius of the piece outlines.
    """

    rows: int
    cols: int
    tile_width: int
    tile_height: int
    offset_x: int
    offset_y: int
    board_width: int
    board_height: int
    knob_size: float

    @classmethod
    def from_board(
        cls,
        board_width: int,
        board_height: int,
        rows: int,
        cols: int,
        knob_ratio: float = 0.22,
    ) -> "BoardLayout":
        """Fit a square play area in the middle of the board and divide it into cells."""
        play_size = min(MAX_PLAY_SIZE, max(MIN_PLAY_SIZE, math.floor(min(board_width, board_height) * PLAY_FRACTION)))
        tile_width = max(1, play_size // cols)
        tile_height = max(1, play_size // rows)
        board_width = max(board_width, tile_width * cols)
        board_height = max(board_height, tile_height * rows)
        return cls(
            rows=rows,
            cols=cols,
            tile_width=tile_width,
            tile_height=tile_height,
            offset_x=(board_width - tile_width * cols) // 2,
            offset_y=(board_height - tile_height * rows) // 2,
            board_width=board_width,
            board_height=board_height,
            knob_size=default_knob_size(tile_width, tile_height, knob_ratio),
        )

    @property
    def play_width(self) -> int:
        return self.tile_width * self.cols

    @property
    def play_height(self) -> int:
        return self.tile_height * self.rows

    @property
    def overhang(self) -> int:
        """How far a tile may hang past the board edge (the knob plus a little)."""
        return round(self.knob_size + 6)

    @property
    def play_rect(self) -> Rect:
        return Rect(0, 0, self.play_width, self.play_height)

    @property
    def outer_rect(self) -> Rect:
        return Rect(-self.offset_x, -self.offset_y, self.board_width, self.board_height)

    def slot_position(self, row: int, col: int) -> Point:
        """Home position of the tile designed for cell (row, col)."""
        return (float(col * self.tile_width), float(row * self.tile_height))

    def bounds(self) -> Tuple[float, float, float, float]:
        """Extended (min_x, min_y, max_x, max_y) range for a tile's top-left corner."""
        outer = self.outer_rect
        return (
            outer.x - self.overhang,
            outer.y - self.overhang,
            outer.x + outer.w - self.tile_width + self.overhang,
            outer.y + outer.h - self.tile_height + self.overhang,
        )

    def clamp_position(self, x: float, y: float) -> Point:
        min_x, min_y, max_x, max_y = self.bounds()
        return (clamp(x, min_x, max_x), clamp(y, min_y, max_y))

    def clamp_delta(self, positions: List[Point], dx: float, dy: float) -> Point:
        """Limit a rigid translation so every position stays inside the bounds."""
        if not positions:
            return (dx, dy)
        min_x, min_y, max_x, max_y = self.bounds()
        low_dx = max(min_x - x for x, _ in positions)
        high_dx = min(max_x - x for x, _ in positions)
        low_dy = max(min_y - y for _, y in positions)
        high_dy = min(max_y - y for _, y in positions)
        # A set wider than the bounds cannot fit; keep it where it is on that axis.
        dx = clamp(dx, low_dx, high_dx) if low_dx <= high_dx else 0.0
        dy = clamp(dy, low_dy, high_dy) if low_dy <= high_dy else 0.0
        return (dx, dy)


def generate_spawn_positions(layout: BoardLayout, count: int, rng: SeededRandom) -> List[Point]:
    """Pick non-overlapping starting positions in the staging bands.

    Candidates are tile-sized cells laid out in the four bands around the
    play area, visited in seeded random order and taken greedily while they
    keep a gap to the ones already chosen. The gap shrinks when the bands run
    out of room, then free sampling outside the play area fills the rest, and
    any tile still without a spot gets a seeded position anywhere on the board.
    """
    tile_w, tile_h = layout.tile_width, layout.tile_height
    outer = layout.outer_rect
    play = layout.play_rect
    gap_base = max(10, round(min(tile_w, tile_h) * 0.12))

    bands = [
        Rect(outer.x, outer.y, play.x - outer.x, outer.h),
        Rect(play.x + play.w, outer.y, outer.x + outer.w - (play.x + play.w), outer.h),
        Rect(outer.x, outer.y, outer.w, play.y - outer.y),
        Rect(outer.x, play.y + play.h, outer.w, outer.y + outer.h - (play.y + play.h)),
    ]

    candidates: List[Rect] = []
    for band in bands:
        if band.w <= 0 or band.h <= 0:
            continue
        y = band.y
        while y <= band.y + band.h - tile_h:
            x = band.x
            while x <= band.x + band.w - tile_w:
                candidates.append(Rect(x, y, tile_w, tile_h))
                x += tile_w + gap_base
            y += tile_h + gap_base
    rng.shuffle(candidates)

    chosen: List[Rect] = []

    def try_select(rects: List[Rect], gap: float) -> None:
        for rect in rects:
            if len(chosen) >= count:
                return
            if rect in chosen:
                continue
            if all(not other.overlaps(rect, gap) for other in chosen):
                chosen.append(rect)

    try_select(candidates, gap_base)
    gap = gap_base
    while len(chosen) < count and gap > 2:
        gap = math.floor(gap * 0.7)
        try_select(candidates, gap)

    guard = 6000
    while len(chosen) < count and guard > 0:
        guard -= 1
        rect = Rect(
            outer.x + math.floor(rng() * max(1, outer.w - tile_w)),
            outer.y + math.floor(rng() * max(1, outer.h - tile_h)),
            tile_w,
            tile_h,
        )
        if rect.overlaps(play):
            continue
        if all(not other.overlaps(rect, 4) for other in chosen):
            chosen.append(rect)

    positions = [(float(rect.x), float(rect.y)) for rect in chosen[:count]]
    min_x, min_y, max_x, max_y = layout.bounds()
    while len(positions) < count:
        positions.append((rng.uniform(min_x, max_x), rng.uniform(min_y, max_y)))
    return positions
