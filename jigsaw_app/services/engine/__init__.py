"""Puzzle engine: tile state, dragging and snapping."""

from .drag import DragController, DragSession
from .engine import PuzzleEngine
from .layout import BoardLayout, generate_spawn_positions
from .options import PuzzleOptions
from .snap import DIRECTIONS, Direction, SnapEngine, SnapResult
from .state import PuzzleState, Tile, TileView, normalize_angle
from .union_find import UnionFind

__all__ = [
    "BoardLayout",
    "DIRECTIONS",
    "Direction",
    "DragController",
    "DragSession",
    "PuzzleEngine",
    "PuzzleOptions",
    "PuzzleState",
    "SnapEngine",
    "SnapResult",
    "Tile",
    "TileView",
    "UnionFind",
    "generate_spawn_positions",
    "normalize_angle",
]
