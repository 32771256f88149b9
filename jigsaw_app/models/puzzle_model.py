"""Data models for puzzle-related operations."""

from typing import List, Optional

from pydantic import BaseModel, Field


class PuzzleConfigRequest(BaseModel):
    """Puzzle options sent by the UI; omitted fields keep their current value.

    Values are not range-checked here: the engine clamps anything unusable to
    a playable default instead of rejecting the request.
    """

    image_url: Optional[str] = Field(None, description="Source image URL; part of the piece seed")
    rows: Optional[int] = Field(None, description="Number of piece rows")
    cols: Optional[int] = Field(None, description="Number of piece columns")
    snap_tolerance: Optional[float] = Field(None, description="Slot-lock distance in pixels (6-64)")
    edges_only: Optional[bool] = Field(None, description="Hide interior floating pieces")
    rotation_mode: Optional[bool] = Field(None, description="Allow rotation from input")
    capture_mode: Optional[bool] = Field(None, description="Click to select, then drag the selection")
    magnet: Optional[float] = Field(None, description="Pull toward the home slot while dragging (0-1)")


class PointerRequest(BaseModel):
    """Pointer position in board coordinates."""

    x: float
    y: float


class BeginDragRequest(PointerRequest):
    """Pointer-down on a tile."""

    tile_id: int


class SelectRequest(BaseModel):
    """Toggle selection of a tile's group."""

    tile_id: int


class RotateRequest(BaseModel):
    """Rotate a tile's group, or the current selection when ``tile_id`` is omitted."""

    tile_id: Optional[int] = None
    delta: int = Field(90, multiple_of=90, description="Degrees, a multiple of 90 (negative for counter-clockwise)")


class OptionsResponse(BaseModel):
    """Effective (sanitized) options of a puzzle."""

    image_url: str
    rows: int
    cols: int
    snap_tolerance: float
    edges_only: bool
    rotation_mode: bool
    capture_mode: bool
    magnet: float


class TileResponse(BaseModel):
    """One tile as a renderer needs it."""

    id: int
    row: int
    col: int
    x: float
    y: float
    angle: int
    locked: bool
    group_id: int
    selected: bool
    outline_path: str = Field(..., description="SVG path of the piece outline in tile-local pixels")


class SnapResultResponse(BaseModel):
    """What happened when the pointer was released."""

    locked: List[int]
    merged: List[int] = Field(..., description="Ids of tiles whose group was absorbed")
    finalized: bool


class PuzzleStateResponse(BaseModel):
    """Full puzzle state after a command."""

    puzzle_id: str
    rows: int
    cols: int
    tile_width: int
    tile_height: int
    tiles: List[TileResponse]
    visible_tile_ids: List[int]
    solved: bool
    options: OptionsResponse
    snap: Optional[SnapResultResponse] = None
