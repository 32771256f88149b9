"""Generate and cache jigsaw piece outlines for a puzzle grid.

This module provides the PieceShapeGenerator class that turns the edge
matrix of a puzzle into per-piece outlines and silhouette masks.
"""

from typing import Dict, Optional, Tuple

import numpy as np
from jigsaw_shapes import (
    DEFAULT_KNOB_RATIO,
    CellEdges,
    EdgeMatrix,
    PieceOutline,
    build_piece_path,
    calculate_piece_bounds,
    create_piece_mask,
    default_knob_size,
    generate_piece_polygon,
)

OutlineKey = Tuple[int, int, CellEdges, float, float]


class PieceShapeGenerator:
    """Build piece outlines and keep them until the grid or piece size changes."""

    def __init__(self, knob_ratio: float = DEFAULT_KNOB_RATIO):
        """Initialize the generator.

        Args:
            knob_ratio: Knob radius relative to the shorter piece side (0.2-0.25 typical).
        """
        self.knob_ratio = knob_ratio
        self._cache: Dict[OutlineKey, PieceOutline] = {}

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        """Drop every cached outline."""
        self._cache.clear()

    def outline(self, row: int, col: int, edges: CellEdges, width: float, height: float) -> PieceOutline:
        """Return the outline of the piece at (row, col), building it on first use."""
        key = (row, col, edges, float(width), float(height))
        outline = self._cache.get(key)
        if outline is None:
            knob = default_knob_size(width, height, self.knob_ratio)
            outline = build_piece_path(float(width), float(height), edges, knob)
            self._cache[key] = outline
        return outline

    def svg_path(self, row: int, col: int, edges: CellEdges, width: float, height: float) -> str:
        return self.outline(row, col, edges, width, height).to_svg_path()

    def outlines_for(self, edge_matrix: EdgeMatrix, width: float, height: float) -> Dict[Tuple[int, int], PieceOutline]:
        """Outlines of every piece in a grid, keyed by (row, col)."""
        return {
            (r, c): self.outline(r, c, cell, width, height)
            for r, row in enumerate(edge_matrix)
            for c, cell in enumerate(row)
        }

    def create_piece_mask(
        self,
        outline: PieceOutline,
        padding: Optional[int] = None,
        points_per_curve: int = 30,
    ) -> Tuple[np.ndarray, Tuple[int, int]]:
        """Create a hard-edged binary silhouette mask for one piece.

        The mask covers the piece cell plus ``padding`` pixels on every side
        so tabs fit inside it.

        Args:
            outline: Outline to rasterise.
            padding: Margin around the cell; defaults to the knob radius plus 2.
            points_per_curve: Sampling density of the curved segments.

        Returns:
            Tuple of (mask array holding only 255 inside and 0 outside, (x, y)
            of the mask's top-left corner relative to the piece cell).
        """
        if padding is None:
            padding = int(default_knob_size(outline.width, outline.height, self.knob_ratio)) + 2
        polygon = generate_piece_polygon(outline, points_per_curve=points_per_curve)
        x1, y1, x2, y2 = calculate_piece_bounds(polygon, padding=padding)
        mask = create_piece_mask(polygon, x2 - x1, y2 - y1, offset_x=x1, offset_y=y1, antialias_scale=1)
        return np.array(mask), (x1, y1)
