"""Tests for puzzle piece edge alignment.

These tests rasterise every piece of a grid onto one canvas and check that
the pieces tile the play area: tabs fill the blanks they plug into, with no
gaps and no double coverage beyond anti-aliasing noise.
"""

import numpy as np
import pytest

from jigsaw_app.services.piece_shape import PieceShapeGenerator
from jigsaw_shapes import create_piece_mask, generate_edge_matrix, generate_piece_polygon


def render_coverage(rows: int, cols: int, piece_size: int, padding: int, seed: str) -> np.ndarray:
    """Sum the anti-aliased masks of every piece.

    Args:
        rows: Number of rows.
        cols: Number of columns.
        piece_size: Size of each piece cell in pixels.
        padding: Margin around the grid so outer tabs would stay on the canvas.
        seed: Edge matrix seed.

    Returns:
        Float array where 1.0 means a pixel is covered exactly once.
    """
    edges = generate_edge_matrix(seed, rows, cols)
    outlines = PieceShapeGenerator().outlines_for(edges, piece_size, piece_size)
    canvas_w = cols * piece_size + 2 * padding
    canvas_h = rows * piece_size + 2 * padding
    coverage = np.zeros((canvas_h, canvas_w), dtype=float)
    for (r, c), outline in outlines.items():
        origin = (float(padding + c * piece_size), float(padding + r * piece_size))
        polygon = generate_piece_polygon(outline, origin=origin, points_per_curve=50)
        mask = create_piece_mask(polygon, canvas_w, canvas_h)
        coverage += np.asarray(mask, dtype=float) / 255.0
    return coverage


def bad_pixel_percentage(coverage: np.ndarray, padding: int) -> float:
    """Percentage of play-area pixels that are uncovered or covered twice."""
    h, w = coverage.shape
    inner = coverage[padding : h - padding, padding : w - padding]
    bad = (inner < 0.5) | (inner > 1.5)
    return 100.0 * float(np.sum(bad)) / inner.size


class TestEdgeAlignment:
    """Tests for edge alignment between adjacent pieces."""

    @pytest.mark.parametrize("seed", ["img1|4x4", "photo.png|4x4", "a|4x4"])
    def test_4x4_puzzle_tiles_the_board(self, seed: str) -> None:
        coverage = render_coverage(rows=4, cols=4, piece_size=100, padding=30, seed=seed)
        assert bad_pixel_percentage(coverage, padding=30) < 0.1

    @pytest.mark.parametrize("rows,cols", [(2, 2), (3, 3), (2, 4), (4, 2)])
    def test_various_grid_sizes_tile_the_board(self, rows: int, cols: int) -> None:
        coverage = render_coverage(rows=rows, cols=cols, piece_size=80, padding=25, seed=f"grid|{rows}x{cols}")
        assert bad_pixel_percentage(coverage, padding=25) < 0.1

    def test_tab_covers_the_blank_exactly(self) -> None:
        coverage = render_coverage(rows=1, cols=2, piece_size=200, padding=50, seed="pair")
        h, w = coverage.shape
        inner = coverage[50 : h - 50, 50 : w - 50]
        # The knob region around the shared side is covered once.
        knob_band = inner[60:140, 160:240]
        assert float(np.mean(np.abs(knob_band - 1.0))) < 0.02

    def test_outer_tabs_never_leave_the_grid(self) -> None:
        coverage = render_coverage(rows=3, cols=3, piece_size=60, padding=20, seed="outer")
        assert float(np.sum(coverage[:18, :])) == 0.0
        assert float(np.sum(coverage[:, :18])) == 0.0
