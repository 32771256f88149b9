"""Geometric logic for generating puzzle piece outlines."""

from functools import lru_cache
from typing import List, Optional, Tuple

import numpy as np

from .models import BezierCurve, CellEdges, EdgeSign, PieceOutline, Point

# Kappa constant for a quarter-circle cubic Bezier approximation.
KAPPA = 0.552

# Default knob radius relative to the shorter piece dimension.
DEFAULT_KNOB_RATIO = 0.22


def default_knob_size(width: float, height: float, knob_ratio: float = DEFAULT_KNOB_RATIO) -> float:
    """Knob radius for a piece of the given pixel size."""
    return min(width, height) * knob_ratio


def generate_knob_edge(
    start: Point,
    end: Point,
    sign: EdgeSign,
    knob: float,
) -> List[BezierCurve]:
    """Generate one side of a piece as a list of cubic Bezier curves.

    A flat side is one straight segment. Otherwise the side is a straight
    shoulder, a half-circle knob of radius ``knob`` centred on the side built
    from two quarter arcs, and a second straight shoulder. A tab bulges out of
    the piece, a blank notches into it.

    The piece outline is walked clockwise in screen coordinates (y down), so
    the outward normal of a side running along ``edge_unit`` is
    ``(edge_unit.y, -edge_unit.x)``.

    Args:
        start: Start corner of the side.
        end: End corner of the side.
        sign: Edge sign of this side.
        knob: Knob radius in pixels.

    Returns:
        List of BezierCurve objects from ``start`` to ``end``.
    """
    if sign == EdgeSign.FLAT:
        return [BezierCurve.line(start, end)]

    p_start = np.array(start, dtype=float)
    p_end = np.array(end, dtype=float)
    edge_vec = p_end - p_start
    edge_unit = edge_vec / float(np.linalg.norm(edge_vec))
    outward = np.array([edge_unit[1], -edge_unit[0]])

    middle = (p_start + p_end) * 0.5
    apex = middle + outward * knob * int(sign)
    entry = middle - edge_unit * knob
    exit_ = middle + edge_unit * knob
    handle = knob * KAPPA

    def pt(v: np.ndarray) -> Point:
        return (float(v[0]), float(v[1]))

    return [
        BezierCurve.line(pt(p_start), pt(entry)),
        BezierCurve(pt(entry), pt(entry + edge_unit * handle), pt(apex - edge_unit * handle), pt(apex)),
        BezierCurve(pt(apex), pt(apex + edge_unit * handle), pt(exit_ - edge_unit * handle), pt(exit_)),
        BezierCurve.line(pt(exit_), pt(p_end)),
    ]


@lru_cache(maxsize=4096)
def build_piece_path(
    width: float,
    height: float,
    edges: CellEdges,
    knob_size: Optional[float] = None,
) -> PieceOutline:
    """Build the closed outline of one piece.

    The outline starts at the top-left corner and runs clockwise: top side
    left to right, right side top to bottom, bottom side right to left, left
    side bottom to top. Because a neighbour's shared side is built from the
    negated sign and runs in the opposite direction, a tab on one piece is the
    exact reversed copy of the blank on the piece next to it.

    Args:
        width: Piece width in pixels.
        height: Piece height in pixels.
        edges: Edge signs of the cell.
        knob_size: Knob radius; defaults to 0.22 of the shorter dimension.

    Returns:
        Immutable PieceOutline (cached per argument tuple).
    """
    knob = default_knob_size(width, height) if knob_size is None else knob_size
    corners = [(0.0, 0.0), (float(width), 0.0), (float(width), float(height)), (0.0, float(height))]
    sides: List[Tuple[BezierCurve, ...]] = []
    for i, sign in enumerate(edges):
        curves = generate_knob_edge(corners[i], corners[(i + 1) % 4], EdgeSign(sign), knob)
        sides.append(tuple(curves))
    return PieceOutline(width=float(width), height=float(height), edges=edges, sides=tuple(sides))


def generate_piece_path(outline: PieceOutline, points_per_curve: int = 20) -> Tuple[List[float], List[float]]:
    """Sample the complete path (x, y coordinates) of a piece outline.

    Straight segments contribute only their end points; curves are sampled
    with ``points_per_curve`` points.

    Args:
        outline: The piece outline.
        points_per_curve: Number of points to sample from each Bezier curve.

    Returns:
        Tuple of (x_coords, y_coords), closed (first point repeated last).
    """
    all_x: List[float] = []
    all_y: List[float] = []

    for curve in outline.curves:
        points = curve.get_points(2 if curve.is_line else points_per_curve)
        # Add all points except the last one to avoid duplication
        all_x.extend(points[:-1, 0].tolist())
        all_y.extend(points[:-1, 1].tolist())

    # Close the path by adding the very first point back
    all_x.append(all_x[0])
    all_y.append(all_y[0])

    return all_x, all_y
