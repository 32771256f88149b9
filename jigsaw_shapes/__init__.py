"""Jigsaw shapes - geometry library for interlocking puzzle pieces.

This package provides a seeded random source, the edge matrix that decides
which side of every shared boundary carries the tab, piece outlines built
from cubic Bezier curves, and helpers to rasterise those outlines.
"""

from .edge_grid import (
    EdgeMatrix,
    build_edges,
    generate_edge_matrix,
    get_opposite_edge_sign,
    is_border_cell,
    puzzle_seed,
    validate_edge_matrix,
)
from .geometry import DEFAULT_KNOB_RATIO, build_piece_path, default_knob_size, generate_knob_edge, generate_piece_path
from .image_masking import calculate_piece_bounds, create_piece_mask, generate_piece_polygon
from .models import SIDES, BezierCurve, CellEdges, EdgeSign, PieceOutline
from .rng import SeededRandom, hash_string, mulberry32

__all__ = [
    # Models
    "SIDES",
    "BezierCurve",
    "CellEdges",
    "EdgeSign",
    "PieceOutline",
    # Random
    "SeededRandom",
    "hash_string",
    "mulberry32",
    # Edge grid
    "EdgeMatrix",
    "build_edges",
    "generate_edge_matrix",
    "get_opposite_edge_sign",
    "is_border_cell",
    "puzzle_seed",
    "validate_edge_matrix",
    # Geometry
    "DEFAULT_KNOB_RATIO",
    "build_piece_path",
    "default_knob_size",
    "generate_knob_edge",
    "generate_piece_path",
    # Image masking
    "calculate_piece_bounds",
    "create_piece_mask",
    "generate_piece_polygon",
]
