"""Piece shape generation service for jigsaw piece outlines."""

from .generator import PieceShapeGenerator

__all__ = ["PieceShapeGenerator"]
