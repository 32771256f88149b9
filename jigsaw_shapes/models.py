"""Data models for jigsaw piece edges and outlines."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, Tuple

import numpy as np

Point = Tuple[float, float]


class EdgeSign(IntEnum):
    """Shape of one side of a cell.

    The values are chosen so that the touching side of a neighbouring cell is
    always the arithmetic negation (TAB <-> BLANK, FLAT stays FLAT).
    """

    FLAT = 0
    TAB = 1
    BLANK = -1


SIDES = ("top", "right", "bottom", "left")


@dataclass(frozen=True)
class CellEdges:
    """The four edge signs of a single grid cell."""

    top: EdgeSign = EdgeSign.FLAT
    right: EdgeSign = EdgeSign.FLAT
    bottom: EdgeSign = EdgeSign.FLAT
    left: EdgeSign = EdgeSign.FLAT

    def side(self, name: str) -> EdgeSign:
        """Return the sign of the side called ``name`` ("top", "right", ...)."""
        if name not in SIDES:
            raise ValueError(f"Unknown side: {name!r}")
        return getattr(self, name)

    def __iter__(self) -> Iterator[EdgeSign]:
        return iter((self.top, self.right, self.bottom, self.left))

    def to_dict(self) -> dict[str, int]:
        """Convert to dictionary for JSON serialization."""
        return {name: int(sign) for name, sign in zip(SIDES, self)}


@dataclass(frozen=True)
class BezierCurve:
    """A cubic Bezier curve defined by 4 control points."""

    p0: Point  # Start point
    p1: Point  # Control point 1
    p2: Point  # Control point 2
    p3: Point  # End point

    @classmethod
    def line(cls, start: Point, end: Point) -> "BezierCurve":
        """Straight segment as a degenerate curve (control points on the line)."""
        return cls(start, start, end, end)

    @property
    def is_line(self) -> bool:
        return self.p0 == self.p1 and self.p2 == self.p3

    def evaluate(self, t: float) -> Point:
        """Evaluate the curve at parameter t (0 to 1)."""
        t2 = t * t
        t3 = t2 * t
        mt = 1 - t
        mt2 = mt * mt
        mt3 = mt2 * mt

        x = mt3 * self.p0[0] + 3 * mt2 * t * self.p1[0] + 3 * mt * t2 * self.p2[0] + t3 * self.p3[0]
        y = mt3 * self.p0[1] + 3 * mt2 * t * self.p1[1] + 3 * mt * t2 * self.p2[1] + t3 * self.p3[1]
        return (x, y)

    def get_points(self, num_points: int = 50) -> np.ndarray:
        """Generate points along the curve."""
        t_values = np.linspace(0, 1, num_points)
        points = [self.evaluate(t) for t in t_values]
        return np.array(points)

    def reversed(self) -> "BezierCurve":
        """The same curve traversed from p3 back to p0."""
        return BezierCurve(self.p3, self.p2, self.p1, self.p0)

    def translated(self, dx: float, dy: float) -> "BezierCurve":
        """The same curve shifted by (dx, dy)."""

        def shift(p: Point) -> Point:
            return (p[0] + dx, p[1] + dy)

        return BezierCurve(shift(self.p0), shift(self.p1), shift(self.p2), shift(self.p3))


@dataclass(frozen=True)
class PieceOutline:
    """Closed outline of one piece in piece-local pixel coordinates.

    ``sides`` holds the curves of the top, right, bottom and left side, in
    that order; walking them in sequence traces the outline clockwise starting
    at the piece's top-left corner (0, 0).
    """

    width: float
    height: float
    edges: CellEdges
    sides: Tuple[Tuple[BezierCurve, ...], ...]

    @property
    def curves(self) -> List[BezierCurve]:
        return [curve for side in self.sides for curve in side]

    def side_curves(self, name: str) -> Tuple[BezierCurve, ...]:
        return self.sides[SIDES.index(name)]

    def to_svg_path(self) -> str:
        """Serialise as an SVG path (``M``, ``L``, ``C`` and ``Z`` commands)."""
        parts = ["M 0 0"]
        for side_index, side in enumerate(self.sides):
            for curve_index, curve in enumerate(side):
                closing = side_index == 3 and curve_index == len(side) - 1
                if curve.is_line:
                    if not closing:
                        parts.append(f"L {_fmt(curve.p3[0])} {_fmt(curve.p3[1])}")
                else:
                    parts.append(
                        "C "
                        + " ".join(f"{_fmt(p[0])} {_fmt(p[1])}" for p in (curve.p1, curve.p2, curve.p3))
                    )
        parts.append("Z")
        return " ".join(parts)


def _fmt(value: float) -> str:
    """Format a coordinate compactly (no trailing zeros, no negative zero)."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text
