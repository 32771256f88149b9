"""Rasterisation helpers for piece outlines.

Outlines are sampled into polygons in board pixel coordinates and filled
with Pillow. Renderers use the masks to clip the source image; the geometry
tests use them to check that neighbouring pieces tile the board without gaps
or overlaps.
"""

from typing import List, Sequence, Tuple

from PIL import Image, ImageDraw

from .geometry import generate_piece_path
from .models import PieceOutline, Point

Bounds = Tuple[int, int, int, int]


def generate_piece_polygon(
    outline: PieceOutline,
    origin: Point = (0.0, 0.0),
    points_per_curve: int = 20,
) -> List[Point]:
    """Place a sampled outline on the board.

    Args:
        outline: Piece outline in piece-local coordinates.
        origin: Board position of the piece's top-left corner.
        points_per_curve: Samples per curved segment.

    Returns:
        Closed polygon as (x, y) board coordinates.
    """
    xs, ys = generate_piece_path(outline, points_per_curve=points_per_curve)
    ox, oy = origin
    return [(x + ox, y + oy) for x, y in zip(xs, ys)]


def create_piece_mask(
    polygon: Sequence[Point],
    width: int,
    height: int,
    offset_x: float = 0.0,
    offset_y: float = 0.0,
    antialias_scale: int = 4,
) -> Image.Image:
    """Fill a polygon into an 8-bit coverage mask.

    The polygon is drawn ``antialias_scale`` times larger and box-filtered
    back down, so every output pixel holds the fraction of its area inside
    the piece (0 outside, 255 fully inside). Box filtering keeps coverage
    additive: two pieces sharing a boundary sum to roughly 255 along it.

    Args:
        polygon: Board coordinates of the outline.
        width: Mask width in pixels.
        height: Mask height in pixels.
        offset_x: Board x of the mask's left edge.
        offset_y: Board y of the mask's top edge.
        antialias_scale: Supersampling factor; 1 gives a hard-edged mask.

    Returns:
        Mode "L" image of size (width, height).
    """
    scale = antialias_scale
    canvas = Image.new("L", (width * scale, height * scale), 0)
    points = [((x - offset_x) * scale, (y - offset_y) * scale) for x, y in polygon]
    if len(points) >= 3:
        ImageDraw.Draw(canvas).polygon(points, fill=255)
    if scale == 1:
        return canvas
    return canvas.resize((width, height), Image.Resampling.BOX)


def calculate_piece_bounds(polygon: Sequence[Point], padding: int = 0) -> Bounds:
    """Integer box around a polygon, grown by ``padding`` on every side.

    Returns:
        (x_min, y_min, x_max, y_max) with exclusive maxima; all zeros for an
        empty polygon.
    """
    if not polygon:
        return (0, 0, 0, 0)
    left = min(x for x, _ in polygon)
    top = min(y for _, y in polygon)
    right = max(x for x, _ in polygon)
    bottom = max(y for _, y in polygon)
    return (int(left) - padding, int(top) - padding, int(right) + padding + 1, int(bottom) + padding + 1)
