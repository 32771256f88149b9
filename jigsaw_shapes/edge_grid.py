"""Edge matrix generation for a grid of interlocking pieces.

Each interior boundary is decided once, by the cell above it or to its left,
and the neighbouring cell takes the negated sign. Border sides are flat. The
resulting matrix is a pure function of the seed and the grid dimensions.
"""

from typing import Callable, List, Tuple, Union

from .models import CellEdges, EdgeSign
from .rng import hash_string, mulberry32

EdgeMatrix = Tuple[Tuple[CellEdges, ...], ...]


def _random_sign(rng: Callable[[], float]) -> EdgeSign:
    return EdgeSign.TAB if rng() > 0.5 else EdgeSign.BLANK


def build_edges(rows: int, cols: int, rng: Callable[[], float]) -> EdgeMatrix:
    """Build the rows x cols matrix of cell edges.

    Cells are visited in row-major order; for every cell the right side is
    drawn from ``rng`` before the bottom side. Top and left sides are copied
    (negated) from the neighbours that were already built.

    Args:
        rows: Number of piece rows.
        cols: Number of piece columns.
        rng: Float stream in [0, 1).

    Returns:
        Immutable matrix indexed as ``edges[row][col]``.
    """
    edges: List[List[CellEdges]] = []
    for r in range(rows):
        row: List[CellEdges] = []
        for c in range(cols):
            top = EdgeSign.FLAT if r == 0 else EdgeSign(-edges[r - 1][c].bottom)
            left = EdgeSign.FLAT if c == 0 else EdgeSign(-row[c - 1].right)
            right = EdgeSign.FLAT if c == cols - 1 else _random_sign(rng)
            bottom = EdgeSign.FLAT if r == rows - 1 else _random_sign(rng)
            row.append(CellEdges(top=top, right=right, bottom=bottom, left=left))
        edges.append(row)
    return tuple(tuple(row) for row in edges)


def generate_edge_matrix(seed: Union[str, int], rows: int, cols: int) -> EdgeMatrix:
    """Generate the edge matrix for a seed.

    Args:
        seed: String seed (hashed) or an already hashed 32-bit integer.
        rows: Number of piece rows.
        cols: Number of piece columns.

    Returns:
        The edge matrix; identical arguments always give an identical matrix.
    """
    numeric_seed = hash_string(seed) if isinstance(seed, str) else seed
    return build_edges(rows, cols, mulberry32(numeric_seed))


def puzzle_seed(image_url: str, rows: int, cols: int) -> str:
    """Seed string tying an interlock pattern to an image and grid size."""
    return f"{image_url}|{rows}x{cols}"


def get_opposite_edge_sign(sign: EdgeSign) -> EdgeSign:
    """Get the sign the touching neighbour must have (tab <-> blank, flat stays flat)."""
    return EdgeSign(-sign)


def is_border_cell(row: int, col: int, rows: int, cols: int) -> bool:
    """True if the cell touches the outer boundary of the grid."""
    return row == 0 or col == 0 or row == rows - 1 or col == cols - 1


def validate_edge_matrix(edges: EdgeMatrix) -> List[str]:
    """Check border flatness and neighbour complementarity.

    Returns:
        Human readable descriptions of every violation (empty when valid).
    """
    problems: List[str] = []
    rows = len(edges)
    cols = len(edges[0]) if rows else 0
    for r in range(rows):
        for c in range(cols):
            cell = edges[r][c]
            if r == 0 and cell.top != EdgeSign.FLAT:
                problems.append(f"({r}, {c}) top border is not flat")
            if r == rows - 1 and cell.bottom != EdgeSign.FLAT:
                problems.append(f"({r}, {c}) bottom border is not flat")
            if c == 0 and cell.left != EdgeSign.FLAT:
                problems.append(f"({r}, {c}) left border is not flat")
            if c == cols - 1 and cell.right != EdgeSign.FLAT:
                problems.append(f"({r}, {c}) right border is not flat")
            if r > 0 and cell.top != -edges[r - 1][c].bottom:
                problems.append(f"({r}, {c}) top does not complement ({r - 1}, {c}) bottom")
            if c > 0 and cell.left != -edges[r][c - 1].right:
                problems.append(f"({r}, {c}) left does not complement ({r}, {c - 1}) right")
            if 0 < r < rows - 1 and cell.bottom == EdgeSign.FLAT:
                problems.append(f"({r}, {c}) interior bottom is flat")
            if 0 < c < cols - 1 and cell.right == EdgeSign.FLAT:
                problems.append(f"({r}, {c}) interior right is flat")
    return problems
