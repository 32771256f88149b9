"""Shared fixtures for the engine and API tests."""

from typing import Callable, Generator, Optional

import pytest

from jigsaw_app.services.engine import PuzzleEngine, PuzzleOptions
from jigsaw_app.services.session_store import get_session_store
from jigsaw_shapes import CellEdges, EdgeMatrix, EdgeSign

# A board large enough that every tile of a small grid spawns clear of the play area.
BOARD_WIDTH = 2000
BOARD_HEIGHT = 1200


def uniform_edges(
    rows: int, cols: int, horizontal: EdgeSign = EdgeSign.TAB, vertical: EdgeSign = EdgeSign.TAB
) -> EdgeMatrix:
    """Edge matrix whose every left piece has ``horizontal`` on its right side
    and every upper piece has ``vertical`` on its bottom side.

    With the default tabs every pair of neighbours can merge.
    """
    return tuple(
        tuple(
            CellEdges(
                top=EdgeSign(-vertical) if r > 0 else EdgeSign.FLAT,
                right=horizontal if c < cols - 1 else EdgeSign.FLAT,
                bottom=vertical if r < rows - 1 else EdgeSign.FLAT,
                left=EdgeSign(-horizontal) if c > 0 else EdgeSign.FLAT,
            )
            for c in range(cols)
        )
        for r in range(rows)
    )


def park_tiles(engine: PuzzleEngine) -> None:
    """Line every tile up in the staging band above the play area, far from any neighbour offset."""
    count = len(engine.state.tiles)
    engine.state.reset([(-600.0 + 130.0 * i, -240.0) for i in range(count)])


@pytest.fixture
def make_engine() -> Callable[..., PuzzleEngine]:
    """Build an engine on the large test board with its tiles parked.

    Without explicit ``edges`` the puzzle uses ``uniform_edges`` with the
    given ``horizontal`` and ``vertical`` signs; the default tabs let any two
    neighbours interlock.
    """

    def factory(
        rows: int = 3,
        cols: int = 3,
        edges: Optional[EdgeMatrix] = None,
        horizontal: EdgeSign = EdgeSign.TAB,
        vertical: EdgeSign = EdgeSign.TAB,
        **options: object,
    ) -> PuzzleEngine:
        if edges is None:
            edges = uniform_edges(rows, cols, horizontal, vertical)
        engine = PuzzleEngine(
            PuzzleOptions(
                image_url="test.png",
                rows=rows,
                cols=cols,
                board_width=BOARD_WIDTH,
                board_height=BOARD_HEIGHT,
                **options,  # type: ignore[arg-type]
            ),
            edges=edges,
        )
        park_tiles(engine)
        return engine

    return factory


@pytest.fixture(autouse=True)
def clear_sessions() -> Generator[None, None, None]:
    """Start every test with an empty session store."""
    get_session_store().clear()
    yield
    get_session_store().clear()
