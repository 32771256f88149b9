"""Main FastAPI application module for the jigsaw puzzle engine."""

import logging
from dataclasses import asdict
from typing import Annotated, Iterator, Optional

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware

from jigsaw_app.config import settings
from jigsaw_app.models.puzzle_model import (
    BeginDragRequest,
    OptionsResponse,
    PointerRequest,
    PuzzleConfigRequest,
    PuzzleStateResponse,
    RotateRequest,
    SelectRequest,
    SnapResultResponse,
    TileResponse,
)
from jigsaw_app.services.engine import PuzzleOptions, SnapResult
from jigsaw_app.services.session_store import PuzzleSession, SessionStore, get_session_store

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Apply the configured log level to the application loggers."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


configure_logging()

# Initialize FastAPI app
app = FastAPI(title=settings.PROJECT_NAME)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

PUZZLES = f"{settings.API_V1_STR}/puzzles"

Store = Annotated[SessionStore, Depends(get_session_store)]


def locked_session(puzzle_id: str, store: Store) -> Iterator[PuzzleSession]:
    """Resolve a puzzle id and hold its lock for the duration of the request.

    Raises:
        HTTPException: If the puzzle does not exist.
    """
    session = store.get(puzzle_id)
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Puzzle not found")
    with session.lock:
        yield session


Session = Annotated[PuzzleSession, Depends(locked_session)]


def build_state_response(session: PuzzleSession, snap: Optional[SnapResult] = None) -> PuzzleStateResponse:
    """Snapshot an engine into the response model."""
    engine = session.engine
    options = engine.options
    return PuzzleStateResponse(
        puzzle_id=session.puzzle_id,
        rows=engine.layout.rows,
        cols=engine.layout.cols,
        tile_width=engine.layout.tile_width,
        tile_height=engine.layout.tile_height,
        tiles=[TileResponse(**asdict(view)) for view in engine.tiles()],
        visible_tile_ids=[view.id for view in engine.visible_tiles()],
        solved=engine.solved(),
        options=OptionsResponse(
            image_url=options.image_url,
            rows=options.rows,
            cols=options.cols,
            snap_tolerance=options.snap_tolerance,
            edges_only=options.edges_only,
            rotation_mode=options.rotation_mode,
            capture_mode=options.capture_mode,
            magnet=options.magnet,
        ),
        snap=(
            SnapResultResponse(
                locked=snap.locked,
                merged=[absorbed for _, absorbed in snap.merges],
                finalized=snap.finalized,
            )
            if snap is not None
            else None
        ),
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post(PUZZLES, response_model=PuzzleStateResponse, status_code=status.HTTP_201_CREATED)
def create_puzzle(config: PuzzleConfigRequest, store: Store) -> PuzzleStateResponse:
    """Create a puzzle and shuffle its pieces around the board.

    Args:
        config: Puzzle options; omitted values use the configured defaults.

    Returns:
        PuzzleStateResponse: The freshly shuffled puzzle.
    """
    options = PuzzleOptions(**config.model_dump(exclude_none=True))
    session = store.create(options)
    with session.lock:
        return build_state_response(session)


@app.get(PUZZLES + "/{puzzle_id}", response_model=PuzzleStateResponse)
def get_puzzle(session: Session) -> PuzzleStateResponse:
    """Return the current state of a puzzle."""
    return build_state_response(session)


@app.delete(PUZZLES + "/{puzzle_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_puzzle(puzzle_id: str, store: Store) -> None:
    """Discard a puzzle.

    Raises:
        HTTPException: If the puzzle does not exist.
    """
    if not store.delete(puzzle_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Puzzle not found")


@app.patch(PUZZLES + "/{puzzle_id}/config", response_model=PuzzleStateResponse)
def update_config(config: PuzzleConfigRequest, session: Session) -> PuzzleStateResponse:
    """Change puzzle options; a new image or grid size rebuilds and reshuffles."""
    session.engine.configure(**config.model_dump(exclude_none=True))
    return build_state_response(session)


@app.post(PUZZLES + "/{puzzle_id}/shuffle", response_model=PuzzleStateResponse)
def shuffle_puzzle(session: Session) -> PuzzleStateResponse:
    """Reshuffle every piece."""
    session.engine.shuffle()
    return build_state_response(session)


@app.post(PUZZLES + "/{puzzle_id}/select", response_model=PuzzleStateResponse)
def select_tile(request: SelectRequest, session: Session) -> PuzzleStateResponse:
    """Toggle selection of a tile's group."""
    session.engine.select(request.tile_id)
    return build_state_response(session)


@app.post(PUZZLES + "/{puzzle_id}/drag/begin", response_model=PuzzleStateResponse)
def begin_drag(request: BeginDragRequest, session: Session) -> PuzzleStateResponse:
    """Pointer-down on a tile."""
    session.engine.begin_drag(request.tile_id, (request.x, request.y))
    return build_state_response(session)


@app.post(PUZZLES + "/{puzzle_id}/drag/move", response_model=PuzzleStateResponse)
def move_drag(request: PointerRequest, session: Session) -> PuzzleStateResponse:
    """Pointer-move while dragging."""
    session.engine.move((request.x, request.y))
    return build_state_response(session)


@app.post(PUZZLES + "/{puzzle_id}/drag/end", response_model=PuzzleStateResponse)
def end_drag(session: Session) -> PuzzleStateResponse:
    """Pointer-up: lock pieces onto their slots and merge matching neighbours."""
    result = session.engine.end_drag()
    return build_state_response(session, snap=result)


@app.post(PUZZLES + "/{puzzle_id}/rotate", response_model=PuzzleStateResponse)
def rotate(request: RotateRequest, session: Session) -> PuzzleStateResponse:
    """Rotate a tile's group or the current selection.

    Raises:
        HTTPException: If rotation mode is switched off for this puzzle.
    """
    engine = session.engine
    if not engine.options.rotation_mode:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Rotation mode is disabled")
    if request.tile_id is None:
        engine.rotate_selected(request.delta)
    else:
        engine.rotate(request.tile_id, request.delta)
    return build_state_response(session)
