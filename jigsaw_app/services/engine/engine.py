"""The puzzle engine: one object exposing every command and query."""

import logging
from dataclasses import replace
from typing import Any, List, Optional, Tuple

from jigsaw_shapes import EdgeMatrix, SeededRandom, generate_edge_matrix, hash_string

from jigsaw_app.services.piece_shape import PieceShapeGenerator

from .drag import DragController
from .layout import BoardLayout, generate_spawn_positions
from .options import PuzzleOptions
from .snap import SnapEngine, SnapResult
from .state import PuzzleState, Tile, TileView

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class PuzzleEngine:
    """Standalone puzzle engine.

    Commands (``shuffle``, ``select``, ``begin_drag``, ``move``, ``end_drag``,
    ``rotate``, ``configure``) mutate the state synchronously; renderers
    re-read ``tiles()``, ``visible_tiles()`` and ``solved()`` afterwards.

    Args:
        options: Puzzle options; sanitized on the way in.
        edges: Explicit edge matrix to use instead of the seeded one. Its
            shape overrides ``rows``/``cols``. Dropped on the next rebuild.
        shapes: Outline generator to use; a fresh one by default.
    """

    def __init__(
        self,
        options: Optional[PuzzleOptions] = None,
        edges: Optional[EdgeMatrix] = None,
        shapes: Optional[PieceShapeGenerator] = None,
    ):
        options = (options or PuzzleOptions()).sanitized()
        if edges is not None:
            options = replace(options, rows=len(edges), cols=len(edges[0]))
        self._options = options
        self._edge_override = edges
        self.shapes = shapes or PieceShapeGenerator(knob_ratio=options.knob_ratio)
        self.shuffle_count = 0
        self.edge_builds = 0
        self._build()

    # ---- construction ----

    def _build(self) -> None:
        options = self._options
        if self._edge_override is not None:
            edges = self._edge_override
        else:
            edges = generate_edge_matrix(options.seed, options.rows, options.cols)
            self.edge_builds += 1
        layout = BoardLayout.from_board(
            options.board_width, options.board_height, options.rows, options.cols, options.knob_ratio
        )
        self.state = PuzzleState(layout, edges)
        self.drag = DragController(self.state)
        self.snap = SnapEngine(self.state, options.snap_tolerance)
        self.shapes.clear()
        self.shapes.knob_ratio = options.knob_ratio
        logger.info("Built %sx%s puzzle for %r", options.rows, options.cols, options.image_url)
        self.shuffle()

    @property
    def options(self) -> PuzzleOptions:
        return self._options

    @property
    def layout(self) -> BoardLayout:
        return self.state.layout

    @property
    def edges(self) -> EdgeMatrix:
        return self.state.edges

    def configure(self, **changes: Any) -> bool:
        """Apply option changes.

        Changing the image, the grid or the board geometry abandons any drag
        and rebuilds the edge matrix and every tile; other options apply in
        place.

        Returns:
            True if the puzzle was rebuilt.
        """
        unknown = set(changes) - set(PuzzleOptions.__dataclass_fields__)
        if unknown:
            raise TypeError(f"Unknown puzzle options: {sorted(unknown)}")
        updated = replace(self._options, **changes).sanitized()
        rebuild = self._options.needs_rebuild(updated)
        self._options = updated
        self.snap.snap_tolerance = updated.snap_tolerance
        if rebuild:
            self.drag.cancel()
            self._edge_override = None
            self._build()
        return rebuild

    # ---- commands ----

    def shuffle(self) -> None:
        """Scatter fresh floating tiles around the board."""
        self.drag.cancel()
        self.shuffle_count += 1
        layout = self.state.layout
        spawn_seed = hash_string(
            f"spawn|{layout.board_width}x{layout.board_height}|{layout.rows}x{layout.cols}"
            f"|{self._options.seed}|{self.shuffle_count}"
        )
        positions = generate_spawn_positions(layout, layout.rows * layout.cols, SeededRandom(spawn_seed))
        self.state.reset(positions)
        logger.info("Shuffled %s tiles (shuffle #%s)", len(self.state.tiles), self.shuffle_count)

    def select(self, tile_id: int) -> bool:
        """Toggle selection of the group containing ``tile_id``."""
        return self.state.toggle_group_selection(tile_id)

    def begin_drag(self, tile_id: int, pointer: Point) -> List[int]:
        return self.drag.begin(tile_id, pointer, capture_mode=self._options.capture_mode)

    def move(self, pointer: Point) -> None:
        self.drag.move(pointer, snap_tolerance=self._options.snap_tolerance, magnet=self._options.magnet)

    def end_drag(self) -> SnapResult:
        """Release the pointer: lock, merge and check for a finished puzzle."""
        if not self.drag.active:
            logger.debug("end_drag without an active drag")
            return SnapResult(solved=self.solved())
        ids = self.drag.finish()
        result = self.snap.resolve(ids)
        if result.changed:
            logger.debug("Release of %s: locked=%s merges=%s", ids, result.locked, result.merges)
        return result

    def rotate(self, tile_id: int, delta: int = 90) -> List[int]:
        """Rotate the unlocked tiles of ``tile_id``'s group; locked tiles ignore it."""
        tile = self.state.tile(tile_id)
        if tile is None or tile.locked:
            logger.debug("Ignoring rotation of tile %s", tile_id)
            return []
        return self.state.rotate(self.state.group_members(tile_id), delta)

    def rotate_selected(self, delta: int = 90) -> List[int]:
        return self.state.rotate(self.state.selected_tiles(), delta)

    # ---- queries ----

    def _view(self, tile: Tile) -> TileView:
        layout = self.state.layout
        return TileView(
            id=tile.id,
            row=tile.row,
            col=tile.col,
            x=tile.x,
            y=tile.y,
            angle=tile.angle,
            locked=tile.locked,
            group_id=self.state.group_id(tile.id),
            selected=tile.selected,
            outline_path=self.shapes.svg_path(
                tile.row, tile.col, self.state.edges_of(tile), layout.tile_width, layout.tile_height
            ),
        )

    def tiles(self) -> List[TileView]:
        """Every tile in render order (locked first)."""
        return [self._view(t) for t in self.state.render_order()]

    def visible_tiles(self) -> List[TileView]:
        """Tiles a renderer should draw; ``edges_only`` hides interior floating pieces."""
        if not self._options.edges_only:
            return self.tiles()
        return [self._view(t) for t in self.state.render_order() if t.locked or self.state.is_border(t)]

    def solved(self) -> bool:
        return self.state.solved()
