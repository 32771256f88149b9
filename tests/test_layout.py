"""Tests for board geometry and spawn positions."""

import pytest

from jigsaw_app.services.engine import BoardLayout, generate_spawn_positions
from jigsaw_app.services.engine.layout import Rect
from jigsaw_shapes import SeededRandom


class TestBoardLayout:
    """Tests for BoardLayout."""

    def test_default_board_geometry(self) -> None:
        layout = BoardLayout.from_board(1100, 800, 4, 4)
        assert (layout.tile_width, layout.tile_height) == (150, 150)
        assert (layout.offset_x, layout.offset_y) == (250, 100)
        assert layout.knob_size == pytest.approx(33.0)
        assert layout.overhang == 39

    @pytest.mark.parametrize(
        "board,expected_play",
        [((400, 400), 400), ((1100, 800), 600), ((3000, 3000), 720)],
    )
    def test_play_area_is_clamped(self, board: tuple[int, int], expected_play: int) -> None:
        layout = BoardLayout.from_board(board[0], board[1], 1, 1)
        assert layout.play_width == expected_play
        assert layout.play_height == expected_play

    def test_slot_positions(self) -> None:
        layout = BoardLayout.from_board(1100, 800, 3, 4)
        assert layout.slot_position(0, 0) == (0.0, 0.0)
        assert layout.slot_position(2, 3) == (3 * layout.tile_width, 2 * layout.tile_height)

    def test_clamp_position(self) -> None:
        layout = BoardLayout.from_board(1100, 800, 4, 4)
        min_x, min_y, max_x, max_y = layout.bounds()
        assert layout.clamp_position(-1e9, 1e9) == (min_x, max_y)
        assert layout.clamp_position(10.0, 20.0) == (10.0, 20.0)

    def test_clamp_delta_keeps_the_set_rigid(self) -> None:
        layout = BoardLayout.from_board(1100, 800, 4, 4)
        min_x, _, max_x, _ = layout.bounds()
        positions = [(0.0, 0.0), (150.0, 0.0)]
        dx, dy = layout.clamp_delta(positions, 1e6, 5.0)
        assert dx == max_x - 150.0
        assert dy == 5.0
        dx, _ = layout.clamp_delta(positions, -1e6, 0.0)
        assert dx == min_x

    def test_clamp_delta_without_positions(self) -> None:
        layout = BoardLayout.from_board(1100, 800, 4, 4)
        assert layout.clamp_delta([], 3.0, 4.0) == (3.0, 4.0)


class TestRect:
    """Tests for Rect.overlaps."""

    def test_touching_rects_do_not_overlap(self) -> None:
        assert not Rect(0, 0, 10, 10).overlaps(Rect(10, 0, 10, 10))

    def test_gap_counts_as_overlap(self) -> None:
        assert Rect(0, 0, 10, 10).overlaps(Rect(12, 0, 10, 10), gap=4)


class TestSpawnPositions:
    """Tests for generate_spawn_positions."""

    def test_spawns_in_the_staging_bands(self) -> None:
        layout = BoardLayout.from_board(2000, 1200, 3, 3)
        positions = generate_spawn_positions(layout, 9, SeededRandom("spawn"))
        rects = [Rect(x, y, layout.tile_width, layout.tile_height) for x, y in positions]

        assert len(positions) == 9
        assert not any(rect.overlaps(layout.play_rect) for rect in rects)
        for i, rect in enumerate(rects):
            assert not any(rect.overlaps(other) for other in rects[i + 1 :])

    def test_spawns_are_deterministic(self) -> None:
        layout = BoardLayout.from_board(1100, 800, 4, 4)
        first = generate_spawn_positions(layout, 16, SeededRandom("same"))
        second = generate_spawn_positions(layout, 16, SeededRandom("same"))
        assert first == second

    def test_crowded_board_still_places_every_tile_in_bounds(self) -> None:
        layout = BoardLayout.from_board(1100, 800, 6, 6)
        min_x, min_y, max_x, max_y = layout.bounds()
        positions = generate_spawn_positions(layout, 36, SeededRandom("crowded"))
        assert len(positions) == 36
        assert all(min_x <= x <= max_x and min_y <= y <= max_y for x, y in positions)
