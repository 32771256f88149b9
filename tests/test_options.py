"""Tests for puzzle options."""

import pytest

from jigsaw_app.services.engine import PuzzleOptions


class TestPuzzleOptions:
    """Tests for PuzzleOptions."""

    def test_defaults_come_from_settings(self) -> None:
        options = PuzzleOptions()
        assert (options.rows, options.cols) == (4, 4)
        assert options.snap_tolerance == 40.0
        assert not options.rotation_mode
        assert options.magnet == 0.0

    def test_seed_ties_image_and_grid(self) -> None:
        assert PuzzleOptions(image_url="img1", rows=2, cols=3).seed == "img1|2x3"

    def test_sanitized_keeps_valid_values(self) -> None:
        options = PuzzleOptions(image_url="a.png", rows=5, cols=7, snap_tolerance=25.0)
        assert options.sanitized() == options

    @pytest.mark.parametrize(
        "value,expected",
        [("6", 6), (3.7, 3), (None, 4), ("abc", 4), (float("inf"), 4), (0, 4), (21, 20)],
    )
    def test_grid_size_coercion(self, value: object, expected: int) -> None:
        assert PuzzleOptions(rows=value).sanitized().rows == expected  # type: ignore[arg-type]

    def test_image_url_none_becomes_empty(self) -> None:
        assert PuzzleOptions(image_url=None).sanitized().image_url == ""  # type: ignore[arg-type]

    def test_needs_rebuild(self) -> None:
        base = PuzzleOptions(image_url="a.png")
        assert base.needs_rebuild(PuzzleOptions(image_url="b.png"))
        assert base.needs_rebuild(PuzzleOptions(image_url="a.png", rows=5))
        assert not base.needs_rebuild(PuzzleOptions(image_url="a.png", snap_tolerance=12, edges_only=True))

    def test_to_dict(self) -> None:
        data = PuzzleOptions(image_url="a.png").to_dict()
        assert data["image_url"] == "a.png"
        assert data["rows"] == 4
        assert "knob_ratio" in data
