"""Test module for the FastAPI puzzle engine application."""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from jigsaw_app.main import app, settings
from jigsaw_app.services.session_store import get_session_store

client = TestClient(app)

PUZZLES = f"{settings.API_V1_STR}/puzzles"


def create_puzzle(**config: Any) -> dict[str, Any]:
    body = {"image_url": "photo.jpg", "rows": 3, "cols": 3}
    body.update(config)
    response = client.post(PUZZLES, json=body)
    assert response.status_code == 201
    return response.json()


def tile_by_id(state: dict[str, Any], tile_id: int) -> dict[str, Any]:
    return next(t for t in state["tiles"] if t["id"] == tile_id)


def test_health_check() -> None:
    """Test the health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_create_puzzle() -> None:
    """Test creating a puzzle returns a shuffled board."""
    state = create_puzzle()
    assert state["rows"] == 3 and state["cols"] == 3
    assert len(state["tiles"]) == 9
    assert sorted(state["visible_tile_ids"]) == list(range(9))
    assert not state["solved"]
    assert state["snap"] is None
    assert all(t["outline_path"].startswith("M 0 0") for t in state["tiles"])
    assert len(get_session_store()) == 1


def test_create_puzzle_clamps_options() -> None:
    """Test that unusable options are clamped instead of rejected."""
    state = create_puzzle(rows=0, cols=99, snap_tolerance=500)
    assert state["options"]["rows"] == settings.DEFAULT_ROWS
    assert state["options"]["cols"] == settings.MAX_GRID_SIZE
    assert state["options"]["snap_tolerance"] == settings.MAX_SNAP_TOLERANCE


def test_get_puzzle() -> None:
    """Test reading back a puzzle."""
    created = create_puzzle()
    response = client.get(f"{PUZZLES}/{created['puzzle_id']}")
    assert response.status_code == 200
    assert response.json()["tiles"] == created["tiles"]


def test_unknown_puzzle() -> None:
    """Test that an unknown puzzle id is a 404."""
    assert client.get(f"{PUZZLES}/missing").status_code == 404
    assert client.post(f"{PUZZLES}/missing/shuffle").status_code == 404
    assert client.delete(f"{PUZZLES}/missing").status_code == 404


def test_delete_puzzle() -> None:
    """Test deleting a puzzle."""
    puzzle_id = create_puzzle()["puzzle_id"]
    assert client.delete(f"{PUZZLES}/{puzzle_id}").status_code == 204
    assert client.get(f"{PUZZLES}/{puzzle_id}").status_code == 404


def test_drag_to_slot_locks_the_tile() -> None:
    """Test the pointer-down, move, pointer-up sequence."""
    created = create_puzzle()
    puzzle_id = created["puzzle_id"]
    tile = tile_by_id(created, 0)

    response = client.post(
        f"{PUZZLES}/{puzzle_id}/drag/begin", json={"tile_id": 0, "x": tile["x"], "y": tile["y"]}
    )
    assert response.status_code == 200
    assert tile_by_id(response.json(), 0)["selected"]

    response = client.post(f"{PUZZLES}/{puzzle_id}/drag/move", json={"x": 4.0, "y": -3.0})
    assert response.status_code == 200
    moved = tile_by_id(response.json(), 0)
    assert (moved["x"], moved["y"]) == pytest.approx((4.0, -3.0))

    response = client.post(f"{PUZZLES}/{puzzle_id}/drag/end")
    assert response.status_code == 200
    state = response.json()
    assert state["snap"]["locked"] == [0]
    locked = tile_by_id(state, 0)
    assert locked["locked"]
    assert (locked["x"], locked["y"]) == (0.0, 0.0)
    assert state["tiles"][0]["id"] == 0


def test_rotate_requires_rotation_mode() -> None:
    """Test that rotation is refused unless enabled."""
    puzzle_id = create_puzzle()["puzzle_id"]
    response = client.post(f"{PUZZLES}/{puzzle_id}/rotate", json={"tile_id": 0})
    assert response.status_code == 409

    client.patch(f"{PUZZLES}/{puzzle_id}/config", json={"rotation_mode": True})
    response = client.post(f"{PUZZLES}/{puzzle_id}/rotate", json={"tile_id": 0, "delta": -90})
    assert response.status_code == 200
    assert tile_by_id(response.json(), 0)["angle"] == 270


def test_rotate_selection() -> None:
    """Test rotating the selected tiles."""
    puzzle_id = create_puzzle(rotation_mode=True)["puzzle_id"]
    client.post(f"{PUZZLES}/{puzzle_id}/select", json={"tile_id": 4})
    response = client.post(f"{PUZZLES}/{puzzle_id}/rotate", json={})
    assert response.status_code == 200
    angles = {t["id"]: t["angle"] for t in response.json()["tiles"]}
    assert angles[4] == 90
    assert sum(1 for a in angles.values() if a) == 1


def test_update_config() -> None:
    """Test that a grid change rebuilds and other changes apply in place."""
    created = create_puzzle()
    puzzle_id = created["puzzle_id"]

    response = client.patch(f"{PUZZLES}/{puzzle_id}/config", json={"edges_only": True})
    state = response.json()
    assert response.status_code == 200
    assert state["tiles"] == created["tiles"]
    assert sorted(state["visible_tile_ids"]) == [0, 1, 2, 3, 5, 6, 7, 8]

    response = client.patch(f"{PUZZLES}/{puzzle_id}/config", json={"rows": 2, "cols": 4})
    assert len(response.json()["tiles"]) == 8


def test_shuffle_moves_tiles() -> None:
    """Test that shuffling produces a new arrangement."""
    created = create_puzzle()
    response = client.post(f"{PUZZLES}/{created['puzzle_id']}/shuffle")
    assert response.status_code == 200
    before = [(t["x"], t["y"]) for t in created["tiles"]]
    after = [(t["x"], t["y"]) for t in response.json()["tiles"]]
    assert before != after


def test_select_toggles() -> None:
    """Test selecting and deselecting a tile."""
    puzzle_id = create_puzzle()["puzzle_id"]
    state = client.post(f"{PUZZLES}/{puzzle_id}/select", json={"tile_id": 2}).json()
    assert tile_by_id(state, 2)["selected"]
    state = client.post(f"{PUZZLES}/{puzzle_id}/select", json={"tile_id": 2}).json()
    assert not tile_by_id(state, 2)["selected"]


@pytest.mark.parametrize("delta", [45, 100, -135])
def test_rotate_rejects_partial_turns(delta: int) -> None:
    """Test that rotation deltas must be whole quarter turns."""
    puzzle_id = create_puzzle(rotation_mode=True)["puzzle_id"]
    response = client.post(f"{PUZZLES}/{puzzle_id}/rotate", json={"tile_id": 0, "delta": delta})
    assert response.status_code == 422
    state = client.get(f"{PUZZLES}/{puzzle_id}").json()
    assert tile_by_id(state, 0)["angle"] == 0
