"""Tests for API endpoints."""
import pytest
from fastapi.testclient import TestClient
from mahjong_solitaire.main import app


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def sample_tiles():
    """Two rows of three; the middle tiles are boxed in."""
    layout = [
        ("tile-1", "dot-1", 0, 0),
        ("tile-2", "dot-2", 1, 0),
        ("tile-3", "dot-3", 2, 0),
        ("tile-4", "dot-3", 0, 1),
        ("tile-5", "dot-2", 1, 1),
        ("tile-6", "dot-1", 2, 1),
    ]
    return [
        {"id": tile_id, "type_id": type_id, "x": x, "y": y, "z": 0, "is_removed": False}
        for tile_id, type_id, x, y in layout
    ]


class TestRootEndpoint:
    """Tests for root endpoint."""

    def test_root_returns_info(self, client):
        """Test root endpoint returns API info."""
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert "name" in data
        assert "version" in data
        assert "endpoints" in data


class TestHealthEndpoint:
    """Tests for health endpoint."""

    def test_health_check(self, client):
        """Test health endpoint returns healthy status."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestLayoutEndpoints:
    """Tests for layout and tile catalog endpoints."""

    def test_list_layouts(self, client):
        """Test that built-in layouts are listed without positions."""
        response = client.get("/api/layouts")

        assert response.status_code == 200
        layouts = response.json()["layouts"]
        assert "turtle" in [l["id"] for l in layouts]
        assert all("positions" not in l for l in layouts)

    def test_layout_detail(self, client):
        """Test that a layout comes with its positions."""
        response = client.get("/api/layouts/flat")

        assert response.status_code == 200
        data = response.json()
        assert data["size"] == 144
        assert len(data["positions"]) == 144

    def test_unknown_layout(self, client):
        """Test that an unknown layout is a 404."""
        response = client.get("/api/layouts/nowhere")
        assert response.status_code == 404

    def test_tile_catalog(self, client):
        """Test the tile catalog listing."""
        response = client.get("/api/tiles")

        assert response.status_code == 200
        data = response.json()
        assert data["full_set_size"] == 144
        assert len(data["tile_types"]) == 42


    def test_tile_type(self, client):
        """Test fetching one tile type."""
        response = client.get("/api/tiles/flower-plum")

        assert response.status_code == 200
        data = response.json()
        assert data["suit"] == "flower"
        assert data["match_group"] == "flower"

    def test_unknown_tile_type(self, client):
        """Test that an unknown tile type is a 404."""
        response = client.get("/api/tiles/nothing")
        assert response.status_code == 404


class TestGenerateEndpoint:
    """Tests for board generation."""

    def test_generate_layout(self, client):
        """Test generating a board on a built-in layout."""
        response = client.post("/api/boards/generate", json={"layout_id": "flat", "seed": 4})

        assert response.status_code == 200
        data = response.json()
        assert data["layout_id"] == "flat"
        assert len(data["tiles"]) == 144
        assert data["next_tile_id"] == 144
        assert data["free_tile_ids"]
        if data["solvable"]:
            assert len(data["solution"]) == 72

    def test_generate_is_reproducible(self, client):
        """Test that a seed reproduces the board."""
        first = client.post("/api/boards/generate", json={"layout_id": "simple", "seed": 8}).json()
        second = client.post("/api/boards/generate", json={"layout_id": "simple", "seed": 8}).json()
        assert first["tiles"] == second["tiles"]

    def test_generate_custom_positions(self, client):
        """Test generating on explicit positions."""
        positions = [{"x": x, "y": 0, "z": 0} for x in range(4)]
        response = client.post("/api/boards/generate", json={"positions": positions, "seed": 1})

        assert response.status_code == 200
        data = response.json()
        assert data["layout_id"] == "custom"
        assert len(data["tiles"]) == 4

    def test_generate_odd_positions(self, client):
        """Test that an odd position count is rejected."""
        positions = [{"x": x, "y": 0, "z": 0} for x in range(3)]
        response = client.post("/api/boards/generate", json={"positions": positions})

        assert response.status_code == 400
        assert "Generation failed" in response.json()["detail"]

    def test_generate_too_many_positions(self, client):
        """Test that more positions than a full board are refused."""
        positions = [{"x": x, "y": y, "z": 0} for y in range(10) for x in range(15)]
        response = client.post("/api/boards/generate", json={"positions": positions})
        assert response.status_code == 422

    def test_generate_duplicate_positions(self, client):
        """Test that a slot listed twice is refused."""
        positions = [{"x": x, "y": 0, "z": 0} for x in range(3)] + [{"x": 0, "y": 0, "z": 0}]
        response = client.post("/api/boards/generate", json={"positions": positions})

        assert response.status_code == 400
        assert "unique" in response.json()["detail"]

    def test_generate_requires_layout(self, client):
        """Test that a layout id or positions must be given."""
        response = client.post("/api/boards/generate", json={})
        assert response.status_code == 400

    def test_generate_unknown_layout(self, client):
        """Test that an unknown layout is a 404."""
        response = client.post("/api/boards/generate", json={"layout_id": "nowhere"})
        assert response.status_code == 404


class TestStateEndpoint:
    """Tests for board state queries."""

    def test_state(self, client, sample_tiles):
        """Test free tiles, matches and hint."""
        response = client.post("/api/boards/state", json={"tiles": sample_tiles})

        assert response.status_code == 200
        data = response.json()
        assert data["free_tile_ids"] == ["tile-1", "tile-3", "tile-4", "tile-6"]
        assert data["matches"] == [["tile-1", "tile-6"], ["tile-3", "tile-4"]]
        assert data["hint"] == ["tile-1", "tile-6"]
        assert data["tiles_remaining"] == 6
        assert not data["is_won"]
        assert not data["is_stuck"]

    def test_state_won(self, client, sample_tiles):
        """Test that a cleared board is won."""
        tiles = [dict(t, is_removed=True) for t in sample_tiles]
        data = client.post("/api/boards/state", json={"tiles": tiles}).json()

        assert data["is_won"]
        assert data["hint"] is None


class TestRemoveEndpoint:
    """Tests for pair removal."""

    def test_remove_pair(self, client, sample_tiles):
        """Test removing a free matching pair."""
        response = client.post(
            "/api/boards/remove",
            json={"tiles": sample_tiles, "tile_ids": ["tile-1", "tile-6"]},
        )

        assert response.status_code == 200
        data = response.json()
        removed = [t["id"] for t in data["tiles"] if t["is_removed"]]
        assert removed == ["tile-1", "tile-6"]
        assert data["tiles_remaining"] == 4
        assert not data["is_won"]

    @pytest.mark.parametrize(
        "tile_ids",
        [
            ["tile-1", "tile-1"],   # same tile
            ["tile-1", "tile-99"],  # unknown tile
            ["tile-2", "tile-5"],   # matching but blocked
            ["tile-1", "tile-3"],   # free but different
        ],
    )
    def test_remove_rejected(self, client, sample_tiles, tile_ids):
        """Test that invalid pairs are refused."""
        response = client.post(
            "/api/boards/remove",
            json={"tiles": sample_tiles, "tile_ids": tile_ids},
        )
        assert response.status_code == 400


class TestShuffleEndpoint:
    """Tests for shuffling."""

    def test_shuffle(self, client, sample_tiles):
        """Test that shuffled tiles get fresh ids and keep their types."""
        sample_tiles[0]["is_removed"] = True
        sample_tiles[5]["is_removed"] = True
        response = client.post(
            "/api/boards/shuffle",
            json={"tiles": sample_tiles, "layout_id": "flat", "seed": 2},
        )

        assert response.status_code == 200
        data = response.json()
        active = [t for t in data["tiles"] if not t["is_removed"]]
        assert sorted(t["type_id"] for t in active) == ["dot-2", "dot-2", "dot-3", "dot-3"]
        assert sorted(t["id"] for t in active) == ["tile-10", "tile-7", "tile-8", "tile-9"]
        assert data["next_tile_id"] == 10

    def test_shuffle_unknown_layout(self, client, sample_tiles):
        """Test that an unknown layout is a 404."""
        response = client.post(
            "/api/boards/shuffle",
            json={"tiles": sample_tiles, "layout_id": "nowhere"},
        )
        assert response.status_code == 404


class TestSimulateEndpoint:
    """Tests for simulation."""

    def test_simulate(self, client):
        """Test a single hint playthrough."""
        response = client.post(
            "/api/boards/simulate",
            json={"layout_id": "flat", "seed": 1, "iterations": 1},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["iterations"] == 1
        assert data["strategy"] == "hint"
        assert 0 <= data["clear_rate"] <= 1
        assert data["solution_verified"] == data["solvable"]

    def test_simulate_invalid_strategy(self, client):
        """Test that an unknown strategy is a 400."""
        response = client.post(
            "/api/boards/simulate",
            json={"layout_id": "flat", "strategy": "magic"},
        )
        assert response.status_code == 400

    def test_simulate_iterations_bounds(self, client):
        """Test request validation on iterations."""
        response = client.post(
            "/api/boards/simulate",
            json={"layout_id": "flat", "iterations": 0},
        )
        assert response.status_code == 422
