"""
Service Tests
=============

Tests for the FastAPI endpoints.
"""

import math
from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi.testclient import TestClient


SMALL_REQUEST = {
    "width": 200,
    "height": 160,
    "vertical_margin": 10,
    "horizontal_margin": 10,
    "distance_between_rows": 4,
    "samples_per_row": 40,
    "num_rows": 8,
    "jitter_seed": 11,
}


@pytest.fixture
def client():
    from slopes.main import app

    with TestClient(app) as test_client:
        yield test_client


class TestInfoEndpoints:
    """Tests for / and /health."""

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["uptime_seconds"] >= 0


class TestGenerateEndpoints:
    """Tests for /generate and /generate.svg."""

    def test_generate_json(self, client):
        response = client.post("/generate", json=SMALL_REQUEST)

        assert response.status_code == 200
        data = response.json()
        assert data["width"] == 200
        assert data["margins"] == [10, 10]
        assert data["stats"]["rows"] == 8
        assert len(data["polylines"]) == data["stats"]["polylines"]
        for polyline in data["polylines"]:
            assert len(polyline) >= 2
            for x, y in polyline:
                assert 10 <= x <= 190
                assert 10 <= y <= 150

    def test_seeded_requests_repeat(self, client):
        first = client.post("/generate", json=SMALL_REQUEST).json()
        second = client.post("/generate", json=SMALL_REQUEST).json()

        assert first["polylines"] == second["polylines"]

    def test_generate_counts_drawings(self, client):
        before = client.get("/health").json()["drawings_generated"]
        client.post("/generate", json=SMALL_REQUEST)
        after = client.get("/health").json()["drawings_generated"]

        assert after == before + 1

    def test_generate_svg(self, client):
        response = client.post("/generate.svg", json=SMALL_REQUEST)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert "<polyline" in response.text

    def test_out_of_range_field(self, client):
        """Field-level validation is done by the request model."""
        response = client.post("/generate", json={**SMALL_REQUEST, "perlin_ratio": 2})
        assert response.status_code == 422

    def test_unknown_field(self, client):
        response = client.post("/generate", json={**SMALL_REQUEST, "colour": "red"})
        assert response.status_code == 422

    def test_undrawable_configuration(self, client):
        """Margins that swallow the page are reported as configuration errors."""
        response = client.post("/generate", json={**SMALL_REQUEST, "vertical_margin": 100})

        assert response.status_code == 422
        assert response.json()["error"] == "invalid_configuration"

    def test_concurrent_requests_all_counted(self, client):
        """Drawings generated from parallel worker threads are all counted."""
        from slopes import main
        from slopes.models.input import GenerateRequest

        request = GenerateRequest(**{**SMALL_REQUEST, "samples_per_row": 8, "num_rows": 2})
        before = main._drawings_generated

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda _: main._run(request), range(32)))

        assert main._drawings_generated == before + 32

    @pytest.mark.parametrize("field", ["width", "height", "distance_between_rows"])
    def test_non_finite_request_rejected(self, field):
        from pydantic import ValidationError

        from slopes.models.input import GenerateRequest

        with pytest.raises(ValidationError):
            GenerateRequest(**{field: math.inf})
        with pytest.raises(ValidationError):
            GenerateRequest(**{field: math.nan})
