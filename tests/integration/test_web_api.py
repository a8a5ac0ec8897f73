"""Integration tests for the REST API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from sheetnest.web import create_app


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def _job(**overrides) -> dict:
    data = {
        "schema_version": "1.0",
        "panels": [
            {"id": "side", "material": "18mm MDF", "length": 720, "width": 560, "quantity": 2},
            {"id": "shelf", "material": "18mm MDF", "length": 764, "width": 540},
        ],
        "options": {"mode": "PRODUCTION", "blade_kerf": 4},
    }
    data.update(overrides)
    return data


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestOptimizeEndpoint:
    """Tests for POST /api/v1/optimize."""

    def test_production_result(self, client: TestClient) -> None:
        response = client.post("/api/v1/optimize", json=_job())

        assert response.status_code == 200
        data = response.json()
        assert data["total_sheets"] == 1
        assert data["total_panels"] == 3
        assert len(data["sheets"][0]["placements"]) == 3
        assert data["cut_operations"][0]["type"] == "rip"
        assert data["is_complete"] is True

    def test_estimation_result(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/optimize", json=_job(options={"mode": "estimation"})
        )

        assert response.status_code == 200
        data = response.json()
        assert data["mode"] == "ESTIMATION"
        assert data["sheets"] == []
        assert data["waste_regions"] == []

    def test_rejected_panels_are_in_body(self, client: TestClient) -> None:
        job = _job()
        job["panels"].append({"id": "bad", "material": "18mm MDF", "length": -1, "width": 5})
        response = client.post("/api/v1/optimize", json=job)

        assert response.status_code == 200
        data = response.json()
        assert data["rejected_panels"][0]["panel_id"] == "bad"
        assert data["is_complete"] is False

    def test_empty_panel_list(self, client: TestClient) -> None:
        response = client.post("/api/v1/optimize", json=_job(panels=[]))

        assert response.status_code == 422
        assert response.json()["error_type"] == "empty_panel_list"

    def test_schema_error(self, client: TestClient) -> None:
        response = client.post("/api/v1/optimize", json=_job(options={"blade_kerf": 50}))

        assert response.status_code == 422
        body = response.json()
        assert body["error_type"] == "validation"
        assert body["details"][0]["path"] == "options.blade_kerf"


class TestValidateEndpoint:
    """Tests for POST /api/v1/validate."""

    def test_valid_job(self, client: TestClient) -> None:
        response = client.post("/api/v1/validate", json=_job())

        assert response.status_code == 200
        data = response.json()
        assert data["is_valid"] is True
        assert data["expanded_quantity"] == 3
        assert data["warnings"] == []

    def test_warnings(self, client: TestClient) -> None:
        job = _job()
        job["panels"].append({"id": "huge", "material": "18mm MDF", "length": 3000, "width": 500})
        response = client.post("/api/v1/validate", json=job)

        data = response.json()
        assert data["is_valid"] is True
        assert data["warnings"][0]["reason"] == "ExceedsSheetSize"

    def test_empty_panels(self, client: TestClient) -> None:
        response = client.post("/api/v1/validate", json=_job(panels=[]))

        assert response.status_code == 200
        assert response.json()["is_valid"] is False
