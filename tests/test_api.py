import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient
from api.main import app

client = TestClient(app)


@pytest.fixture
def triangle_payload():
    return {
        "comparisons": [
            {"study_id": "S1", "treatment_a": "A", "treatment_b": "B", "n_a": 40, "n_b": 42},
            {"study_id": "S2", "treatment_a": "B", "treatment_b": "C"},
            {"study_id": "S3", "treatment_a": "A", "treatment_b": "C"},
        ]
    }


@pytest.fixture
def effects_payload():
    return {
        "effects": [
            {"treatment": "Drug A", "effect_size": 10.0, "standard_error": 0.01},
            {"treatment": "Placebo", "effect_size": 0.0, "standard_error": 0.01, "is_reference": True},
        ],
        "n_simulations": 1000,
        "seed": 1,
    }


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"]


def test_root():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["endpoints"]["ranking"] == "/api/v1/network/ranking"


def test_assess_geometry(triangle_payload):
    response = client.post("/api/v1/network/geometry", json=triangle_payload)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["result"]["n_treatments"] == 3
    assert data["result"]["connectivity"]["is_connected"] is True
    assert data["result"]["characteristics"]["completeness"] == pytest.approx(1.0)
    assert data["result"]["edges"][0]["total_participants"] == 82


def test_assess_geometry_empty():
    response = client.post("/api/v1/network/geometry", json={"comparisons": []})
    assert response.status_code == 400
    assert "No comparisons provided" in response.json()["detail"]


def test_assess_geometry_self_comparison():
    response = client.post("/api/v1/network/geometry", json={
        "comparisons": [{"study_id": "S1", "treatment_a": "A", "treatment_b": "A"}]
    })
    assert response.status_code == 400


def test_assess_geometry_schema_error():
    response = client.post("/api/v1/network/geometry", json={"comparisons": [{"study_id": "S1"}]})
    assert response.status_code == 422


def test_rank_treatments(effects_payload):
    response = client.post("/api/v1/network/ranking", json=effects_payload)

    assert response.status_code == 200
    result = response.json()["result"]
    assert result["best_treatment"]["treatment"] == "Drug A"
    assert result["n_simulations"] == 1000
    assert result["rankings"][1]["is_reference"] is True
    assert result["warnings"] == ["Only 2 treatments - ranking is trivial"]


def test_rank_treatments_lower_is_better(effects_payload):
    effects_payload["higher_is_better"] = False
    response = client.post("/api/v1/network/ranking", json=effects_payload)
    assert response.status_code == 200
    assert response.json()["result"]["best_treatment"]["treatment"] == "Placebo"


def test_rank_single_treatment():
    response = client.post("/api/v1/network/ranking", json={
        "effects": [{"treatment": "A", "effect_size": 0.2, "standard_error": 0.1}]
    })
    assert response.status_code == 400
    assert "At least 2 treatments" in response.json()["detail"]


def test_rank_negative_standard_error():
    response = client.post("/api/v1/network/ranking", json={
        "effects": [
            {"treatment": "A", "effect_size": 0.2, "standard_error": -0.1},
            {"treatment": "B", "effect_size": 0.0, "standard_error": 0.1},
        ]
    })
    assert response.status_code == 400


@patch("api.routers.network.NetworkService")
def test_rank_unexpected_failure(MockService, effects_payload):
    MockService.return_value.rank.side_effect = RuntimeError("boom")

    response = client.post("/api/v1/network/ranking", json=effects_payload)

    assert response.status_code == 500
    assert "boom" in response.json()["detail"]
    MockService.return_value.rank.assert_called_once()
