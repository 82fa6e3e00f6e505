"""
Integration tests for the Medoid Lab API endpoints.
"""

import pytest
from fastapi.testclient import TestClient


TWO_BLOBS = [
    {"x": 0, "y": 0},
    {"x": 0, "y": 1},
    {"x": 10, "y": 10},
    {"x": 10, "y": 11},
    {"x": 10, "y": 9},
]


@pytest.fixture
def session_id(client: TestClient) -> str:
    response = client.post("/api/sessions")
    assert response.status_code == 201
    return response.json()["session_id"]


@pytest.fixture
def loaded_session_id(client: TestClient, session_id: str) -> str:
    response = client.post(
        f"/api/sessions/{session_id}/datasets",
        json={"name": "Dataset 1", "points": TWO_BLOBS},
    )
    assert response.status_code == 200
    return session_id


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_health_returns_200(self, client: TestClient):
        response = client.get("/api/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["environment"] == "test"
        assert "version" in data
        assert "timestamp" in data

    def test_liveness_returns_alive(self, client: TestClient):
        response = client.get("/api/health/live")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    def test_readiness_reports_session_store(self, client: TestClient):
        response = client.get("/api/health/ready")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "ready"
        assert data["checks"]["sessions"]["status"] == "ready"


class TestSecurityHeaders:
    """Tests for security headers."""

    def test_security_headers_present(self, client: TestClient):
        response = client.get("/api/health")

        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert "X-XSS-Protection" in response.headers

    def test_request_id_header(self, client: TestClient):
        response = client.get("/api/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"


class TestSessionLifecycle:
    """Tests for creating, reading and deleting sessions."""

    def test_new_session_is_empty(self, client: TestClient, session_id: str):
        response = client.get(f"/api/sessions/{session_id}")
        assert response.status_code == 200

        data = response.json()
        assert data["point_count"] == 0
        assert data["datasets"] == []
        assert data["medoids"] == []

    def test_unknown_session_returns_404(self, client: TestClient):
        assert client.get("/api/sessions/does-not-exist").status_code == 404
        assert client.post("/api/sessions/does-not-exist/step").status_code == 404

    def test_delete_session(self, client: TestClient, session_id: str):
        assert client.delete(f"/api/sessions/{session_id}").json() == {"deleted": True}
        assert client.get(f"/api/sessions/{session_id}").status_code == 404
        assert client.delete(f"/api/sessions/{session_id}").status_code == 404

    def test_datasets_are_listed(self, client: TestClient, loaded_session_id: str):
        client.post(
            f"/api/sessions/{loaded_session_id}/datasets",
            json={"name": "Dataset 2", "points": [{"x": 5, "y": 5}]},
        )

        data = client.get(f"/api/sessions/{loaded_session_id}").json()

        assert data["point_count"] == 6
        assert data["datasets"] == [
            {"name": "Dataset 1", "point_count": 5},
            {"name": "Dataset 2", "point_count": 1},
        ]


class TestDatasetValidation:
    """Tests for rejected input."""

    def test_non_numeric_point_rejected(self, client: TestClient, session_id: str):
        response = client.post(
            f"/api/sessions/{session_id}/datasets",
            json={"name": "bad", "points": [{"x": "abc", "y": 1}]},
        )
        assert response.status_code == 422

    def test_blank_name_rejected(self, client: TestClient, session_id: str):
        response = client.post(
            f"/api/sessions/{session_id}/datasets",
            json={"name": "   ", "points": TWO_BLOBS},
        )
        assert response.status_code == 422

    def test_upload_csv(self, client: TestClient, session_id: str):
        response = client.post(
            f"/api/sessions/{session_id}/datasets/upload",
            files={"file": ("points.csv", b"x,y\n0,0\n1,1\n2,2\n", "text/csv")},
            data={"name": "Uploaded"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["point_count"] == 3
        assert data["datasets"][0]["name"] == "Uploaded"

    def test_upload_with_invalid_coordinates(self, client: TestClient, session_id: str):
        response = client.post(
            f"/api/sessions/{session_id}/datasets/upload",
            files={"file": ("points.csv", b"x,y\n0,0\nabc,1\n", "text/csv")},
        )

        assert response.status_code == 422
        assert response.json()["error_type"] == "InvalidPointError"

    def test_upload_unsupported_format(self, client: TestClient, session_id: str):
        response = client.post(
            f"/api/sessions/{session_id}/datasets/upload",
            files={"file": ("points.json", b"[]", "application/json")},
        )
        assert response.status_code == 400

    def test_upload_empty_file(self, client: TestClient, session_id: str):
        response = client.post(
            f"/api/sessions/{session_id}/datasets/upload",
            files={"file": ("points.csv", b"", "text/csv")},
        )
        assert response.status_code == 400

    @pytest.mark.parametrize("filename, content", [
        ("points.xlsx", b"PK\x03\x04garbage, not a workbook"),
        ("points.xls", b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 64),
    ])
    def test_upload_unreadable_spreadsheet(self, client: TestClient, session_id: str, filename: str, content: bytes):
        response = client.post(
            f"/api/sessions/{session_id}/datasets/upload",
            files={"file": (filename, content, "application/octet-stream")},
        )

        assert response.status_code == 400
        assert filename in response.json()["detail"]
        assert client.get(f"/api/sessions/{session_id}").json()["point_count"] == 0


class TestClusteringEndpoints:
    """Tests for seeding, stepping and running."""

    def test_seed_empty_session_returns_no_data(self, client: TestClient, session_id: str):
        response = client.post(f"/api/sessions/{session_id}/seed", json={"k": 3})

        assert response.status_code == 409
        data = response.json()
        assert data["error_type"] == "EmptyPointPoolError"
        assert "No data" in data["message"]

    @pytest.mark.parametrize("k", [0, 11])
    def test_out_of_range_k_rejected(self, client: TestClient, loaded_session_id: str, k: int):
        response = client.post(f"/api/sessions/{loaded_session_id}/run", json={"k": k})
        assert response.status_code == 422

    def test_k_above_configured_maximum(self, client: TestClient, loaded_session_id: str):
        response = client.post(f"/api/sessions/{loaded_session_id}/seed", json={"k": 11})

        assert response.status_code == 422
        data = response.json()
        assert data["error_type"] == "InvalidClusterCountError"
        assert "between 1 and 10" in data["message"]

    def test_seed_assigns_every_point(self, client: TestClient, loaded_session_id: str):
        response = client.post(f"/api/sessions/{loaded_session_id}/seed", json={"k": 2})
        assert response.status_code == 200

        data = response.json()
        assert len(data["clusters"]) == 2
        assert sum(len(c["members"]) for c in data["clusters"]) == 5
        assert data["statistics"]["total_points"] == 5

    def test_step_without_seed_is_noop(self, client: TestClient, loaded_session_id: str):
        response = client.post(f"/api/sessions/{loaded_session_id}/step")

        assert response.status_code == 200
        assert response.json()["changed"] is False
        assert response.json()["medoids"] == []

    def test_run_converges(self, client: TestClient, loaded_session_id: str):
        response = client.post(f"/api/sessions/{loaded_session_id}/run", json={"k": 2})
        assert response.status_code == 200

        data = response.json()
        assert len(data["medoids"]) == 2
        pool = {(p["x"], p["y"]) for p in TWO_BLOBS}
        assert all((m["x"], m["y"]) in pool for m in data["medoids"])
        assert data["cost_history"][-1] == data["cost"]
        assert sum(len(c["members"]) for c in data["clusters"]) == 5

        step = client.post(f"/api/sessions/{loaded_session_id}/step").json()
        assert step["changed"] is False

    def test_run_caps_k_at_pool_size(self, client: TestClient, session_id: str):
        client.post(
            f"/api/sessions/{session_id}/datasets",
            json={"name": "tiny", "points": TWO_BLOBS[:3]},
        )

        data = client.post(f"/api/sessions/{session_id}/run", json={"k": 5}).json()

        assert len(data["medoids"]) == 3
        assert data["cost"] == 0

    def test_seed_then_converge(self, client: TestClient, loaded_session_id: str):
        client.post(f"/api/sessions/{loaded_session_id}/seed", json={"k": 2})

        response = client.post(f"/api/sessions/{loaded_session_id}/converge")

        assert response.status_code == 200
        clusters = client.get(f"/api/sessions/{loaded_session_id}/clusters").json()["clusters"]
        assert clusters == response.json()["clusters"]

    def test_assign_before_seed_returns_no_clusters(self, client: TestClient, loaded_session_id: str):
        response = client.post(f"/api/sessions/{loaded_session_id}/assign")

        assert response.status_code == 200
        assert response.json()["clusters"] == []

    def test_export_csv(self, client: TestClient, loaded_session_id: str):
        client.post(f"/api/sessions/{loaded_session_id}/run", json={"k": 2})

        response = client.get(f"/api/sessions/{loaded_session_id}/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        lines = response.text.strip().splitlines()
        assert lines[0].startswith("cluster,medoid_x,medoid_y")
        assert len(lines) == 6
