"""
Tests for the HTTP API.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client():
    import server

    return TestClient(server.app)


class TestPrescription:
    """Test POST /."""

    def test_returns_pdf_attachment(self, client):
        response = client.post("/", json={"confirmed_disease": "gastritis"})

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == 'attachment; filename="Prescription.pdf"'
        assert response.content.startswith(b"%PDF-")

    def test_normalizes_mixed_case_and_spaces(self, client):
        response = client.post("/", json={"confirmed_disease": "Acute   Pancreatitis"})

        assert response.status_code == 200
        assert response.content.startswith(b"%PDF-")

    def test_unknown_disease_is_404(self, client):
        response = client.post("/", json={"confirmed_disease": "nonexistent disease"})

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": "No recommendation found for nonexistent_disease",
        }

    @pytest.mark.parametrize("body", [
        {},
        {"confirmed_disease": None},
        {"confirmed_disease": "   "},
        {"confirmed_disease": 42},
    ])
    def test_malformed_input_is_400(self, client, body):
        response = client.post("/", json=body)

        assert response.status_code == 400
        payload = response.json()
        assert payload["success"] is False
        assert payload["error"]

    def test_rendering_failure_is_500(self, client, tmp_path, monkeypatch):
        import server

        (tmp_path / "logo-no-bg.png").write_bytes(b"not an image")
        monkeypatch.setattr(server.settings, "assets_dir", tmp_path)

        response = client.post("/", json={"confirmed_disease": "gastritis"})

        assert response.status_code == 500
        assert response.headers["content-type"].startswith("application/json")
        assert response.json() == {"success": False, "error": "Internal server error"}


class TestDiseases:
    """Test knowledge base endpoints."""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["diseases"] == 10

    def test_list(self, client):
        response = client.get("/api/diseases")

        assert response.status_code == 200
        diseases = response.json()
        assert len(diseases) == 10
        assert {"id": "gastric_ulcer", "name": "Gastric Ulcer"} in diseases

    def test_detail(self, client):
        response = client.get("/api/diseases/Gastric Ulcer")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "gastric_ulcer"
        assert data["name"] == "Gastric Ulcer"
        assert data["treatment"].startswith("Proton pump inhibitors")

    def test_detail_not_found(self, client):
        response = client.get("/api/diseases/gastric")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "No recommendation found for gastric"}
