"""Tests for health check endpoint."""

from rsvp_engine import __version__
from rsvp_engine.services.tokenizer import get_tokenizer_version


def test_health_check(client):
    """Test that health check returns status and versions."""
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == __version__
    assert data["tokenizer_version"] == get_tokenizer_version()


def test_root_endpoint(client):
    """Test that root endpoint returns service info."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["service"] == "RSVP Engine API"
    assert "version" in data
