# tests/test_health.py
from fastapi.testclient import TestClient


def test_health_responds(client: TestClient) -> None:
    """The health endpoint needs no authentication."""
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
