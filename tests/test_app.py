from fastapi.testclient import TestClient

import app as gateway


def client():
    return TestClient(gateway.app)


def test_root():
    r = client().get("/")
    assert r.status_code == 200
    data = r.json()
    assert data["ok"] is True
    assert data["service"] == gateway.SERVICE_NAME
    assert data["mcp"] == "/mcp"


def test_health():
    r = client().get("/health")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_ready_reports_leader(monkeypatch, fake_consul):
    monkeypatch.setattr(gateway, "consul", fake_consul)
    r = client().get("/ready")
    assert r.status_code == 200
    assert r.json()["leader"] == "10.0.0.1:8300"


def test_ready_fails_without_consul(monkeypatch, broken_consul):
    monkeypatch.setattr(gateway, "consul", broken_consul)
    r = client().get("/ready")
    assert r.status_code == 503
    data = r.json()
    assert data["ok"] is False
    assert data["error"] == "connection refused"
