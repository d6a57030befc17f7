"""Health & Readiness — liveness is unconditional, readiness depends on the extractor binary."""

import shutil


async def test_liveness_returns_healthy(client):
    resp = await client.get("/api/v1/health/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
    assert resp.json()["service"] == "ytgateway"


async def test_readiness_reports_resolved_extractor(client, monkeypatch):
    monkeypatch.setattr(shutil, "which", lambda name: f"/usr/bin/{name}")
    resp = await client.get("/api/v1/health/ready")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ready", "checks": {"extractor": "/usr/bin/yt-dlp"}}


async def test_readiness_503_when_extractor_missing(client, monkeypatch):
    monkeypatch.setattr(shutil, "which", lambda name: None)
    resp = await client.get("/api/v1/health/ready")
    assert resp.status_code == 503
    assert resp.json() == {"status": "not_ready", "reason": "extractor_unavailable"}
