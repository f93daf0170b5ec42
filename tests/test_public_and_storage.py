"""Public endpoints, storage helpers and error rendering."""

from fastapi.testclient import TestClient

from cinexnema.dependencies import get_optional_storage, get_storage
from cinexnema.main import app


def test_pricing_preview(client):
    res = client.get("/api/videos/pricing", params={"duration_minutes": 141})
    assert res.status_code == 200
    assert res.json() == {
        "duration_minutes": 141,
        "free_minutes": 70,
        "block_minutes": 70,
        "block_fee": 1000,
        "extra_blocks": 2,
        "monthly_cost": 2000,
    }


def test_public_submit_requires_url(client):
    res = client.post("/api/videos/submit", json={"title": "Sem url"})
    assert res.status_code == 400
    assert res.json()["error"] == "VALIDATION"


def test_public_submit_needs_approval(client, admin, headers_for):
    res = client.post(
        "/api/videos/submit",
        json={"title": "Aberto", "public_url": "http://cdn.test/a.mp4", "duration_minutes": 71},
    )
    assert res.status_code == 200
    video = res.json()
    assert video["creator_id"] is None
    assert video["status"] == "ready"
    assert video["approved"] is False
    assert video["monthly_cost"] == 1000
    assert client.get("/api/videos/public").json() == []

    client.post(f"/api/videos/{video['id']}/approve", headers=headers_for(admin))
    assert [v["id"] for v in client.get("/api/videos/public").json()] == [video["id"]]


def test_public_submit_rejects_partial_storage_pointers(client):
    res = client.post("/api/videos/submit", json={"public_url": "http://cdn.test/a.mp4", "bucket": "videos"})
    assert res.status_code == 400


def test_signed_upload_and_signed_url(client, creator, storage, headers_for):
    res = client.post(
        "/api/storage/signed-upload",
        json={"bucket": "screenshots", "filename": "shot 1.png", "prefix": "uploads"},
        headers=headers_for(creator),
    )
    assert res.status_code == 200
    body = res.json()
    assert body["path"] == "uploads/shot%201.png"
    assert body["created_bucket"] is True

    res = client.post("/api/storage/signed-url", json={"path": "a/b.mp4"}, headers=headers_for(creator))
    assert res.status_code == 200
    assert res.json()["bucket"] == "videos"
    assert res.json()["expires_in"] == 3600


def test_signed_upload_validation(client, creator, headers_for):
    res = client.post("/api/storage/signed-upload", json={}, headers=headers_for(creator))
    assert res.status_code == 400
    res = client.post("/api/storage/signed-upload", json={"filename": "a", "bucket": "secret"}, headers=headers_for(creator))
    assert res.status_code == 400


def test_bucket_admin_routes(client, admin, headers_for):
    res = client.get("/api/storage/check-buckets", headers=headers_for(admin))
    assert res.json()["all_configured"] is False
    assert "banners" in res.json()["missing"]

    res = client.post("/api/storage/create-buckets", headers=headers_for(admin))
    assert res.json()["success"] is True

    res = client.get("/api/storage/check-buckets", headers=headers_for(admin))
    assert res.json() == {
        "existing": ["banners", "covers", "screenshots", "thumbnails", "videos"],
        "missing": [],
        "all_configured": True,
    }


def test_storage_not_configured(client, creator, headers_for):
    app.dependency_overrides.pop(get_storage)
    app.dependency_overrides[get_optional_storage] = lambda: None
    res = client.post("/api/creators/upload", json={"title": "x"}, headers=headers_for(creator))
    assert res.status_code == 503
    assert res.json()["error"] == "CONFIGURATION_MISSING"


def test_unexpected_errors_become_500(client, creator, storage, headers_for, monkeypatch):
    def explode(bucket, path):
        raise RuntimeError("boom")

    monkeypatch.setattr(storage, "create_signed_upload", explode)
    safe_client = TestClient(app, raise_server_exceptions=False)
    res = safe_client.post("/api/creators/upload", json={"title": "x"}, headers=headers_for(creator))
    assert res.status_code == 500
    assert res.json()["error"] == "INTERNAL_ERROR"


def test_ping(client):
    assert client.get("/api/ping").json() == {"message": "pong"}
