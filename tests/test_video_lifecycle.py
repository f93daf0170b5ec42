"""Upload handoff, approval and deletion through the HTTP API."""

import io

from cinexnema.dependencies import get_optional_storage
from cinexnema.main import app
from cinexnema.models import Video
from tests_support import create_upload


def test_create_upload_prices_and_issues_signed_url(client, creator, storage, headers_for):
    res = client.post(
        "/api/creators/upload",
        json={"title": "Longa", "format": "Movie", "genres": ["Drama"], "duration_minutes": 141},
        headers=headers_for(creator),
    )
    assert res.status_code == 200
    ticket = res.json()
    assert ticket["monthly_cost"] == 2000
    assert ticket["bucket"] == "videos"
    assert ticket["video_path"].startswith(f"{creator.id}/")
    assert "X-Amz-Signature" in ticket["upload_url"]
    assert storage.signed_uploads == [("videos", ticket["video_path"])]

    videos = client.get("/api/creators/videos", headers=headers_for(creator)).json()
    assert len(videos) == 1
    assert videos[0]["status"] == "uploading"
    assert videos[0]["approved"] is False
    assert videos[0]["video_url"] is None
    assert videos[0]["format"] == "Movie"


def test_create_upload_requires_auth(client):
    res = client.post("/api/creators/upload", json={"title": "x"})
    assert res.status_code == 401


def test_create_upload_rejects_unknown_format(client, creator, headers_for):
    res = client.post("/api/creators/upload", json={"format": "Documentary"}, headers=headers_for(creator))
    assert res.status_code == 422


def test_complete_upload_unknown_id_is_not_found(client, creator, headers_for):
    res = client.post("/api/creators/upload-complete", json={"video_id": "missing"}, headers=headers_for(creator))
    assert res.status_code == 404
    assert res.json()["error"] == "NOT_FOUND"


def test_complete_upload_sets_url_and_status(client, creator, headers_for):
    ticket = create_upload(client, headers_for(creator), duration=10)
    res = client.post("/api/creators/upload-complete", json={"video_id": ticket["video_id"]}, headers=headers_for(creator))
    assert res.status_code == 200
    video = res.json()
    assert video["status"] == "uploaded"
    assert video["video_url"] == f"http://storage.test/videos/{ticket['video_path']}"
    assert video["monthly_cost"] == 0


def test_complete_upload_of_someone_elses_video_is_not_found(client, creator, other_creator, headers_for):
    ticket = create_upload(client, headers_for(creator))
    res = client.post(
        "/api/creators/upload-complete", json={"video_id": ticket["video_id"]}, headers=headers_for(other_creator)
    )
    assert res.status_code == 404


def test_approve_revoke_approve_keeps_status(client, creator, admin, headers_for):
    ticket = create_upload(client, headers_for(creator))
    client.post("/api/creators/upload-complete", json={"video_id": ticket["video_id"]}, headers=headers_for(creator))
    vid = ticket["video_id"]

    for action, expected in (("approve", True), ("revoke", False), ("approve", True), ("approve", True)):
        res = client.post(f"/api/videos/{vid}/{action}", headers=headers_for(admin))
        assert res.status_code == 200
        assert res.json()["approved"] is expected
        assert res.json()["status"] == "uploaded"


def test_approve_unknown_id_is_not_found(client, admin, headers_for):
    assert client.post("/api/videos/nope/approve", headers=headers_for(admin)).status_code == 404
    assert client.post("/api/videos/nope/revoke", headers=headers_for(admin)).status_code == 404


def test_delete_non_owned_video_leaves_row(client, creator, other_creator, db_session, headers_for):
    ticket = create_upload(client, headers_for(creator))
    res = client.delete(f"/api/creators/video/{ticket['video_id']}", headers=headers_for(other_creator))
    assert res.status_code == 404
    assert db_session.query(Video).filter(Video.id == ticket["video_id"]).count() == 1


def test_delete_removes_row_and_objects(client, creator, storage, headers_for):
    ticket = create_upload(client, headers_for(creator), cover_path=f"{creator.id}/cover.jpg")
    res = client.delete(f"/api/creators/video/{ticket['video_id']}", headers=headers_for(creator))
    assert res.status_code == 200
    assert ("videos", ticket["video_path"]) in storage.removed
    assert ("covers", f"{creator.id}/cover.jpg") in storage.removed
    assert client.get("/api/creators/videos", headers=headers_for(creator)).json() == []


def test_delete_succeeds_when_storage_cleanup_fails(client, creator, storage, headers_for):
    ticket = create_upload(client, headers_for(creator))
    storage.fail_remove = True
    res = client.delete(f"/api/creators/video/{ticket['video_id']}", headers=headers_for(creator))
    assert res.status_code == 200
    assert client.get("/api/creators/videos", headers=headers_for(creator)).json() == []


def test_delete_without_storage_still_removes_row(client, creator, storage, db_session, headers_for):
    ticket = create_upload(client, headers_for(creator), cover_path=f"{creator.id}/cover.jpg")
    app.dependency_overrides[get_optional_storage] = lambda: None
    res = client.delete(f"/api/creators/video/{ticket['video_id']}", headers=headers_for(creator))
    assert res.status_code == 200
    assert db_session.query(Video).filter(Video.id == ticket["video_id"]).count() == 0
    assert storage.removed == []


def test_create_upload_rejects_cover_path_outside_own_folder(client, creator, other_creator, storage, headers_for):
    cover = client.post(
        "/api/creators/cover",
        files={"file": ("poster.png", io.BytesIO(b"\x89PNG fake"), "image/png")},
        headers=headers_for(creator),
    ).json()
    res = client.post(
        "/api/creators/upload",
        json={"title": "x", "cover_path": cover["path"]},
        headers=headers_for(other_creator),
    )
    assert res.status_code == 400
    assert res.json()["error"] == "VALIDATION"
    assert client.get("/api/creators/videos", headers=headers_for(other_creator)).json() == []
    assert ("covers", cover["path"]) in storage.objects


def test_create_upload_rejects_cover_path_traversal(client, creator, headers_for):
    res = client.post(
        "/api/creators/upload",
        json={"title": "x", "cover_path": f"{creator.id}/../someone/cover.png"},
        headers=headers_for(creator),
    )
    assert res.status_code == 400


def test_end_to_end_moderation_flow(client, creator, admin, headers_for):
    ticket = create_upload(client, headers_for(creator), duration=90)
    assert ticket["monthly_cost"] == 1000
    vid = ticket["video_id"]

    done = client.post("/api/creators/upload-complete", json={"video_id": vid}, headers=headers_for(creator)).json()
    assert done["status"] == "uploaded"
    assert done["video_url"]

    assert client.get("/api/videos/public").json() == []

    client.post(f"/api/videos/{vid}/approve", headers=headers_for(admin))
    public_ids = [v["id"] for v in client.get("/api/videos/public").json()]
    assert public_ids == [vid]

    client.post(f"/api/videos/{vid}/revoke", headers=headers_for(admin))
    assert client.get("/api/videos/public").json() == []

    client.post(f"/api/videos/{vid}/approve", headers=headers_for(admin))
    assert client.delete(f"/api/creators/video/{vid}", headers=headers_for(creator)).status_code == 200
    assert client.get("/api/videos/public").json() == []
    assert client.get("/api/creators/videos", headers=headers_for(creator)).json() == []


def test_admin_lists_everything(client, creator, admin, headers_for):
    create_upload(client, headers_for(creator))
    create_upload(client, headers_for(creator))
    res = client.get("/api/videos", headers=headers_for(admin))
    assert res.status_code == 200
    assert len(res.json()) == 2
