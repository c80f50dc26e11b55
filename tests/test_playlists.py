import logging
import re

import pytest


VIDEO = {
    "videoId": "dQw4w9WgXcQ",
    "title": "Never Gonna Give You Up",
    "thumbnail": "https://i.ytimg.com/vi/dQw4w9WgXcQ/default.jpg",
    "channelTitle": "Rick Astley",
    "views": "1.5B",
    "duration": "3:33",
}


def items_of(client, playlist_id):
    for playlist in client.get("/api/playlists").json():
        if playlist["id"] == playlist_id:
            return playlist["items"]
    raise AssertionError(f"playlist {playlist_id} missing")


def test_list_starts_empty(client, login):
    login()
    response = client.get("/api/playlists")
    assert response.status_code == 200
    assert response.json() == []


def test_create_returns_playlist(client, login, read_store):
    login()
    response = client.post("/api/playlists", json={"name": "  Road Trip  "})
    assert response.status_code == 200
    playlist = response.json()
    assert playlist["name"] == "Road Trip"
    assert playlist["items"] == []
    assert re.fullmatch(r"\d+_[0-9a-f]+", playlist["id"])

    assert client.get("/api/playlists").json() == [playlist]
    assert read_store()[0]["playlists"] == [playlist]


def test_create_preserves_order(client, login):
    login()
    for name in ["One", "Two", "Three"]:
        client.post("/api/playlists", json={"name": name})
    assert [p["name"] for p in client.get("/api/playlists").json()] == ["One", "Two", "Three"]


@pytest.mark.parametrize("second", ["road trip", "ROAD TRIP", "  Road Trip "])
def test_create_duplicate_name_conflicts(client, playlist, second):
    response = client.post("/api/playlists", json={"name": second})
    assert response.status_code == 409
    assert response.json() == {"error": "Playlist already exists"}
    assert len(client.get("/api/playlists").json()) == 1


@pytest.mark.parametrize("body", [{}, {"name": ""}, {"name": "   "}])
def test_create_requires_name(client, login, body):
    login()
    response = client.post("/api/playlists", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": "Playlist name required"}


def test_same_name_allowed_for_different_users(client, login):
    login("alice")
    assert client.post("/api/playlists", json={"name": "Mix"}).status_code == 200
    login("bob")
    assert client.post("/api/playlists", json={"name": "Mix"}).status_code == 200
    assert [p["name"] for p in client.get("/api/playlists").json()] == ["Mix"]


def test_delete_playlist(client, playlist):
    response = client.delete(f"/api/playlists/{playlist['id']}")
    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert client.get("/api/playlists").json() == []


def test_delete_unknown_playlist_is_noop(client, playlist, read_store):
    before = read_store()
    response = client.delete("/api/playlists/does-not-exist")
    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert read_store() == before


def test_delete_logs_only_when_a_playlist_was_removed(client, playlist, caplog):
    caplog.set_level(logging.INFO, logger="playlist_server.app.services.playlist_service")

    client.delete("/api/playlists/does-not-exist")
    assert not [r for r in caplog.records if "deleted playlist" in r.getMessage()]

    client.delete(f"/api/playlists/{playlist['id']}")
    messages = [r.getMessage() for r in caplog.records if "deleted playlist" in r.getMessage()]
    assert messages == [f"User alice deleted playlist {playlist['id']}"]


def test_add_video_stores_all_fields(client, playlist):
    response = client.post(f"/api/playlists/{playlist['id']}/videos", json=VIDEO)
    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert items_of(client, playlist["id"]) == [dict(VIDEO, type="youtube")]


def test_add_video_fills_defaults(client, playlist):
    client.post(f"/api/playlists/{playlist['id']}/videos", json={"videoId": "abc", "title": "T"})
    assert items_of(client, playlist["id"]) == [
        {
            "type": "youtube",
            "videoId": "abc",
            "title": "T",
            "thumbnail": "",
            "channelTitle": "",
            "views": "0",
            "duration": "",
        }
    ]


def test_add_same_video_twice_reports_already(client, playlist, read_store):
    url = f"/api/playlists/{playlist['id']}/videos"
    assert client.post(url, json=VIDEO).json() == {"ok": True}
    before = read_store()

    response = client.post(url, json=dict(VIDEO, title="Other title"))
    assert response.status_code == 200
    assert response.json() == {"ok": True, "already": True}

    items = items_of(client, playlist["id"])
    assert [i["videoId"] for i in items] == [VIDEO["videoId"]]
    assert items[0]["title"] == VIDEO["title"]
    assert read_store() == before


@pytest.mark.parametrize("missing", ["videoId", "title"])
def test_add_video_requires_id_and_title(client, playlist, missing):
    body = dict(VIDEO)
    del body[missing]
    response = client.post(f"/api/playlists/{playlist['id']}/videos", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": "videoId and title required"}
    assert items_of(client, playlist["id"]) == []


def test_add_video_unknown_playlist(client, playlist):
    response = client.post("/api/playlists/nope/videos", json=VIDEO)
    assert response.status_code == 404
    assert response.json() == {"error": "Playlist not found"}


def test_playlists_of_other_users_are_not_found(client, login, playlist):
    login("bob")
    assert client.get("/api/playlists").json() == []
    assert client.post(f"/api/playlists/{playlist['id']}/videos", json=VIDEO).status_code == 404
    assert client.delete(f"/api/playlists/{playlist['id']}/videos/x").status_code == 404
    assert client.delete(f"/api/playlists/{playlist['id']}").json() == {"ok": True}

    login("alice")
    assert [p["id"] for p in client.get("/api/playlists").json()] == [playlist["id"]]


def test_remove_video(client, playlist):
    url = f"/api/playlists/{playlist['id']}/videos"
    client.post(url, json=VIDEO)
    client.post(url, json={"videoId": "other", "title": "Other"})

    response = client.delete(f"{url}/{VIDEO['videoId']}")
    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert [i["videoId"] for i in items_of(client, playlist["id"])] == ["other"]


def test_remove_unknown_video_is_noop(client, playlist, read_store):
    url = f"/api/playlists/{playlist['id']}/videos"
    client.post(url, json=VIDEO)
    before = read_store()

    response = client.delete(f"{url}/not-there")
    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert read_store() == before


def test_remove_video_unknown_playlist(client, playlist):
    response = client.delete("/api/playlists/nope/videos/abc")
    assert response.status_code == 404


def test_storage_failure_is_reported_as_server_error(client, app, playlist, monkeypatch):
    from playlist_server.app.core.errors import StorageError

    def broken_save(users):
        raise StorageError("Could not save data")

    monkeypatch.setattr(app.state.store, "save", broken_save)
    response = client.post("/api/playlists", json={"name": "Another"})
    assert response.status_code == 500
    assert response.json() == {"error": "Could not save data"}

    monkeypatch.undo()
    assert [p["name"] for p in client.get("/api/playlists").json()] == ["Road Trip"]


@pytest.mark.parametrize(
    "method, path, kwargs",
    [
        ("get", "/api/me", {}),
        ("get", "/api/playlists", {}),
        ("post", "/api/playlists", {"json": {"name": "Sneaky"}}),
        ("delete", "/api/playlists/{id}", {}),
        ("post", "/api/playlists/{id}/videos", {"json": VIDEO}),
        ("delete", "/api/playlists/{id}/videos/abc", {}),
        ("post", "/api/playlists/{id}/mp3", {"files": {"mp3": ("a.mp3", b"data", "audio/mpeg")}}),
    ],
)
def test_unauthenticated_requests_are_rejected_without_side_effects(
    client, playlist, read_store, settings, method, path, kwargs
):
    client.post("/api/logout")
    before = read_store()

    response = getattr(client, method)(path.format(id=playlist["id"]), **kwargs)

    assert response.status_code == 401
    assert response.json() == {"error": "Not logged in"}
    assert read_store() == before
    assert not settings.upload_path.exists()
