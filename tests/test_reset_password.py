import json

from playlist_server.app.core.security import verify_password
from playlist_server.app.core.store import Store

import reset_password

from .conftest import user_payload


def seed(path):
    user = user_payload("Alice")
    user["playlists"] = [{"id": "1_a", "name": "Mix", "items": []}]
    path.write_text(json.dumps([user]), encoding="utf-8")


def test_reset_password_updates_hash(tmp_path, capsys):
    path = tmp_path / "users.json"
    seed(path)

    code = reset_password.main(["--data", str(path), "--username", "alice", "--password", "newpass1"])

    assert code == 0
    assert "Alice" in capsys.readouterr().out
    user = Store(path).load()[0]
    assert verify_password("newpass1", user.password)
    assert not verify_password("abc123", user.password)
    assert user.playlists[0].name == "Mix"


def test_reset_password_unknown_user(tmp_path, capsys):
    path = tmp_path / "users.json"
    seed(path)
    before = path.read_text(encoding="utf-8")

    code = reset_password.main(["--data", str(path), "--username", "bob", "--password", "newpass1"])

    assert code == 1
    assert "not found" in capsys.readouterr().err
    assert path.read_text(encoding="utf-8") == before


def test_reset_password_rejects_weak_password(tmp_path):
    path = tmp_path / "users.json"
    seed(path)
    before = path.read_text(encoding="utf-8")
    assert reset_password.main(["--data", str(path), "--username", "alice", "--password", "short"]) == 1
    assert path.read_text(encoding="utf-8") == before
