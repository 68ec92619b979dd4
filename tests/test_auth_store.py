from __future__ import annotations

import json
import threading

from quickserve_client.auth_store import AuthStore
from quickserve_client.models import PersistedAuth


def test_save_and_load_round_trip_uses_namespaced_state_blob(auth_store: AuthStore, tmp_path) -> None:
    auth_store.save(PersistedAuth(user={"id": 1}, access_token="t1", refresh_token="r1", is_authenticated=True))

    raw = json.loads((tmp_path / "quickserve-auth.json").read_text())
    assert raw == {
        "state": {
            "user": {"id": 1},
            "accessToken": "t1",
            "refreshToken": "r1",
            "isAuthenticated": True,
        }
    }
    loaded = auth_store.load()
    assert loaded is not None
    assert loaded.access_token == "t1"
    assert auth_store.refresh_token() == "r1"


def test_load_without_file_returns_none(auth_store: AuthStore) -> None:
    assert auth_store.load() is None
    assert auth_store.access_token() is None


def test_corrupt_file_is_discarded(auth_store: AuthStore, tmp_path) -> None:
    path = tmp_path / "quickserve-auth.json"
    path.write_text("{not json")
    assert auth_store.load() is None
    assert not path.exists()


def test_blob_without_state_is_discarded(auth_store: AuthStore, tmp_path) -> None:
    path = tmp_path / "quickserve-auth.json"
    path.write_text(json.dumps({"accessToken": "t1"}))
    assert auth_store.load() is None
    assert not path.exists()


def test_update_tokens_keeps_user(logged_in_store: AuthStore) -> None:
    updated = logged_in_store.update_tokens("t2", "r2")
    assert updated.user == {"id": 1, "email": "a@b.com", "role": "CUSTOMER"}
    assert logged_in_store.access_token() == "t2"
    assert logged_in_store.refresh_token() == "r2"


def test_update_tokens_without_new_refresh_token_keeps_old_one(logged_in_store: AuthStore) -> None:
    logged_in_store.update_tokens("t2", None)
    assert logged_in_store.refresh_token() == "r1"


def test_clear_removes_file(logged_in_store: AuthStore, tmp_path) -> None:
    logged_in_store.clear()
    assert not (tmp_path / "quickserve-auth.json").exists()
    logged_in_store.clear()


def test_concurrent_save_never_exposes_partial_blob(logged_in_store: AuthStore, tmp_path) -> None:
    state = logged_in_store.load()
    stop = threading.Event()

    def writer() -> None:
        while not stop.is_set():
            logged_in_store.save(state)

    thread = threading.Thread(target=writer)
    thread.start()
    try:
        lost = sum(1 for _ in range(500) if logged_in_store.access_token() != "t1")
    finally:
        stop.set()
        thread.join()

    assert lost == 0
    assert sorted(path.name for path in tmp_path.iterdir()) == ["quickserve-auth.json"]


def test_saved_file_is_private(auth_store: AuthStore, tmp_path) -> None:
    auth_store.save(PersistedAuth(access_token="t1"))

    assert (tmp_path / "quickserve-auth.json").stat().st_mode & 0o777 == 0o600
