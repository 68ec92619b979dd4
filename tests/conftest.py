from __future__ import annotations

import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

from quickserve_client.auth_store import AuthStore  # noqa: E402
from quickserve_client.config import ClientConfig  # noqa: E402
from quickserve_client.http_client import HttpClient  # noqa: E402
from quickserve_client.models import PersistedAuth  # noqa: E402
from quickserve_client.session import QuickServeSession  # noqa: E402

from helpers import BASE_URL  # noqa: E402


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=BASE_URL)


@pytest.fixture
def auth_store(tmp_path: Path) -> AuthStore:
    return AuthStore(app_name="quickserve-test", base_dir=tmp_path)


@pytest.fixture
def logged_in_store(auth_store: AuthStore) -> AuthStore:
    auth_store.save(
        PersistedAuth(
            user={"id": 1, "email": "a@b.com", "role": "CUSTOMER"},
            access_token="t1",
            refresh_token="r1",
            is_authenticated=True,
        )
    )
    return auth_store


@pytest.fixture
def http(config: ClientConfig, auth_store: AuthStore) -> HttpClient:
    return HttpClient(config=config, auth_store=auth_store)


@pytest.fixture
def session(config: ClientConfig, auth_store: AuthStore) -> QuickServeSession:
    return QuickServeSession(config=config, auth_store=auth_store)
