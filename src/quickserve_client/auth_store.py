from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir
from pydantic import ValidationError

from .models import PersistedAuth

logger = logging.getLogger(__name__)

AUTH_NAMESPACE = "quickserve-auth"


@dataclass
class AuthStore:
    """Durable copy of the auth session, shared by the HTTP client and the auth state.

    The file holds ``{"state": {...}}`` under a fixed namespace. Writers do not
    coordinate; the last write wins.
    """

    app_name: str = "quickserve"
    filename: str = f"{AUTH_NAMESPACE}.json"
    base_dir: Path | None = None

    def _path(self) -> Path:
        base = Path(self.base_dir) if self.base_dir else Path(user_data_dir(self.app_name, "QuickServe"))
        base.mkdir(parents=True, exist_ok=True)
        return base / self.filename

    def save(self, state: PersistedAuth) -> None:
        path = self._path()
        data = {"state": state.model_dump(by_alias=True)}
        # readers must never see a partly written blob; mkstemp creates it with mode 0600
        handle, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{self.filename}.", suffix=".tmp")
        try:
            with os.fdopen(handle, "w") as tmp:
                tmp.write(json.dumps(data, indent=2))
            os.replace(tmp_name, path)
        finally:
            Path(tmp_name).unlink(missing_ok=True)

    def load(self) -> PersistedAuth | None:
        path = self._path()
        try:
            raw = path.read_text()
        except FileNotFoundError:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("auth_store_corrupt", extra={"path": str(path)})
            self.clear()
            return None
        if not isinstance(data, dict) or not isinstance(data.get("state"), dict):
            self.clear()
            return None
        try:
            return PersistedAuth.model_validate(data["state"])
        except ValidationError:
            logger.warning("auth_store_invalid", extra={"path": str(path)})
            self.clear()
            return None

    def access_token(self) -> str | None:
        stored = self.load()
        return stored.access_token if stored else None

    def refresh_token(self) -> str | None:
        stored = self.load()
        return stored.refresh_token if stored else None

    def update_tokens(self, access_token: str, refresh_token: str | None) -> PersistedAuth:
        stored = self.load() or PersistedAuth()
        updated = stored.model_copy(
            update={
                "access_token": access_token,
                "refresh_token": refresh_token or stored.refresh_token,
            }
        )
        self.save(updated)
        return updated

    def clear(self) -> None:
        self._path().unlink(missing_ok=True)
