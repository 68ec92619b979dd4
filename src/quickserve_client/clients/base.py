from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..http_client import HttpClient, Payload


@dataclass
class BaseClient:
    http: HttpClient

    def _request(self, method: str, path: str, **kwargs: Any) -> Payload:
        return self.http.request(method, path, **kwargs)
