from __future__ import annotations

from typing import Any, Mapping

from ..http_client import Payload
from .base import BaseClient


class AuthClient(BaseClient):
    def login(self, credentials: Mapping[str, Any]) -> Payload:
        return self._request("POST", "/auth/login", json_body=dict(credentials))

    def signup(self, data: Mapping[str, Any]) -> Payload:
        return self._request("POST", "/auth/signup", json_body=dict(data))

    def signup_customer(self, data: Mapping[str, Any]) -> Payload:
        return self._request("POST", "/auth/signup/customer", json_body=dict(data))

    def logout(self, email: str) -> Payload:
        return self._request("POST", "/auth/logout", json_body={"email": email})

    def refresh_token(self, refresh_token: str) -> Payload:
        return self._request("POST", "/auth/refresh", json_body={"refreshToken": refresh_token})

    def verify_token(self) -> Payload:
        return self._request("GET", "/auth/me")
