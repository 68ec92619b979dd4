from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .auth_store import AuthStore
from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import ApiError, InvalidResponseError, SessionExpiredError, TransportError
from .models import AuthPayload

logger = logging.getLogger(__name__)

REFRESH_PATH = "/auth/refresh"

SessionExpiredHook = Callable[[], None]
Payload = dict[str, Any] | list[Any] | None


@dataclass
class RequestSpec:
    """One logical request. ``retried`` guards the single refresh-and-retry."""

    method: str
    path: str
    json_body: Any = None
    params: dict[str, Any] | None = None
    retried: bool = False


@dataclass
class HttpClient:
    config: ClientConfig
    auth_store: AuthStore | None = None
    session: requests.Session | None = None
    on_session_expired: SessionExpiredHook | None = None

    def __post_init__(self) -> None:
        if self.auth_store is None:
            self.auth_store = AuthStore(app_name=self.config.app_name)
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)

    def _build_url(self, path: str) -> str:
        base = self.config.api_base_url.rstrip("/") + "/"
        return urljoin(base, path.lstrip("/"))

    @property
    def _timeout(self) -> tuple[float, float]:
        return (self.config.connect_timeout_seconds, self.config.read_timeout_seconds)

    def request(
        self,
        method: str,
        path: str,
        *,
        json_body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Payload:
        return self.dispatch(RequestSpec(method=method.upper(), path=path, json_body=json_body, params=params))

    def dispatch(self, spec: RequestSpec) -> Payload:
        response = self._send(spec)
        if response.status_code == 401 and not spec.retried:
            spec.retried = True
            if self._refresh_session(spec):
                response = self._send(spec)
        return self._handle(response)

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        token = self.auth_store.access_token() if self.auth_store else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _send(self, spec: RequestSpec) -> requests.Response:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        try:
            return self.session.request(
                method=spec.method,
                url=self._build_url(spec.path),
                headers=self._headers(),
                json=spec.json_body,
                params=spec.params,
                timeout=self._timeout,
                verify=self.config.verify_ssl,
            )
        except requests.RequestException as exc:
            raise TransportError(
                code="TRANSPORT_ERROR",
                message=str(exc),
                details={"type": type(exc).__name__},
                status_code=0,
                raw_payload=None,
            ) from exc

    def _handle(self, response: requests.Response) -> Payload:
        if response.ok:
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as exc:
                raise InvalidResponseError(
                    code="INVALID_RESPONSE",
                    message="Response body is not valid JSON",
                    details={"content_type": response.headers.get("Content-Type")},
                    status_code=response.status_code,
                    raw_payload=None,
                ) from exc
        raise map_error(response.status_code, _error_payload(response))

    def _refresh_session(self, spec: RequestSpec) -> bool:
        """Swap in fresh tokens; False when there is no refresh token to try."""
        if self.auth_store is None or self.session is None:
            raise RuntimeError("HTTP client not initialized")
        refresh_token = self.auth_store.refresh_token()
        if not refresh_token:
            return False
        logger.info("token_refresh_attempt", extra={"path": spec.path})
        try:
            response = self.session.post(
                self._build_url(REFRESH_PATH),
                json={"refreshToken": refresh_token},
                headers={"Accept": "application/json", "Content-Type": "application/json"},
                timeout=self._timeout,
                verify=self.config.verify_ssl,
            )
            if not response.ok:
                raise map_error(response.status_code, _error_payload(response))
            tokens = AuthPayload.model_validate(response.json()["data"])
        except (requests.RequestException, ApiError, KeyError, TypeError, ValueError) as exc:
            logger.warning("token_refresh_failure", extra={"path": spec.path, "reason": type(exc).__name__})
            self.auth_store.clear()
            if self.on_session_expired:
                self.on_session_expired()
            raise SessionExpiredError(
                code="SESSION_EXPIRED",
                message="Session expired, please log in again",
                details=None,
                status_code=401,
                raw_payload=None,
            ) from exc
        self.auth_store.update_tokens(tokens.access_token, tokens.refresh_token)
        logger.info("token_refresh_success", extra={"path": spec.path})
        return True


def _error_payload(response: requests.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        return {"details": response.text} if response.text else {}
    if isinstance(payload, dict):
        return payload
    return {"details": payload}
