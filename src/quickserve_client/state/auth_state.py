from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from ..auth_store import AuthStore
from ..clients.auth import AuthClient
from ..exceptions import ApiError
from ..models import AuthPayload, PersistedAuth
from .base import BaseState, unwrap

logger = logging.getLogger(__name__)


class AuthState(BaseState):
    name = "auth"

    def __init__(self, client: AuthClient, storage: AuthStore) -> None:
        self.client = client
        self.storage = storage
        self.clear_data()
        self.reload()

    def initial_state(self) -> dict[str, Any]:
        return {
            "user": None,
            "access_token": None,
            "refresh_token": None,
            "is_authenticated": False,
            "is_loading": False,
            "error": None,
        }

    def reload(self) -> None:
        """Pick up the persisted session, e.g. after the HTTP client refreshed tokens."""
        stored = self.storage.load()
        if stored is None:
            return
        self.user = stored.user
        self.access_token = stored.access_token
        self.refresh_token = stored.refresh_token
        self.is_authenticated = stored.is_authenticated

    def _persist(self) -> None:
        self.storage.save(
            PersistedAuth(
                user=self.user,
                access_token=self.access_token,
                refresh_token=self.refresh_token,
                is_authenticated=self.is_authenticated,
            )
        )

    def _apply_session(self, data: Any) -> None:
        session = AuthPayload.model_validate(data)
        self.access_token = session.access_token
        self.refresh_token = session.refresh_token
        if session.user is not None:
            self.user = session.user
        self.is_authenticated = True
        self._persist()

    def login(self, email: str, password: str) -> Any:
        try:
            data = self._run(
                "login",
                lambda: self.client.login({"email": email, "password": password}),
                fallback="Login failed. Please try again.",
                apply=self._apply_session,
            )
        except ApiError as exc:
            logger.warning("login_failure", extra={"status_code": exc.status_code, "error_code": exc.code})
            raise
        logger.info("login_success", extra={"user_id": (self.user or {}).get("id"), "role": (self.user or {}).get("role")})
        return data

    def signup(self, form: Mapping[str, Any]) -> Any:
        return self._run(
            "signup",
            lambda: self.client.signup(form),
            fallback="Signup failed. Please try again.",
            apply=self._apply_session,
        )

    def signup_customer(self, form: Mapping[str, Any]) -> Any:
        return self._run(
            "signup_customer",
            lambda: self.client.signup_customer(form),
            fallback="Signup failed. Please try again.",
            apply=self._apply_session,
        )

    def verify_token(self) -> Any:
        return self._run(
            "verify_token",
            self.client.verify_token,
            fallback="Session verification failed",
        )

    def logout(self) -> None:
        email = (self.user or {}).get("email")
        if email:
            try:
                self.client.logout(email)
            except ApiError as exc:
                # the local session is dropped regardless
                logger.warning("logout_request_failed", extra={"status_code": exc.status_code})
        self.clear_data()
        self.storage.clear()
        logger.info("logout")

    def refresh_access_token(self) -> bool:
        self.reload()
        if not self.refresh_token:
            self.logout()
            return False
        try:
            payload = self.client.refresh_token(self.refresh_token)
            self._apply_session(unwrap(payload))
        except (ApiError, ValidationError) as exc:
            logger.warning("token_refresh_failure", extra={"reason": type(exc).__name__})
            self.logout()
            return False
        return True

    def update_user(self, **changes: Any) -> None:
        # the adapter may have rotated the tokens on disk since this state last read them
        self.reload()
        self.user = {**(self.user or {}), **changes}
        self._persist()
