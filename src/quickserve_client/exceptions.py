from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.code}: {self.message}"

    @property
    def server_message(self) -> str | None:
        """The ``message`` field of the error envelope, when the server sent one."""
        if isinstance(self.raw_payload, dict):
            message = self.raw_payload.get("message")
            if isinstance(message, str) and message.strip():
                return message
        return None


class UnauthorizedError(ApiError):
    pass


class ForbiddenError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class AuthError(UnauthorizedError):
    """Authentication failed or the access token was rejected."""


class PermissionError(ForbiddenError):
    """The authenticated role may not call this endpoint."""


class ConflictError(ApiError):
    """409 or conflict-style errors."""


class RateLimitError(ApiError):
    """429 throttling error."""


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class SessionExpiredError(AuthError):
    """The token refresh failed; persisted auth has been cleared."""


class InvalidResponseError(ApiError):
    """A success status whose body is not JSON."""
