from .auth_store import AuthStore
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthError,
    ForbiddenError,
    InvalidResponseError,
    NotFoundError,
    SessionExpiredError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from .http_client import HttpClient
from .logging_config import configure_logging
from .models import (
    AccountStatus,
    AdminListQuery,
    AnalyticsKind,
    AuthPayload,
    BookingStatus,
    Pagination,
    PersistedAuth,
    ProviderSearchQuery,
    Role,
)
from .session import QuickServeSession
from .state import AdminState, AuthState, CustomerState, DashboardState

__version__ = "0.1.0"

__all__ = [
    "AccountStatus",
    "AdminListQuery",
    "AdminState",
    "AnalyticsKind",
    "ApiError",
    "AuthError",
    "AuthPayload",
    "AuthState",
    "AuthStore",
    "BookingStatus",
    "ClientConfig",
    "ConfigError",
    "CustomerState",
    "DashboardState",
    "ForbiddenError",
    "HttpClient",
    "InvalidResponseError",
    "NotFoundError",
    "Pagination",
    "PersistedAuth",
    "ProviderSearchQuery",
    "QuickServeSession",
    "Role",
    "SessionExpiredError",
    "TransportError",
    "UnauthorizedError",
    "ValidationError",
    "configure_logging",
    "load_config",
]
