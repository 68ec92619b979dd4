from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .auth_store import AuthStore
from .clients.admin_client import AdminClient
from .clients.auth import AuthClient
from .clients.customer_client import CustomerClient
from .clients.provider_client import ProviderClient
from .clients.public_client import PublicClient
from .config import ClientConfig, load_config
from .http_client import HttpClient, SessionExpiredHook
from .logging_config import configure_logging
from .state.admin_state import AdminState
from .state.auth_state import AuthState
from .state.base import BaseState
from .state.customer_state import CustomerState
from .state.dashboard_state import DashboardState

logger = logging.getLogger(__name__)


@dataclass
class QuickServeSession:
    """One HTTP client, the five API modules and one state store per role."""

    config: ClientConfig
    auth_store: AuthStore | None = None
    http: HttpClient | None = None
    on_session_expired: SessionExpiredHook | None = None

    auth_client: AuthClient = field(init=False)
    provider_client: ProviderClient = field(init=False)
    customer_client: CustomerClient = field(init=False)
    public_client: PublicClient = field(init=False)
    admin_client: AdminClient = field(init=False)
    auth: AuthState = field(init=False)
    dashboard: DashboardState = field(init=False)
    customer: CustomerState = field(init=False)
    admin: AdminState = field(init=False)
    _client_hook: SessionExpiredHook | None = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        if self.http is not None and self.auth_store is None:
            self.auth_store = self.http.auth_store
        self.auth_store = self.auth_store or AuthStore(app_name=self.config.app_name)
        if self.http is None:
            self.http = HttpClient(config=self.config, auth_store=self.auth_store)
        # a hook already set on the HTTP client still runs, after the stores are reset
        self._client_hook = self.http.on_session_expired
        self.http.on_session_expired = self._handle_session_expired

        self.auth_client = AuthClient(http=self.http)
        self.provider_client = ProviderClient(http=self.http)
        self.customer_client = CustomerClient(http=self.http)
        self.public_client = PublicClient(http=self.http)
        self.admin_client = AdminClient(http=self.http)

        self.auth = AuthState(self.auth_client, self.auth_store)
        self.dashboard = DashboardState(self.provider_client)
        self.customer = CustomerState(self.customer_client, self.public_client)
        self.admin = AdminState(self.admin_client)

    @classmethod
    def from_env(cls, env_file: str | None = None, **kwargs) -> "QuickServeSession":
        config = load_config(env_file)
        configure_logging(config.log_level)
        return cls(config=config, **kwargs)

    def role_states(self) -> tuple[BaseState, ...]:
        return (self.dashboard, self.customer, self.admin)

    def logout(self) -> None:
        self.auth.logout()
        for state in self.role_states():
            state.clear_data()

    def _handle_session_expired(self) -> None:
        logger.warning("session_expired")
        self.auth.clear_data()
        for state in self.role_states():
            state.clear_data()
        for hook in (self._client_hook, self.on_session_expired):
            if hook:
                hook()
