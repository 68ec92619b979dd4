from .admin_state import AdminState
from .auth_state import AuthState
from .base import BaseState
from .customer_state import CustomerState
from .dashboard_state import DashboardState

__all__ = [
    "AdminState",
    "AuthState",
    "BaseState",
    "CustomerState",
    "DashboardState",
]
