from .admin_client import AdminClient
from .auth import AuthClient
from .customer_client import CustomerClient
from .provider_client import ProviderClient
from .public_client import PublicClient

__all__ = [
    "AdminClient",
    "AuthClient",
    "CustomerClient",
    "ProviderClient",
    "PublicClient",
]
