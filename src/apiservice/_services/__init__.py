from ._auth_interceptor import AuthInterceptor
from ._pending import PendingRequest, RequestState
from .api_service import ApiService
from .token_store import DotEnvTokenStore, InMemoryTokenStore, TokenStore

__all__ = [
    "ApiService",
    "AuthInterceptor",
    "DotEnvTokenStore",
    "InMemoryTokenStore",
    "PendingRequest",
    "RequestState",
    "TokenStore",
]
