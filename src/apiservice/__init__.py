from ._apiservice_sdk import ApiServiceSDK
from ._config import CacheConfig, Config, EndpointConfig
from ._services import (
    ApiService,
    AuthInterceptor,
    DotEnvTokenStore,
    InMemoryTokenStore,
    PendingRequest,
    RequestState,
    TokenStore,
)
from ._utils import (
    QueryMapping,
    QueryScalar,
    QuerySequence,
    encode_query,
    to_form_data,
    to_query_value,
)
from .models.errors import (
    ApiServiceError,
    ApplicationError,
    BaseUrlMissingError,
    ResponseParseError,
    TransportError,
)

__all__ = [
    "ApiService",
    "ApiServiceError",
    "ApiServiceSDK",
    "ApplicationError",
    "AuthInterceptor",
    "BaseUrlMissingError",
    "CacheConfig",
    "Config",
    "DotEnvTokenStore",
    "EndpointConfig",
    "InMemoryTokenStore",
    "PendingRequest",
    "QueryMapping",
    "QueryScalar",
    "QuerySequence",
    "RequestState",
    "ResponseParseError",
    "TokenStore",
    "TransportError",
    "encode_query",
    "to_form_data",
    "to_query_value",
]
