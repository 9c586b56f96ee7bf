from os import environ as env
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, HttpUrl, field_validator

from ._utils.constants import ENV_API_URL, ENV_CACHE_API
from .models.errors import BaseUrlMissingError

_TRUTHY = {"1", "true", "yes", "on"}


class CacheConfig(BaseModel):
    api: bool = False


class Config(BaseModel):
    """Construction-time settings: ``{"api": ..., "cache": {"api": ...}}``."""

    api: str
    cache: CacheConfig = CacheConfig()

    @field_validator("api", mode="before")
    @classmethod
    def validate_api(cls, value: Any) -> Any:
        if not value:
            raise BaseUrlMissingError()
        HttpUrl(url=value)
        return str(value).rstrip("/")

    @classmethod
    def from_env(cls, overrides: Optional[Mapping[str, Any]] = None) -> "Config":
        data: dict[str, Any] = {
            "api": env.get(ENV_API_URL),
            "cache": {"api": env.get(ENV_CACHE_API, "").lower() in _TRUTHY},
        }
        if overrides:
            data.update({k: v for k, v in overrides.items() if v is not None})
        if not data["api"]:
            raise BaseUrlMissingError()
        return cls.model_validate(data)

    def endpoint(self) -> "EndpointConfig":
        return EndpointConfig(base_url=self.api, cache_enabled=bool(self.cache.api))


class EndpointConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_url: str
    cache_enabled: bool = False
