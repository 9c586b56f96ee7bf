from logging import getLogger
from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable

from dotenv import dotenv_values, set_key

from .._utils.constants import DOTENV_FILE, ENV_ACCESS_TOKEN

logger = getLogger("apiservice")


@runtime_checkable
class TokenStore(Protocol):
    """Holds the credential token relayed on every exchange."""

    def get_token(self) -> Optional[str]: ...

    def set_token(self, token: str) -> None: ...


class InMemoryTokenStore:
    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token

    def get_token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: str) -> None:
        self._token = token


class DotEnvTokenStore:
    """Token store backed by a ``.env`` file.

    The token is read once when the store is created. Rotated tokens are
    written back under ``key`` and the other entries in the file are kept.
    """

    def __init__(
        self,
        path: Union[str, Path] = DOTENV_FILE,
        key: str = ENV_ACCESS_TOKEN,
    ) -> None:
        self._path = Path(path)
        self._key = key
        self._token: Optional[str] = None
        if self._path.exists():
            self._token = dotenv_values(self._path).get(self._key) or None

    @property
    def path(self) -> Path:
        return self._path

    def get_token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: str) -> None:
        self._token = token
        self._path.touch(exist_ok=True)
        set_key(self._path, self._key, token, quote_mode="never")
        logger.debug(f"Persisted rotated token to {self._path}")
