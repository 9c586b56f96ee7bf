import logging
import sys
from logging import getLogger
from typing import Optional

from dotenv import load_dotenv

from ._config import Config
from ._services.api_service import ApiService
from ._services.token_store import InMemoryTokenStore, TokenStore
from ._utils.constants import LOGGER_NAME

load_dotenv()


def setup_logging(debug: bool = False) -> None:
    logging.basicConfig(stream=sys.stderr, level=logging.INFO)
    getLogger(LOGGER_NAME).setLevel(logging.DEBUG if debug else logging.INFO)


class ApiServiceSDK:
    """Builds the configuration, the token store and one ``ApiService``.

    Construct it once at application start-up and hand ``sdk.api`` to the code
    that issues requests.
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        cache_api: Optional[bool] = None,
        token_store: Optional[TokenStore] = None,
        skip_first_nested_key: bool = True,
        debug: bool = False,
    ) -> None:
        overrides: dict = {"api": base_url}
        if cache_api is not None:
            overrides["cache"] = {"api": cache_api}
        self._config = Config.from_env(overrides)

        setup_logging(debug)
        log = getLogger(LOGGER_NAME)

        log.debug("CONFIG:")
        log.debug(f"{self._config.model_dump()}\n")

        self._token_store = (
            token_store if token_store is not None else InMemoryTokenStore()
        )
        self._skip_first_nested_key = skip_first_nested_key
        self._api: Optional[ApiService] = None

    @property
    def config(self) -> Config:
        return self._config

    @property
    def token_store(self) -> TokenStore:
        return self._token_store

    @property
    def api(self) -> ApiService:
        if self._api is None:
            self._api = ApiService(
                self._config,
                self._token_store,
                skip_first_nested_key=self._skip_first_nested_key,
            )
        return self._api

    async def aclose(self) -> None:
        if self._api is not None:
            await self._api.aclose()
