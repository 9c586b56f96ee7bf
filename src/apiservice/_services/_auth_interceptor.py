from logging import getLogger

from httpx import Request, Response

from .._utils.constants import HEADER_AUTH_TOKEN
from .token_store import TokenStore

logger = getLogger("apiservice")


class AuthInterceptor:
    """Carries the credential token across the transport boundary.

    The same header name is used in both directions so a token rotated by the
    server on one response is sent on the next request.
    """

    header_name = HEADER_AUTH_TOKEN

    def __init__(self, token_store: TokenStore) -> None:
        self._token_store = token_store

    def before_send(self, request: Request) -> None:
        token = self._token_store.get_token()
        if token:
            request.headers[self.header_name] = token

    def after_receive(self, response: Response) -> None:
        token = response.headers.get(self.header_name)
        if token:
            logger.debug("Received rotated auth token")
            self._token_store.set_token(token)
