import asyncio
import json
from logging import getLogger
from typing import Any, Mapping, Optional, TypeVar, Union

from httpx import AsyncClient, Headers, Request, RequestError, Response
from pydantic import TypeAdapter

from .._config import Config, EndpointConfig
from .._utils._form import to_form_data, to_multipart
from .._utils._query import QueryValue, encode_query
from .._utils._request_spec import RequestSpec
from .._utils._ssl_context import get_httpx_client_kwargs
from .._utils.constants import (
    APPLICATION_JSON,
    HEADER_ACCEPT,
    HEADER_AUTH_TOKEN,
    HEADER_CONTENT_TYPE,
)
from ..models.errors import (
    ApplicationError,
    ResponseParseError,
    TransportError,
)
from ._auth_interceptor import AuthInterceptor
from ._pending import PendingRequest
from .token_store import TokenStore

T = TypeVar("T")


class ApiService:
    """Typed, cancelable HTTP client for a single API origin.

    Every verb starts the exchange right away on the running event loop and
    returns a :class:`PendingRequest`. The credential token is attached to the
    request and picked up again from successful responses by an
    :class:`AuthInterceptor`.

    Args:
        config: Endpoint settings, read once.
        token_store: Credential service the token is read from and rotated into.
        client: Optional ``httpx.AsyncClient`` to send through.
        skip_first_nested_key: Passed to the query encoder for GET payloads.
    """

    def __init__(
        self,
        config: Union[Config, EndpointConfig],
        token_store: TokenStore,
        *,
        client: Optional[AsyncClient] = None,
        skip_first_nested_key: bool = True,
    ) -> None:
        self._logger = getLogger("apiservice")
        self._endpoint = config.endpoint() if isinstance(config, Config) else config
        self._interceptor = AuthInterceptor(token_store)
        self._skip_first_nested_key = skip_first_nested_key

        if client is None:
            client = AsyncClient(
                **get_httpx_client_kwargs(),
                headers=Headers(self.default_headers),
            )
        self._client_async = client

        self._logger.debug(f"ENDPOINT: {self._endpoint.model_dump()}")

    @property
    def endpoint(self) -> EndpointConfig:
        return self._endpoint

    @property
    def default_headers(self) -> dict[str, str]:
        return {HEADER_ACCEPT: APPLICATION_JSON}

    def get(
        self,
        path: str,
        query: Union[QueryValue, Mapping[str, Any], None] = None,
        *,
        result_type: Optional[type[T]] = None,
    ) -> PendingRequest[T]:
        if query is not None:
            encoded = encode_query(
                query, skip_first_nested_key=self._skip_first_nested_key
            )
            path = f"{path}?{encoded}"
        return self.request(RequestSpec("GET", path), result_type=result_type)

    def post(
        self, path: str, body: Any, *, result_type: Optional[type[T]] = None
    ) -> PendingRequest[T]:
        spec = RequestSpec(
            "POST", path, json=body, headers={HEADER_CONTENT_TYPE: APPLICATION_JSON}
        )
        return self.request(spec, result_type=result_type)

    def put(
        self, path: str, body: Any, *, result_type: Optional[type[T]] = None
    ) -> PendingRequest[T]:
        spec = RequestSpec(
            "PUT", path, json=body, headers={HEADER_CONTENT_TYPE: APPLICATION_JSON}
        )
        return self.request(spec, result_type=result_type)

    def delete(
        self, path: str, id: int, *, result_type: Optional[type[T]] = None
    ) -> PendingRequest[T]:
        spec = RequestSpec("DELETE", f"{path}/{id}")
        return self.request(spec, result_type=result_type)

    def upload(
        self,
        path: str,
        form: Mapping[str, Any],
        *,
        result_type: Optional[type[T]] = None,
    ) -> PendingRequest[T]:
        """POST ``form`` as a multipart body, one part per key."""
        spec = RequestSpec("POST", path, files=to_multipart(to_form_data(form)))
        return self.request(spec, result_type=result_type)

    def request(
        self, spec: RequestSpec, *, result_type: Optional[type[T]] = None
    ) -> PendingRequest[T]:
        pending: PendingRequest[T] = PendingRequest()
        task = asyncio.create_task(self._exchange(spec, pending, result_type))
        pending._bind(task)
        return pending

    async def aclose(self) -> None:
        await self._client_async.aclose()

    async def __aenter__(self) -> "ApiService":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _build_request(self, spec: RequestSpec) -> Request:
        kwargs: dict[str, Any] = {}
        if spec.files is not None:
            kwargs["files"] = spec.files
        elif spec.json is not None:
            kwargs["content"] = json.dumps(spec.json)

        request = self._client_async.build_request(
            spec.method, f"{self._endpoint.base_url}/{spec.path}", **kwargs
        )
        self._interceptor.before_send(request)
        for header, value in spec.headers.items():
            request.headers[header] = value
        return request

    async def _exchange(
        self,
        spec: RequestSpec,
        pending: PendingRequest[T],
        result_type: Optional[type[T]],
    ) -> None:
        try:
            request = self._build_request(spec)
        except Exception as e:
            pending._reject(e)
            return
        pending._attach(request)

        self._logger.debug(f"Request: {request.method} {request.url}")
        self._logger.debug(f"HEADERS: {_redact(request.headers)}")

        try:
            response = await self._client_async.send(request)
        except RequestError as e:
            self._logger.debug(f"Transport failure: {e!r}")
            pending._reject(TransportError(e))
            return

        self._logger.debug(f"Response: {response.status_code} {request.url}")

        if response.status_code == 200:
            self._interceptor.after_receive(response)

        try:
            value = self._settle(response, result_type)
        except Exception as e:
            pending._reject(e)
        else:
            pending._resolve(value)

    def _settle(self, response: Response, result_type: Optional[type[T]]) -> Any:
        text = response.text
        try:
            data = json.loads(text, parse_constant=_reject_constant)
        except ValueError as e:
            self._logger.warning(
                f"Response to {response.request.url} is not valid JSON: {e}"
            )
            raise ResponseParseError(text, str(e)) from e

        if isinstance(data, dict) and _is_truthy(data.get("error")):
            raise ApplicationError(data["error"])

        if result_type is not None:
            return TypeAdapter(result_type).validate_python(data)
        return data


def _redact(headers: Headers) -> dict[str, str]:
    return {
        key: "***" if key.lower() == HEADER_AUTH_TOKEN.lower() else value
        for key, value in headers.items()
    }


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def _is_truthy(value: Any) -> bool:
    # empty containers count as set, like any other present object
    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0 and value == value
    return True
