import asyncio
from enum import Enum
from typing import Any, Generator, Generic, Optional, TypeVar

from httpx import Request

T = TypeVar("T")


class RequestState(str, Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    REJECTED = "rejected"
    CANCELED = "canceled"


class PendingRequest(Generic[T]):
    """Handle for one in-flight exchange.

    The handle is awaitable and settles exactly once, either resolved with the
    parsed response or rejected with an ``ApiServiceError``. Calling
    :meth:`cancel` aborts the exchange and moves the handle to ``CANCELED``;
    ``result`` then never settles.

    Example:
        ```python
        pending = api.get("users", {"active": True})
        pending.cancel()
        assert pending.state is RequestState.CANCELED
        ```
    """

    def __init__(self) -> None:
        loop = asyncio.get_running_loop()
        self._future: asyncio.Future[T] = loop.create_future()
        self._future.add_done_callback(self._on_future_done)
        self._task: Optional[asyncio.Task[None]] = None
        self._request: Optional[Request] = None
        self._state = RequestState.PENDING

    @property
    def result(self) -> "asyncio.Future[T]":
        return self._future

    @property
    def request(self) -> Optional[Request]:
        """The ``httpx.Request`` being sent, once it has been built."""
        return self._request

    @property
    def state(self) -> RequestState:
        return self._state

    def done(self) -> bool:
        return self._future.done()

    def cancel(self) -> bool:
        """Abort the exchange. Returns ``False`` once the handle left ``PENDING``."""
        if self._state is not RequestState.PENDING:
            return False
        self._state = RequestState.CANCELED
        if self._task is not None:
            self._task.cancel()
        return True

    def __await__(self) -> Generator[Any, None, T]:
        return self._future.__await__()

    def __repr__(self) -> str:
        target = f"{self._request.method} {self._request.url}" if self._request else "-"
        return f"<PendingRequest {self._state.value} {target}>"

    def _bind(self, task: "asyncio.Task[None]") -> None:
        self._task = task

    def _attach(self, request: Request) -> None:
        self._request = request

    def _resolve(self, value: T) -> None:
        if self._state is not RequestState.PENDING or self._future.done():
            return
        self._state = RequestState.RESOLVED
        self._future.set_result(value)

    def _reject(self, error: BaseException) -> None:
        if self._state is not RequestState.PENDING or self._future.done():
            return
        self._state = RequestState.REJECTED
        self._future.set_exception(error)

    def _on_future_done(self, future: "asyncio.Future[T]") -> None:
        # the awaiting side gave up on the result
        if future.cancelled():
            self.cancel()
