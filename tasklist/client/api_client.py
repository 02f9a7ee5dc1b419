"""HTTP client for the tasklist API with bearer token injection."""

import logging
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Any, Self

import httpx

from tasklist.core.config import constants


logger = logging.getLogger(__name__)


TokenGetter = Callable[[], Awaitable[str | None]]


class ApiError(Exception):
    """Non-2xx response from the API.

    Attributes:
        status_code: HTTP status of the response
        body: Decoded JSON body, or the raw text when it is not JSON
    """

    def __init__(self, status_code: int, body: Any) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"API request failed with status {status_code}")

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
        except ValueError:
            body = response.text
        return cls(response.status_code, body)

    @property
    def server_error(self) -> str | None:
        """The ``error`` field of the response body, if the server sent one."""
        if isinstance(self.body, dict) and self.body.get("error"):
            return str(self.body["error"])
        return None


class ApiClient:
    """Thin wrapper over ``httpx.AsyncClient`` bound to the API base URL.

    A token getter, once set, is awaited before every request and its token
    sent as ``Authorization: Bearer``. If the getter fails the request is sent
    without credentials.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = constants.API_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token_getter: TokenGetter | None = None
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
            event_hooks={"request": [self._attach_token]},
        )

    def set_token_getter(self, getter: TokenGetter) -> None:
        self._token_getter = getter

    async def _attach_token(self, request: httpx.Request) -> None:
        if self._token_getter is None:
            return
        try:
            token = await self._token_getter()
        except Exception as e:
            logger.error("Failed to get access token", extra={"error": str(e), "url": str(request.url)})
            return
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def request(self, method: str, url: str, *, json: Any = None) -> httpx.Response:
        """Send a request and return the response.

        Raises:
            ApiError: If the response status is 4xx or 5xx
            httpx.TransportError: If the server could not be reached
        """
        response = await self._client.request(method, url, json=json)
        if response.is_error:
            logger.warning(
                "api_request_failed",
                extra={"method": method, "url": url, "status_code": response.status_code},
            )
            raise ApiError.from_response(response)
        return response

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
