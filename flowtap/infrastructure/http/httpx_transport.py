"""httpx transport — implements the Transport port against the FlowTap business API.

Sends JSON requests to ``{base_url}{path}`` with an optional bearer token.
Successful mapping bodies are augmented with ``_message`` and ``_status``;
failures are raised as ``ApiError`` carrying the best available message.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

import httpx

from flowtap.application.interfaces import Transport
from flowtap.application.services.response_normalizer import is_present, join_error_items
from flowtap.domain.exceptions import ApiError

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], str | None]


class HttpxTransport(Transport):
    """Infrastructure adapter — connects to the business API over HTTP.

    Uses an injected httpx.AsyncClient when given (connection pooling,
    tests with MockTransport); otherwise opens a client per request.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        token_provider: TokenProvider | None = None,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._token_provider = token_provider
        self._timeout = timeout
        self._http_client = http_client

    def _get_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self._token_provider() if self._token_provider else self._token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        url = f"{self._base_url}{path}"
        query = {k: v for k, v in (params or {}).items() if v is not None}

        client = await self._get_client()
        should_close = self._http_client is None

        try:
            logger.debug("%s %s params=%s", method, url, query)
            response = await client.request(
                method,
                url,
                params=query or None,
                json=body,
                headers=self._get_headers(),
            )
        except httpx.HTTPError as exc:
            logger.warning("Transport fault on %s %s: %s", method, url, exc)
            raise ApiError("Network error", 0, None) from exc
        finally:
            if should_close:
                await client.aclose()

        payload = self._decode(response)

        if not response.is_success:
            raise ApiError(
                self._error_message(payload), response.status_code, payload
            )

        if isinstance(payload, dict):
            return {
                **payload,
                "_message": payload.get("message") or payload.get("detail") or "Success",
                "_status": response.status_code,
            }
        return payload

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        """Decoded JSON body, or ``{}`` when the body is empty or not JSON."""
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {}

    @staticmethod
    def _error_message(payload: Any) -> str:
        """Message for a non-2xx body: detail, title, message, errors[], raw string."""
        if isinstance(payload, Mapping):
            for key in ("detail", "title", "message"):
                if is_present(payload.get(key)):
                    return str(payload[key])
            joined = join_error_items(payload.get("errors"))
            if joined:
                return joined
        elif isinstance(payload, str) and payload:
            return payload
        return "Request failed"
