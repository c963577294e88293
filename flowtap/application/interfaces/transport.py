"""Abstract transport interface — port for the client that talks to the business API.

The core hands over ``(method, path, params | body)`` and receives either a
decoded response body or an exception. Serialization, authentication and
timeouts belong to the implementation.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class Transport(ABC):
    """Port — implemented in the infrastructure layer (e.g. httpx)."""

    @abstractmethod
    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        """Issue a request and return the decoded response body.

        Raises on transport faults and non-2xx responses.
        """
        ...

    async def get(self, path: str, params: Mapping[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Any = None) -> Any:
        return await self.request("POST", path, body=body)

    async def put(self, path: str, body: Any = None) -> Any:
        return await self.request("PUT", path, body=body)

    async def patch(self, path: str, body: Any = None) -> Any:
        return await self.request("PATCH", path, body=body)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def aclose(self) -> None:
        """Release pooled connections, if any."""
        return None
