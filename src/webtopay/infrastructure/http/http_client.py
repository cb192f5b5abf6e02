from __future__ import annotations

from typing import Any, Optional, Type
from types import TracebackType

import httpx


class AsyncHttpClient:
    """Thin asynchronous HTTP client wrapper around httpx.AsyncClient.

    - Follows redirects.
    - Applies a default timeout.
    - Raises for non-successful responses.
    """

    def __init__(self, timeout: float = 10.0, **client_kwargs: Any) -> None:
        self._client = httpx.AsyncClient(
            timeout=timeout, follow_redirects=True, **client_kwargs
        )

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        resp = await self._client.get(url, **kwargs)
        resp.raise_for_status()
        return resp

    async def fetch(self, url: str) -> str:
        resp = await self.get(url)
        return resp.text

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        await self.aclose()
