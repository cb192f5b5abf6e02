"""Protocol interface for the HTTP collaborator.

The client only needs to fetch text documents (the RSA public key and the
payment methods XML). Any object with a matching ``fetch`` coroutine can be
injected, which keeps the client testable without network access.
"""

from __future__ import annotations

from typing import Protocol


class HttpFetcher(Protocol):
    """Fetches a URL and returns the response body as text.

    Implementations must follow redirects and fail after a bounded timeout.
    """

    async def fetch(self, url: str) -> str:
        """Return the body of a successful GET response for ``url``."""
        ...
