"""FastAPI dependencies for the callback service."""

from __future__ import annotations

from functools import lru_cache

from ..client import WebToPayClient
from ..env import get_settings


@lru_cache(maxsize=1)
def get_client() -> WebToPayClient:
    """Get the process-wide client so the public key cache is shared."""
    return WebToPayClient.from_settings(get_settings())
