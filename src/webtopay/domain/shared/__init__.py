"""Shared domain interfaces."""

from .http_client_protocol import HttpFetcher

__all__ = ["HttpFetcher"]
