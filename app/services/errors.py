"""
Exceptions raised inside provider adapters.

None of these escape an adapter: ``ProviderAdapter.fetch_slots`` converts
them into an empty slot list with a reason string.
"""

from __future__ import annotations


class ProviderError(Exception):
    """Base exception for provider adapter errors."""

    def __init__(self, message: str, provider: str = "unknown"):
        self.provider = provider
        self.message = message
        super().__init__(f"[{provider}] {message}")


class ConfigurationError(ProviderError):
    """The course lacks an identifier or URL the provider needs."""


class ParseError(ProviderError):
    """The upstream payload did not have a recognisable shape."""
