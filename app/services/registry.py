"""
Adapter registry – holds one adapter per booking platform.

Provides a single place to look up the adapter for a course's provider.
Initialized once at application startup; owns the provider HTTP clients
and closes them on shutdown.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from app.config import HTTP_TIMEOUT_SECONDS
from app.models import FeeGroup, Provider
from app.services.chronogolf.client import ChronogolfClient
from app.services.chronogolf.service import ChronogolfAdapter
from app.services.miclub.client import MiClubClient
from app.services.miclub.service import MiClubAdapter
from app.services.provider import ProviderAdapter
from app.services.quick18.client import Quick18Client
from app.services.quick18.service import Quick18Adapter
from app.services.teeitup.client import TeeItUpClient
from app.services.teeitup.service import TeeItUpAdapter

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """
    Registry of provider adapters keyed by Provider.

    Tests register fakes directly with ``register``.
    """

    def __init__(self) -> None:
        self._adapters: dict[Provider, ProviderAdapter] = {}

    def register(self, provider: Provider, adapter: ProviderAdapter) -> None:
        self._adapters[provider] = adapter

    def register_defaults(
        self,
        fee_groups: Mapping[str, FeeGroup] | None = None,
        *,
        timeout: float = HTTP_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize and register the four live platform integrations."""
        self.register(Provider.MICLUB, MiClubAdapter(MiClubClient(timeout=timeout), fee_groups))
        self.register(Provider.QUICK18, Quick18Adapter(Quick18Client(timeout=timeout)))
        self.register(Provider.TEEITUP, TeeItUpAdapter(TeeItUpClient(timeout=timeout)))
        self.register(Provider.CHRONOGOLF, ChronogolfAdapter(ChronogolfClient(timeout=timeout)))
        logger.info("Registered adapters: %s", ", ".join(p.value for p in self._adapters))

    def get(self, provider: Provider) -> ProviderAdapter | None:
        return self._adapters.get(provider)

    @property
    def providers(self) -> list[Provider]:
        return list(self._adapters)

    async def close(self) -> None:
        """Close all adapter HTTP clients; one failing close does not skip the rest."""
        for provider, adapter in self._adapters.items():
            try:
                await adapter.close()
            except Exception:
                logger.exception("Failed to close %s adapter", provider.value)
        self._adapters.clear()
