"""Tests for the provider adapter registry."""

from app.models import Provider
from app.services.chronogolf.service import ChronogolfAdapter
from app.services.miclub.service import MiClubAdapter
from app.services.quick18.service import Quick18Adapter
from app.services.registry import AdapterRegistry
from app.services.teeitup.service import TeeItUpAdapter
from tests.mocks.adapters import MockAdapter


async def test_register_defaults_covers_every_provider():
    registry = AdapterRegistry()
    registry.register_defaults(timeout=1.0)
    try:
        assert set(registry.providers) == set(Provider)
        assert isinstance(registry.get(Provider.MICLUB), MiClubAdapter)
        assert isinstance(registry.get(Provider.QUICK18), Quick18Adapter)
        assert isinstance(registry.get(Provider.TEEITUP), TeeItUpAdapter)
        assert isinstance(registry.get(Provider.CHRONOGOLF), ChronogolfAdapter)
    finally:
        await registry.close()
    assert registry.providers == []


async def test_close_closes_adapters():
    registry = AdapterRegistry()
    adapter = MockAdapter(Provider.QUICK18)
    registry.register(Provider.QUICK18, adapter)

    assert registry.get(Provider.MICLUB) is None
    await registry.close()
    assert adapter.closed is True


async def test_close_continues_past_failing_adapter():
    class BrokenClose(MockAdapter):
        async def close(self) -> None:
            raise RuntimeError("already closed")

    registry = AdapterRegistry()
    healthy = MockAdapter(Provider.TEEITUP)
    registry.register(Provider.MICLUB, BrokenClose(Provider.MICLUB))
    registry.register(Provider.TEEITUP, healthy)

    await registry.close()

    assert healthy.closed is True
    assert registry.providers == []
