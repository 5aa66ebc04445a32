import pytest
from unittest.mock import AsyncMock, MagicMock

from tests.fixtures.clock import FakeClock
from tokenvault.app.services.obfuscation_codec import ObfuscationCodec
from tokenvault.app.services.token_lifecycle import TokenLifecycle
from tokenvault.app.services.token_store import TokenStore


@pytest.fixture
def slot_data():
    """Backing dict for the mocked storage slots"""
    return {}


@pytest.fixture
def mock_uow(slot_data):
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    async def put(key, value):
        slot_data[key] = value

    uow.slots = MagicMock()
    uow.slots.get = AsyncMock(side_effect=lambda key: slot_data.get(key))
    uow.slots.put = AsyncMock(side_effect=put)
    return uow


@pytest.fixture
def uow_factory(mock_uow):
    return lambda: mock_uow


@pytest.fixture
def codec():
    return ObfuscationCodec()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(uow_factory, codec):
    return TokenStore(uow_factory, codec)


@pytest.fixture
def lifecycle(store, clock):
    return TokenLifecycle(store, clock=clock)
