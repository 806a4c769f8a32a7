"""
Unit tests for the Autocomplete service wiring and the Redis store adapter.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from redis.exceptions import ConnectionError as RedisConnectionError

from autocomplete.engine.enums import IndexType, SortOrder
from autocomplete.engine.scripts import LOCATE_MEMBER, MEMBER_EXISTS, REPLACE_MEMBER
from autocomplete.service import Autocomplete
from autocomplete.storage.redis_store import RedisStore


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.register_script = MagicMock(side_effect=lambda source: AsyncMock(name="script"))
    return client


def test_scripts_registered_once_at_construction(mock_client):
    ac = Autocomplete(mock_client, prefix="ac", index_type=IndexType.TERMS)

    sources = [c.args[0] for c in mock_client.register_script.call_args_list]
    assert sources == [LOCATE_MEMBER, REPLACE_MEMBER, MEMBER_EXISTS]
    assert ac.writer.scripts is ac.scripts

    with pytest.raises(AttributeError):
        ac.scripts.locate_member = None


def test_defaults_come_from_settings(mock_client):
    ac = Autocomplete(mock_client)

    assert ac.prefix == "ac"
    assert ac.index_type == "prefixes"
    assert ac.hydrator.batch_size == 1000
    assert ac.executor.intersection_ttl == 60


@pytest.mark.parametrize("override", [{"batch_size": 0}, {"intersection_ttl": 0}])
def test_zero_overrides_are_rejected_not_replaced_by_defaults(mock_client, override):
    with pytest.raises(ValueError, match="must be positive"):
        Autocomplete(mock_client, **override)


def test_explicit_overrides_are_kept(mock_client):
    ac = Autocomplete(mock_client, batch_size=7, intersection_ttl=5)

    assert ac.hydrator.batch_size == 7
    assert ac.executor.intersection_ttl == 5


def test_construction_is_logged(mock_client):
    with patch("autocomplete.service.logger") as mock_logger:
        Autocomplete(mock_client, prefix="x", index_type="terms", batch_size=7)

    mock_logger.debug.assert_called_once_with(
        "autocomplete_initialized", prefix="x", index_type="terms", batch_size=7
    )


def test_from_store_requires_connection():
    with pytest.raises(RuntimeError):
        Autocomplete.from_store(RedisStore())


@pytest.mark.asyncio
async def test_operations_delegate(mock_client, d1):
    ac = Autocomplete(mock_client, prefix="x", index_type="terms")
    ac.writer = AsyncMock()
    ac.executor = AsyncMock()
    ac.executor.search.return_value = [b"{}"]

    await ac.index("cars", d1, 5)
    await ac.update_document("cars", d1)
    await ac.update_score("cars", d1, 6)
    await ac.remove_document("cars", d1)
    await ac.contains("cars", d1)
    results = await ac.search("cars", "te", SortOrder.REV_SCORE)

    ac.writer.index.assert_awaited_once_with("cars", d1, 5)
    ac.writer.update_document.assert_awaited_once_with("cars", d1)
    ac.writer.update_score.assert_awaited_once_with("cars", d1, 6)
    ac.writer.remove_document.assert_awaited_once_with("cars", d1)
    ac.writer.contains.assert_awaited_once_with("cars", d1)
    ac.executor.search.assert_awaited_once_with("cars", "te", SortOrder.REV_SCORE)
    assert results == [b"{}"]


@pytest.mark.asyncio
async def test_redis_store_lifecycle():
    with patch("autocomplete.storage.redis_store.BlockingConnectionPool") as mock_pool_cls, \
         patch("autocomplete.storage.redis_store.Redis") as mock_redis_cls:
        pool = mock_pool_cls.from_url.return_value
        pool.disconnect = AsyncMock()
        client = mock_redis_cls.return_value
        client.ping = AsyncMock(return_value=True)
        client.aclose = AsyncMock()

        store = RedisStore(redis_url="redis://cache:6379/2", max_connections=4)
        await store.connect()
        await store.connect()

        mock_pool_cls.from_url.assert_called_once()
        args, kwargs = mock_pool_cls.from_url.call_args
        assert args[0] == "redis://cache:6379/2"
        assert kwargs["max_connections"] == 4
        mock_redis_cls.assert_called_once_with(connection_pool=pool)

        assert await store.health_check() is True

        client.ping.side_effect = RedisConnectionError("down")
        assert await store.health_check() is False

        await store.close()
        client.aclose.assert_awaited_once()
        pool.disconnect.assert_awaited_once()
        assert store.client is None
