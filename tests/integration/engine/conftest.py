"""
Fixtures for tests that need a running Redis instance.

Run `docker run -p 6379:6379 redis` before running these tests; they are
skipped when Redis cannot be reached.
"""

import os
from uuid import uuid4

import pytest
from redis.asyncio import Redis
from redis.exceptions import RedisError

from autocomplete.engine.enums import IndexType
from autocomplete.service import Autocomplete


@pytest.fixture
async def redis_client():
    client = Redis.from_url(os.environ.get("REDIS_URL", "redis://localhost:6379"))
    try:
        await client.ping()
    except RedisError:
        await client.aclose()
        pytest.skip("Redis is not reachable")
    yield client
    await client.aclose()


async def _cleanup(client: Redis, prefix: str) -> None:
    keys = [key async for key in client.scan_iter(match=f"{prefix}:*")]
    if keys:
        await client.delete(*keys)


@pytest.fixture
async def prefixes_autocomplete(redis_client):
    prefix = f"test_ac_{uuid4().hex}"
    yield Autocomplete(redis_client, prefix=prefix, index_type=IndexType.PREFIXES)
    await _cleanup(redis_client, prefix)


@pytest.fixture
async def terms_autocomplete(redis_client):
    prefix = f"test_ac_{uuid4().hex}"
    yield Autocomplete(redis_client, prefix=prefix, index_type=IndexType.TERMS)
    await _cleanup(redis_client, prefix)
