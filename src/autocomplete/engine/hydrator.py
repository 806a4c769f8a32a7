"""
Result Hydrator - fetch payloads for matched document keys.

Keys are split into fixed-size batches and each batch is fetched with its
own HMGET in its own task. Every command borrows a connection from the
client's pool for the duration of the call, so batches never share one.
"""

import asyncio
from typing import List, Sequence

import structlog
from redis.asyncio import Redis

from autocomplete.errors import PayloadDecodeError

logger = structlog.get_logger()

DEFAULT_BATCH_SIZE = 1000


class ResultHydrator:
    """Concurrent, batched HMGET against one document hash."""

    def __init__(self, client: Redis, batch_size: int = DEFAULT_BATCH_SIZE):
        if batch_size < 1:
            raise ValueError("batch_size must be positive")
        self.client = client
        self.batch_size = batch_size

    def batches(self, keys: Sequence[str]) -> List[Sequence[str]]:
        return [keys[i:i + self.batch_size] for i in range(0, len(keys), self.batch_size)]

    async def hydrate(self, hash_key: str, keys: Sequence[str]) -> List[bytes]:
        """
        Return the payloads of ``keys`` in the same order as ``keys``.

        The first failing batch cancels the others and its error propagates;
        there are no partial results.
        """
        if not keys:
            return []

        tasks = [
            asyncio.create_task(self._fetch_batch(hash_key, batch))
            for batch in self.batches(keys)
        ]
        try:
            fetched = await asyncio.gather(*tasks)
        except Exception as e:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.error("hydration_failed", hash=hash_key, batches=len(tasks), error=str(e))
            raise

        logger.debug("hydrated_results", hash=hash_key, keys=len(keys), batches=len(tasks))
        return [payload for batch in fetched for payload in batch]

    async def _fetch_batch(self, hash_key: str, batch: Sequence[str]) -> List[bytes]:
        values = await self.client.hmget(hash_key, list(batch))

        payloads = []
        for key, value in zip(batch, values):
            if value is None:
                raise PayloadDecodeError(f"{hash_key} has no payload for {key}")
            if isinstance(value, str):
                value = value.encode("utf-8")
            payloads.append(value)
        return payloads
