"""
Autocomplete Service - public entry point of the engine.

Wires the key layout, the registered Lua scripts, the writer, the query
executor and the hydrator around one Redis client. Inspired by
http://oldblog.antirez.com/post/autocomplete-with-redis.html.

Example:
    store = RedisStore()
    await store.connect()
    ac = Autocomplete.from_store(store, prefix="ac", index_type=IndexType.TERMS)
    await ac.index("cars", IndexedDocument(identifier="1", term="Mercedes", payload={}), 10)
    payloads = await ac.search("cars", "mer", SortOrder.REV_SCORE)
"""

from typing import Any, List, Optional

from redis.asyncio import Redis

from autocomplete.documents import Document
from autocomplete.engine.enums import IndexType, SortOrder
from autocomplete.engine.hydrator import ResultHydrator
from autocomplete.engine.keys import KeyLayout
from autocomplete.engine.scripts import ScriptTable
from autocomplete.engine.search import QueryExecutor
from autocomplete.engine.writer import IndexWriter
from autocomplete.platform.config import settings
from autocomplete.platform.logging import get_logger
from autocomplete.storage.redis_store import RedisStore

logger = get_logger(__name__)


class Autocomplete:
    """
    Autocomplete index over a Redis backend.

    The indexing strategy is fixed per instance. It is validated on every
    operation, which raises ``InvalidIndexTypeError`` for unknown values.
    """

    def __init__(
        self,
        client: Redis,
        prefix: Optional[str] = None,
        index_type: Any = None,
        batch_size: Optional[int] = None,
        intersection_ttl: Optional[int] = None,
    ):
        """
        Initialize the service.

        Args:
            client: Async Redis client; its connection pool is shared by all calls
            prefix: Global key prefix (defaults to AUTOCOMPLETE_KEY_PREFIX)
            index_type: ``IndexType`` or its string value (defaults to AUTOCOMPLETE_INDEX_TYPE)
            batch_size: Keys per HMGET during hydration
            intersection_ttl: Seconds a multi-term intersection set is kept
        """
        self.client = client
        self.layout = KeyLayout(prefix if prefix is not None else settings.AUTOCOMPLETE_KEY_PREFIX)
        self.index_type = index_type if index_type is not None else settings.AUTOCOMPLETE_INDEX_TYPE
        self.scripts = ScriptTable.register(client)

        self.hydrator = ResultHydrator(
            client, batch_size if batch_size is not None else settings.AUTOCOMPLETE_BATCH_SIZE
        )
        self.writer = IndexWriter(client, self.layout, self.scripts, self.index_type)
        self.executor = QueryExecutor(
            client,
            self.layout,
            self.hydrator,
            self.index_type,
            intersection_ttl if intersection_ttl is not None else settings.AUTOCOMPLETE_INTERSECTION_TTL,
        )
        logger.debug(
            "autocomplete_initialized",
            prefix=self.layout.prefix,
            index_type=self.index_type,
            batch_size=self.hydrator.batch_size,
        )

    @classmethod
    def from_store(cls, store: RedisStore, **kwargs) -> "Autocomplete":
        """Build a service on a connected ``RedisStore``."""
        if store.client is None:
            raise RuntimeError("RedisStore is not connected. Call connect() first.")
        return cls(store.client, **kwargs)

    @property
    def prefix(self) -> str:
        return self.layout.prefix

    async def index(self, index: str, document: Document, score: int) -> None:
        await self.writer.index(index, document, score)

    async def remove_document(self, index: str, document: Document) -> None:
        await self.writer.remove_document(index, document)

    async def update_document(self, index: str, document: Document) -> None:
        await self.writer.update_document(index, document)

    async def update_score(self, index: str, document: Document, score: int) -> None:
        await self.writer.update_score(index, document, score)

    async def contains(self, index: str, document: Document) -> bool:
        return await self.writer.contains(index, document)

    async def search(
        self,
        index: str,
        query: str,
        order: Any = SortOrder.LEXICOGRAPHICAL,
    ) -> List[bytes]:
        return await self.executor.search(index, query, order)


__all__ = ["Autocomplete", "IndexType", "SortOrder"]
