"""
Query Planner/Executor - resolve a query to ordered document keys.

Prefix strategy: one term reads its prefix set directly; several terms are
intersected into a short-lived cache set (score aggregated by MAX) which is
then read. Terms strategy: a lexicographic range over the term set bounded
by the query and the query followed by 0xff.
"""

from typing import Any, List

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError

from autocomplete.engine.enums import IndexType, SortOrder, resolve_index_type, resolve_sort_order
from autocomplete.engine.hydrator import ResultHydrator
from autocomplete.engine.keys import KeyLayout, as_text, member_key, member_score

logger = structlog.get_logger()

DEFAULT_INTERSECTION_TTL = 60

# Above every byte that can appear in a UTF-8 encoded term
_LEX_SENTINEL = b"\xff"


def split_query(query: str) -> List[str]:
    """Lowercased query terms; empty pieces from repeated spaces are dropped."""
    return [term for term in query.lower().split(" ") if term]


class QueryExecutor:
    """Read side of the engine."""

    def __init__(
        self,
        client: Redis,
        layout: KeyLayout,
        hydrator: ResultHydrator,
        index_type: Any,
        intersection_ttl: int = DEFAULT_INTERSECTION_TTL,
    ):
        if intersection_ttl < 1:
            raise ValueError("intersection_ttl must be positive")
        self.client = client
        self.layout = layout
        self.hydrator = hydrator
        self.index_type = index_type
        self.intersection_ttl = intersection_ttl

    async def search(
        self,
        index: str,
        query: str,
        order: Any = SortOrder.LEXICOGRAPHICAL,
    ) -> List[bytes]:
        """
        Run a query and return matching payloads in the requested order.

        Args:
            index: Index name
            query: Space separated query; matched case-insensitively
            order: One of ``SortOrder``

        Returns:
            Raw payloads as stored by the writer
        """
        index_type = resolve_index_type(self.index_type)
        order = resolve_sort_order(order)

        terms = split_query(query)
        if not terms:
            return []

        try:
            if index_type is IndexType.PREFIXES:
                keys = await self.prefix_keys(index, terms, order)
            else:
                keys = await self.term_keys(index, query.lower(), order)
        except RedisError as e:
            logger.error("search_failed", index=index, query=query, error=str(e))
            raise

        results = await self.hydrator.hydrate(self.layout.documents(index), keys)
        logger.debug("search_completed", index=index, query=query, order=order.name, hits=len(results))
        return results

    async def prefix_keys(self, index: str, terms: List[str], order: SortOrder) -> List[str]:
        if len(terms) == 1:
            zkey = self.layout.prefix_set(index, terms[0])
        else:
            zkey = self.layout.intersection(index, terms)
            async with self.client.pipeline(transaction=True) as pipe:
                pipe.zinterstore(zkey, self.layout.prefix_sets(index, terms), aggregate="MAX")
                pipe.expire(zkey, self.intersection_ttl)
                await pipe.execute()

        if order is SortOrder.SCORE:
            members = await self.client.zrangebyscore(zkey, "-inf", "+inf")
        elif order is SortOrder.REV_SCORE:
            members = await self.client.zrevrangebyscore(zkey, "+inf", "-inf")
        else:
            members = await self.client.zrange(zkey, 0, -1)

        keys = [as_text(m) for m in members]
        if order is SortOrder.LEXICOGRAPHICAL:
            keys.sort()
        elif order is SortOrder.REV_LEXICOGRAPHICAL:
            keys.sort(reverse=True)
        return keys

    async def term_keys(self, index: str, query: str, order: SortOrder) -> List[str]:
        zkey = self.layout.term_set(index)
        low = b"[" + query.encode("utf-8")
        high = low + _LEX_SENTINEL

        if order is SortOrder.REV_LEXICOGRAPHICAL:
            members = await self.client.zrevrangebylex(zkey, high, low)
        else:
            members = await self.client.zrangebylex(zkey, low, high)

        members = [as_text(m) for m in members]
        if order is SortOrder.SCORE:
            members.sort(key=member_score)
        elif order is SortOrder.REV_SCORE:
            members.sort(key=member_score, reverse=True)
        return [member_key(m) for m in members]
