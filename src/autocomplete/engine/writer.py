"""
Index Writer - keeps the index structures and the document hash in step.

Every public operation commits as a single MULTI/EXEC. Where a transaction
depends on a value read beforehand (the located term member, the existence
of a payload), the read happens under WATCH and redis-py's ``transaction``
helper retries the whole callable if the watched key changes first.
"""

from typing import Any

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError

from autocomplete.documents import Document, document_key, prefixes, serialize_payload
from autocomplete.engine.enums import IndexType, resolve_index_type
from autocomplete.engine.keys import KeyLayout, as_text, term_member
from autocomplete.engine.score import encode_score, validate_score
from autocomplete.engine.scripts import ScriptTable
from autocomplete.errors import DocumentNotFoundError

logger = structlog.get_logger()


class IndexWriter:
    """Write side of the engine: index, remove, update payload, update score."""

    def __init__(
        self,
        client: Redis,
        layout: KeyLayout,
        scripts: ScriptTable,
        index_type: Any,
    ):
        self.client = client
        self.layout = layout
        self.scripts = scripts
        self.index_type = index_type

    async def index(self, index: str, document: Document, score: int) -> None:
        """
        Index a document at the given score.

        Under the terms strategy an existing member for the same document is
        replaced, so the term set never holds two members for one key.
        """
        index_type = resolve_index_type(self.index_type)
        validate_score(score)
        doc_key = document_key(document)
        payload = serialize_payload(document)
        hkey = self.layout.documents(index)

        try:
            if index_type is IndexType.PREFIXES:
                async with self.client.pipeline(transaction=True) as pipe:
                    for zkey in self.layout.prefix_sets(index, prefixes(document.term)):
                        pipe.zadd(zkey, {doc_key: score})
                    pipe.hset(hkey, doc_key, payload)
                    await pipe.execute()
            else:
                zkey = self.layout.term_set(index)
                member = term_member(document.term, encode_score(score), doc_key)

                async def _index(pipe) -> None:
                    existing = await self.scripts.locate_member(
                        keys=[zkey], args=[doc_key], client=pipe
                    )
                    pipe.multi()
                    if existing is not None and as_text(existing) != member:
                        pipe.zrem(zkey, existing)
                    pipe.zadd(zkey, {member: 0})
                    pipe.hset(hkey, doc_key, payload)

                await self.client.transaction(_index, zkey)
        except RedisError as e:
            logger.error("index_document_failed", index=index, key=doc_key, error=str(e))
            raise

        logger.debug("indexed_document", index=index, key=doc_key, score=score)

    async def remove_document(self, index: str, document: Document) -> None:
        index_type = resolve_index_type(self.index_type)
        doc_key = document_key(document)
        hkey = self.layout.documents(index)

        try:
            if index_type is IndexType.PREFIXES:
                async with self.client.pipeline(transaction=True) as pipe:
                    for zkey in self.layout.prefix_sets(index, prefixes(document.term)):
                        pipe.zrem(zkey, doc_key)
                    pipe.hdel(hkey, doc_key)
                    await pipe.execute()
            else:
                zkey = self.layout.term_set(index)

                async def _remove(pipe) -> None:
                    member = await self.scripts.locate_member(
                        keys=[zkey], args=[doc_key], client=pipe
                    )
                    if member is None:
                        raise DocumentNotFoundError(doc_key, zkey)
                    pipe.multi()
                    pipe.zrem(zkey, member)
                    pipe.hdel(hkey, doc_key)

                await self.client.transaction(_remove, zkey)
        except RedisError as e:
            logger.error("remove_document_failed", index=index, key=doc_key, error=str(e))
            raise

        logger.debug("removed_document", index=index, key=doc_key)

    async def update_document(self, index: str, document: Document) -> None:
        """
        Replace the stored payload of an indexed document.

        Only the payload can change: the key is derived from the term and
        identifier, so changing either means removing and re-indexing.
        """
        doc_key = document_key(document)
        payload = serialize_payload(document)
        hkey = self.layout.documents(index)

        async def _update(pipe) -> None:
            if not await pipe.hexists(hkey, doc_key):
                raise DocumentNotFoundError(doc_key, hkey)
            pipe.multi()
            pipe.hset(hkey, doc_key, payload)

        try:
            await self.client.transaction(_update, hkey)
        except RedisError as e:
            logger.error("update_document_failed", index=index, key=doc_key, error=str(e))
            raise

        logger.debug("updated_document", index=index, key=doc_key)

    async def update_score(self, index: str, document: Document, score: int) -> None:
        index_type = resolve_index_type(self.index_type)
        validate_score(score)
        doc_key = document_key(document)

        try:
            if index_type is IndexType.PREFIXES:
                hkey = self.layout.documents(index)
                zkeys = self.layout.prefix_sets(index, prefixes(document.term))

                async def _rescore(pipe) -> None:
                    if not await pipe.hexists(hkey, doc_key):
                        raise DocumentNotFoundError(doc_key, hkey)
                    pipe.multi()
                    for zkey in zkeys:
                        pipe.zadd(zkey, {doc_key: score})

                await self.client.transaction(_rescore, hkey)
            else:
                zkey = self.layout.term_set(index)
                member = term_member(document.term, encode_score(score), doc_key)
                replaced = await self.scripts.replace_member(keys=[zkey], args=[doc_key, member])
                if not replaced:
                    raise DocumentNotFoundError(doc_key, zkey)
        except RedisError as e:
            logger.error("update_score_failed", index=index, key=doc_key, error=str(e))
            raise

        logger.debug("updated_score", index=index, key=doc_key, score=score)

    async def contains(self, index: str, document: Document) -> bool:
        """Whether the document is currently indexed."""
        index_type = resolve_index_type(self.index_type)
        doc_key = document_key(document)

        if not await self.client.hexists(self.layout.documents(index), doc_key):
            return False
        if index_type is IndexType.TERMS:
            found = await self.scripts.member_exists(
                keys=[self.layout.term_set(index)], args=[doc_key]
            )
            return bool(found)
        return True
