"""
autocomplete - Redis-backed autocomplete indexing and search

This package contains:
- documents: Document contract, key and prefix derivation
- engine: Index writer, query executor, hydrator, Lua routines
- storage: Redis connection adapter
- platform: Cross-cutting concerns (configuration, logging)
"""

from .documents import Document, IndexedDocument, document_key, make_document_key, prefixes
from .engine.enums import IndexType, SortOrder
from .errors import (
    AutocompleteError,
    DocumentNotFoundError,
    InvalidIndexTypeError,
    InvalidScoreError,
    InvalidSortOrderError,
    PayloadDecodeError,
)
from .service import Autocomplete
from .storage import RedisStore

__version__ = "0.1.0"

__all__ = [
    "Autocomplete",
    "RedisStore",
    "Document",
    "IndexedDocument",
    "IndexType",
    "SortOrder",
    "document_key",
    "make_document_key",
    "prefixes",
    # Errors
    "AutocompleteError",
    "InvalidIndexTypeError",
    "InvalidSortOrderError",
    "InvalidScoreError",
    "DocumentNotFoundError",
    "PayloadDecodeError",
]
