"""
Engine Module - indexing and query internals.

This module provides:
- Key layout and composite term members
- Order-preserving score tokens
- Lua routines for the term index
- Index writer, query executor and result hydrator
"""

from .enums import IndexType, SortOrder
from .hydrator import ResultHydrator
from .keys import KeyLayout
from .score import decode_score, encode_score
from .scripts import ScriptTable
from .search import QueryExecutor, split_query
from .writer import IndexWriter

__all__ = [
    "IndexType",
    "SortOrder",
    "KeyLayout",
    "ScriptTable",
    "IndexWriter",
    "QueryExecutor",
    "ResultHydrator",
    "encode_score",
    "decode_score",
    "split_query",
]
