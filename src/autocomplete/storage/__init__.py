"""Autocomplete Storage Layer - backing store adapters."""

from .base import StoreAdapter
from .redis_store import RedisStore

__all__ = ["StoreAdapter", "RedisStore"]
