"""Remote store interfaces and backends."""

from __future__ import annotations

from .base import CollectionHandle, StoreClient
from .factory import create_store_client
from .memory_impl import InMemoryCollection, InMemoryStoreClient

__all__ = [
    "CollectionHandle",
    "InMemoryCollection",
    "InMemoryStoreClient",
    "StoreClient",
    "create_store_client",
]
