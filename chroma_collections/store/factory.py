"""Factory helpers for constructing StoreClient instances."""

from __future__ import annotations

import logging
from typing import Optional

from ..config import AppConfig, load_config
from .base import StoreClient
from .chromadb_impl import ChromaStoreClient
from .memory_impl import InMemoryStoreClient

_LOGGER = logging.getLogger("chroma_collections.store")


def create_store_client(config: Optional[AppConfig] = None) -> StoreClient:
    """Instantiate the configured StoreClient backend."""

    config = config or load_config()
    backend = config.store.backend.lower()
    if backend in {"memory", "inmemory"}:
        _LOGGER.debug("Using in-memory store backend")
        return InMemoryStoreClient()
    if backend == "chroma":
        _LOGGER.debug("Connecting to Chroma at %s:%s", config.store.host, config.store.port)
        return ChromaStoreClient(config.store.host, config.store.port, ssl=config.store.ssl)
    raise ValueError(f"Unsupported store backend: {config.store.backend}")


__all__ = ["create_store_client"]
