"""Chroma HTTP backend for the StoreClient interface."""

from __future__ import annotations

from typing import Dict, List, Optional

import chromadb
from chromadb.api.models.Collection import Collection
from chromadb.config import Settings

from .base import Metadata, StoreClient


class ChromaStoreClient(StoreClient):
    """StoreClient backed by a remote Chroma server.

    Collections are returned as native ``chromadb`` collections, which already
    satisfy :class:`~chroma_collections.store.base.CollectionHandle`. Chroma
    errors are not translated.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 8000,
        *,
        ssl: bool = False,
        headers: Optional[Dict[str, str]] = None,
        allow_reset: bool = False,
    ) -> None:
        self._client = chromadb.HttpClient(
            host=host,
            port=port,
            ssl=ssl,
            headers=headers,
            settings=Settings(allow_reset=allow_reset, anonymized_telemetry=False),
        )

    def create_collection(self, name: str, metadata: Optional[Metadata] = None) -> Collection:
        # No embedding function: vectors always come from the caller.
        return self._client.create_collection(name=name, metadata=metadata, embedding_function=None)

    def get_collection(self, name: str) -> Collection:
        return self._client.get_collection(name=name, embedding_function=None)

    def delete_collection(self, name: str) -> None:
        self._client.delete_collection(name=name)

    def list_collections(self) -> List[str]:
        # Older chromadb releases return names, newer ones Collection objects.
        return [item if isinstance(item, str) else item.name for item in self._client.list_collections()]

    def heartbeat(self) -> int:
        return self._client.heartbeat()

    def reset(self) -> bool:
        return self._client.reset()


__all__ = ["ChromaStoreClient"]
