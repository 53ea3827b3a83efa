"""Remote store interfaces consumed by :mod:`chroma_collections.collection`."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence

Metadata = Dict[str, Any]
Where = Dict[str, Any]
# Chroma-style response: {"ids": ..., "documents": ..., "metadatas": ..., ...}
StoreResult = Mapping[str, Any]

HNSW_SPACE_KEY = "hnsw:space"


class CollectionHandle(Protocol):
    """Collection-scoped operations, shaped after ``chromadb`` collections."""

    name: str
    metadata: Optional[Metadata]

    def add(
        self,
        ids: List[str],
        embeddings: Optional[List[List[float]]] = None,
        metadatas: Optional[List[Metadata]] = None,
        documents: Optional[List[str]] = None,
    ) -> None:
        """Insert a batch of records in one call."""

    def get(
        self,
        ids: Optional[List[str]] = None,
        where: Optional[Where] = None,
        limit: Optional[int] = None,
        where_document: Optional[Where] = None,
        include: Sequence[str] = ("metadatas", "documents"),
    ) -> StoreResult:
        """Return records matching every supplied filter, in store order."""

    def query(
        self,
        query_embeddings: List[List[float]],
        n_results: int = 10,
        where: Optional[Where] = None,
        where_document: Optional[Where] = None,
        include: Sequence[str] = ("metadatas", "documents", "distances"),
    ) -> StoreResult:
        """Nearest-neighbour search; one nested result list per query vector."""

    def count(self) -> int:
        """Number of records in the collection."""


class StoreClient(Protocol):
    """Collection lifecycle operations of a remote store."""

    def create_collection(self, name: str, metadata: Optional[Metadata] = None) -> CollectionHandle:
        """Create a collection; fails if it already exists."""

    def get_collection(self, name: str) -> CollectionHandle:
        """Return an existing collection."""

    def delete_collection(self, name: str) -> None:
        """Delete a collection and its records."""

    def list_collections(self) -> List[str]:
        """Names of all collections."""

    def heartbeat(self) -> int:
        """Server time in nanoseconds."""

    def reset(self) -> bool:
        """Drop every collection."""
