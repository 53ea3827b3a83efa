"""Collection lifecycle on top of a StoreClient backend."""

from __future__ import annotations

import logging
from typing import List, Optional

from .collection import Collection
from .config import AppConfig, load_config
from .document import DistanceMetric, Metadata
from .store.base import HNSW_SPACE_KEY, StoreClient
from .store.factory import create_store_client


class CollectionClient:
    """Creates, opens and deletes collections in the remote store.

    Collections are never created implicitly: ``get_collection`` on a missing
    name fails the way the backend fails.
    """

    def __init__(self, store: StoreClient) -> None:
        self.store = store
        self.logger = logging.getLogger("chroma_collections.client")

    @classmethod
    def from_config(cls, config: Optional[AppConfig] = None) -> "CollectionClient":
        return cls(create_store_client(config or load_config()))

    def create_collection(
        self,
        name: str,
        distance_metric: DistanceMetric | str = DistanceMetric.L2,
        metadata: Optional[Metadata] = None,
    ) -> Collection:
        metric = DistanceMetric.parse(distance_metric)
        collection_metadata = dict(metadata or {})
        collection_metadata[HNSW_SPACE_KEY] = metric.value
        handle = self.store.create_collection(name, metadata=collection_metadata)
        self.logger.info("Created collection", extra={"collection": name})
        return Collection(name=name, distance_metric=metric, handle=handle)

    def get_collection(self, name: str) -> Collection:
        handle = self.store.get_collection(name)
        metric = (handle.metadata or {}).get(HNSW_SPACE_KEY, DistanceMetric.L2.value)
        return Collection(name=name, distance_metric=DistanceMetric.parse(metric), handle=handle)

    def delete_collection(self, name: str) -> None:
        self.store.delete_collection(name)
        self.logger.info("Deleted collection", extra={"collection": name})

    def list_collections(self) -> List[str]:
        return self.store.list_collections()

    def heartbeat(self) -> int:
        return self.store.heartbeat()

    def reset(self) -> bool:
        return self.store.reset()


__all__ = ["CollectionClient"]
