"""Simple in-memory store used for testing or sandboxed environments."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np

from ..errors import StoreValidationError
from .base import HNSW_SPACE_KEY, Metadata, StoreClient, Where

_COMPARATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "$eq": lambda actual, expected: actual == expected,
    "$ne": lambda actual, expected: actual != expected,
    "$gt": lambda actual, expected: actual is not None and actual > expected,
    "$gte": lambda actual, expected: actual is not None and actual >= expected,
    "$lt": lambda actual, expected: actual is not None and actual < expected,
    "$lte": lambda actual, expected: actual is not None and actual <= expected,
    "$in": lambda actual, expected: actual in expected,
    "$nin": lambda actual, expected: actual not in expected,
}


def matches_where(metadata: Metadata, where: Optional[Where]) -> bool:
    """Evaluate a Chroma ``where`` clause against one metadata mapping."""

    if not where:
        return True
    for key, condition in where.items():
        if key == "$and":
            if not all(matches_where(metadata, clause) for clause in condition):
                return False
        elif key == "$or":
            if not any(matches_where(metadata, clause) for clause in condition):
                return False
        elif isinstance(condition, dict):
            actual = metadata.get(key)
            for operator, expected in condition.items():
                comparator = _COMPARATORS.get(operator)
                if comparator is None:
                    raise StoreValidationError(f"Unsupported where operator: {operator}")
                try:
                    if not comparator(actual, expected):
                        return False
                except TypeError:
                    return False
        elif metadata.get(key) != condition:
            return False
    return True


def matches_where_document(content: str, where_document: Optional[Where]) -> bool:
    """Evaluate a Chroma ``where_document`` clause against document text."""

    if not where_document:
        return True
    for operator, operand in where_document.items():
        if operator == "$contains":
            if operand not in content:
                return False
        elif operator == "$not_contains":
            if operand in content:
                return False
        elif operator == "$and":
            if not all(matches_where_document(content, clause) for clause in operand):
                return False
        elif operator == "$or":
            if not any(matches_where_document(content, clause) for clause in operand):
                return False
        else:
            raise StoreValidationError(f"Unsupported where_document operator: {operator}")
    return True


def distance(space: str, a: np.ndarray, b: np.ndarray) -> float:
    """Chroma's distance for ``space``: squared L2, 1 - cosine or 1 - dot."""

    if space == "l2":
        diff = a - b
        return float(np.dot(diff, diff))
    if space == "ip":
        return float(1.0 - np.dot(a, b))
    if space == "cosine":
        denom = (np.linalg.norm(a) * np.linalg.norm(b)) or 1.0
        return float(1.0 - np.dot(a, b) / denom)
    raise StoreValidationError(f"Unsupported distance space: {space}")


@dataclass
class _StoredRecord:
    id: str
    embedding: np.ndarray
    metadata: Optional[Metadata]
    document: Optional[str]


@dataclass
class InMemoryCollection:
    """A collection kept in process memory, answering like a Chroma collection."""

    name: str
    metadata: Optional[Metadata] = None
    _records: List[_StoredRecord] = field(default_factory=list)

    @property
    def space(self) -> str:
        return str((self.metadata or {}).get(HNSW_SPACE_KEY, "l2"))

    def add(
        self,
        ids: List[str],
        embeddings: Optional[List[List[float]]] = None,
        metadatas: Optional[List[Metadata]] = None,
        documents: Optional[List[str]] = None,
    ) -> None:
        if embeddings is None:
            raise StoreValidationError("In-memory collections require embeddings")
        for label, values in (("embeddings", embeddings), ("metadatas", metadatas), ("documents", documents)):
            if values is not None and len(values) != len(ids):
                raise StoreValidationError(f"Expected {len(ids)} {label}, got {len(values)}")
        if metadatas is not None and any(metadata is not None and not metadata for metadata in metadatas):
            raise StoreValidationError("Expected metadata to be a non-empty dict")
        existing = {record.id for record in self._records}
        seen = set()
        for record_id in ids:
            if record_id in existing or record_id in seen:
                raise StoreValidationError(f"Duplicate ID in collection {self.name}: {record_id}")
            seen.add(record_id)

        vectors = [np.asarray(vector, dtype=float) for vector in embeddings]
        dimension = self._dimension()
        for vector in vectors:
            dimension = dimension or vector.shape[0]
            if vector.shape != (dimension,):
                raise StoreValidationError(
                    f"Embedding dimension {vector.shape[0]} does not match collection dimensionality {dimension}"
                )

        for idx, record_id in enumerate(ids):
            self._records.append(
                _StoredRecord(
                    id=record_id,
                    embedding=vectors[idx],
                    metadata=dict(metadatas[idx]) if metadatas and metadatas[idx] else None,
                    document=documents[idx] if documents is not None else None,
                )
            )

    def get(
        self,
        ids: Optional[List[str]] = None,
        where: Optional[Where] = None,
        limit: Optional[int] = None,
        where_document: Optional[Where] = None,
        include: Sequence[str] = ("metadatas", "documents"),
    ) -> Dict[str, Any]:
        records = self._filter(ids, where, where_document)
        if limit is not None:
            records = records[:limit]
        return self._rows(records, include)

    def query(
        self,
        query_embeddings: List[List[float]],
        n_results: int = 10,
        where: Optional[Where] = None,
        where_document: Optional[Where] = None,
        include: Sequence[str] = ("metadatas", "documents", "distances"),
    ) -> Dict[str, Any]:
        candidates = self._filter(None, where, where_document)
        response: Dict[str, Any] = {key: [] for key in ("ids", *include)}
        for query_embedding in query_embeddings:
            query_vector = np.asarray(query_embedding, dtype=float)
            dimension = self._dimension()
            if dimension is not None and query_vector.shape != (dimension,):
                raise StoreValidationError(
                    f"Query dimension {query_vector.shape[0]} does not match collection dimensionality {dimension}"
                )
            scored = sorted(
                ((distance(self.space, record.embedding, query_vector), record) for record in candidates),
                key=lambda item: item[0],
            )[:n_results]
            rows = self._rows([record for _, record in scored], include)
            for key in rows:
                response[key].append(rows[key])
            if "distances" in include:
                response["distances"].append([score for score, _ in scored])
        return response

    def count(self) -> int:
        return len(self._records)

    def _dimension(self) -> Optional[int]:
        return self._records[0].embedding.shape[0] if self._records else None

    def _filter(
        self,
        ids: Optional[List[str]],
        where: Optional[Where],
        where_document: Optional[Where],
    ) -> List[_StoredRecord]:
        wanted = set(ids) if ids is not None else None
        return [
            record
            for record in self._records
            if (wanted is None or record.id in wanted)
            and matches_where(record.metadata or {}, where)
            and matches_where_document(record.document or "", where_document)
        ]

    def _rows(self, records: List[_StoredRecord], include: Sequence[str]) -> Dict[str, Any]:
        rows: Dict[str, Any] = {"ids": [record.id for record in records]}
        if "documents" in include:
            rows["documents"] = [record.document for record in records]
        if "metadatas" in include:
            rows["metadatas"] = [dict(record.metadata) if record.metadata else None for record in records]
        if "embeddings" in include:
            rows["embeddings"] = [record.embedding.copy() for record in records]
        return rows


class InMemoryStoreClient(StoreClient):
    """A minimal StoreClient implementation that keeps data in process memory."""

    def __init__(self) -> None:
        self._collections: Dict[str, InMemoryCollection] = {}

    def create_collection(self, name: str, metadata: Optional[Metadata] = None) -> InMemoryCollection:
        if name in self._collections:
            raise StoreValidationError(f"Collection {name} already exists")
        collection = InMemoryCollection(name=name, metadata=dict(metadata) if metadata else None)
        self._collections[name] = collection
        return collection

    def get_collection(self, name: str) -> InMemoryCollection:
        try:
            return self._collections[name]
        except KeyError:
            raise StoreValidationError(f"Collection {name} does not exist") from None

    def delete_collection(self, name: str) -> None:
        if self._collections.pop(name, None) is None:
            raise StoreValidationError(f"Collection {name} does not exist")

    def list_collections(self) -> List[str]:
        return list(self._collections)

    def heartbeat(self) -> int:
        return time.time_ns()

    def reset(self) -> bool:
        self._collections.clear()
        return True


__all__ = ["InMemoryCollection", "InMemoryStoreClient", "distance", "matches_where", "matches_where_document"]
