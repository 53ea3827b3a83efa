"""Collection workflow: embed, submit and query documents in a remote store."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, List, Optional, Sequence

from .document import DistanceMetric, Document, QueryEnum, Vector
from .embeddings.base import Embedder
from .errors import EmbeddingError
from .store.base import CollectionHandle, StoreResult, Where

DEFAULT_GET_INCLUDE = (QueryEnum.WITH_DOCUMENTS, QueryEnum.WITH_METADATAS)
DEFAULT_QUERY_INCLUDE = (
    QueryEnum.WITH_DOCUMENTS,
    QueryEnum.WITH_METADATAS,
    QueryEnum.WITH_DISTANCES,
)


def _as_vector(value: Any) -> Vector:
    return value.tolist() if hasattr(value, "tolist") else [float(item) for item in value]


def _column(result: StoreResult, key: str, size: int, nested: bool) -> List[Any]:
    """Return one response column, padded with ``None`` when it was not included."""

    values = result.get(key)
    if values is None:
        return [None] * size
    if nested:
        values = values[0] if len(values) else []
    return list(values) if values is not None else [None] * size


@dataclass
class Collection:
    """A named collection in the remote store.

    The collection keeps no documents between calls: ``add`` submits copies of
    the caller's documents and ``get``/``query`` build new ones from the store
    response.
    """

    name: str
    distance_metric: DistanceMetric
    handle: CollectionHandle = field(repr=False)

    def __post_init__(self) -> None:
        self.distance_metric = DistanceMetric.parse(self.distance_metric)
        self.logger = logging.getLogger("chroma_collections.collection")

    # Public API ---------------------------------------------------------
    def add(self, documents: Sequence[Document], embedder: Embedder) -> None:
        """Embed documents that lack a vector and submit the batch in one call.

        Embedding happens before anything is sent, so a failing embedder leaves
        the store untouched. Store errors propagate unchanged.
        """

        if not documents:
            return
        prepared = self._with_embeddings(documents, embedder)
        # Chroma rejects empty metadata dicts; documents without metadata send None.
        metadatas = [dict(doc.metadata) or None for doc in prepared]
        self.handle.add(
            ids=[doc.id for doc in prepared],
            embeddings=[list(doc.embeddings) for doc in prepared],
            metadatas=metadatas if any(metadatas) else None,
            documents=[doc.content for doc in prepared],
        )
        self.logger.debug("Added documents", extra={"collection": self.name, "count": len(prepared)})

    def get(
        self,
        ids: Optional[Sequence[str]] = None,
        where: Optional[Where] = None,
        where_document: Optional[Where] = None,
        include: Optional[Sequence[QueryEnum]] = None,
    ) -> List[Document]:
        """Return documents matching all supplied filters, in store order."""

        include_names = self._include_names(
            include if include is not None else DEFAULT_GET_INCLUDE, allow_distances=False
        )
        result = self.handle.get(
            ids=list(ids) if ids is not None else None,
            where=where,
            where_document=where_document,
            include=include_names,
        )
        return self._documents(result, nested=False)

    def query(
        self,
        query_text: str,
        n_results: int,
        where: Optional[Where] = None,
        where_document: Optional[Where] = None,
        include: Optional[Sequence[QueryEnum]] = None,
        embedder: Optional[Embedder] = None,
    ) -> List[Document]:
        """Return up to ``n_results`` documents for ``query_text``.

        A non-empty ``query_text`` is embedded and results come back nearest
        first. An empty one runs a filter-only scan capped at ``n_results``,
        in store order and without distances.
        """

        if n_results < 1:
            raise ValueError("n_results must be at least 1")
        include = include if include is not None else DEFAULT_QUERY_INCLUDE

        if not query_text:
            include_names = self._include_names(include, allow_distances=False)
            result = self.handle.get(
                where=where,
                where_document=where_document,
                limit=n_results,
                include=include_names,
            )
            documents = self._documents(result, nested=False)
        else:
            if embedder is None:
                raise ValueError("an embedder is required to query by text")
            query_vector = embedder.get_embeddings(query_text)
            result = self.handle.query(
                query_embeddings=[list(query_vector)],
                n_results=n_results,
                where=where,
                where_document=where_document,
                include=self._include_names(include, allow_distances=True),
            )
            documents = self._documents(result, nested=True)

        self.logger.debug(
            "Query returned documents",
            extra={"collection": self.name, "count": len(documents), "n_results": n_results},
        )
        return documents[:n_results]

    def count(self) -> int:
        return self.handle.count()

    # Internal helpers ---------------------------------------------------
    def _with_embeddings(self, documents: Sequence[Document], embedder: Embedder) -> List[Document]:
        pending = [idx for idx, doc in enumerate(documents) if doc.embeddings is None]
        vectors: List[Vector] = []
        if len(pending) == 1:
            vectors = [embedder.get_embeddings(documents[pending[0]].content)]
        elif pending:
            vectors = embedder.get_embeddings_batch([documents[idx].content for idx in pending])
        if len(vectors) != len(pending):
            raise EmbeddingError(f"expected {len(pending)} embeddings, got {len(vectors)}")

        prepared = [replace(doc, metadata=dict(doc.metadata)) for doc in documents]
        for idx, vector in zip(pending, vectors):
            prepared[idx].embeddings = _as_vector(vector)
        return prepared

    @staticmethod
    def _include_names(include: Sequence[QueryEnum], *, allow_distances: bool) -> List[str]:
        names = [QueryEnum(flag).value for flag in include]
        if not allow_distances:
            names = [name for name in names if name != QueryEnum.WITH_DISTANCES.value]
        return names

    @staticmethod
    def _documents(result: StoreResult, *, nested: bool) -> List[Document]:
        ids = _column(result, "ids", 0, nested)
        size = len(ids)
        contents = _column(result, "documents", size, nested)
        metadatas = _column(result, "metadatas", size, nested)
        embeddings = _column(result, "embeddings", size, nested)
        distances = _column(result, "distances", size, nested)

        documents: List[Document] = []
        for doc_id, content, metadata, embedding, dist in zip(ids, contents, metadatas, embeddings, distances):
            documents.append(
                Document(
                    id=doc_id,
                    content=content or "",
                    metadata=dict(metadata) if metadata else {},
                    embeddings=_as_vector(embedding) if embedding is not None else None,
                    distance=float(dist) if dist is not None else None,
                )
            )
        return documents


__all__ = ["Collection", "DEFAULT_GET_INCLUDE", "DEFAULT_QUERY_INCLUDE"]
