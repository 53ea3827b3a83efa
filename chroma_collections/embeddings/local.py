"""Sentence-transformers embedder that runs in-process."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from sentence_transformers import SentenceTransformer

from ..errors import EmptyResultError

DEFAULT_LOCAL_MODEL = "sentence-transformers/all-MiniLM-L6-v2"


def _to_list(vector: Any) -> List[float]:
    return vector.tolist() if hasattr(vector, "tolist") else [float(value) for value in vector]


class SentenceTransformerEmbedder:
    """Embedder backed by a locally loaded SentenceTransformer model."""

    def __init__(
        self,
        model_name: str = DEFAULT_LOCAL_MODEL,
        *,
        batch_size: int = 8,
        normalize: bool = True,
    ) -> None:
        self.model_name = model_name
        self.batch_size = batch_size
        self.normalize = normalize
        self._model: Optional[SentenceTransformer] = None

    @property
    def model(self) -> SentenceTransformer:
        if self._model is None:
            self._model = SentenceTransformer(self.model_name)
        return self._model

    def get_embeddings(self, content: str) -> List[float]:
        return self.get_embeddings_batch([content])[0]

    def get_embeddings_batch(self, contents: Sequence[str]) -> List[List[float]]:
        inputs = list(contents)
        if not inputs:
            raise ValueError("get_embeddings_batch requires at least one input")
        encoded = self.model.encode(
            inputs,
            batch_size=self.batch_size,
            normalize_embeddings=self.normalize,
            show_progress_bar=False,
        )
        vectors = [_to_list(vector) for vector in encoded]
        if len(vectors) != len(inputs):
            raise EmptyResultError(f"expected {len(inputs)} embeddings from {self.model_name}, got {len(vectors)}")
        return vectors


__all__ = ["SentenceTransformerEmbedder"]
