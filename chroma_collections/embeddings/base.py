"""Embedding capability shared by every embedder implementation."""

from __future__ import annotations

from typing import List, Protocol, Sequence, runtime_checkable


@runtime_checkable
class Embedder(Protocol):
    """Turns text into dense vectors.

    ``get_embeddings_batch`` returns one vector per input, in input order, or
    raises; it never returns a partial result.
    """

    def get_embeddings(self, content: str) -> List[float]:
        """Embed a single string."""

    def get_embeddings_batch(self, contents: Sequence[str]) -> List[List[float]]:
        """Embed several strings in one call."""
