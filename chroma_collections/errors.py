"""Error types raised by chroma_collections."""

from __future__ import annotations

from typing import Optional


class ChromaCollectionsError(RuntimeError):
    """Base class for errors raised by this package."""


class EmbeddingError(ChromaCollectionsError):
    """Embedding generation failed."""


class TransportError(EmbeddingError):
    """The embedding provider could not be reached."""


class ProtocolError(EmbeddingError):
    """The embedding provider answered with a non-success status."""

    def __init__(self, status_code: int, status: str, body: str) -> None:
        self.status_code = status_code
        self.status = status
        self.body = body
        super().__init__(f"error getting embeddings. Status: {status} Response: {body}")


class DecodeError(EmbeddingError):
    """The embedding provider returned a body that could not be decoded."""

    def __init__(self, message: str, body: str, cause: Optional[Exception] = None) -> None:
        self.body = body
        detail = f"{message}: {cause}" if cause is not None else message
        super().__init__(f"{detail}\nresponse body: {body}")


class EmptyResultError(EmbeddingError):
    """The embedding provider returned zero vectors for a non-empty request."""


class StoreValidationError(ChromaCollectionsError):
    """The in-memory store rejected a request."""


__all__ = [
    "ChromaCollectionsError",
    "DecodeError",
    "EmbeddingError",
    "EmptyResultError",
    "ProtocolError",
    "StoreValidationError",
    "TransportError",
]
