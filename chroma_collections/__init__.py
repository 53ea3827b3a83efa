"""Client library for document collections in a Chroma vector store."""

from __future__ import annotations

from .client import CollectionClient
from .collection import Collection
from .config import AppConfig, load_config
from .document import DistanceMetric, Document, QueryEnum
from .embeddings import Embedder, OpenAIEmbedder
from .errors import (
    ChromaCollectionsError,
    DecodeError,
    EmbeddingError,
    EmptyResultError,
    ProtocolError,
    StoreValidationError,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "AppConfig",
    "ChromaCollectionsError",
    "Collection",
    "CollectionClient",
    "DecodeError",
    "DistanceMetric",
    "Document",
    "Embedder",
    "EmbeddingError",
    "EmptyResultError",
    "OpenAIEmbedder",
    "ProtocolError",
    "QueryEnum",
    "StoreValidationError",
    "TransportError",
    "load_config",
]
