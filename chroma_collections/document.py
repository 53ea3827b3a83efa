"""Document value type and the enums shared by collections and queries."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

Metadata = Dict[str, Any]
Vector = List[float]


class DistanceMetric(str, Enum):
    """Distance function a collection ranks neighbours with."""

    L2 = "l2"
    COSINE = "cosine"
    IP = "ip"

    @classmethod
    def parse(cls, value: "DistanceMetric | str") -> "DistanceMetric":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            allowed = ", ".join(metric.value for metric in cls)
            raise ValueError(f"Unsupported distance metric {value!r}; expected one of: {allowed}") from None


class QueryEnum(str, Enum):
    """Fields the store populates on each returned row."""

    WITH_DOCUMENTS = "documents"
    WITH_METADATAS = "metadatas"
    WITH_DISTANCES = "distances"
    WITH_EMBEDDINGS = "embeddings"


@dataclass
class Document:
    """A text document and, once embedded, its vector.

    ``embeddings`` is ``None`` until the document is embedded. ``distance`` is
    only set on query results and is ignored when comparing documents.
    """

    id: str
    content: str = ""
    metadata: Metadata = field(default_factory=dict)
    embeddings: Optional[Vector] = None
    distance: Optional[float] = field(default=None, compare=False)


__all__ = ["DistanceMetric", "Document", "Metadata", "QueryEnum", "Vector"]
