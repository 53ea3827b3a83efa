"""Embedder protocol and the HTTP embeddings provider."""

from __future__ import annotations

from .base import Embedder
from .openai import OpenAIEmbedder

__all__ = ["Embedder", "OpenAIEmbedder"]
