"""HTTP client for OpenAI-compatible embeddings endpoints."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, List, Optional, Sequence, Union

import requests

from ..config import AppConfig, EmbeddingsConfig
from ..errors import DecodeError, EmbeddingError, EmptyResultError, ProtocolError, TransportError

DEFAULT_BASE_URL = EmbeddingsConfig.base_url
DEFAULT_MODEL = EmbeddingsConfig.model
DEFAULT_MAX_BATCH_SIZE = EmbeddingsConfig.max_batch_size


class OpenAIEmbedder:
    """Embedder backed by ``POST {base_url}/embeddings``.

    Every request goes through ``self.session`` so callers can inject a
    preconfigured :class:`requests.Session` (proxies, adapters, test doubles).
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        session: Optional[requests.Session] = None,
        timeout: float = EmbeddingsConfig.request_timeout,
        max_batch_size: int = DEFAULT_MAX_BATCH_SIZE,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self.max_batch_size = max_batch_size
        self.session = session or requests.Session()
        self.logger = logging.getLogger("chroma_collections.embeddings.openai")
        self.headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }

    @classmethod
    def from_config(cls, config: AppConfig, session: Optional[requests.Session] = None) -> "OpenAIEmbedder":
        settings = config.embeddings
        return cls(
            settings.api_key,
            base_url=settings.base_url,
            model=settings.model,
            session=session,
            timeout=settings.request_timeout,
            max_batch_size=settings.max_batch_size,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/embeddings"

    def get_embeddings(self, content: str) -> List[float]:
        """Embed one string and log the provider's token usage."""

        data = self._post(content)
        usage = data.get("usage") or {}
        self.logger.debug(
            "embedding token usage",
            extra={
                "model": data.get("model"),
                "prompt_tokens": usage.get("prompt_tokens"),
                "total_tokens": usage.get("total_tokens"),
            },
        )
        return self._ordered_vectors(data, expected=None)[0]

    def get_embeddings_batch(self, contents: Sequence[str]) -> List[List[float]]:
        """Embed a batch in one request, keeping input order.

        The batch must be non-empty and no larger than ``max_batch_size``;
        larger inputs are the caller's to split.
        """

        inputs = list(contents)
        if not inputs:
            raise ValueError("get_embeddings_batch requires at least one input")
        if len(inputs) > self.max_batch_size:
            raise ValueError(
                f"batch of {len(inputs)} inputs exceeds the provider limit of {self.max_batch_size}"
            )
        data = self._post(inputs)
        return self._ordered_vectors(data, expected=len(inputs))

    # Internal helpers ---------------------------------------------------
    def _post(self, payload_input: Union[str, List[str]]) -> Dict[str, Any]:
        payload = {"model": self.model, "input": payload_input}
        start = time.perf_counter()
        try:
            response = self.session.post(
                self.endpoint,
                data=json.dumps(payload),
                headers=self.headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            raise TransportError(f"embeddings request failed for {self.endpoint}: {exc}") from exc
        elapsed = time.perf_counter() - start

        body = response.text
        if response.status_code != 200:
            status = f"{response.status_code} {response.reason or ''}".strip()
            self.logger.error(
                "embeddings request failed",
                extra={"status_code": response.status_code, "elapsed_ms": round(elapsed * 1000, 2)},
            )
            raise ProtocolError(response.status_code, status, body)

        try:
            data = json.loads(body)
        except ValueError as exc:
            raise DecodeError("error decoding embeddings response", body, exc) from exc
        if not isinstance(data, dict) or not isinstance(data.get("data"), list):
            raise DecodeError("embeddings response has no data array", body)
        return data

    def _ordered_vectors(self, data: Dict[str, Any], expected: Optional[int]) -> List[List[float]]:
        entries = data["data"]
        if not entries:
            raise EmptyResultError("no embeddings returned")
        if expected is not None and len(entries) != expected:
            raise EmbeddingError(f"expected {expected} embeddings, got {len(entries)}")

        try:
            vectors = [[float(value) for value in entry["embedding"]] for entry in entries]
        except (KeyError, TypeError, ValueError) as exc:
            raise DecodeError("malformed embedding entry", json.dumps(data), exc) from exc

        # Providers number entries with ``index``; fall back to response order
        # when the indices are missing or not a permutation of the inputs.
        indices = [entry.get("index") for entry in entries]
        if len(vectors) > 1 and sorted(i for i in indices if isinstance(i, int)) == list(range(len(vectors))):
            ordered: List[List[float]] = [[] for _ in vectors]
            for index, vector in zip(indices, vectors):
                ordered[index] = vector
            return ordered
        return vectors


__all__ = ["OpenAIEmbedder"]
