"""Central configuration for chroma_collections.

Values come from a TOML file (``CHROMA_COLLECTIONS_CONFIG_FILE``, default
``chroma_collections.toml`` in the working directory) and can be overridden
per key with ``CHROMA_COLLECTIONS_<SECTION>_<KEY>`` environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for 3.10
    import tomli as tomllib

ENV_PREFIX = "CHROMA_COLLECTIONS"
DEFAULT_CONFIG_FILE = "chroma_collections.toml"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _default_config_path() -> Path:
    return Path(os.environ.get(f"{ENV_PREFIX}_CONFIG_FILE", DEFAULT_CONFIG_FILE))


def _load_config_data(path: Path) -> Dict[str, Any]:
    if path.exists():
        with path.open("rb") as fh:
            return tomllib.load(fh)
    return {}


class _Settings:
    """Resolves one section: environment first, then file, then default."""

    def __init__(self, data: Mapping[str, Any], section: str, env: Mapping[str, str]) -> None:
        self._section = section
        self._values = data.get(section, {}) or {}
        self._env = env

    def get(self, name: str, default: Any, env_key: Optional[str] = None) -> Any:
        key = env_key or f"{ENV_PREFIX}_{self._section.upper()}_{name.upper()}"
        if key in self._env:
            return self._env[key]
        return self._values.get(name, default)

    def get_str(self, name: str, default: str, env_key: Optional[str] = None) -> str:
        return str(self.get(name, default, env_key))

    def get_int(self, name: str, default: int) -> int:
        return int(self.get(name, default))

    def get_bool(self, name: str, default: bool, env_key: Optional[str] = None) -> bool:
        raw = self.get(name, default, env_key)
        if isinstance(raw, bool):
            return raw
        return str(raw).strip().lower() in _TRUE_VALUES


@dataclass(frozen=True)
class StoreConfig:
    """Remote vector store connection settings."""

    backend: str = "chroma"
    host: str = "localhost"
    port: int = 8000
    ssl: bool = False
    default_distance: str = "l2"


@dataclass(frozen=True)
class EmbeddingsConfig:
    """Settings for the OpenAI-compatible embeddings provider."""

    base_url: str = "https://api.openai.com/v1"
    model: str = "text-embedding-ada-002"
    api_key: str = field(default="", repr=False)
    request_timeout: int = 60
    max_batch_size: int = 2048


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    file: Optional[Path] = None
    to_stdout: bool = False


@dataclass(frozen=True)
class AppConfig:
    """Aggregate configuration for the library and its CLI."""

    store: StoreConfig = StoreConfig()
    embeddings: EmbeddingsConfig = EmbeddingsConfig()
    logging: LoggingConfig = LoggingConfig()
    config_file: Optional[Path] = None


def load_config(
    path: Union[str, Path, None] = None,
    env: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """Build an :class:`AppConfig` from the TOML file and environment."""

    env = os.environ if env is None else env
    config_path = Path(path) if path is not None else _default_config_path()
    data = _load_config_data(config_path)

    store = _Settings(data, "store", env)
    embeddings = _Settings(data, "embeddings", env)
    logging_section = _Settings(data, "logging", env)

    log_file = logging_section.get("file", None, env_key=f"{ENV_PREFIX}_LOG_FILE")
    return AppConfig(
        store=StoreConfig(
            backend=store.get_str("backend", StoreConfig.backend),
            host=store.get_str("host", StoreConfig.host),
            port=store.get_int("port", StoreConfig.port),
            ssl=store.get_bool("ssl", StoreConfig.ssl),
            default_distance=store.get_str("default_distance", StoreConfig.default_distance),
        ),
        embeddings=EmbeddingsConfig(
            base_url=embeddings.get_str("base_url", EmbeddingsConfig.base_url),
            model=embeddings.get_str("model", EmbeddingsConfig.model),
            api_key=embeddings.get_str("api_key", "", env_key="OPENAI_API_KEY"),
            request_timeout=embeddings.get_int("request_timeout", EmbeddingsConfig.request_timeout),
            max_batch_size=embeddings.get_int("max_batch_size", EmbeddingsConfig.max_batch_size),
        ),
        logging=LoggingConfig(
            level=logging_section.get_str(
                "level", LoggingConfig.level, env_key=f"{ENV_PREFIX}_LOG_LEVEL"
            ),
            file=Path(log_file) if log_file else None,
            to_stdout=logging_section.get_bool(
                "to_stdout", LoggingConfig.to_stdout, env_key=f"{ENV_PREFIX}_LOG_TO_STDOUT"
            ),
        ),
        config_file=config_path if config_path.exists() else None,
    )


__all__ = ["AppConfig", "EmbeddingsConfig", "LoggingConfig", "StoreConfig", "load_config"]
