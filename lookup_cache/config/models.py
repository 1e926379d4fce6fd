"""Config models and loader.

This module defines Pydantic models for file- and environment-based
configuration. JSON parsing prefers `orjson` when available for speed and
lower memory usage, but intentionally falls back to the Python standard
library's `json` module so `orjson` stays an optional extra.
"""

from __future__ import annotations

import json as _json
from pathlib import Path
from typing import Any, Callable, List, Literal, Optional

try:
    import orjson as _orjson_mod  # type: ignore[assignment]
except ImportError:  # pragma: no cover - optional dependency
    _orjson_mod = None  # type: ignore[assignment]
    _loads_orjson: Optional[Callable[[bytes], Any]] = None
else:

    def _loads_orjson(buf: bytes) -> Any:
        loader = getattr(_orjson_mod, "loads")  # type: ignore[assignment]
        return loader(buf)


from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.models import Thing


class ServiceConfig(BaseModel):
    """Configuration for the lookup service behind the cache.

    Attributes
    ----------
    type: str
        Service type identifier ("memory" or "http").
    endpoint: Optional[str]
        Base URL of the thing API; required for "http".
    api_key: Optional[str]
        Optional bearer token used to authenticate to the API.
    timeout_seconds: int
        HTTP request timeout in seconds.
    things: List[Thing]
        Seed records for the "memory" service.
    """

    type: Literal["memory", "http"] = Field(
        "memory", description="Service type identifier"
    )
    endpoint: Optional[str] = Field(None, description="Thing API base URL")
    api_key: Optional[str] = Field(None, description="Authentication token")
    timeout_seconds: int = Field(30, ge=1)
    max_retries: int = Field(1, ge=0, description="Number of retry attempts")
    backoff_initial_ms: int = Field(
        200, ge=0, description="Initial backoff in milliseconds"
    )
    backoff_multiplier: float = Field(
        2.0, ge=1.0, description="Backoff multiplier per attempt"
    )
    things: List[Thing] = Field(
        default_factory=list, description="Seed things for the memory service"
    )


class AppConfig(BaseModel):
    """Top-level application configuration.

    Attributes
    ----------
    service: ServiceConfig
        Lookup service settings.
    synchronized: bool
        Build a thread-safe cache when true.
    """

    service: ServiceConfig = Field(default_factory=ServiceConfig)
    synchronized: bool = False

    @staticmethod
    def load(path: Path) -> "AppConfig":
        """Load application config from a JSON file."""
        raw = path.read_bytes()
        if _loads_orjson is not None:
            data = _loads_orjson(raw)
        else:
            data = _json.loads(raw.decode("utf-8"))
        return AppConfig.model_validate(data)


class EnvSettings(BaseSettings):
    """Environment-driven settings and .env support.

    Attributes
    ----------
    log_level: str
        Logging level name (e.g., "DEBUG", "INFO"). Defaults to "INFO".
    config_path: Optional[str]
        Path to a JSON file loaded with :meth:`AppConfig.load`.
    """

    model_config = SettingsConfigDict(env_file=".env", env_prefix="LOOKUP_CACHE_")

    log_level: str = Field("INFO")
    config_path: Optional[str] = Field(
        None, description="Path to JSON app config"
    )
