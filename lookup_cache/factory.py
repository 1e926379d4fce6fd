"""Build caches and services from configuration.

Usage
-----
    from lookup_cache.factory import build_cache_from_env

    cache = build_cache_from_env()
    thing = cache.get("TheDress")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from .cache import SynchronizedLookupCache, ThingCache
from .config.models import AppConfig, EnvSettings, ServiceConfig
from .domain.models import Thing
from .observability import setup_logging
from .services import ThingService
from .services.http import HttpThingService
from .services.memory import InMemoryThingService

logger = logging.getLogger(__name__)


def build_service(config: ServiceConfig) -> ThingService:
    """Instantiate the thing service described by `config`.

    Raises
    ------
    ValueError
        If the service type is unknown or an http service has no endpoint.
    """
    if config.type == "memory":
        return InMemoryThingService(config.things)
    if config.type == "http":
        if not config.endpoint:
            raise ValueError("http service requires an endpoint")
        return HttpThingService(
            config.endpoint,
            config.api_key,
            config.timeout_seconds,
            max_retries=config.max_retries,
            backoff_initial_ms=config.backoff_initial_ms,
            backoff_multiplier=config.backoff_multiplier,
        )
    raise ValueError(f"unknown service type: {config.type!r}")


def build_cache(
    config: AppConfig,
) -> Union[ThingCache, SynchronizedLookupCache[str, Thing]]:
    """Build a cache in front of the configured service."""
    service = build_service(config.service)
    logger.info(
        "lookup_cache.build",
        extra={
            "service_type": config.service.type,
            "synchronized": config.synchronized,
        },
    )
    if config.synchronized:
        return SynchronizedLookupCache(service)
    return ThingCache(service)


def build_cache_from_env(
    settings: Optional[EnvSettings] = None,
) -> Union[ThingCache, SynchronizedLookupCache[str, Thing]]:
    """Configure logging and build a cache from environment settings.

    Uses the JSON file at ``config_path`` when set, otherwise an empty
    in-memory service.
    """
    settings = settings or EnvSettings()
    setup_logging(settings.log_level)
    if settings.config_path:
        config = AppConfig.load(Path(settings.config_path))
    else:
        config = AppConfig()
    return build_cache(config)
