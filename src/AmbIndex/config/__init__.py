from __future__ import annotations

"""Public configuration API for AmbIndex."""

from AmbIndex.config.app import (
    DEFAULT_CONFIG_PATH,
    AppConfig,
    load_config,
    load_config_with_defaults,
    parse_config_dict,
)
from AmbIndex.config.runtime import RuntimeConfig
from AmbIndex.config.search import SearchConfig
from AmbIndex.config.typesense import TypesenseConfig

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "RuntimeConfig",
    "SearchConfig",
    "TypesenseConfig",
    "AppConfig",
    "load_config",
    "load_config_with_defaults",
    "parse_config_dict",
]
