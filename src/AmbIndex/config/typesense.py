"""Typesense connection configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

from AmbIndex.config.common import get_section

DEFAULT_API_KEY_ENV = "TYPESENSE_API_KEY"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True, slots=True)
class TypesenseConfig:
    """Store validated Typesense connection settings.

    The API key itself never lives in the YAML file; it is read from the
    environment variable named by ``api_key_env``.
    """

    host: str
    collection: str
    api_key_env: str
    api_key: str
    timeout: float


def load_typesense(raw: Mapping[str, Any]) -> TypesenseConfig:
    """Load Typesense config from raw mapping.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed Typesense configuration.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If required keys are missing.
    """
    section = get_section(raw, "typesense", required=True)
    api_key_env = section.get_str("api_key_env", DEFAULT_API_KEY_ENV)
    return TypesenseConfig(
        host=section.get_str("host").strip(),
        collection=section.get_str("collection").strip(),
        api_key_env=api_key_env,
        api_key=_load_api_key_from_env(api_key_env),
        timeout=section.get_float("timeout", DEFAULT_TIMEOUT),
    )


def check_typesense(config: TypesenseConfig) -> None:
    """Validate Typesense domain constraints.

    A missing API key is not an error here; commands that need the server
    fail on the first rejected request instead.

    Raises:
        ValueError: If values violate Typesense constraints.
    """
    if not config.host.startswith(("http://", "https://")):
        raise ValueError("typesense.host must start with http:// or https://")
    if not config.collection:
        raise ValueError("typesense.collection must not be empty")
    if not config.api_key_env.strip():
        raise ValueError("typesense.api_key_env must not be empty")
    if config.timeout <= 0:
        raise ValueError("typesense.timeout must be positive")


def _load_api_key_from_env(api_key_env: str) -> str:
    """Load API key from environment variable."""
    return os.getenv(api_key_env, "").strip()
