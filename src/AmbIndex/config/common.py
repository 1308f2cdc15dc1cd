from __future__ import annotations

"""Shared helpers for reading and type-checking config sections."""

from dataclasses import dataclass
from typing import Any, Mapping

_MISSING: Any = object()


@dataclass(frozen=True, slots=True)
class ConfigSection:
    """One top-level config section with typed accessors.

    Every accessor reports errors with the full key path (``section.field``).
    Passing no ``default`` makes the field required.
    """

    name: str
    values: Mapping[str, Any]

    def key(self, field: str) -> str:
        return f"{self.name}.{field}"

    def get(self, field: str, default: Any = _MISSING) -> Any:
        """Return a raw field value.

        Raises:
            ValueError: If the field is required but missing.
        """
        if field in self.values:
            return self.values[field]
        if default is _MISSING:
            raise ValueError(f"Missing required config: {self.key(field)}")
        return default

    def get_str(self, field: str, default: Any = _MISSING) -> str:
        value = self.get(field, default)
        if not isinstance(value, str):
            raise TypeError(f"{self.key(field)} must be a string")
        return value

    def get_bool(self, field: str, default: Any = _MISSING) -> bool:
        value = self.get(field, default)
        if not isinstance(value, bool):
            raise TypeError(f"{self.key(field)} must be a boolean")
        return value

    def get_int(self, field: str, default: Any = _MISSING) -> int:
        """Return an integer field; booleans are rejected."""
        value = self.get(field, default)
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{self.key(field)} must be an integer")
        return value

    def get_float(self, field: str, default: Any = _MISSING) -> float:
        """Return a numeric field as float; booleans are rejected."""
        value = self.get(field, default)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"{self.key(field)} must be a number")
        return float(value)

    def get_str_list(self, field: str, default: Any = _MISSING) -> list[str]:
        """Return a list of stripped, non-empty strings.

        A single string is accepted as a comma-separated list.
        """
        value = self.get(field, default)
        if isinstance(value, str):
            value = value.split(",")
        if not isinstance(value, list):
            raise TypeError(f"{self.key(field)} must be a list")
        out: list[str] = []
        for idx, item in enumerate(value):
            if not isinstance(item, str):
                raise TypeError(f"{self.key(field)}[{idx}] must be a string")
            if item.strip():
                out.append(item.strip())
        return out


def get_section(raw: Mapping[str, Any], key: str, *, required: bool) -> ConfigSection:
    """Return a section from root config.

    Args:
        raw: Root configuration mapping.
        key: Section name.
        required: Whether the section must exist.

    Returns:
        Section wrapper; an optional missing section is empty.

    Raises:
        ValueError: If section is required but missing.
        TypeError: If section is not a mapping.
    """
    section = raw.get(key)
    if section is None:
        if required:
            raise ValueError(f"Missing required config: {key}")
        return ConfigSection(key, {})
    if not isinstance(section, Mapping):
        raise TypeError(f"{key} must be an object")
    return ConfigSection(key, section)
