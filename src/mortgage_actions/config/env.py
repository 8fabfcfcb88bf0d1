"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import ConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


def require_any_env_var(names: Sequence[str]) -> str:
    """Return the first non-blank variable of ``names`` (in order)."""

    for name in names:
        value = optional_env_var(name)
        if value is not None:
            return value
    missing_list = " or ".join(names)
    raise MissingConfigurationError(f"Missing configuration for: {missing_list}")


def optional_env_var(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def optional_int_env_var(name: str, *, minimum: int | None = None) -> int | None:
    value = optional_env_var(name)
    if value is None:
        return None
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc
    if minimum is not None and parsed < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {parsed}")
    return parsed


def optional_float_env_var(name: str, *, minimum: float | None = None) -> float | None:
    value = optional_env_var(name)
    if value is None:
        return None
    try:
        parsed = float(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {value!r}") from exc
    if minimum is not None and parsed < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {parsed}")
    return parsed
