"""Centralized environment variable access for acmesh.

The ``.env`` file is located from the caller's working directory and read on
first use. Its values are kept in this module; ``os.environ`` is never
modified.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values, find_dotenv

_DOTENV_VALUES: dict[str, str | None] = {}
_FORCE_ENV_OVERRIDE = False
_LOADED = False


def _read_dotenv_values(env_path: str | os.PathLike[str] | None) -> dict[str, str | None]:
    if env_path is None:
        env_path = find_dotenv(usecwd=True)
    if env_path and Path(env_path).is_file():
        return dict(dotenv_values(env_path))
    return {}


def _compute_force_override(values: Mapping[str, str | None]) -> bool:
    raw = (values.get("ACMESH_FORCE_ENV_OVERRIDE") or "false").strip().lower()
    return raw == "true"


def reload_env(
    dotenv_mapping: Mapping[str, str | None] | None = None,
    *,
    env_path: str | os.PathLike[str] | None = None,
) -> None:
    """Reload .env values and recompute override semantics.

    Args:
        dotenv_mapping: Optional mapping used instead of reading a .env file.
            Intended for tests.
        env_path: Explicit .env file. When omitted the nearest .env above the
            current working directory is used.
    """

    global _DOTENV_VALUES, _FORCE_ENV_OVERRIDE, _LOADED

    if dotenv_mapping is not None:
        _DOTENV_VALUES = dict(dotenv_mapping)
    else:
        _DOTENV_VALUES = _read_dotenv_values(env_path)
    _FORCE_ENV_OVERRIDE = _compute_force_override(_DOTENV_VALUES)
    _LOADED = True


def _ensure_loaded() -> None:
    if not _LOADED:
        reload_env()


def env_override_enabled() -> bool:
    """Return True when ACMESH_FORCE_ENV_OVERRIDE is enabled via the .env file."""

    _ensure_loaded()
    return _FORCE_ENV_OVERRIDE


def get_env(key: str, default: str | None = None) -> str | None:
    """Retrieve a setting from the process environment or the .env file.

    The process environment wins unless ACMESH_FORCE_ENV_OVERRIDE is set in
    the .env file, in which case only .env values are consulted.
    """

    if env_override_enabled():
        value = _DOTENV_VALUES.get(key)
        return value if value is not None else default

    value = os.getenv(key)
    if value is not None:
        return value
    value = _DOTENV_VALUES.get(key)
    return value if value is not None else default
