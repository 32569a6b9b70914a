"""Runtime configuration for the acme.sh client."""

from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, PositiveInt, field_validator

from acmesh.constants import (
    DEFAULT_EXECUTABLE,
    DEFAULT_TIMEOUT_SECONDS,
    PATH_ENV_VAR,
    TIMEOUT_ENV_VAR,
    WORKING_DIR_ENV_VAR,
)
from acmesh.env import get_env

logger = logging.getLogger("acmesh.config")


class ConfigError(RuntimeError):
    """Raised when environment configuration is invalid."""


class ClientConfig(BaseModel):
    """How to launch acme.sh."""

    executable: list[str] = Field(default_factory=lambda: [DEFAULT_EXECUTABLE])
    working_dir: Path | None = None
    timeout_seconds: PositiveInt = DEFAULT_TIMEOUT_SECONDS
    env: dict[str, str] = Field(default_factory=dict)

    @field_validator("executable", mode="before")
    @classmethod
    def _split_command(cls, value: Any) -> list[str]:
        if value is None:
            return [DEFAULT_EXECUTABLE]
        if isinstance(value, str):
            parts = shlex.split(value)
            return parts or [DEFAULT_EXECUTABLE]
        if isinstance(value, list):
            return [str(item) for item in value]
        raise TypeError("executable must be a command string or a list of strings")


def _timeout_from_env() -> int:
    raw = get_env(TIMEOUT_ENV_VAR)
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{TIMEOUT_ENV_VAR} must be an integer, got {raw!r}") from exc
    if timeout <= 0:
        raise ConfigError(f"{TIMEOUT_ENV_VAR} must be positive, got {timeout}")
    return timeout


def load_client_config(**overrides: Any) -> ClientConfig:
    """Build a ``ClientConfig`` from the environment, then apply ``overrides``.

    Overrides whose value is ``None`` are ignored so callers can pass optional
    arguments straight through.
    """

    working_dir = get_env(WORKING_DIR_ENV_VAR)
    values: dict[str, Any] = {
        "executable": get_env(PATH_ENV_VAR, DEFAULT_EXECUTABLE),
        "working_dir": Path(working_dir).expanduser() if working_dir else None,
        "timeout_seconds": _timeout_from_env(),
    }
    values.update({key: value for key, value in overrides.items() if value is not None})

    config = ClientConfig.model_validate(values)
    logger.debug("Resolved acme.sh command %s (timeout %ss)", config.executable, config.timeout_seconds)
    return config
