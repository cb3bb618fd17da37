"""Host configuration read from ``HOSTFX_*`` environment variables.

Values not present in the environment fall back to :data:`DEFAULT_CONFIG`.
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass

from frozendict import frozendict

from hostfx.errors import ConfigError

ENV_PREFIX = "HOSTFX_"

DEFAULT_CONFIG: frozendict[str, str] = frozendict(
    {
        "http_timeout": "30",
        "follow_redirects": "true",
        "max_steps": "",
        "log_level": "WARNING",
        "expected_output": "Hello, World!\n",
    }
)

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass(frozen=True)
class HostConfig:
    http_timeout: float = 30.0
    follow_redirects: bool = True
    max_steps: int | None = None
    log_level: str = "WARNING"
    expected_output: str = "Hello, World!\n"


def _env_key(key: str) -> str:
    return f"{ENV_PREFIX}{key.upper()}"


def _parse_timeout(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(_env_key("http_timeout"), raw, "a number of seconds") from None
    if not math.isfinite(value) or value <= 0:
        raise ConfigError(_env_key("http_timeout"), raw, "a positive number of seconds")
    return value


def _parse_bool(key: str, raw: str) -> bool:
    lowered = raw.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ConfigError(_env_key(key), raw, "a boolean")


def _parse_max_steps(raw: str) -> int | None:
    if not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(_env_key("max_steps"), raw, "an integer") from None
    if value <= 0:
        raise ConfigError(_env_key("max_steps"), raw, "a positive integer")
    return value


def _parse_log_level(raw: str) -> str:
    level = raw.strip().upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(_env_key("log_level"), raw, " | ".join(_LOG_LEVELS))
    return level


def load_config(environ: Mapping[str, str] | None = None) -> HostConfig:
    """Build a :class:`HostConfig` from ``environ`` (defaults to ``os.environ``)."""
    source = os.environ if environ is None else environ
    raw = {key: source.get(_env_key(key), default) for key, default in DEFAULT_CONFIG.items()}
    return HostConfig(
        http_timeout=_parse_timeout(raw["http_timeout"]),
        follow_redirects=_parse_bool("follow_redirects", raw["follow_redirects"]),
        max_steps=_parse_max_steps(raw["max_steps"]),
        log_level=_parse_log_level(raw["log_level"]),
        expected_output=raw["expected_output"],
    )


__all__ = [
    "DEFAULT_CONFIG",
    "ENV_PREFIX",
    "HostConfig",
    "load_config",
]
