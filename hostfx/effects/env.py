"""Environment variable effect."""

from __future__ import annotations

from dataclasses import dataclass

from ._validators import ensure_str
from .base import Effect, EffectBase, create_effect_with_trace


@dataclass(frozen=True)
class EnvVarUtf8Effect(EffectBase):
    """Reads the environment variable ``name`` as text."""

    name: str

    def __post_init__(self) -> None:
        ensure_str(self.name, name="name")
        if not self.name:
            raise ValueError("environment variable name must not be empty")


def env_var_utf8(name: str) -> EnvVarUtf8Effect:
    return create_effect_with_trace(EnvVarUtf8Effect(name=name))


def EnvVarUtf8(name: str) -> Effect:  # noqa: N802
    return create_effect_with_trace(EnvVarUtf8Effect(name=name), skip_frames=3)


__all__ = [
    "EnvVarUtf8",
    "EnvVarUtf8Effect",
    "env_var_utf8",
]
