"""Pure effect - represents an immediate value (Pure case of Free monad)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .base import Effect, EffectBase, create_effect_with_trace


@dataclass(frozen=True)
class PureEffect(EffectBase):
    """
    Represents an immediate value without performing any effect.

    The interpreter answers it directly; no handler ever sees it.
    """

    value: Any


def pure(value: Any) -> PureEffect:
    return create_effect_with_trace(PureEffect(value=value))


def Pure(value: Any) -> Effect:  # noqa: N802
    """
    Create a PureEffect with creation trace context.

    Args:
        value: The value to wrap

    Returns:
        PureEffect with trace information
    """
    return create_effect_with_trace(PureEffect(value=value), skip_frames=3)


__all__ = [
    "Pure",
    "PureEffect",
    "pure",
]
