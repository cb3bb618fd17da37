"""Console effects: standard output, standard error and standard input lines."""

from __future__ import annotations

from dataclasses import dataclass

from ._validators import ensure_str
from .base import Effect, EffectBase, create_effect_with_trace


@dataclass(frozen=True)
class PutLineEffect(EffectBase):
    """Writes ``line`` followed by a newline to standard output."""

    line: str

    def __post_init__(self) -> None:
        ensure_str(self.line, name="line")


@dataclass(frozen=True)
class ErrLineEffect(EffectBase):
    """Writes ``line`` followed by a newline to standard error."""

    line: str

    def __post_init__(self) -> None:
        ensure_str(self.line, name="line")


@dataclass(frozen=True)
class GetLineEffect(EffectBase):
    """Reads one line from standard input, without its trailing newline."""


def put_line(line: str) -> PutLineEffect:
    return create_effect_with_trace(PutLineEffect(line=line))


def err_line(line: str) -> ErrLineEffect:
    return create_effect_with_trace(ErrLineEffect(line=line))


def get_line() -> GetLineEffect:
    return create_effect_with_trace(GetLineEffect())


# Uppercase aliases

def PutLine(line: str) -> Effect:  # noqa: N802
    return create_effect_with_trace(PutLineEffect(line=line), skip_frames=3)


def ErrLine(line: str) -> Effect:  # noqa: N802
    return create_effect_with_trace(ErrLineEffect(line=line), skip_frames=3)


def GetLine() -> Effect:  # noqa: N802
    return create_effect_with_trace(GetLineEffect(), skip_frames=3)


__all__ = [
    "ErrLine",
    "ErrLineEffect",
    "GetLine",
    "GetLineEffect",
    "PutLine",
    "PutLineEffect",
    "err_line",
    "get_line",
    "put_line",
]
