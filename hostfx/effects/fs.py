"""File write effects."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ._validators import coerce_path, ensure_bytes, ensure_str
from .base import Effect, EffectBase, create_effect_with_trace


@dataclass(frozen=True)
class WriteUtf8Effect(EffectBase):
    """Replaces the contents of ``path`` with ``text`` encoded as UTF-8."""

    path: Path
    text: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", coerce_path(self.path, name="path"))
        ensure_str(self.text, name="text")


@dataclass(frozen=True)
class WriteBytesEffect(EffectBase):
    """Replaces the contents of ``path`` with raw ``data``."""

    path: Path
    data: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", coerce_path(self.path, name="path"))
        ensure_bytes(self.data, name="data")
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))


def write_utf8(path: str | os.PathLike[str], text: str) -> WriteUtf8Effect:
    return create_effect_with_trace(WriteUtf8Effect(path=path, text=text))


def write_bytes(path: str | os.PathLike[str], data: bytes) -> WriteBytesEffect:
    return create_effect_with_trace(WriteBytesEffect(path=path, data=data))


def WriteUtf8(path: str | os.PathLike[str], text: str) -> Effect:  # noqa: N802
    return create_effect_with_trace(WriteUtf8Effect(path=path, text=text), skip_frames=3)


def WriteBytes(path: str | os.PathLike[str], data: bytes) -> Effect:  # noqa: N802
    return create_effect_with_trace(WriteBytesEffect(path=path, data=data), skip_frames=3)


__all__ = [
    "WriteBytes",
    "WriteBytesEffect",
    "WriteUtf8",
    "WriteUtf8Effect",
    "write_bytes",
    "write_utf8",
]
