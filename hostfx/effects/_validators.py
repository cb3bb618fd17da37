"""Runtime validators for effect attribute type checking."""

from __future__ import annotations

import os
from pathlib import Path

from hostfx.program import ProgramBase


def _type_name(value: object) -> str:
    return type(value).__name__


def ensure_str(value: object, *, name: str) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be str, got {_type_name(value)}")


def ensure_bytes(value: object, *, name: str) -> None:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes, got {_type_name(value)}")


def ensure_callable(value: object, *, name: str) -> None:
    if not callable(value):
        raise TypeError(f"{name} must be callable, got {_type_name(value)}")


def ensure_program_like(value: object, *, name: str) -> None:
    if not isinstance(value, ProgramBase):
        raise TypeError(f"{name} must be Program or Effect, got {_type_name(value)}")


def coerce_path(value: object, *, name: str) -> Path:
    if isinstance(value, Path):
        return value
    if isinstance(value, (str, os.PathLike)):
        return Path(value)
    raise TypeError(f"{name} must be str or PathLike, got {_type_name(value)}")


__all__ = [
    "coerce_path",
    "ensure_bytes",
    "ensure_callable",
    "ensure_program_like",
    "ensure_str",
]
