"""Core types shared across hostfx: effect base class and creation context."""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, TypeVar

from hostfx.program import Program, ProgramBase

T = TypeVar("T")
E = TypeVar("E", bound="EffectBase")


@dataclass(frozen=True)
class EffectCreationContext:
    """Where an effect value was built in user code."""

    filename: str
    line: int
    function: str
    code: str | None = None

    def format_location(self) -> str:
        return f"{self.filename}:{self.line} in {self.function}"


@dataclass(frozen=True)
class EffectBase(ProgramBase[Any]):
    """Base dataclass for every effect.

    An effect is pure data: it names an operation and its arguments. Building
    one performs nothing; a handler decides what it means when the program
    runs.
    """

    created_at: EffectCreationContext | None = field(
        default=None, compare=False, repr=False, kw_only=True
    )

    def with_created_at(self: E, created_at: EffectCreationContext | None) -> E:
        if created_at is self.created_at:
            return self
        return replace(self, created_at=created_at)

    def describe(self) -> str:
        name = type(self).__name__
        if self.created_at is None:
            return name
        return f"{name} (created at {self.created_at.format_location()})"


Effect = EffectBase

# Type alias for generators used in @do functions
if TYPE_CHECKING:
    EffectGenerator = Generator[Effect | Program, Any, T]
else:
    EffectGenerator = Generator[Any, Any, T]


__all__ = [
    "Effect",
    "EffectBase",
    "EffectCreationContext",
    "EffectGenerator",
    "Program",
]
