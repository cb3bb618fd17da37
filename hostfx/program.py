"""
Program class for the hostfx system.

This module contains the Program wrapper classes that represent a lazy
computation. Nothing here performs I/O: a Program only describes what a host
should do once it is run.
"""

from __future__ import annotations

from abc import ABC
from collections.abc import Callable, Generator
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from hostfx.types import Effect

T = TypeVar("T")
U = TypeVar("U")


class ProgramBase(ABC, Generic[T]):
    """Runtime base class for all hostfx programs (effects and generator programs)."""

    def map(self, f: Callable[[T], U]) -> Program[U]:
        """Map a function over this program's result."""

        if not callable(f):
            raise TypeError("mapper must be callable")

        def factory() -> Generator[Effect | Program, Any, U]:
            value = yield self
            return f(value)

        return GeneratorProgram(factory)

    def flat_map(self, f: Callable[[T], Program[U]]) -> Program[U]:
        """Monadic bind operation."""

        if not callable(f):
            raise TypeError("binder must be callable returning a Program")

        def factory() -> Generator[Effect | Program, Any, U]:
            value = yield self
            next_prog = f(value)
            if not isinstance(next_prog, ProgramBase):
                raise TypeError(
                    "binder must return a Program; got "
                    f"{type(next_prog).__name__}"
                )
            result = yield next_prog
            return result

        return GeneratorProgram(factory)

    def and_then(self, f: Callable[[T], Program[U]]) -> Program[U]:
        """Alias for flat_map."""

        return self.flat_map(f)

    def then(self, next_program: Program[U]) -> Program[U]:
        """Run this program, discard its value, then run ``next_program``."""

        return self.flat_map(lambda _: next_program)

    @staticmethod
    def pure(value: T) -> Program[T]:
        from hostfx.effects.pure import PureEffect

        return PureEffect(value=value)

    @staticmethod
    def of(value: T) -> Program[T]:
        return ProgramBase.pure(value)

    @staticmethod
    def lift(value: Program[U] | U) -> Program[U]:
        if isinstance(value, ProgramBase):
            return value  # type: ignore[return-value]
        return ProgramBase.pure(value)  # type: ignore[return-value]


class GeneratorProgram(ProgramBase[T]):
    """Program backed by a generator factory.

    The factory is called once per run, so the same program value can be run
    any number of times.
    """

    __slots__ = ("factory", "name")

    def __init__(
        self,
        factory: Callable[[], Generator[Any, Any, T]],
        *,
        name: str | None = None,
    ) -> None:
        if not callable(factory):
            raise TypeError("factory must be callable returning a generator")
        self.factory = factory
        self.name = name or getattr(factory, "__qualname__", None) or "program"

    def to_generator(self) -> Generator[Any, Any, T]:
        generator = self.factory()
        if not isinstance(generator, Generator):
            raise TypeError(
                f"{self.name} did not produce a generator; got {type(generator).__name__}"
            )
        return generator

    def __repr__(self) -> str:
        return f"GeneratorProgram({self.name})"


Program = ProgramBase


__all__ = [
    "GeneratorProgram",
    "Program",
    "ProgramBase",
]
