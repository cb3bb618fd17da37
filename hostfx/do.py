"""
The do decorator for the hostfx system.

This module provides the @do decorator that turns generator functions into
functions returning Programs, giving do-notation over host effects.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Generator
from functools import partial, update_wrapper
from typing import Any, Generic, ParamSpec, TypeVar

from hostfx.program import GeneratorProgram, Program
from hostfx.types import EffectGenerator

P = ParamSpec("P")
T = TypeVar("T")


class DoFunction(Generic[P, T]):
    """Callable returned by :func:`do`; calling it builds a Program and runs nothing."""

    def __init__(self, func: Callable[P, EffectGenerator[T]]) -> None:
        if not callable(func):
            raise TypeError("@do requires a callable")
        self.original_func = func
        update_wrapper(self, func)

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> Program[T]:
        func = self.original_func

        def generator_wrapper() -> Generator[Any, Any, T]:
            gen_or_value = func(*args, **kwargs)
            if not inspect.isgenerator(gen_or_value):
                return gen_or_value
            return (yield from gen_or_value)

        return GeneratorProgram(generator_wrapper, name=getattr(func, "__qualname__", None))

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return partial(self.__call__, instance)

    def __repr__(self) -> str:
        return f"<do {getattr(self, '__qualname__', self.original_func)!r}>"


def do(func: Callable[P, EffectGenerator[T]]) -> DoFunction[P, T]:
    """
    Decorator that converts a generator function into a Program factory.

    Python generators start running as soon as they are iterated, so the
    decorated function is only invoked when the interpreter starts the
    program. Each call produces a fresh Program that can be run many times.

    Exceptions raised by a host operation are thrown into the generator at the
    ``yield`` that performed it, so ordinary ``try``/``except`` works:

        @do
        def greet():
            try:
                name = yield env_var_utf8("USER")
            except EnvVarNotFoundError:
                name = "stranger"
            yield put_line(f"Hello, {name}!")

    Args:
        func: Generator function yielding effects or programs

    Returns:
        A callable producing a Program
    """
    return DoFunction(func)


__all__ = ["DoFunction", "do"]
