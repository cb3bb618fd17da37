"""
Result type returned by :func:`hostfx.combinators.attempt`.

``Ok`` carries a value, ``Err`` carries the exception an effect raised.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, cast

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
U = TypeVar("U")


class Result(Generic[T_co]):
    """Sum type representing either a successful value or an error."""

    __slots__ = ()

    def is_ok(self) -> bool:
        """Return ``True`` when the result is successful."""

        return isinstance(self, Ok)

    def is_err(self) -> bool:
        """Return ``True`` when the result represents a failure."""

        return isinstance(self, Err)

    def ok(self) -> T_co | None:
        if isinstance(self, Ok):
            return self.value
        return None

    def err(self) -> Exception | None:
        if isinstance(self, Err):
            return self.error
        return None

    def unwrap(self) -> T_co:
        """Return the value or raise the stored error."""

        if isinstance(self, Ok):
            return self.value
        raise self.error

    def unwrap_or(self, default: U) -> T_co | U:
        if isinstance(self, Ok):
            return self.value
        return default

    def map(self, f: Callable[[T_co], U]) -> Result[U]:
        """Apply ``f`` to the contained value if this is a success."""

        if isinstance(self, Ok):
            return Ok(f(self.value))
        return cast(Result[U], self)

    def map_err(self, f: Callable[[Exception], Exception]) -> Result[T_co]:
        if isinstance(self, Err):
            error = f(self.error)
            if not isinstance(error, Exception):
                raise TypeError("map_err must return an Exception instance")
            return Err(error)
        return self

    def __bool__(self) -> bool:
        """Truthiness matches :meth:`is_ok`."""

        return self.is_ok()


@dataclass(frozen=True)
class Ok(Result[T], Generic[T]):
    """Success result."""
    value: T


@dataclass(frozen=True)
class Err(Result[NoReturn]):
    """Error result."""
    error: Exception


__all__ = ["Err", "Ok", "Result"]
