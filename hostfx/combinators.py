"""Combinators that build new effects from existing ones without running them."""

from __future__ import annotations

from collections.abc import Callable, Generator, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from hostfx.effects._validators import ensure_callable, ensure_program_like
from hostfx.program import GeneratorProgram, Program, ProgramBase
from hostfx.result import Err, Ok, Result

A = TypeVar("A")
B = TypeVar("B")
S = TypeVar("S")


@dataclass(frozen=True)
class Continue(Generic[S]):
    """Loop step: run the step function again with ``state``."""

    state: S


@dataclass(frozen=True)
class Break(Generic[A]):
    """Terminal loop step: the loop finishes with ``value``."""

    value: A


Step = Continue[Any] | Break[Any]


def after(effect: Program[A], f: Callable[[A], Program[B]]) -> Program[B]:
    """Run ``effect``, then the effect ``f`` builds from its value."""
    ensure_program_like(effect, name="effect")
    ensure_callable(f, name="f")
    return effect.flat_map(f)


def map_(effect: Program[A], f: Callable[[A], B]) -> Program[B]:
    """Transform the value of ``effect`` with ``f``; performs nothing new."""
    ensure_program_like(effect, name="effect")
    ensure_callable(f, name="f")
    return effect.map(f)


def always(value: A) -> Program[A]:
    """An effect that performs nothing and yields ``value``."""
    return ProgramBase.pure(value)


def forever(effect: Program[Any]) -> Program[Any]:
    """Repeat ``effect`` indefinitely.

    The result never completes normally. The run ends when the repeated effect
    raises or when the run is cancelled.
    """
    ensure_program_like(effect, name="effect")

    def forever_generator() -> Generator[Any, Any, Any]:
        while True:
            yield effect

    return GeneratorProgram(forever_generator, name="forever")


def loop(state: S, step: Callable[[S], Program[Step]]) -> Program[A]:
    """Repeat ``step`` from ``state`` until it produces :class:`Break`."""
    ensure_callable(step, name="step")

    def loop_generator() -> Generator[Any, Any, A]:
        current = state
        while True:
            next_program = step(current)
            ensure_program_like(next_program, name="loop step result")
            outcome = yield next_program
            if isinstance(outcome, Break):
                return outcome.value
            if not isinstance(outcome, Continue):
                raise TypeError(
                    f"loop step must produce Continue or Break, got {type(outcome).__name__}"
                )
            current = outcome.state

    return GeneratorProgram(loop_generator, name="loop")


def attempt(effect: Program[A]) -> Program[Result[A]]:
    """Run ``effect`` and capture a raised exception as :class:`Err`."""
    ensure_program_like(effect, name="effect")

    def attempt_generator() -> Generator[Any, Any, Result[A]]:
        try:
            value = yield effect
        except Exception as exc:
            return Err(exc)
        return Ok(value)

    return GeneratorProgram(attempt_generator, name="attempt")


def sequence(effects: Iterable[Program[A]]) -> Program[list[A]]:
    """Run ``effects`` in order and collect their values."""
    programs = list(effects)
    for index, program in enumerate(programs):
        ensure_program_like(program, name=f"effects[{index}]")

    def sequence_generator() -> Generator[Any, Any, list[A]]:
        values = []
        for program in programs:
            values.append((yield program))
        return values

    return GeneratorProgram(sequence_generator, name="sequence")


# Host interface spelling; import it qualified to keep the builtin.
map = map_  # noqa: A001


__all__ = [
    "Break",
    "Continue",
    "Step",
    "after",
    "always",
    "attempt",
    "forever",
    "loop",
    "map",
    "map_",
    "sequence",
]
