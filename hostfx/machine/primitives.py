from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from hostfx.machine.frames import Continuation, Handler

if TYPE_CHECKING:
    from hostfx.program import Program

T = TypeVar("T")


class ControlPrimitive:
    pass


@dataclass(frozen=True)
class WithHandler(ControlPrimitive, Generic[T]):
    """Run ``program`` with ``handler`` installed as the innermost handler."""

    handler: Handler
    program: Program[T] | WithHandler[T]


@dataclass(frozen=True)
class Resume(ControlPrimitive):
    """Continue the suspended program ``k`` with ``value``.

    Resuming ends the handler: code after ``yield Resume(...)`` does not run.
    """

    k: Continuation
    value: Any = None


@dataclass(frozen=True)
class Pass(ControlPrimitive):
    """Hand the effect being dispatched to the next outer handler."""
