from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from hostfx.machine.frames import DispatchingFrame, ReturnFrame, WithHandlerFrame

    Frame = ReturnFrame | WithHandlerFrame | DispatchingFrame
    Kontinuation = list[Frame]


@dataclass(frozen=True)
class ProgramControl:
    program: Any


@dataclass(frozen=True)
class Value:
    value: Any


@dataclass(frozen=True)
class Error:
    error: BaseException


@dataclass(frozen=True)
class EffectYield:
    yielded: Any


@dataclass(frozen=True)
class Done:
    value: Any


@dataclass(frozen=True)
class Failed:
    error: BaseException


Control = ProgramControl | Value | Error | EffectYield


@dataclass(frozen=True)
class MachineState:
    """Control plus continuation. ``K[0]`` is the innermost frame."""

    C: Control
    K: Kontinuation
