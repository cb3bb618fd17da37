from __future__ import annotations

from collections.abc import Generator as GeneratorABC
from typing import Any, Generator, cast

from hostfx.effects.pure import PureEffect
from hostfx.machine.dispatch import (
    abandon,
    pass_to_outer,
    resume,
    start_dispatch,
)
from hostfx.machine.frames import DispatchingFrame, ReturnFrame, WithHandlerFrame
from hostfx.machine.state import (
    Done,
    EffectYield,
    Error,
    Failed,
    MachineState,
    ProgramControl,
    Value,
)
from hostfx.machine.primitives import ControlPrimitive, Pass, Resume, WithHandler
from hostfx.program import ProgramBase
from hostfx.types import EffectBase


def to_generator(program: Any) -> Generator[Any, Any, Any]:
    if isinstance(program, GeneratorABC):
        return cast(Generator[Any, Any, Any], program)
    to_gen = getattr(program, "to_generator", None)
    if callable(to_gen):
        return cast(Generator[Any, Any, Any], to_gen())
    raise TypeError(f"Cannot convert {type(program).__name__} to generator")


def translate_control_primitive(primitive: ControlPrimitive, K: list[Any]) -> MachineState:
    if isinstance(primitive, WithHandler):
        return MachineState(
            C=ProgramControl(primitive.program),
            K=[WithHandlerFrame(handler=primitive.handler)] + K,
        )

    if isinstance(primitive, Resume):
        return resume(primitive.k, primitive.value, K)

    if isinstance(primitive, Pass):
        return pass_to_outer(K)

    raise NotImplementedError(f"Control primitive not implemented: {type(primitive).__name__}")


def _start_program(program: Any, K: list[Any]) -> MachineState:
    if isinstance(program, PureEffect):
        return MachineState(C=Value(program.value), K=K)
    if isinstance(program, (EffectBase, ControlPrimitive)):
        return _on_yield(program, K)

    try:
        gen = to_generator(program)
        yielded = next(gen)
    except StopIteration as e:
        return MachineState(C=Value(e.value), K=K)
    except Exception as e:
        return MachineState(C=Error(e), K=K)
    return MachineState(C=EffectYield(yielded), K=[ReturnFrame(gen)] + K)


def _on_yield(yielded: Any, K: list[Any]) -> MachineState:
    if isinstance(yielded, ControlPrimitive):
        return translate_control_primitive(yielded, K)
    if isinstance(yielded, PureEffect):
        return MachineState(C=Value(yielded.value), K=K)
    if isinstance(yielded, EffectBase):
        return start_dispatch(yielded, K)
    if isinstance(yielded, (ProgramBase, GeneratorABC)):
        return MachineState(C=ProgramControl(yielded), K=K)
    return MachineState(
        C=Error(TypeError(f"Programs may only yield effects or programs, got {type(yielded).__name__}")),
        K=K,
    )


def _resume_frame(frame: ReturnFrame, rest_k: list[Any], send: Any = None, throw: BaseException | None = None) -> MachineState:
    try:
        if throw is not None:
            yielded = frame.generator.throw(throw)
        else:
            yielded = frame.generator.send(send)
    except StopIteration as e:
        return MachineState(C=Value(e.value), K=rest_k)
    except Exception as e:
        return MachineState(C=Error(e), K=rest_k)
    return MachineState(C=EffectYield(yielded), K=[frame] + rest_k)


def step(state: MachineState) -> MachineState | Done | Failed:
    C, K = state.C, state.K

    if isinstance(C, ProgramControl):
        return _start_program(C.program, K)

    if isinstance(C, EffectYield):
        return _on_yield(C.yielded, K)

    if isinstance(C, Value):
        if not K:
            return Done(C.value)
        frame, rest_k = K[0], K[1:]
        if isinstance(frame, ReturnFrame):
            return _resume_frame(frame, rest_k, send=C.value)
        if isinstance(frame, WithHandlerFrame):
            return MachineState(C=C, K=rest_k)
        if isinstance(frame, DispatchingFrame):
            return abandon(frame, C.value, rest_k)

    if isinstance(C, Error):
        if not K:
            return Failed(C.error)
        frame, rest_k = K[0], K[1:]
        if isinstance(frame, ReturnFrame):
            return _resume_frame(frame, rest_k, throw=C.error)
        # Leaving a handler scope or a failed handler: the error continues
        # into the program that performed the effect.
        return MachineState(C=C, K=rest_k)

    raise RuntimeError(f"Invalid machine state: C={type(C).__name__}, K={len(K)} frames")
