from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast

from hostfx.errors import RunCancelledError, StepLimitExceededError
from hostfx.machine.dispatch import close_frames
from hostfx.machine.frames import Handler
from hostfx.machine.primitives import WithHandler
from hostfx.machine.state import Done, Failed, MachineState, ProgramControl
from hostfx.machine.step import step
from hostfx.program import Program
from hostfx.result import Err, Ok, Result

T = TypeVar("T")

logger = logging.getLogger(__name__)


@dataclass
class RunResult(Generic[T]):
    value: T | None = None
    error: BaseException | None = None
    steps: int = 0

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @property
    def is_err(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return cast(T, self.value)

    def to_result(self) -> Result[T]:
        if self.error is not None:
            error = self.error
            if not isinstance(error, Exception):
                error = RuntimeError(repr(error))
            return Err(error)
        return Ok(cast(T, self.value))


def wrap_with_handlers(
    program: Program[T], handlers: Sequence[Handler]
) -> Program[T] | WithHandler[T]:
    """Wrap program with handlers. handlers[0] = innermost, handlers[N-1] = outermost."""
    result: Program[T] | WithHandler[T] = program
    for handler in handlers:
        result = WithHandler(handler=handler, program=result)
    return result


def sync_run(
    program: Program[T],
    handlers: Sequence[Handler] = (),
    *,
    cancel: threading.Event | None = None,
    max_steps: int | None = None,
) -> RunResult[T]:
    """Step ``program`` to completion under ``handlers``.

    ``cancel`` is checked before every step; once it is set the run stops with
    :class:`RunCancelledError`. ``max_steps`` bounds the number of steps.
    Failures are returned in the :class:`RunResult`, never raised.
    """
    state = MachineState(C=ProgramControl(wrap_with_handlers(program, handlers)), K=[])
    steps = 0

    while True:
        if cancel is not None and cancel.is_set():
            logger.debug("run cancelled after %d steps", steps)
            close_frames(state.K)
            return RunResult(error=RunCancelledError(steps), steps=steps)
        if max_steps is not None and steps >= max_steps:
            close_frames(state.K)
            return RunResult(error=StepLimitExceededError(max_steps), steps=steps)

        steps += 1
        try:
            result = step(state)
        except Exception as e:
            close_frames(state.K)
            return RunResult(error=e, steps=steps)

        if isinstance(result, Done):
            return RunResult(value=result.value, steps=steps)

        if isinstance(result, Failed):
            logger.debug("run failed after %d steps: %r", steps, result.error)
            return RunResult(error=result.error, steps=steps)

        state = result


def debug_sync_run(
    program: Program[T],
    handlers: Sequence[Handler] = (),
    max_steps: int = 1000,
) -> RunResult[T]:
    """Like :func:`sync_run` but logs every machine transition at INFO level."""
    state = MachineState(C=ProgramControl(wrap_with_handlers(program, handlers)), K=[])
    logger.info("initial: C=%s, K=%s", _format_control(state.C), _format_k(state.K))

    for n in range(1, max_steps + 1):
        result = step(state)
        if isinstance(result, Done):
            logger.info("step %d: Done(%r)", n, result.value)
            return RunResult(value=result.value, steps=n)
        if isinstance(result, Failed):
            logger.info("step %d: Failed(%r)", n, result.error)
            return RunResult(error=result.error, steps=n)
        state = result
        logger.info("step %d: C=%s, K=%s", n, _format_control(state.C), _format_k(state.K))

    close_frames(state.K)
    return RunResult(error=StepLimitExceededError(max_steps), steps=max_steps)


def _format_control(C: Any) -> str:
    from hostfx.machine.state import EffectYield, Error, Value

    if isinstance(C, ProgramControl):
        return f"ProgramControl({type(C.program).__name__})"
    if isinstance(C, Value):
        return f"Value({C.value!r})"
    if isinstance(C, EffectYield):
        return f"EffectYield({type(C.yielded).__name__})"
    if isinstance(C, Error):
        return f"Error({type(C.error).__name__}: {C.error})"
    return type(C).__name__


def _format_k(K: list[Any]) -> str:
    from hostfx.machine.dispatch import handler_name
    from hostfx.machine.frames import DispatchingFrame, ReturnFrame, WithHandlerFrame

    parts = []
    for f in K:
        if isinstance(f, ReturnFrame):
            parts.append(f"RF#{f.frame_id}")
        elif isinstance(f, WithHandlerFrame):
            parts.append(f"WHF#{f.frame_id}({handler_name(f.handler)})")
        elif isinstance(f, DispatchingFrame):
            parts.append(f"DF#{f.frame_id}(idx={f.handler_idx})")
        else:
            parts.append(type(f).__name__)
    return "[" + ", ".join(parts) + "]"
