from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hostfx.machine.errors import UnhandledEffectError
from hostfx.machine.frames import (
    Continuation,
    DispatchingFrame,
    Handler,
    ReturnFrame,
    WithHandlerFrame,
)
from hostfx.machine.state import Error, MachineState, ProgramControl, Value

if TYPE_CHECKING:
    from hostfx.machine.state import Kontinuation
    from hostfx.types import EffectBase

logger = logging.getLogger(__name__)


def handler_name(handler: Handler) -> str:
    return getattr(handler, "__name__", type(handler).__name__)


def close_frames(frames: Kontinuation) -> None:
    """Close every suspended generator in ``frames``."""
    for frame in frames:
        if isinstance(frame, ReturnFrame):
            try:
                frame.generator.close()
            except Exception:
                logger.debug("generator raised while closing", exc_info=True)


def collect_available_handlers(K: Kontinuation) -> list[Handler]:
    """Collect handlers available for a new effect dispatch.

    Convention: handlers[0] = innermost, handlers[N-1] = outermost.
    When inside a DispatchingFrame, only the handlers outside the running
    one are available, so a handler never receives its own effects.
    """
    handlers: list[Handler] = []

    for frame in K:
        if isinstance(frame, WithHandlerFrame):
            handlers.append(frame.handler)
        elif isinstance(frame, DispatchingFrame):
            return handlers + list(frame.handlers[frame.handler_idx + 1 :])

    return handlers


def find_dispatching_frame(K: Kontinuation) -> int | None:
    for i, frame in enumerate(K):
        if isinstance(frame, DispatchingFrame):
            return i
    return None


def invoke_handler(df: DispatchingFrame, K: Kontinuation) -> MachineState:
    """Start ``df``'s current handler above the suspended program ``K``."""
    handler = df.current_handler
    logger.debug("dispatch %s -> %s", df.effect.describe(), handler_name(handler))
    try:
        handler_program = handler(df.effect, df.continuation)
    except Exception as e:
        return MachineState(C=Error(e), K=K)
    return MachineState(C=ProgramControl(handler_program), K=[df] + K)


def start_dispatch(effect: EffectBase, K: Kontinuation) -> MachineState:
    handlers = collect_available_handlers(K)

    if not handlers:
        return MachineState(C=Error(UnhandledEffectError(effect)), K=K)

    df = DispatchingFrame(
        effect=effect,
        handlers=tuple(handlers),
        handler_idx=0,
        continuation=Continuation(),
    )
    return invoke_handler(df, K)


def resume(k: Continuation, value: object, K: Kontinuation) -> MachineState:
    df_idx = find_dispatching_frame(K)
    if df_idx is None:
        return MachineState(C=Error(RuntimeError("Resume called outside of a handler")), K=K)

    df = K[df_idx]
    assert isinstance(df, DispatchingFrame)
    if k is not df.continuation:
        return MachineState(
            C=Error(RuntimeError(f"Resume received {k!r}, expected {df.continuation!r}")),
            K=K,
        )
    if k.consumed:
        return MachineState(
            C=Error(RuntimeError(f"{k!r} has already been resumed")),
            K=K,
        )

    k.consumed = True
    close_frames(K[:df_idx])
    return MachineState(C=Value(value), K=list(K[df_idx + 1 :]))


def pass_to_outer(K: Kontinuation) -> MachineState:
    df_idx = find_dispatching_frame(K)
    if df_idx is None:
        return MachineState(C=Error(RuntimeError("Pass called outside of a handler")), K=K)

    df = K[df_idx]
    assert isinstance(df, DispatchingFrame)
    close_frames(K[:df_idx])
    user_k = list(K[df_idx + 1 :])

    next_df = df.next_handler()
    if next_df is None:
        return MachineState(C=Error(UnhandledEffectError(df.effect)), K=user_k)
    return invoke_handler(next_df, user_k)


def abandon(df: DispatchingFrame, value: object, user_k: Kontinuation) -> MachineState:
    """The handler returned without resuming: its value ends the handled scope."""
    target = df.current_handler
    for whf_idx, frame in enumerate(user_k):
        if isinstance(frame, WithHandlerFrame) and frame.handler is target:
            close_frames(user_k[:whf_idx])
            df.continuation.consumed = True
            return MachineState(C=Value(value), K=list(user_k[whf_idx + 1 :]))

    raise RuntimeError(
        f"Handler {handler_name(target)} returned but its WithHandlerFrame is missing"
    )
