from __future__ import annotations

import itertools
from collections.abc import Callable, Generator
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from hostfx.program import Program
    from hostfx.types import EffectBase

Handler = Callable[["EffectBase", "Continuation"], "Generator[Any, Any, Any] | Program[Any]"]

_frame_id_counter = itertools.count(1)
_continuation_id_counter = itertools.count(1)


def _next_frame_id() -> int:
    return next(_frame_id_counter)


class Continuation:
    """Handle for the suspended program that performed an effect.

    Handlers receive it as ``k`` and hand it back through ``Resume(k, value)``.
    A continuation can be resumed once.
    """

    __slots__ = ("cont_id", "consumed")

    def __init__(self) -> None:
        self.cont_id = next(_continuation_id_counter)
        self.consumed = False

    def __repr__(self) -> str:
        state = "consumed" if self.consumed else "live"
        return f"Continuation#{self.cont_id}({state})"


@dataclass(frozen=True)
class ReturnFrame:
    generator: Generator[Any, Any, Any]
    frame_id: int = field(default_factory=_next_frame_id, compare=False)


@dataclass(frozen=True)
class WithHandlerFrame:
    handler: Handler
    frame_id: int = field(default_factory=_next_frame_id, compare=False)


@dataclass(frozen=True)
class DispatchingFrame:
    """Tracks effect dispatch progress.

    Attributes:
        effect: The effect being dispatched
        handlers: Snapshot of available handlers at dispatch start (0 = innermost)
        handler_idx: Index of the handler currently running
        continuation: Token the running handler must pass to Resume
        frame_id: Unique identifier for debugging
    """

    effect: EffectBase
    handlers: tuple[Handler, ...]
    handler_idx: int
    continuation: Continuation
    frame_id: int = field(default_factory=_next_frame_id, compare=False)

    @property
    def current_handler(self) -> Handler:
        return self.handlers[self.handler_idx]

    def next_handler(self) -> DispatchingFrame | None:
        if self.handler_idx + 1 >= len(self.handlers):
            return None
        return replace(self, handler_idx=self.handler_idx + 1, frame_id=_next_frame_id())
