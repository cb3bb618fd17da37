"""Entry points that run a program against a host."""

from __future__ import annotations

import threading
from collections.abc import Sequence
from typing import TypeVar

from hostfx.handlers import Host, OsHost, host_handler
from hostfx.machine import Handler, RunResult, sync_run
from hostfx.program import Program

T = TypeVar("T")


def run(
    program: Program[T],
    host: Host | None = None,
    handlers: Sequence[Handler] = (),
    *,
    cancel: threading.Event | None = None,
    max_steps: int | None = None,
) -> RunResult[T]:
    """Run ``program`` and return its :class:`RunResult`.

    ``handlers`` are installed innermost first; the handler for ``host``
    (an :class:`OsHost` when omitted) is installed outermost so custom
    handlers can intercept host effects before they reach it.
    """
    active_host = host if host is not None else OsHost()
    if max_steps is None and isinstance(active_host, OsHost):
        max_steps = active_host.config.max_steps
    return sync_run(
        program,
        [*handlers, host_handler(active_host)],
        cancel=cancel,
        max_steps=max_steps,
    )


def run_program(
    program: Program[T],
    host: Host | None = None,
    handlers: Sequence[Handler] = (),
    *,
    cancel: threading.Event | None = None,
    max_steps: int | None = None,
) -> T:
    """Run ``program`` and return its value, raising the error it failed with."""
    return run(program, host, handlers, cancel=cancel, max_steps=max_steps).unwrap()


__all__ = ["run", "run_program"]
