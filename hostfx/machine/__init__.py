"""Step machine that interprets hostfx programs.

State is a control value plus a continuation stack ``K``. Generators are
stepped one yield at a time; effects are dispatched to handlers installed with
``WithHandler``; handlers answer with ``Resume`` or defer with ``Pass``.
"""

from hostfx.machine.errors import UnhandledEffectError
from hostfx.machine.frames import Continuation, Handler
from hostfx.machine.primitives import ControlPrimitive, Pass, Resume, WithHandler
from hostfx.machine.run import RunResult, debug_sync_run, sync_run, wrap_with_handlers
from hostfx.machine.state import MachineState
from hostfx.machine.step import step

__all__ = [
    "Continuation",
    "ControlPrimitive",
    "Handler",
    "MachineState",
    "Pass",
    "Resume",
    "RunResult",
    "UnhandledEffectError",
    "WithHandler",
    "debug_sync_run",
    "step",
    "sync_run",
    "wrap_with_handlers",
]
