"""
hostfx - host effects for a command-line language platform.

Programs are inert descriptions of side effects. Building one performs no I/O;
a host performs the effects when the program is run.

Example:
    >>> from hostfx import do, env_var_utf8, put_line, run, InMemoryHost
    >>>
    >>> @do
    ... def greet():
    ...     name = yield env_var_utf8("USER")
    ...     yield put_line(f"Hello, {name}!")
    >>>
    >>> host = InMemoryHost.from_seed_data(environ={"USER": "ada"})
    >>> run(greet(), host).is_ok
    True
"""

from loguru import logger

from hostfx.combinators import (
    Break,
    Continue,
    Step,
    after,
    always,
    attempt,
    forever,
    loop,
    map_,
    sequence,
)
from hostfx.config import DEFAULT_CONFIG, HostConfig, load_config
from hostfx.do import do
from hostfx.effects import (
    EnvVarUtf8,
    EnvVarUtf8Effect,
    ErrLine,
    ErrLineEffect,
    GetLine,
    GetLineEffect,
    Pure,
    PureEffect,
    PutLine,
    PutLineEffect,
    SendRequest,
    SendRequestEffect,
    WriteBytes,
    WriteBytesEffect,
    WriteUtf8,
    WriteUtf8Effect,
    env_var_utf8,
    err_line,
    get_line,
    put_line,
    send_request,
    write_bytes,
    write_utf8,
)
from hostfx.errors import (
    ConfigError,
    EndOfInputError,
    EnvVarNotFoundError,
    FileWriteError,
    HostError,
    PlatformError,
    RunCancelledError,
    StepLimitExceededError,
)
from hostfx.handlers import CapturingHost, Host, InMemoryHost, OsHost, host_handler
from hostfx.http import (
    BadStatus,
    BadUrl,
    GoodStatus,
    Header,
    Metadata,
    NetworkError,
    Request,
    Response,
    Timeout,
)
from hostfx.machine import Pass, Resume, RunResult, UnhandledEffectError, WithHandler
from hostfx.program import GeneratorProgram, Program
from hostfx.result import Err, Ok, Result
from hostfx.run import run, run_program
from hostfx.types import Effect, EffectBase, EffectGenerator

__version__ = "0.1.0"

# Library logging is silent until an application enables it.
logger.disable("hostfx")

__all__ = [  # noqa: RUF022
    # Core types
    "Effect",
    "EffectBase",
    "EffectGenerator",
    "GeneratorProgram",
    "Program",
    "RunResult",
    "Result",
    "Ok",
    "Err",
    # Host effects
    "EnvVarUtf8",
    "EnvVarUtf8Effect",
    "ErrLine",
    "ErrLineEffect",
    "GetLine",
    "GetLineEffect",
    "Pure",
    "PureEffect",
    "PutLine",
    "PutLineEffect",
    "SendRequest",
    "SendRequestEffect",
    "WriteBytes",
    "WriteBytesEffect",
    "WriteUtf8",
    "WriteUtf8Effect",
    "env_var_utf8",
    "err_line",
    "get_line",
    "put_line",
    "send_request",
    "write_bytes",
    "write_utf8",
    # Combinators
    "Break",
    "Continue",
    "Step",
    "after",
    "always",
    "attempt",
    "forever",
    "loop",
    "map_",
    "sequence",
    "do",
    # HTTP records
    "BadStatus",
    "BadUrl",
    "GoodStatus",
    "Header",
    "Metadata",
    "NetworkError",
    "Request",
    "Response",
    "Timeout",
    # Hosts and handlers
    "CapturingHost",
    "Host",
    "InMemoryHost",
    "OsHost",
    "Pass",
    "Resume",
    "WithHandler",
    "host_handler",
    # Running
    "run",
    "run_program",
    # Configuration
    "DEFAULT_CONFIG",
    "HostConfig",
    "load_config",
    # Errors
    "ConfigError",
    "EndOfInputError",
    "EnvVarNotFoundError",
    "FileWriteError",
    "HostError",
    "PlatformError",
    "RunCancelledError",
    "StepLimitExceededError",
    "UnhandledEffectError",
]
