"""Platform harness: fetch a program module, run it, report its resulting string.

The harness mirrors a browser-style host page. ``fetch`` yields an object with
an ``array_buffer()`` accessor, the module's ``main`` is run against a host,
and the resulting string is returned to the caller instead of being handed to
a completion callback.
"""

from __future__ import annotations

import asyncio
import os
import sys
import threading
import types
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

import httpx
from loguru import logger as loguru_logger

from hostfx.config import HostConfig, load_config
from hostfx.errors import PlatformError
from hostfx.handlers import CapturingHost, Host, OsHost
from hostfx.program import ProgramBase
from hostfx.run import run

loguru_logger = loguru_logger.bind(component="harness")

DEFAULT_EXPECTED = "Hello, World!\n"
ENTRY_POINT = "main"


@dataclass(frozen=True)
class FetchedResource:
    """Raw bytes of a fetched resource."""

    name: str
    data: bytes

    def array_buffer(self) -> bytes:
        return self.data


def _is_url(resource: str) -> bool:
    return resource.startswith(("http://", "https://"))


async def fetch(
    resource: str | os.PathLike[str],
    *,
    client: httpx.AsyncClient | None = None,
    config: HostConfig | None = None,
) -> FetchedResource:
    """Read ``resource`` from disk, or download it when it is an http(s) URL."""
    name = os.fspath(resource)
    if _is_url(name):
        active_config = config or load_config()
        try:
            if client is not None:
                response = await client.get(name)
            else:
                async with httpx.AsyncClient(
                    timeout=active_config.http_timeout,
                    follow_redirects=active_config.follow_redirects,
                ) as owned_client:
                    response = await owned_client.get(name)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise PlatformError(f"Failed to fetch {name}: {exc}") from exc
        return FetchedResource(name=name, data=response.content)

    try:
        data = await asyncio.to_thread(Path(name).read_bytes)
    except OSError as exc:
        raise PlatformError(f"Failed to fetch {name}: {exc.strerror or exc}") from exc
    return FetchedResource(name=name, data=data)


def _module_name(resource_name: str) -> str:
    stem = Path(resource_name.rsplit("/", 1)[-1]).stem or "platform_module"
    return "".join(ch if ch.isalnum() else "_" for ch in stem)


def _ensure_program(obj: Any, description: str) -> ProgramBase[Any]:
    if isinstance(obj, ProgramBase):
        return obj
    if isinstance(obj, str):
        return ProgramBase.pure(obj)
    if callable(obj):
        try:
            produced = obj()
        except Exception as exc:
            raise PlatformError(
                f"{description} raised {type(exc).__name__}: {exc}"
            ) from exc
        if isinstance(produced, ProgramBase):
            return produced
        if isinstance(produced, str):
            return ProgramBase.pure(produced)
    raise PlatformError(f"{description} did not resolve to a Program or a string.")


def load_module(source: bytes, name: str = "<platform module>") -> ProgramBase[Any]:
    """Compile ``source`` as a Python module and return its entry program."""
    try:
        text = source.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise PlatformError(f"{name} is not UTF-8 Python source") from exc

    module = types.ModuleType(_module_name(name))
    module.__file__ = name
    try:
        code = compile(text, name, "exec")
        exec(code, module.__dict__)
    except Exception as exc:
        raise PlatformError(f"Failed to load {name}: {type(exc).__name__}: {exc}") from exc

    if ENTRY_POINT not in module.__dict__:
        raise PlatformError(f"{name} does not define '{ENTRY_POINT}'")
    return _ensure_program(module.__dict__[ENTRY_POINT], f"{name}:{ENTRY_POINT}")


def _result_string(value: Any, capture: CapturingHost, name: str, forward_stdout: bool) -> str:
    if isinstance(value, str):
        if forward_stdout:
            capture.forward()
        return value
    if value is None:
        return capture.captured
    raise PlatformError(
        f"{name}:{ENTRY_POINT} produced {type(value).__name__}; expected a string or None"
    )


async def run_platform_async(
    resource: str | os.PathLike[str],
    *,
    host: Host | None = None,
    config: HostConfig | None = None,
    cancel: threading.Event | None = None,
    forward_stdout: bool = False,
) -> str:
    """Fetch, load and run a program module; return its resulting string.

    Standard output is buffered while the program runs. When the program
    produces a string and ``forward_stdout`` is set, the buffered lines are
    written to the host afterwards; otherwise they are dropped.

    Cancelling the awaiting task sets ``cancel`` (or an internal event), waits
    for the interpreter to stop, then re-raises :class:`asyncio.CancelledError`.
    """
    active_config = config or load_config()
    fetched = await fetch(resource, config=active_config)
    program = load_module(fetched.array_buffer(), fetched.name)
    capture = CapturingHost(host if host is not None else OsHost(active_config))
    cancel_event = cancel if cancel is not None else threading.Event()

    loguru_logger.debug("running {} ({} bytes)", fetched.name, len(fetched.data))
    worker = asyncio.ensure_future(
        asyncio.to_thread(
            run,
            program,
            capture,
            cancel=cancel_event,
            max_steps=active_config.max_steps,
        )
    )
    try:
        result = await asyncio.shield(worker)
    except asyncio.CancelledError:
        cancel_event.set()
        stopped = await worker
        loguru_logger.debug("{} cancelled: {}", fetched.name, stopped.error)
        raise
    loguru_logger.debug("{} finished after {} steps", fetched.name, result.steps)
    return _result_string(result.unwrap(), capture, fetched.name, forward_stdout)


def run_platform(
    resource: str | os.PathLike[str],
    *,
    host: Host | None = None,
    config: HostConfig | None = None,
    cancel: threading.Event | None = None,
    forward_stdout: bool = False,
) -> str:
    """Synchronous :func:`run_platform_async`."""
    return asyncio.run(
        run_platform_async(
            resource,
            host=host,
            config=config,
            cancel=cancel,
            forward_stdout=forward_stdout,
        )
    )


def check_output(
    actual: str,
    expected: str = DEFAULT_EXPECTED,
    *,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Compare a program's resulting string with ``expected``; return an exit code."""
    if actual != expected:
        print(f'Expected "{expected}", but got "{actual}"', file=stderr or sys.stderr)
        return 1
    print("OK", file=stdout or sys.stdout)
    return 0


__all__ = [
    "DEFAULT_EXPECTED",
    "ENTRY_POINT",
    "FetchedResource",
    "check_output",
    "fetch",
    "load_module",
    "run_platform",
    "run_platform_async",
]
