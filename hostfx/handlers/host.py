"""The host capability interface and its adapter to the handler protocol."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from typing import Any

from hostfx.effects import (
    EnvVarUtf8Effect,
    ErrLineEffect,
    GetLineEffect,
    PutLineEffect,
    SendRequestEffect,
    WriteBytesEffect,
    WriteUtf8Effect,
)
from hostfx.http import Request, Response
from hostfx.machine import Continuation, Handler, Pass, Resume
from hostfx.types import Effect

logger = logging.getLogger(__name__)


class Host(ABC):
    """Performs the platform's side effects. One method per host operation."""

    @abstractmethod
    def env_var_utf8(self, name: str) -> str: ...

    @abstractmethod
    def write_utf8(self, path: Path, text: str) -> None: ...

    @abstractmethod
    def write_bytes(self, path: Path, data: bytes) -> None: ...

    @abstractmethod
    def put_line(self, line: str) -> None: ...

    @abstractmethod
    def err_line(self, line: str) -> None: ...

    @abstractmethod
    def get_line(self) -> str: ...

    @abstractmethod
    def send_request(self, request: Request) -> Response: ...


def _operations(host: Host) -> dict[type[Any], Callable[[Any], Any]]:
    return {
        EnvVarUtf8Effect: lambda effect: host.env_var_utf8(effect.name),
        WriteUtf8Effect: lambda effect: host.write_utf8(effect.path, effect.text),
        WriteBytesEffect: lambda effect: host.write_bytes(effect.path, effect.data),
        PutLineEffect: lambda effect: host.put_line(effect.line),
        ErrLineEffect: lambda effect: host.err_line(effect.line),
        GetLineEffect: lambda effect: host.get_line(),
        SendRequestEffect: lambda effect: host.send_request(effect.request),
    }


def host_handler(host: Host) -> Handler:
    """Build a handler that performs host effects with ``host``.

    Effects that are not host operations are passed to outer handlers.
    """
    operations = _operations(host)

    def handler(effect: Effect, k: Continuation):
        for effect_type, operation in operations.items():
            if isinstance(effect, effect_type):
                logger.debug("%s performs %s", type(host).__name__, effect_type.__name__)
                value = operation(effect)
                return (yield Resume(k, value))
        yield Pass()

    handler.__name__ = f"host_handler[{type(host).__name__}]"
    return handler


__all__ = ["Host", "host_handler"]
