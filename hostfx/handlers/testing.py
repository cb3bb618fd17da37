"""In-memory host used by tests and by programs that must not touch the OS."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from hostfx.errors import EndOfInputError, EnvVarNotFoundError
from hostfx.http import NetworkError, Request, Response

from .host import Host

Responder = Callable[[Request], Response]


@dataclass
class InMemoryHost(Host):
    """Scripted stdin, captured stdout/stderr, in-memory files and environment.

    Every operation is appended to ``calls`` as ``(operation, args)``.
    """

    stdin: deque[str] = field(default_factory=deque)
    environ: dict[str, str] = field(default_factory=dict)
    responder: Responder | None = None
    stdout: list[str] = field(default_factory=list)
    stderr: list[str] = field(default_factory=list)
    files: dict[Path, bytes] = field(default_factory=dict)
    calls: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)

    @classmethod
    def from_seed_data(
        cls,
        *,
        stdin: Iterable[str] = (),
        environ: Mapping[str, str] | None = None,
        responder: Responder | None = None,
    ) -> InMemoryHost:
        return cls(
            stdin=deque(stdin),
            environ=dict(environ or {}),
            responder=responder,
        )

    @property
    def stdout_text(self) -> str:
        return "".join(f"{line}\n" for line in self.stdout)

    @property
    def stderr_text(self) -> str:
        return "".join(f"{line}\n" for line in self.stderr)

    def read_text(self, path: str | Path) -> str:
        return self.files[Path(path)].decode("utf-8")

    def env_var_utf8(self, name: str) -> str:
        self.calls.append(("env_var_utf8", (name,)))
        try:
            return self.environ[name]
        except KeyError:
            raise EnvVarNotFoundError(name) from None

    def write_utf8(self, path: Path, text: str) -> None:
        self.calls.append(("write_utf8", (path, text)))
        self.files[path] = text.encode("utf-8")

    def write_bytes(self, path: Path, data: bytes) -> None:
        self.calls.append(("write_bytes", (path, data)))
        self.files[path] = bytes(data)

    def put_line(self, line: str) -> None:
        self.calls.append(("put_line", (line,)))
        self.stdout.append(line)

    def err_line(self, line: str) -> None:
        self.calls.append(("err_line", (line,)))
        self.stderr.append(line)

    def get_line(self) -> str:
        self.calls.append(("get_line", ()))
        if not self.stdin:
            raise EndOfInputError()
        return self.stdin.popleft()

    def send_request(self, request: Request) -> Response:
        self.calls.append(("send_request", (request,)))
        if self.responder is None:
            return NetworkError(message=f"no responder configured for {request.url}")
        return self.responder(request)


__all__ = ["InMemoryHost", "Responder"]
