"""Host wrapper that keeps standard output in memory."""

from __future__ import annotations

from pathlib import Path

from hostfx.http import Request, Response

from .host import Host


class CapturingHost(Host):
    """Delegates to ``inner`` but buffers ``put_line`` output instead of printing it."""

    def __init__(self, inner: Host) -> None:
        self.inner = inner
        self.lines: list[str] = []

    @property
    def captured(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)

    def forward(self) -> None:
        """Write the buffered lines to the inner host and clear the buffer."""
        for line in self.lines:
            self.inner.put_line(line)
        self.lines.clear()

    def put_line(self, line: str) -> None:
        self.lines.append(line)

    def env_var_utf8(self, name: str) -> str:
        return self.inner.env_var_utf8(name)

    def write_utf8(self, path: Path, text: str) -> None:
        self.inner.write_utf8(path, text)

    def write_bytes(self, path: Path, data: bytes) -> None:
        self.inner.write_bytes(path, data)

    def err_line(self, line: str) -> None:
        self.inner.err_line(line)

    def get_line(self) -> str:
        return self.inner.get_line()

    def send_request(self, request: Request) -> Response:
        return self.inner.send_request(request)


__all__ = ["CapturingHost"]
