"""Host backed by the real operating system."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import TextIO

import httpx

from hostfx.config import HostConfig, load_config
from hostfx.errors import EndOfInputError, EnvVarNotFoundError, FileWriteError
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

from .host import Host

logger = logging.getLogger(__name__)


def _strip_newline(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def to_response(response: httpx.Response) -> Response:
    metadata = Metadata(
        url=str(response.url),
        status_code=response.status_code,
        status_text=response.reason_phrase,
        headers=tuple(Header(name=name, value=value) for name, value in response.headers.items()),
    )
    if response.is_success:
        return GoodStatus(metadata=metadata, body=response.content)
    return BadStatus(metadata=metadata, body=response.content)


class OsHost(Host):
    """Performs effects against the process environment, files, stdio and network.

    Streams default to the ``sys`` streams current at call time. ``client`` lets
    callers supply a configured :class:`httpx.Client`; otherwise one is created
    per request from ``config``.
    """

    def __init__(
        self,
        config: HostConfig | None = None,
        *,
        environ: Mapping[str, str] | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.config = config or load_config()
        self._environ = environ
        self._stdin = stdin
        self._stdout = stdout
        self._stderr = stderr
        self._client = client

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def env_var_utf8(self, name: str) -> str:
        value = self.environ.get(name)
        if value is None:
            raise EnvVarNotFoundError(name)
        return value

    def write_utf8(self, path: Path, text: str) -> None:
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise FileWriteError(path, exc.strerror or str(exc)) from exc

    def write_bytes(self, path: Path, data: bytes) -> None:
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise FileWriteError(path, exc.strerror or str(exc)) from exc

    def put_line(self, line: str) -> None:
        stream = self._stdout or sys.stdout
        stream.write(line + "\n")
        stream.flush()

    def err_line(self, line: str) -> None:
        stream = self._stderr or sys.stderr
        stream.write(line + "\n")
        stream.flush()

    def get_line(self) -> str:
        stream = self._stdin or sys.stdin
        line = stream.readline()
        if line == "":
            raise EndOfInputError()
        return _strip_newline(line)

    def send_request(self, request: Request) -> Response:
        timeout = request.timeout if request.timeout is not None else self.config.http_timeout
        logger.debug("%s %s (timeout=%s)", request.method, request.url, timeout)
        try:
            if self._client is not None:
                return self._send(self._client, request, timeout)
            with httpx.Client(follow_redirects=self.config.follow_redirects) as client:
                return self._send(client, request, timeout)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol):
            return BadUrl(url=request.url)
        except httpx.TimeoutException:
            return Timeout()
        except httpx.TransportError as exc:
            return NetworkError(message=str(exc) or type(exc).__name__)

    @staticmethod
    def _send(client: httpx.Client, request: Request, timeout: float) -> Response:
        response = client.request(
            request.method,
            request.url,
            headers=[(header.name, header.value) for header in request.headers],
            content=request.body or None,
            timeout=timeout,
        )
        return to_response(response)


__all__ = ["OsHost", "to_response"]
