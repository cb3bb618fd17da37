"""Request and response records exchanged with the host's network operation."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

METHODS = ("GET", "HEAD", "POST", "PUT", "DELETE", "PATCH", "OPTIONS", "CONNECT", "TRACE")


@dataclass(frozen=True)
class Header:
    name: str
    value: str


def _coerce_headers(
    headers: Mapping[str, str] | Iterable[Header | tuple[str, str]] | None,
) -> tuple[Header, ...]:
    if headers is None:
        return ()
    items = headers.items() if isinstance(headers, Mapping) else headers
    coerced: list[Header] = []
    for item in items:
        if isinstance(item, Header):
            coerced.append(item)
        else:
            name, value = item
            coerced.append(Header(name=str(name), value=str(value)))
    return tuple(coerced)


@dataclass(frozen=True)
class Request:
    """An HTTP request description. Building one sends nothing."""

    url: str
    method: str = "GET"
    headers: tuple[Header, ...] = ()
    body: bytes = b""
    timeout: float | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.url, str):
            raise TypeError(f"url must be str, got {type(self.url).__name__}")
        method = self.method.upper()
        if method not in METHODS:
            raise ValueError(f"Unsupported HTTP method: {self.method!r}")
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "headers", _coerce_headers(self.headers))
        if isinstance(self.body, str):
            object.__setattr__(self, "body", self.body.encode("utf-8"))
        elif not isinstance(self.body, bytes):
            raise TypeError(f"body must be bytes or str, got {type(self.body).__name__}")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def get(cls, url: str, **kwargs) -> Request:
        return cls(url=url, method="GET", **kwargs)

    @classmethod
    def post(cls, url: str, body: bytes | str = b"", **kwargs) -> Request:
        return cls(url=url, method="POST", body=body, **kwargs)


@dataclass(frozen=True)
class Metadata:
    url: str
    status_code: int
    status_text: str = ""
    headers: tuple[Header, ...] = ()

    def header(self, name: str) -> str | None:
        """Return the first header value matching ``name`` (case-insensitive)."""
        needle = name.lower()
        for header in self.headers:
            if header.name.lower() == needle:
                return header.value
        return None


class Response:
    """Base for the possible outcomes of a request.

    Transport failures are ordinary values; the host never raises for them.
    """

    @property
    def is_success(self) -> bool:
        return isinstance(self, GoodStatus)


@dataclass(frozen=True)
class GoodStatus(Response):
    metadata: Metadata
    body: bytes = b""

    def text(self, encoding: str = "utf-8") -> str:
        return self.body.decode(encoding)


@dataclass(frozen=True)
class BadStatus(Response):
    metadata: Metadata
    body: bytes = b""


@dataclass(frozen=True)
class BadUrl(Response):
    url: str


@dataclass(frozen=True)
class Timeout(Response):
    pass


@dataclass(frozen=True)
class NetworkError(Response):
    message: str = field(default="")


__all__ = [
    "BadStatus",
    "BadUrl",
    "GoodStatus",
    "Header",
    "METHODS",
    "Metadata",
    "NetworkError",
    "Request",
    "Response",
    "Timeout",
]
