"""Network request effect."""

from __future__ import annotations

from dataclasses import dataclass

from hostfx.http import Request

from .base import Effect, EffectBase, create_effect_with_trace


@dataclass(frozen=True)
class SendRequestEffect(EffectBase):
    """Performs ``request`` and yields a :class:`hostfx.http.Response`."""

    request: Request

    def __post_init__(self) -> None:
        if not isinstance(self.request, Request):
            raise TypeError(f"request must be Request, got {type(self.request).__name__}")


def send_request(request: Request) -> SendRequestEffect:
    return create_effect_with_trace(SendRequestEffect(request=request))


def SendRequest(request: Request) -> Effect:  # noqa: N802
    return create_effect_with_trace(SendRequestEffect(request=request), skip_frames=3)


__all__ = [
    "SendRequest",
    "SendRequestEffect",
    "send_request",
]
