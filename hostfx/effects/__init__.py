"""Host effects: the operations a command-line platform performs for a program."""

from .base import Effect, EffectBase
from .console import (
    ErrLine,
    ErrLineEffect,
    GetLine,
    GetLineEffect,
    PutLine,
    PutLineEffect,
    err_line,
    get_line,
    put_line,
)
from .env import EnvVarUtf8, EnvVarUtf8Effect, env_var_utf8
from .fs import (
    WriteBytes,
    WriteBytesEffect,
    WriteUtf8,
    WriteUtf8Effect,
    write_bytes,
    write_utf8,
)
from .network import SendRequest, SendRequestEffect, send_request
from .pure import Pure, PureEffect, pure

HOST_EFFECT_TYPES = (
    EnvVarUtf8Effect,
    WriteUtf8Effect,
    WriteBytesEffect,
    PutLineEffect,
    ErrLineEffect,
    GetLineEffect,
    SendRequestEffect,
)

__all__ = [
    "HOST_EFFECT_TYPES",
    "Effect",
    "EffectBase",
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
    "pure",
    "put_line",
    "send_request",
    "write_bytes",
    "write_utf8",
]
