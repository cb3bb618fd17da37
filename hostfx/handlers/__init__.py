"""Hosts that perform effects, and the adapter that turns a host into a handler."""

from .capture import CapturingHost
from .host import Host, host_handler
from .os_host import OsHost
from .testing import InMemoryHost, Responder

__all__ = [
    "CapturingHost",
    "Host",
    "InMemoryHost",
    "OsHost",
    "Responder",
    "host_handler",
]
