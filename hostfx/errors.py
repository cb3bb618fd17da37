from __future__ import annotations

from pathlib import Path


class HostError(Exception):
    """Base class for failures raised while a host performs an effect."""


class EnvVarNotFoundError(HostError, KeyError):
    """Raised when an environment variable read finds no such variable."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Environment variable not found: {name!r}\n"
            f"Hint: export {name}=... before running, or wrap the read with attempt(...)"
        )

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class EndOfInputError(HostError, EOFError):
    """Raised when standard input is exhausted before a line could be read."""

    def __init__(self, message: str = "standard input reached end of file") -> None:
        super().__init__(message)


class FileWriteError(HostError, OSError):
    """Raised when a file write effect fails."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write {str(path)!r}: {reason}")

    def __str__(self) -> str:
        return str(self.args[0])


class RunCancelledError(HostError):
    """Raised when a run is stopped by external cancellation."""

    def __init__(self, steps: int) -> None:
        self.steps = steps
        super().__init__(f"Run cancelled after {steps} steps")


class StepLimitExceededError(HostError):
    """Raised when a run exceeds its configured step budget."""

    def __init__(self, max_steps: int) -> None:
        self.max_steps = max_steps
        super().__init__(f"Run exceeded max_steps ({max_steps})")


class PlatformError(Exception):
    """Raised when the platform harness cannot load or interpret a program module."""


class ConfigError(ValueError):
    """Raised when a configuration value cannot be parsed."""

    def __init__(self, key: str, value: str, expected: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid value for {key}: {value!r} (expected {expected})")


__all__ = [
    "ConfigError",
    "EndOfInputError",
    "EnvVarNotFoundError",
    "FileWriteError",
    "HostError",
    "PlatformError",
    "RunCancelledError",
    "StepLimitExceededError",
]
