"""Error handling framework for zoektd."""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class ExitCode(IntEnum):
    """zoektd CLI exit codes."""

    SUCCESS = 0
    CONFIG_ERROR = 1  # Invalid configuration (user fixable)
    BOOTSTRAP_ERROR = 2  # Directory creation failed
    SUPERVISOR_ERROR = 3  # launchctl/systemctl failed
    FATAL_ERROR = 4  # Unexpected crash


class ZoektdError(Exception):
    """Base exception for zoektd errors."""

    exit_code: ExitCode = ExitCode.FATAL_ERROR

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for JSON output."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "exit_code": int(self.exit_code),
            **self.context,
        }


class ConfigError(ZoektdError):
    """Invalid or unreadable configuration."""

    exit_code = ExitCode.CONFIG_ERROR

    def __init__(self, message: str, errors: list[str] | None = None, **context: Any) -> None:
        super().__init__(message, errors=errors or [], **context)
        self.errors = errors or []


class BootstrapError(ZoektdError):
    """A required directory or generated file could not be written."""

    exit_code = ExitCode.BOOTSTRAP_ERROR

    def __init__(self, path: str, reason: str, action: str = "create directory") -> None:
        super().__init__(f"Cannot {action} {path}: {reason}", path=path, action=action)
        self.path = path
        self.reason = reason
        self.action = action


class SupervisorError(ZoektdError):
    """The platform service supervisor rejected a command."""

    exit_code = ExitCode.SUPERVISOR_ERROR

    def __init__(self, command: list[str], returncode: int, stderr: str = "") -> None:
        super().__init__(
            f"Command failed ({returncode}): {' '.join(command)}",
            command=command,
            returncode=returncode,
            stderr=stderr,
        )
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


__all__ = [
    "ExitCode",
    "ZoektdError",
    "ConfigError",
    "BootstrapError",
    "SupervisorError",
]
