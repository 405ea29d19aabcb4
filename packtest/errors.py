"""Exceptions raised while preparing and running pack tests.

Each exception carries the process exit status the CLI reports for it.
"""

from typing import List, Optional

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INVALID_PACK_PATH = 3
EXIT_COMMAND_NOT_FOUND = 127


class PackTestError(Exception):
    """Base class for all packtest errors."""

    exit_code = EXIT_FAILURE

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class UsageError(PackTestError):
    """Bad or missing command line arguments."""

    exit_code = EXIT_USAGE


class InvalidPackPathError(PackTestError):
    """The pack path does not resolve to a directory."""

    exit_code = EXIT_INVALID_PACK_PATH


class ConfigurationError(PackTestError):
    """The requested run mode cannot work with the current setup."""

    exit_code = EXIT_USAGE


class CommandError(PackTestError):
    """An external command exited with a non-zero status."""

    def __init__(self, message: str, cmd: List[str], exit_code: int):
        super().__init__(message, exit_code)
        self.cmd = cmd


class EnvironmentCreationError(CommandError):
    """Creating the virtual environment or upgrading its pip failed."""


class DependencyInstallError(CommandError):
    """A pip install step failed."""
