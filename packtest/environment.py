"""
Environment Manager
===================

Owns the per-pack virtual environment and the RunContext every step runs
commands through.

Activation never touches the real ``os.environ``: it edits the RunContext's
private copy of the environment, which is what child processes receive.
Deactivation restores the previous values exactly.
"""

import logging
import os
import shutil
import subprocess
import sys
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Type

from .config import Settings
from .errors import (
    EXIT_COMMAND_NOT_FOUND,
    CommandError,
    ConfigurationError,
    EnvironmentCreationError,
)
from .options import RunOptions

logger = logging.getLogger(__name__)

IS_WINDOWS = sys.platform == "win32"

# Variables rewritten by activation and restored by deactivation
ACTIVATION_VARS = ("VIRTUAL_ENV", "PATH", "PYTHONHOME")


class RunContext:
    """State shared by all steps of one pack test run."""

    def __init__(self, settings: Settings, environ: Optional[Dict[str, str]] = None,
                 dry_run: bool = False):
        self.settings = settings
        self.env = dict(os.environ if environ is None else environ)
        self.dry_run = dry_run

    def set_var(self, name: str, value: str) -> None:
        self.env[name] = value

    def unset_var(self, *names: str) -> None:
        for name in names:
            self.env.pop(name, None)

    def run_command(self, cmd: List[str], error_cls: Type[CommandError] = CommandError,
                    check: bool = True, cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
        """
        Run an external command with the context environment.

        Output is not captured, it streams straight to the terminal.

        Args:
            cmd: Command and arguments
            error_cls: CommandError subclass raised on a non-zero exit
            check: Raise on a non-zero exit when True
            cwd: Working directory for the child process

        Returns:
            The completed process; a zero-status stand-in in dry-run mode

        Raises:
            CommandError: (or error_cls) the command failed or could not be started
        """
        cmd = [str(c) for c in cmd]
        cmd_str = ' '.join(cmd)
        if self.dry_run:
            logger.info(f"[DRY-RUN] Would execute: {cmd_str}")
            return subprocess.CompletedProcess(cmd, 0)

        logger.debug(f"[EXEC] {cmd_str}")
        try:
            return subprocess.run(cmd, cwd=cwd, env=self.env, check=check)
        except subprocess.CalledProcessError as e:
            raise error_cls(f"Command failed ({e.returncode}): {cmd_str}", cmd, e.returncode) from e
        except FileNotFoundError as e:
            raise error_cls(f"Command not found: {cmd[0]}", cmd, EXIT_COMMAND_NOT_FOUND) from e


class EnvState(Enum):
    UNTOUCHED = "untouched"
    ACTIVATED = "activated"


class EnvironmentManager:
    """Creates, reuses and activates the isolated environment of one pack."""

    def __init__(self, ctx: RunContext, pack_name: str):
        self.ctx = ctx
        self.venv_dir = ctx.settings.virtualenv_dir_for(pack_name)
        self.state = EnvState.UNTOUCHED
        self._saved_vars: Dict[str, Optional[str]] = {}

    @property
    def bin_dir(self) -> Path:
        return self.venv_dir / ("Scripts" if IS_WINDOWS else "bin")

    @property
    def venv_python(self) -> Path:
        return self.bin_dir / ("python.exe" if IS_WINDOWS else "python")

    @property
    def activated(self) -> bool:
        return self.state is EnvState.ACTIVATED

    @property
    def python(self) -> str:
        """Interpreter used for pip and the test runner."""
        if self.activated:
            return str(self.venv_python)
        return self.ctx.settings.base_python

    def exists(self) -> bool:
        return self.venv_dir.is_dir()

    def create(self) -> None:
        """Create a fresh environment, replacing any previous one, and upgrade its pip."""
        print(f"🏗️  Creating virtual environment at {self.venv_dir}")

        if self.venv_dir.is_symlink() or self.venv_dir.is_file():
            logger.debug(f"Removing file in place of the virtual environment at {self.venv_dir}")
            if not self.ctx.dry_run:
                self.venv_dir.unlink()
        elif self.venv_dir.exists():
            logger.debug(f"Removing existing virtual environment at {self.venv_dir}")
            if not self.ctx.dry_run:
                shutil.rmtree(self.venv_dir)

        if not self.ctx.dry_run:
            self.venv_dir.parent.mkdir(parents=True, exist_ok=True)

        self.ctx.run_command(
            [self.ctx.settings.base_python, "-m", "venv", "--system-site-packages", self.venv_dir],
            error_cls=EnvironmentCreationError,
        )
        self.ctx.run_command(
            [self.venv_python, "-m", "pip", "install", "--upgrade",
             "--cache-dir", self.ctx.settings.pip_cache_dir]
            + list(self.ctx.settings.pip_options) + ["pip"],
            error_cls=EnvironmentCreationError,
        )

    def activate(self) -> None:
        """Put the environment's executables first on PATH. Repeated calls are no-ops."""
        if self.activated:
            return

        env = self.ctx.env
        self._saved_vars = {name: env.get(name) for name in ACTIVATION_VARS}

        path = env.get("PATH")
        env["PATH"] = os.pathsep.join([str(self.bin_dir), path]) if path else str(self.bin_dir)
        env["VIRTUAL_ENV"] = str(self.venv_dir)
        env.pop("PYTHONHOME", None)

        self.state = EnvState.ACTIVATED
        logger.debug(f"Activated virtual environment {self.venv_dir}")

    def deactivate(self) -> None:
        """Restore the variables activation replaced. No-op when never activated."""
        if not self.activated:
            return

        for name, value in self._saved_vars.items():
            if value is None:
                self.ctx.env.pop(name, None)
            else:
                self.ctx.env[name] = value

        self._saved_vars = {}
        self.state = EnvState.UNTOUCHED
        logger.debug(f"Deactivated virtual environment {self.venv_dir}")

    def prepare(self, options: RunOptions) -> None:
        """
        Create or reuse the environment according to the run options.

        Raises:
            ConfigurationError: tests-only mode without an existing environment
            EnvironmentCreationError: venv creation or the pip upgrade failed
        """
        if options.skip_env_creation:
            if self.exists():
                print(f"♻️  Reusing virtual environment at {self.venv_dir}")
                self.activate()
            else:
                logger.info(f"No virtual environment at {self.venv_dir}, using the current interpreter")
            return

        if options.tests_only:
            if not self.exists():
                raise ConfigurationError(
                    f"Virtual environment {self.venv_dir} doesn't exist. "
                    "Run once without -j to create it and install the dependencies, "
                    "or pass -x to run with the current interpreter."
                )
            self.activate()
            return

        self.create()
        self.activate()

    @contextmanager
    def session(self, options: RunOptions) -> Iterator["EnvironmentManager"]:
        """Prepare the environment and always deactivate it on the way out."""
        try:
            self.prepare(options)
            yield self
        finally:
            self.deactivate()
