"""
Runtime Configuration
=====================

Settings read from the process environment. Everything else packtest needs
comes from the command line.
"""

import os
import shlex
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

REPO_PATH_VAR = "ST2_REPO_PATH"
PIP_OPTIONS_VAR = "ST2_PIP_OPTIONS"
CONFIG_PATH_VAR = "ST2_CONFIG_PATH"
VIRTUALENVS_DIR_VAR = "PACKTEST_VIRTUALENVS_DIR"
PIP_CACHE_DIR_VAR = "PACKTEST_PIP_CACHE_DIR"
PYTHON_VAR = "PACKTEST_PYTHON"

DEFAULT_VIRTUALENVS_DIR = Path("/tmp/st2-pack-tests-virtualenvs")
DEFAULT_PIP_CACHE_DIR = Path("~/.pip-cache")
DEFAULT_PIP_OPTIONS = ("-q",)

# Platform component directories inside the platform repository start with this
COMPONENT_PREFIX = "st2"

# Relative to the platform repository
PLATFORM_REQUIREMENTS = ("requirements.txt", "test-requirements.txt")
PLATFORM_TESTS_CONFIG = Path("conf") / "st2.tests.conf"


@dataclass(frozen=True)
class Settings:
    """Environment-level configuration for a pack test run."""

    platform_repo_path: Optional[Path] = None
    pip_options: Tuple[str, ...] = DEFAULT_PIP_OPTIONS
    virtualenvs_dir: Path = DEFAULT_VIRTUALENVS_DIR
    pip_cache_dir: Path = DEFAULT_PIP_CACHE_DIR.expanduser()
    base_python: str = sys.executable

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from, defaults to os.environ

        Returns:
            Settings with defaults filled in for unset variables
        """
        if environ is None:
            environ = os.environ

        repo_path = environ.get(REPO_PATH_VAR)
        pip_options = environ.get(PIP_OPTIONS_VAR)

        return cls(
            platform_repo_path=Path(repo_path) if repo_path else None,
            # An explicitly empty value means "no extra options"
            pip_options=tuple(shlex.split(pip_options)) if pip_options is not None else DEFAULT_PIP_OPTIONS,
            virtualenvs_dir=Path(environ.get(VIRTUALENVS_DIR_VAR) or DEFAULT_VIRTUALENVS_DIR),
            pip_cache_dir=Path(environ.get(PIP_CACHE_DIR_VAR) or DEFAULT_PIP_CACHE_DIR).expanduser(),
            base_python=environ.get(PYTHON_VAR) or sys.executable,
        )

    def virtualenv_dir_for(self, pack_name: str) -> Path:
        """Deterministic per-pack environment location."""
        return self.virtualenvs_dir / pack_name

    @property
    def platform_tests_config(self) -> Optional[Path]:
        if self.platform_repo_path is None:
            return None
        config_path = self.platform_repo_path / PLATFORM_TESTS_CONFIG
        return config_path if config_path.is_file() else None
