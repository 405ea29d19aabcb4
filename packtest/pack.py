"""
Pack Resolver
=============

Turns the raw ``-p`` argument into a PackLayout describing where the pack's
tests, code directories and requirements files live.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from .errors import UsageError, InvalidPackPathError

TESTS_DIR = "tests"
SENSORS_DIR = "sensors"
ACTIONS_DIR = "actions"
ETC_DIR = "etc"
REQUIREMENTS_FILE = "requirements.txt"
TEST_REQUIREMENTS_FILE = "requirements-tests.txt"


@dataclass(frozen=True)
class PackLayout:
    """Absolute locations inside a pack directory."""
    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def tests_path(self) -> Path:
        return self.path / TESTS_DIR

    @property
    def sensors_path(self) -> Path:
        return self.path / SENSORS_DIR

    @property
    def actions_path(self) -> Path:
        return self.path / ACTIONS_DIR

    @property
    def etc_path(self) -> Path:
        return self.path / ETC_DIR

    @property
    def requirements_file(self) -> Path:
        return self.path / REQUIREMENTS_FILE

    @property
    def test_requirements_file(self) -> Path:
        return self.path / TEST_REQUIREMENTS_FILE

    @property
    def has_tests(self) -> bool:
        return self.tests_path.is_dir()


def resolve_pack(raw_path: str) -> PackLayout:
    """
    Resolve a user supplied pack path.

    Args:
        raw_path: Path as given on the command line, may be relative or a symlink

    Returns:
        PackLayout rooted at the absolute, symlink-free pack directory

    Raises:
        UsageError: raw_path is empty
        InvalidPackPathError: the resolved path is not a directory
    """
    if not raw_path or not raw_path.strip():
        raise UsageError("Missing pack path")

    resolved = Path(os.path.realpath(os.path.expanduser(raw_path)))
    if not resolved.is_dir():
        raise InvalidPackPathError(f"Invalid pack path: {resolved}")

    return PackLayout(path=resolved)
