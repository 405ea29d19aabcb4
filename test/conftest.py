"""
Pytest configuration for packtest.

Provides pack and platform repository trees on disk plus a mocked
subprocess.run, so no test creates a real virtual environment or calls pip.
"""

import subprocess
import sys
from pathlib import Path
from unittest.mock import Mock, patch

import pytest

# Make the package importable when running from a checkout
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from packtest.config import Settings  # noqa: E402
from packtest.environment import RunContext  # noqa: E402


def make_pack(root: Path, name: str = "libcloud", tests: bool = True,
              requirements: bool = True, test_requirements: bool = True) -> Path:
    """Create a pack directory tree and return its path."""
    pack = root / name
    for sub in ("sensors", "actions", "etc"):
        (pack / sub).mkdir(parents=True)
    if tests:
        (pack / "tests").mkdir()
        (pack / "tests" / "test_action_list_nodes.py").write_text("def test_ok():\n    assert True\n")
    if requirements:
        (pack / "requirements.txt").write_text("apache-libcloud>=3.0\n")
    if test_requirements:
        (pack / "requirements-tests.txt").write_text("requests-mock\n")
    return pack


@pytest.fixture
def pack_dir(tmp_path):
    """A complete pack with tests and both requirements files."""
    return make_pack(tmp_path / "packs")


@pytest.fixture
def platform_repo(tmp_path):
    """A platform repository with components, requirements and test config."""
    repo = tmp_path / "st2"
    for component in ("st2reactor", "st2common", "st2actions"):
        (repo / component).mkdir(parents=True)
    (repo / "tools").mkdir()
    (repo / "st2-notes.txt").write_text("not a directory\n")
    (repo / "requirements.txt").write_text("six\n")
    (repo / "test-requirements.txt").write_text("nose\n")
    (repo / "conf").mkdir()
    (repo / "conf" / "st2.tests.conf").write_text("[system]\n")
    return repo


@pytest.fixture
def settings(tmp_path):
    """Settings without a platform repository, environments kept under tmp_path."""
    return Settings(
        virtualenvs_dir=tmp_path / "virtualenvs",
        pip_cache_dir=tmp_path / "pip-cache",
        base_python="/usr/bin/python3",
    )


@pytest.fixture
def platform_settings(settings, platform_repo):
    return Settings(
        platform_repo_path=platform_repo,
        virtualenvs_dir=settings.virtualenvs_dir,
        pip_cache_dir=settings.pip_cache_dir,
        base_python=settings.base_python,
    )


@pytest.fixture
def ctx(settings):
    return RunContext(settings, environ={"PATH": "/usr/bin:/bin", "HOME": "/root"})


@pytest.fixture
def mock_run():
    """Patch subprocess.run as used by RunContext; every command succeeds by default."""
    with patch("packtest.environment.subprocess.run") as run:
        run.side_effect = lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 0)
        yield run


def commands(mock_run: Mock):
    """The argument lists subprocess.run was called with, in order."""
    return [call.args[0] for call in mock_run.call_args_list]


def is_pip_install(cmd) -> bool:
    return cmd[1:4] == ["-m", "pip", "install"] and "--upgrade" not in cmd


def is_test_run(cmd) -> bool:
    return cmd[1:3] == ["-m", "pytest"]
