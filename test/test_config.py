"""Tests for environment-derived settings."""

import sys
from pathlib import Path

from packtest.config import DEFAULT_VIRTUALENVS_DIR, Settings


def test_defaults():
    settings = Settings.from_env({})

    assert settings.platform_repo_path is None
    assert settings.pip_options == ("-q",)
    assert settings.virtualenvs_dir == DEFAULT_VIRTUALENVS_DIR
    assert settings.pip_cache_dir == Path("~/.pip-cache").expanduser()
    assert settings.base_python == sys.executable
    assert settings.platform_tests_config is None


def test_overrides(tmp_path):
    settings = Settings.from_env({
        "ST2_REPO_PATH": str(tmp_path / "st2"),
        "ST2_PIP_OPTIONS": "--no-deps --index-url 'https://pypi.example.com/simple'",
        "PACKTEST_VIRTUALENVS_DIR": str(tmp_path / "venvs"),
        "PACKTEST_PIP_CACHE_DIR": str(tmp_path / "cache"),
        "PACKTEST_PYTHON": "/usr/bin/python3.11",
    })

    assert settings.platform_repo_path == tmp_path / "st2"
    assert settings.pip_options == ("--no-deps", "--index-url", "https://pypi.example.com/simple")
    assert settings.virtualenvs_dir == tmp_path / "venvs"
    assert settings.pip_cache_dir == tmp_path / "cache"
    assert settings.base_python == "/usr/bin/python3.11"


def test_empty_pip_options_disable_quiet():
    assert Settings.from_env({"ST2_PIP_OPTIONS": ""}).pip_options == ()


def test_virtualenv_dir_is_per_pack(tmp_path):
    settings = Settings(virtualenvs_dir=tmp_path)
    assert settings.virtualenv_dir_for("libcloud") == tmp_path / "libcloud"
    assert settings.virtualenv_dir_for("aws") != settings.virtualenv_dir_for("libcloud")


def test_platform_tests_config(platform_repo):
    settings = Settings(platform_repo_path=platform_repo)
    assert settings.platform_tests_config == platform_repo / "conf" / "st2.tests.conf"


def test_platform_tests_config_missing(tmp_path):
    assert Settings(platform_repo_path=tmp_path).platform_tests_config is None


def test_settings_are_hashable():
    settings = Settings.from_env({"ST2_PIP_OPTIONS": "-q --no-deps"})
    assert hash(settings) == hash(Settings.from_env({"ST2_PIP_OPTIONS": "-q --no-deps"}))
    assert isinstance(settings.pip_options, tuple)
