"""
packtest
========

Runs the unit tests of a single automation pack inside an isolated
virtual environment with the platform, test tooling and pack dependencies
installed.
"""

from .config import Settings
from .errors import (
    PackTestError,
    UsageError,
    InvalidPackPathError,
    ConfigurationError,
    CommandError,
    EnvironmentCreationError,
    DependencyInstallError,
)
from .options import RunOptions, parse_args
from .pack import PackLayout, resolve_pack
from .environment import RunContext, EnvironmentManager, EnvState
from .pythonpath import SearchPath, PathComposer
from .installer import PackageSpec, RequirementsFile, InstallStep, DependencyInstaller
from .executor import TestRunResult, TestExecutor
from .runner import PackTestRunner

__version__ = '0.1.0'

__all__ = [
    'Settings',
    'PackTestError',
    'UsageError',
    'InvalidPackPathError',
    'ConfigurationError',
    'CommandError',
    'EnvironmentCreationError',
    'DependencyInstallError',
    'RunOptions',
    'parse_args',
    'PackLayout',
    'resolve_pack',
    'RunContext',
    'EnvironmentManager',
    'EnvState',
    'SearchPath',
    'PathComposer',
    'PackageSpec',
    'RequirementsFile',
    'InstallStep',
    'DependencyInstaller',
    'TestRunResult',
    'TestExecutor',
    'PackTestRunner',
]
