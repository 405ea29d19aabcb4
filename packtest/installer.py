"""
Dependency Installer
====================

Installs the dependency layers a pack's tests need, in a fixed order:

1. platform requirements (when a platform repository is configured)
2. global test tooling
3. pack runtime requirements (requirements.txt)
4. pack test requirements (requirements-tests.txt)

A failing pip invocation aborts the run with pip's own exit status.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union

from .config import PLATFORM_REQUIREMENTS
from .environment import EnvironmentManager, RunContext
from .errors import DependencyInstallError
from .pack import PackLayout

logger = logging.getLogger(__name__)

GLOBAL_TEST_REQUIREMENTS = (
    "mock>=4.0.3,<6.0",
    "pytest>=7.4.0,<9.0",
    "pytest-cov>=4.1.0,<6.0",
)


@dataclass(frozen=True)
class PackageSpec:
    """A single requirement specifier such as ``mock>=4.0``."""
    spec: str

    def pip_args(self) -> List[str]:
        return [self.spec]


@dataclass(frozen=True)
class RequirementsFile:
    """A requirements file passed to pip with ``-r``."""
    path: Path

    def pip_args(self) -> List[str]:
        return ["-r", str(self.path)]


Requirement = Union[PackageSpec, RequirementsFile]


@dataclass(frozen=True)
class InstallStep:
    """One pip invocation."""
    description: str
    requirements: Tuple[Requirement, ...]

    def pip_args(self) -> List[str]:
        args: List[str] = []
        for requirement in self.requirements:
            args.extend(requirement.pip_args())
        return args


class DependencyInstaller:
    """Plans and runs the pip install steps for a pack."""

    def __init__(self, ctx: RunContext, environment: EnvironmentManager):
        self.ctx = ctx
        self.environment = environment

    def plan(self, layout: PackLayout) -> List[InstallStep]:
        """
        Work out which install steps apply to this pack.

        Args:
            layout: The pack being tested

        Returns:
            Install steps in the order they must run
        """
        steps: List[InstallStep] = []

        repo_path = self.ctx.settings.platform_repo_path
        if repo_path is not None:
            steps.append(InstallStep(
                "platform requirements",
                tuple(RequirementsFile(repo_path / name) for name in PLATFORM_REQUIREMENTS),
            ))

        steps.append(InstallStep(
            "global pack test dependencies",
            tuple(PackageSpec(spec) for spec in GLOBAL_TEST_REQUIREMENTS),
        ))

        if layout.requirements_file.is_file():
            steps.append(InstallStep(
                "pack-specific dependencies",
                (RequirementsFile(layout.requirements_file),),
            ))

        if layout.test_requirements_file.is_file():
            steps.append(InstallStep(
                "pack-specific test dependencies",
                (RequirementsFile(layout.test_requirements_file),),
            ))

        return steps

    def pip_command(self, step: InstallStep) -> List[str]:
        settings = self.ctx.settings
        return ([self.environment.python, "-m", "pip", "install",
                 "--cache-dir", str(settings.pip_cache_dir)]
                + list(settings.pip_options)
                + step.pip_args())

    def install(self, layout: PackLayout) -> List[InstallStep]:
        """
        Run every planned step.

        Returns:
            The steps that were installed

        Raises:
            DependencyInstallError: pip exited non-zero; nothing after it runs
        """
        steps = self.plan(layout)
        for step in steps:
            print(f"📦 Installing {step.description}")
            self.ctx.run_command(self.pip_command(step), error_cls=DependencyInstallError)
        logger.debug(f"Installed {len(steps)} dependency layers")
        return steps
