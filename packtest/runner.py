"""
Pack Test Runner
================

The whole procedure for one pack: resolve, prepare the environment,
install, run the tests, tear down, report the test runner's status.
"""

import logging
from typing import Optional

from .config import Settings
from .environment import EnvironmentManager, RunContext
from .errors import EXIT_SUCCESS
from .executor import TestExecutor, TestRunResult
from .installer import DependencyInstaller
from .options import RunOptions
from .pack import resolve_pack
from .pythonpath import PathComposer

logger = logging.getLogger(__name__)


class PackTestRunner:
    """Runs the unit tests of one pack."""

    def __init__(self, options: RunOptions, settings: Optional[Settings] = None,
                 ctx: Optional[RunContext] = None):
        self.options = options
        self.settings = settings or Settings.from_env()
        self.ctx = ctx or RunContext(self.settings)
        if options.dry_run:
            self.ctx.dry_run = True
        self.result: Optional[TestRunResult] = None

    def run(self) -> int:
        """
        Run the tests.

        Returns:
            0 when the pack has no tests, otherwise the test runner's exit code

        Raises:
            PackTestError: usage, path, configuration or install failures
        """
        layout = resolve_pack(self.options.pack_path)
        print(f"🚀 Running tests for pack: {layout.name}")

        if not layout.has_tests:
            print("No tests found.")
            return EXIT_SUCCESS

        if self.options.dry_run:
            print("DRY-RUN MODE: commands are logged, not executed")

        environment = EnvironmentManager(self.ctx, layout.name)
        composer = PathComposer(self.ctx)

        with environment.session(self.options):
            search_path = composer.compose(layout)

            if self.options.tests_only:
                logger.info("Skipping dependency installation (-j)")
            else:
                DependencyInstaller(self.ctx, environment).install(layout)

            with composer.exported(search_path):
                self.result = TestExecutor(self.ctx, environment).run(layout)

        return self.result.return_code
