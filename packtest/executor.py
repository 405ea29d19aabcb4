"""
Test Executor
=============

Runs the test runner over the pack's tests directory and captures its
exit status.
"""

import logging
import time
from dataclasses import dataclass
from typing import List

from .environment import EnvironmentManager, RunContext
from .pack import PackLayout

logger = logging.getLogger(__name__)

# -s streams test output as it happens, -v names every test
TEST_RUNNER_ARGS = ["-m", "pytest", "-s", "-v"]


def shell_status(returncode: int) -> int:
    """Status a shell would report: 128 + N for a child killed by signal N."""
    if returncode < 0:
        return 128 - returncode
    return returncode


@dataclass(frozen=True)
class TestRunResult:
    """Outcome of one test runner invocation."""
    __test__ = False

    return_code: int
    command: List[str]
    duration: float

    @property
    def passed(self) -> bool:
        return self.return_code == 0


class TestExecutor:
    """Invokes the discovery-based test runner."""
    __test__ = False

    def __init__(self, ctx: RunContext, environment: EnvironmentManager):
        self.ctx = ctx
        self.environment = environment

    def command(self, layout: PackLayout) -> List[str]:
        return [self.environment.python] + TEST_RUNNER_ARGS + [f"{layout.tests_path}/"]

    def run(self, layout: PackLayout) -> TestRunResult:
        print("🧪 Running tests...")
        cmd = self.command(layout)

        start_time = time.time()
        process = self.ctx.run_command(cmd, check=False)
        result = TestRunResult(
            return_code=shell_status(process.returncode),
            command=cmd,
            duration=time.time() - start_time,
        )
        logger.debug(f"Test runner exited with status {result.return_code}")

        if self.ctx.dry_run:
            print("\nDRY-RUN: tests were not executed")
        elif result.passed:
            print(f"\n✅ All tests passed! ({result.duration:.2f}s)")
        else:
            print(f"\n❌ Some tests failed! (exit code {result.return_code}, {result.duration:.2f}s)")
        return result
