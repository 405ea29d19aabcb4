"""
Option Parser
=============

Command line handling. Misuse (unknown flag, flag without its value,
missing pack path) prints usage to stderr and exits with status 2.
"""

import argparse
import sys
from dataclasses import dataclass
from typing import List, Optional

from .errors import EXIT_USAGE


@dataclass(frozen=True)
class RunOptions:
    """Invocation options, fixed for the whole run."""
    pack_path: str
    skip_env_creation: bool = False
    tests_only: bool = False
    verbose: bool = False
    dry_run: bool = False


class _UsageArgumentParser(argparse.ArgumentParser):

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _UsageArgumentParser(
        prog="packtest",
        description="Set up a virtual environment for a pack and run its unit tests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  packtest -p /opt/packs/libcloud          # Fresh environment, install, run tests
  packtest -p /opt/packs/libcloud -j       # Reuse prepared environment, tests only
  packtest -p /opt/packs/libcloud -x -j    # Reuse environment if present, tests only
  packtest -p /opt/packs/libcloud --dry-run --verbose

Environment:
  ST2_REPO_PATH      platform repository (enables platform requirements and components)
  ST2_PIP_OPTIONS    options passed to every pip install (default: -q)
        """
    )
    parser.add_argument(
        "-p", "--pack",
        dest="pack_path",
        metavar="PATH",
        required=True,
        help="Path to the pack directory"
    )
    parser.add_argument(
        "-x", "--skip-venv-creation",
        dest="skip_env_creation",
        action="store_true",
        help="Don't create a virtual environment, reuse an existing one if present"
    )
    parser.add_argument(
        "-j", "--just-tests",
        dest="tests_only",
        action="store_true",
        help="Skip dependency installation and only run the tests"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show which commands would run without executing them"
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> RunOptions:
    """Parse argv into RunOptions, exiting with status 2 on misuse."""
    args = build_parser().parse_args(argv)
    return RunOptions(
        pack_path=args.pack_path,
        skip_env_creation=args.skip_env_creation,
        tests_only=args.tests_only,
        verbose=args.verbose,
        dry_run=args.dry_run,
    )
