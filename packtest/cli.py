"""Command line entry point for packtest."""

import logging
import sys
from typing import List, Optional

from .errors import PackTestError, UsageError
from .options import build_parser, parse_args
from .runner import PackTestRunner

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='[%(asctime)s.%(msecs)03d]  %(message)s',
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def main(argv: Optional[List[str]] = None) -> int:
    options = parse_args(argv)
    setup_logging(options.verbose)

    try:
        return PackTestRunner(options).run()
    except UsageError as e:
        build_parser().print_usage(sys.stderr)
        print(f"❌ {e}", file=sys.stderr)
        return e.exit_code
    except PackTestError as e:
        logger.debug("Run aborted", exc_info=True)
        print(f"❌ {e}", file=sys.stderr)
        return e.exit_code
    except KeyboardInterrupt:
        print("\n⚠️  Interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
