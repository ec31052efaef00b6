"""CLI entry point."""

import sys
import os

from common.exceptions import FileServiceError
from common.logging_config import setup_logging
from cli.parser import ParseError, parse_tokens
from cli.repl import dispatch_command, repl_loop


def run_once(argv: list[str]) -> int:
    """
    Run a single command given on the command line.

    Args:
        argv: Command tokens, e.g. ['copy', 'src/', 's3://bucket/dst/']

    Returns:
        Process exit status
    """
    try:
        print(dispatch_command(parse_tokens(argv)))
        return 0
    except ParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except (FileServiceError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main() -> None:
    """Entry point for CLI."""
    debug = '--debug' in sys.argv
    log_level = 'DEBUG' if debug else os.getenv('LOG_LEVEL', 'WARNING')

    logger = setup_logging('fileservice', log_level=log_level)
    setup_logging('cli', log_level=log_level)

    argv = [arg for arg in sys.argv[1:] if arg != '--debug']
    if debug:
        logger.info("Debug logging enabled")

    if argv:
        sys.exit(run_once(argv))

    try:
        repl_loop()
    except Exception as e:
        logger.error(f"CLI error: {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
