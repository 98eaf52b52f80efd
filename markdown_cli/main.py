"""CLI entry point."""

import os
import sys
from typing import List, Optional

from markdown_cli.client_factory import create_client
from markdown_cli.commands import dispatch_command
from markdown_cli.config import Config
from markdown_cli.constants import DEFAULT_EDITOR, USAGE
from markdown_cli.models import HelpCommand, ShellCommand
from markdown_cli.parser import ParseError, parse_args
from markdown_cli.repl import repl_loop
from markdown_common.exceptions import MarkdownCliError
from markdown_common.logging_config import setup_logging


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for CLI.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])

    Returns:
        Process exit code
    """
    argv = sys.argv[1:] if argv is None else argv

    log_level = 'DEBUG' if '--debug' in argv else os.getenv('LOG_LEVEL', 'WARNING')
    logger = setup_logging('markdown_cli', log_level=log_level)
    setup_logging('markdown_common', log_level=log_level)

    try:
        invocation = parse_args(argv)
    except ParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(USAGE)
        return 1

    if isinstance(invocation.request, HelpCommand):
        print(USAGE)
        return 0

    editor = os.environ.get('EDITOR') or DEFAULT_EDITOR

    try:
        config = Config()
        server_url = invocation.server or config.get_server_url()
        logger.debug(f"Running {invocation.request.command} against {server_url}")
        with create_client(server_url, config) as client:
            if isinstance(invocation.request, ShellCommand):
                repl_loop(client, editor)
            else:
                print(dispatch_command(invocation.request, client, editor))
    except MarkdownCliError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.debug(f"Unexpected error: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
