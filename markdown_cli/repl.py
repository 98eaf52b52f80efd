"""Interactive shell with prompt_toolkit."""

import os
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from markdown_cli.commands import dispatch_command
from markdown_cli.completer import MarkdownCompleter
from markdown_cli.constants import (
    DEFAULT_EDITOR,
    MUTATING_COMMANDS,
    PROMPT_TEXT,
    SHELL_HELP_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
from markdown_cli.models import HelpCommand
from markdown_cli.parser import ParseError, parse_command
from markdown_cli.types import FileStoreClient
from markdown_common.exceptions import MarkdownCliError
from markdown_common.logging_config import get_logger

logger = get_logger(__name__)


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    if sys.platform == "win32":
        os.system("cls")
    else:
        os.system("clear")


def show_welcome() -> None:
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def execute_line(user_input: str, client: FileStoreClient, editor: str = DEFAULT_EDITOR) -> str:
    """
    Parse and run one shell line.

    Args:
        user_input: Raw line (not a builtin)
        client: Session client
        editor: Editor command for 'edit'

    Returns:
        Text to print; errors are rendered as "Error: <message>"
    """
    try:
        cmd_obj = parse_command(user_input)
        if isinstance(cmd_obj, HelpCommand):
            return SHELL_HELP_TEXT
        return dispatch_command(cmd_obj, client, editor)
    except (ParseError, MarkdownCliError) as e:
        return f"Error: {e}"
    except Exception as e:
        logger.debug(f"Unexpected error: {e}", exc_info=True)
        return f"Error: {e}"


def repl_loop(client: FileStoreClient, editor: str = DEFAULT_EDITOR) -> None:
    """Start interactive shell bound to one client."""
    completer = MarkdownCompleter(client)
    session: PromptSession = PromptSession(
        completer=completer, history=InMemoryHistory(), style=STYLE
    )

    show_welcome()

    while True:
        try:
            user_input = session.prompt([("class:prompt", PROMPT_TEXT)])
        except KeyboardInterrupt:
            continue
        except EOFError:
            print("\nGoodbye!")
            break

        line = user_input.strip()
        if not line:
            continue

        if line == "exit":
            print("Goodbye!")
            break

        if line == "help":
            print(SHELL_HELP_TEXT)
            continue

        if line == "clear":
            clear_screen()
            show_welcome()
            continue

        print(execute_line(line, client, editor))

        if line.split()[0] in MUTATING_COMMANDS:
            completer.refresh()
