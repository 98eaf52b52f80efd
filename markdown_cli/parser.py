"""Command parser for CLI arguments and shell input."""

import argparse
import shlex
from typing import List, Optional

from markdown_cli.models import (
    CommandRequest,
    DeleteCommand,
    DownloadCommand,
    EditCommand,
    HealthCommand,
    HelpCommand,
    Invocation,
    ListCommand,
    RenameCommand,
    ShellCommand,
    UploadCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


class _RaisingArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises ParseError instead of exiting."""

    def error(self, message: str):
        raise ParseError(message)


def _build_parser() -> argparse.ArgumentParser:
    parser = _RaisingArgumentParser(prog="markdown-cli", add_help=False)
    parser.add_argument("-s", "--server", metavar="url")
    parser.add_argument("-o", "--output", metavar="path")
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("args", nargs="*")
    return parser


def parse_args(argv: List[str]) -> Invocation:
    """Parse process arguments into an Invocation.

    Args:
        argv: Arguments without the program name

    Returns:
        Invocation with the command request and global options

    Raises:
        ParseError: If options are malformed, the command is unknown,
            or a required argument is missing
    """
    namespace = _build_parser().parse_intermixed_args(argv)

    if namespace.help or not namespace.args:
        return Invocation(request=HelpCommand(), server=namespace.server, debug=namespace.debug)

    request = _parse_request(namespace.args[0], namespace.args[1:], namespace.output)
    return Invocation(request=request, server=namespace.server, debug=namespace.debug)


def parse_command(input_line: str) -> CommandRequest:
    """Parse one line of shell input into a CommandRequest.

    Args:
        input_line: Raw user input from the shell

    Returns:
        CommandRequest object

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    invocation = parse_args(tokens)
    if invocation.server is not None:
        raise ParseError("--server cannot be changed inside the shell")
    if isinstance(invocation.request, ShellCommand):
        raise ParseError("Already in a shell")
    return invocation.request


def _parse_request(command_name: str, args: List[str], output_path: Optional[str]) -> CommandRequest:
    if command_name == "upload":
        return UploadCommand(file_path=_require_arg(args, "upload requires a file path argument"))
    elif command_name == "download":
        return DownloadCommand(
            name=_require_arg(args, "download requires a file name argument"),
            output_path=output_path,
        )
    elif command_name == "edit":
        return EditCommand(name=_require_arg(args, "edit requires a file name argument"))
    elif command_name == "list":
        return ListCommand()
    elif command_name == "delete":
        return DeleteCommand(name=_require_arg(args, "delete requires a file name argument"))
    elif command_name == "rename":
        if len(args) < 2:
            raise ParseError("rename requires 2 arguments: <name> <new-name>")
        return RenameCommand(name=args[0], new_name=args[1])
    elif command_name == "health":
        return HealthCommand()
    elif command_name == "shell":
        return ShellCommand()
    else:
        raise ParseError(f"Unrecognized command: {command_name}")


def _require_arg(args: List[str], message: str) -> str:
    """Return the first positional argument or raise ParseError."""
    if not args:
        raise ParseError(message)
    return args[0]
