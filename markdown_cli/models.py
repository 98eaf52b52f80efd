"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class UploadCommand:
    """Upload a local markdown file."""

    file_path: str
    command: Literal["upload"] = "upload"


@dataclass(frozen=True)
class DownloadCommand:
    """Download a file by name."""

    name: str
    output_path: Optional[str] = None
    command: Literal["download"] = "download"


@dataclass(frozen=True)
class EditCommand:
    """Edit a file in the external editor."""

    name: str
    command: Literal["edit"] = "edit"


@dataclass(frozen=True)
class ListCommand:
    """List all files."""

    command: Literal["list"] = "list"


@dataclass(frozen=True)
class DeleteCommand:
    """Delete a file by name."""

    name: str
    command: Literal["delete"] = "delete"


@dataclass(frozen=True)
class HealthCommand:
    """Check server health."""

    command: Literal["health"] = "health"


@dataclass(frozen=True)
class RenameCommand:
    """Rename a file."""

    name: str
    new_name: str
    command: Literal["rename"] = "rename"


@dataclass(frozen=True)
class ShellCommand:
    """Start the interactive shell."""

    command: Literal["shell"] = "shell"


@dataclass(frozen=True)
class HelpCommand:
    """Print usage."""

    command: Literal["help"] = "help"


CommandRequest = (
    UploadCommand
    | DownloadCommand
    | EditCommand
    | ListCommand
    | DeleteCommand
    | HealthCommand
    | RenameCommand
    | ShellCommand
    | HelpCommand
)


@dataclass(frozen=True)
class Invocation:
    """A parsed command line: the command plus global options."""

    request: CommandRequest
    server: Optional[str] = None
    debug: bool = False
