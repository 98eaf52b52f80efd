"""Command handler functions for CLI operations."""

from pathlib import Path

from markdown_cli.constants import DEFAULT_EDITOR
from markdown_cli.models import (
    CommandRequest,
    DeleteCommand,
    DownloadCommand,
    EditCommand,
    HealthCommand,
    ListCommand,
    RenameCommand,
    UploadCommand,
)
from markdown_cli.types import FileStoreClient
from markdown_cli.utils import edit_in_editor, format_file_table
from markdown_common.exceptions import RemoteFileNotFoundError, UsageError
from markdown_common.logging_config import get_logger
from markdown_common.types import FileData

logger = get_logger(__name__)


def _lookup(client: FileStoreClient, name: str) -> FileData:
    """Fetch a file by name or raise RemoteFileNotFoundError."""
    file_data = client.get_file_by_name(name)
    if file_data is None:
        raise RemoteFileNotFoundError(name)
    return file_data


def handle_upload(cmd: UploadCommand, client: FileStoreClient) -> str:
    """
    Handle 'upload' command.

    Creates the file, or replaces the content of an existing file with the
    same name.

    Args:
        cmd: UploadCommand with the local file path
        client: Transport client

    Returns:
        "Uploaded: ..." or "Updated: ..." message

    Raises:
        UsageError: If the path does not exist, is not a regular file or is not UTF-8
    """
    path = Path(cmd.file_path)
    if not path.exists():
        raise UsageError(f"File does not exist: {cmd.file_path}")
    if not path.is_file():
        raise UsageError(f"Path is not a file: {cmd.file_path}")

    name = path.name
    try:
        content = path.read_bytes().decode("utf-8")
    except UnicodeDecodeError:
        raise UsageError(f"File is not valid UTF-8: {cmd.file_path}")
    except OSError as e:
        raise UsageError(f"Cannot read {cmd.file_path}: {e.strerror or e}")
    logger.info(f"Executing upload command: name={name} size={len(content)}")

    existing = client.get_file_by_name(name)
    if existing is not None:
        client.update_content(existing.id, content)
        return f"Updated: {name} (id: {existing.id})"

    info = client.create_file(name, content)
    return f"Uploaded: {name} (id: {info.id})"


def handle_download(cmd: DownloadCommand, client: FileStoreClient) -> str:
    """
    Handle 'download' command.

    Args:
        cmd: DownloadCommand with name and optional output_path
        client: Transport client

    Returns:
        Confirmation with the absolute output path
    """
    logger.info(f"Executing download command: name={cmd.name} output_path={cmd.output_path}")
    file_data = _lookup(client, cmd.name)

    output_file = Path(cmd.output_path or cmd.name)
    try:
        output_file.write_text(file_data.content, encoding="utf-8", newline="")
    except OSError as e:
        raise UsageError(f"Cannot write {output_file}: {e.strerror or e}")
    return f"Downloaded: {cmd.name} -> {output_file.absolute()}"


def handle_edit(cmd: EditCommand, client: FileStoreClient, editor: str = DEFAULT_EDITOR) -> str:
    """
    Handle 'edit' command.

    Editing a name that does not exist creates the file on save.

    Args:
        cmd: EditCommand with name
        client: Transport client
        editor: Editor command to launch

    Returns:
        "Updated", "Created" or "No changes" message
    """
    logger.info(f"Executing edit command: name={cmd.name} editor={editor}")
    existing = client.get_file_by_name(cmd.name)

    new_content = edit_in_editor(existing.content if existing is not None else "", editor)
    if new_content is None:
        return "No changes made, skipping save"

    if existing is not None:
        client.update_content(existing.id, new_content)
        return f"Updated: {cmd.name}"

    info = client.create_file(cmd.name, new_content)
    return f"Created: {cmd.name} (id: {info.id})"


def handle_list(cmd: ListCommand, client: FileStoreClient) -> str:
    """
    Handle 'list' command.

    Args:
        cmd: ListCommand
        client: Transport client

    Returns:
        Formatted table, or "No files found"
    """
    files = client.list_files()
    logger.debug(f"List command returned {len(files)} file(s)")
    if not files:
        return "No files found"
    return format_file_table(files)


def handle_delete(cmd: DeleteCommand, client: FileStoreClient) -> str:
    """
    Handle 'delete' command.

    Args:
        cmd: DeleteCommand with name
        client: Transport client

    Returns:
        Confirmation with the deleted id
    """
    logger.info(f"Executing delete command: name={cmd.name}")
    file_data = _lookup(client, cmd.name)
    client.delete_file(file_data.id)
    return f"Deleted: {cmd.name} (id: {file_data.id})"


def handle_rename(cmd: RenameCommand, client: FileStoreClient) -> str:
    """
    Handle 'rename' command.

    Args:
        cmd: RenameCommand with current and new name
        client: Transport client

    Returns:
        Confirmation with the unchanged id
    """
    logger.info(f"Executing rename command: {cmd.name} -> {cmd.new_name}")
    file_data = _lookup(client, cmd.name)
    client.update_name(file_data.id, cmd.new_name)
    return f"Renamed: {cmd.name} -> {cmd.new_name} (id: {file_data.id})"


def handle_health(cmd: HealthCommand, client: FileStoreClient) -> str:
    """
    Handle 'health' command.

    Args:
        cmd: HealthCommand
        client: Transport client

    Returns:
        "Server health: <result>"
    """
    return f"Server health: {client.health()}"


def dispatch_command(cmd: CommandRequest, client: FileStoreClient, editor: str = DEFAULT_EDITOR) -> str:
    """
    Dispatch parsed command to appropriate handler.

    Args:
        cmd: Parsed command (not shell or help)
        client: Transport client
        editor: Editor command for 'edit'

    Returns:
        Text to print

    Raises:
        UsageError: If the command has no handler
    """
    if isinstance(cmd, UploadCommand):
        return handle_upload(cmd, client)
    elif isinstance(cmd, DownloadCommand):
        return handle_download(cmd, client)
    elif isinstance(cmd, EditCommand):
        return handle_edit(cmd, client, editor)
    elif isinstance(cmd, ListCommand):
        return handle_list(cmd, client)
    elif isinstance(cmd, DeleteCommand):
        return handle_delete(cmd, client)
    elif isinstance(cmd, RenameCommand):
        return handle_rename(cmd, client)
    elif isinstance(cmd, HealthCommand):
        return handle_health(cmd, client)
    else:
        raise UsageError(f"Unsupported command: {cmd.command}")
