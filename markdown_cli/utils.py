"""Utility functions for CLI output and the editor workflow."""

import os
import shlex
import subprocess
import tempfile
from datetime import datetime
from typing import List, Optional

from markdown_cli.constants import (
    ID_COLUMN_WIDTH,
    NAME_COLUMN_WIDTH,
    TABLE_WIDTH,
    TIMESTAMP_FORMAT,
)
from markdown_common.exceptions import EditorError
from markdown_common.logging_config import get_logger
from markdown_common.types import FileInfo

logger = get_logger(__name__)


def format_timestamp(epoch_millis: int) -> str:
    """
    Format an epoch-millisecond timestamp in local time.

    Args:
        epoch_millis: Milliseconds since the epoch

    Returns:
        "yyyy-MM-dd HH:mm:ss", or "N/A" for zero or negative values
    """
    if epoch_millis <= 0:
        return "N/A"
    return datetime.fromtimestamp(epoch_millis / 1000).strftime(TIMESTAMP_FORMAT)


def _table_row(first: str, second: str, third: str) -> str:
    return f"{first:<{ID_COLUMN_WIDTH}}  {second:<{NAME_COLUMN_WIDTH}}  {third}"


def format_file_table(files: List[FileInfo]) -> str:
    """
    Render files as a fixed-width table.

    Args:
        files: Non-empty list of files

    Returns:
        Table text with header, one row per file and a total line
    """
    separator = "-" * TABLE_WIDTH
    lines = [
        "Files:",
        separator,
        _table_row("ID", "Name", "Last Modified"),
        separator,
    ]
    for file_info in files:
        lines.append(_table_row(file_info.id, file_info.name, format_timestamp(file_info.last_modified)))
    lines.append(separator)
    lines.append(f"Total: {len(files)} file(s)")
    return "\n".join(lines)


def edit_in_editor(initial_content: str, editor: str) -> Optional[str]:
    """
    Let the user edit text in an external editor.

    Writes the text to a temporary .md file, runs the editor on it with
    the terminal inherited, and blocks until it exits. The temporary file
    is removed on every path.

    Args:
        initial_content: Text to pre-fill
        editor: Editor command, split shell-style (e.g., "vim", "code --wait")

    Returns:
        New content, or None if the file's modification time did not change

    Raises:
        EditorError: If the editor cannot be started or exits non-zero
    """
    editor_argv = shlex.split(editor)
    if not editor_argv:
        raise EditorError("No editor configured")

    fd, temp_path = tempfile.mkstemp(prefix="markdown-edit-", suffix=".md")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(initial_content)

        modified_before = os.stat(temp_path).st_mtime_ns
        logger.debug(f"Launching editor {editor_argv[0]} on {temp_path}")

        try:
            completed = subprocess.run([*editor_argv, temp_path])
        except FileNotFoundError:
            raise EditorError(f"Editor not found: {editor_argv[0]}")

        if completed.returncode != 0:
            raise EditorError(f"Editor exited with code {completed.returncode}")

        if os.stat(temp_path).st_mtime_ns == modified_before:
            return None

        with open(temp_path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    finally:
        try:
            os.unlink(temp_path)
        except FileNotFoundError:
            pass
