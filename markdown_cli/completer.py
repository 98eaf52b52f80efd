"""Custom completer for the markdown-cli shell."""

from typing import Iterable, List, Optional

from prompt_toolkit.completion import Completer, Completion, PathCompleter
from prompt_toolkit.document import Document

from markdown_cli.constants import COMMANDS, REMOTE_NAME_COMMANDS, SHELL_BUILTINS
from markdown_cli.types import FileStoreClient
from markdown_common.exceptions import MarkdownCliError
from markdown_common.logging_config import get_logger

logger = get_logger(__name__)


class MarkdownCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - Local path completion for 'upload'
    - Remote file name completion for download/edit/delete/rename
    """

    def __init__(self, client: Optional[FileStoreClient] = None):
        self.client = client
        self._remote_names: Optional[List[str]] = None
        self._path_completer = PathCompleter(expanduser=True)

    def refresh(self) -> None:
        """Forget cached remote names; they are fetched again on next use."""
        self._remote_names = None

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Generate completions based on cursor position and context.
        """
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        command = tokens[0].lower()
        current_word = "" if is_typing_new_token else tokens[-1]
        arg_index = len(tokens) - 1 if is_typing_new_token else len(tokens) - 2

        if command == "upload" and arg_index == 0:
            yield from self._path_completer.get_completions(Document(current_word), complete_event)
        elif command in REMOTE_NAME_COMMANDS and arg_index == 0:
            yield from self._complete_remote_names(current_word)

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        """Complete command names matching the partial input."""
        partial_lower = partial.lower()
        for cmd in COMMANDS + SHELL_BUILTINS:
            if cmd == "shell":
                continue
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_remote_names(self, partial: str) -> Iterable[Completion]:
        """Complete file names stored on the server."""
        for name in self._get_remote_names():
            if name.startswith(partial):
                yield Completion(name, start_position=-len(partial))

    def _get_remote_names(self) -> List[str]:
        if self._remote_names is None:
            if self.client is None:
                return []
            try:
                self._remote_names = sorted({f.name for f in self.client.list_files()})
            except MarkdownCliError as e:
                logger.debug(f"Remote name completion unavailable: {e}")
                return []
        return self._remote_names
