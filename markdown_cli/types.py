"""Interface shared by the HTTP and URL protocol clients."""

from typing import List, Optional, Protocol

from markdown_common.types import FileData, FileInfo


class FileStoreClient(Protocol):
    """The operations every transport client offers to the command handlers."""

    def health(self) -> str: ...

    def list_files(self) -> List[FileInfo]: ...

    def get_file_by_id(self, file_id: str) -> Optional[FileData]: ...

    def get_file_by_name(self, name: str) -> Optional[FileData]: ...

    def create_file(self, name: str, content: str) -> FileInfo: ...

    def update_content(self, file_id: str, content: str) -> None: ...

    def update_name(self, file_id: str, name: str) -> None: ...

    def delete_file(self, file_id: str) -> None: ...

    def close(self) -> None: ...

    def __enter__(self) -> 'FileStoreClient': ...

    def __exit__(self, exc_type, exc_val, exc_tb) -> None: ...
