"""Shared data type definitions (FileInfo, FileData)."""

from dataclasses import dataclass
from typing import Any, Dict

from markdown_common.exceptions import ProtocolError


def _require(obj: Dict[str, Any], field: str) -> Any:
    """Fetch a mandatory response field or raise ProtocolError."""
    if not isinstance(obj, dict) or field not in obj or obj[field] is None:
        raise ProtocolError(f"Malformed response: missing field '{field}'")
    return obj[field]


def _require_int(obj: Dict[str, Any], field: str) -> int:
    value = _require(obj, field)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ProtocolError(f"Malformed response: field '{field}' is not an integer")


@dataclass(frozen=True)
class FileInfo:
    """
    Metadata of a stored markdown file.

    Attributes:
        id: Server-assigned identifier, stable across edits
        name: Mutable display name used for lookups
        last_modified: Epoch milliseconds (0 when unknown)
    """
    id: str
    name: str
    last_modified: int

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> 'FileInfo':
        """Build from a decoded `{id, name, lastModified}` object."""
        return cls(
            id=str(_require(obj, 'id')),
            name=str(_require(obj, 'name')),
            last_modified=_require_int(obj, 'lastModified'),
        )


@dataclass(frozen=True)
class FileData:
    """
    A stored markdown file including its content.
    """
    id: str
    name: str
    content: str
    last_modified: int

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> 'FileData':
        """Build from a decoded `{id, name, content, lastModified}` object."""
        return cls(
            id=str(_require(obj, 'id')),
            name=str(_require(obj, 'name')),
            content=str(_require(obj, 'content')),
            last_modified=_require_int(obj, 'lastModified'),
        )

    def info(self) -> FileInfo:
        """Drop the content and keep the metadata."""
        return FileInfo(id=self.id, name=self.name, last_modified=self.last_modified)
