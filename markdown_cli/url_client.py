"""Client for the markdown service over the URL protocol (P2P)."""

import json
from typing import Any, Dict, List, Optional, Sequence

from markdown_common.constants import RPC_TIMEOUT_SECONDS
from markdown_common.exceptions import RpcCallError
from markdown_common.logging_config import get_logger
from markdown_common.types import FileData, FileInfo
from markdown_common.url_resolver import UrlResolver

logger = get_logger(__name__)


class UrlProtocolClient:
    """
    P2P/RPC adapter for the markdown service.

    The resolver joins the network on the first call, so building a client
    is cheap and silent. Use as a context manager, or call close(), to
    release the resolver.
    """

    def __init__(
        self,
        service_url: str,
        resolver: Optional[UrlResolver] = None,
        bootstrap_peers: Optional[Sequence[str]] = None,
        timeout: float = RPC_TIMEOUT_SECONDS
    ):
        """
        Initialize URL protocol client.

        Args:
            service_url: Service address (e.g., "url://markdown/")
            resolver: Resolver to use; one is created from bootstrap_peers if omitted
            bootstrap_peers: "host:port" bootstrap peers for a new resolver
            timeout: Per-call deadline for a new resolver
        """
        self.service_url = service_url
        self.resolver = resolver or UrlResolver(bootstrap_peers=bootstrap_peers, timeout=timeout)

    def health(self) -> str:
        """Health check."""
        response = self._call_rpc('health', {})
        if response is None:
            return 'OK'
        return str(response.get('result', 'OK'))

    def list_files(self) -> List[FileInfo]:
        """List all files."""
        response = self._call_rpc('getAllFiles', {})
        if response is None or not response.get('files'):
            return []
        return [FileInfo.from_json(obj) for obj in response['files']]

    def get_file_by_id(self, file_id: str) -> Optional[FileData]:
        """Get file by ID, or None if it does not exist."""
        return self._file_or_none(self._call_rpc('getFile', {'id': file_id}))

    def get_file_by_name(self, name: str) -> Optional[FileData]:
        """Get file by name, or None if it does not exist."""
        return self._file_or_none(self._call_rpc('getFileByName', {'name': name}))

    def create_file(self, name: str, content: str) -> FileInfo:
        """Create a new file."""
        response = self._call_rpc('createFile', {'name': name, 'content': content})
        if response is None:
            raise RpcCallError("Failed to create file: no response from server")
        return FileInfo.from_json(response)

    def update_content(self, file_id: str, content: str) -> None:
        """Replace file content."""
        self._call_rpc('setContent', {'id': file_id, 'content': content})

    def update_name(self, file_id: str, name: str) -> None:
        """Rename file."""
        self._call_rpc('setName', {'id': file_id, 'name': name})

    def delete_file(self, file_id: str) -> None:
        """Delete file."""
        self._call_rpc('deleteFile', {'id': file_id})

    @staticmethod
    def _file_or_none(response: Optional[Dict[str, Any]]) -> Optional[FileData]:
        if response is None:
            return None
        if not response.get('found', True) or 'error' in response:
            return None
        return FileData.from_json(response)

    def _call_rpc(self, method: str, params: Dict[str, str]) -> Optional[Dict[str, Any]]:
        """
        Call a service method and decode its JSON result.

        Args:
            method: Remote method name
            params: Flat string parameter map

        Returns:
            Decoded result object, or None when the service returned nothing

        Raises:
            RpcCallError: If the call fails or the result is not a JSON object
        """
        logger.debug(f"RPC {method} -> {self.service_url}")
        try:
            result = self.resolver.send_service_rpc_request(self.service_url, method, params)
            if result is None:
                return None
            decoded = json.loads(result)
            if not isinstance(decoded, dict):
                raise ValueError("result is not a JSON object")
            return decoded
        except Exception as e:
            logger.debug(f"RPC {method} failed: {e}")
            raise RpcCallError(f"RPC call to {method} failed: {e}") from e

    def close(self) -> None:
        """Release the resolver."""
        self.resolver.close()

    def __enter__(self) -> 'UrlProtocolClient':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
