"""HTTP client for communicating with the markdown storage service."""

import json
import uuid
from typing import Any, Dict, List, Optional

import httpx

from markdown_common.constants import HTTP_TIMEOUT_SECONDS
from markdown_common.exceptions import HttpError, ProtocolError, TransportError
from markdown_common.logging_config import get_logger
from markdown_common.types import FileData, FileInfo

logger = get_logger(__name__)


class MarkdownClient:
    """HTTP/JSON adapter for the markdown storage REST API."""

    def __init__(self, base_url: str, timeout: float = HTTP_TIMEOUT_SECONDS):
        """
        Initialize HTTP client.

        Args:
            base_url: Server root (e.g., "http://localhost:8080")
            timeout: Connect and read timeout in seconds
        """
        self.base_url = base_url
        self.session = httpx.Client(base_url=base_url, timeout=timeout)
        self.request_id: Optional[str] = None
        logger.debug(f"Initialized MarkdownClient [base_url={base_url}]")

    def health(self) -> str:
        """Health check."""
        return str(self._request('GET', '/health').get('result', 'OK'))

    def list_files(self) -> List[FileInfo]:
        """List all files."""
        files = self._request('GET', '/files').get('files')
        if not files:
            return []
        return [FileInfo.from_json(obj) for obj in files]

    def get_file_by_id(self, file_id: str) -> Optional[FileData]:
        """Get file by ID, or None if it does not exist."""
        return self._file_or_none(self._request('GET', '/file', params={'id': file_id}))

    def get_file_by_name(self, name: str) -> Optional[FileData]:
        """Get file by name, or None if it does not exist."""
        return self._file_or_none(self._request('GET', '/file', params={'name': name}))

    def create_file(self, name: str, content: str) -> FileInfo:
        """Create a new file."""
        response = self._request('POST', '/file', json={'name': name, 'content': content})
        return FileInfo.from_json(response)

    def update_content(self, file_id: str, content: str) -> None:
        """Replace file content."""
        self._request('PUT', '/file', params={'id': file_id}, json={'content': content})

    def update_name(self, file_id: str, name: str) -> None:
        """Rename file."""
        self._request('PUT', '/file', params={'id': file_id}, json={'name': name})

    def delete_file(self, file_id: str) -> None:
        """Delete file."""
        self._request('DELETE', '/file', params={'id': file_id})

    @staticmethod
    def _file_or_none(response: Dict[str, Any]) -> Optional[FileData]:
        if not response.get('found', True) or 'error' in response:
            return None
        return FileData.from_json(response)

    def _request(self, method: str, endpoint: str, **kwargs) -> Dict[str, Any]:
        """
        Make one HTTP request and decode its JSON object body.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            endpoint: API endpoint path
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            Decoded response body ({} for an empty body)

        Raises:
            HttpError: If the server answers with status >= 400
            ProtocolError: If the body is not a JSON object
            TransportError: If the server cannot be reached or times out
        """
        self.request_id = str(uuid.uuid4())
        kwargs.setdefault('headers', {})['X-Request-ID'] = self.request_id

        logger.debug(f"Making request: {method} {endpoint} [request_id={self.request_id}]")

        try:
            response = self.session.request(method, endpoint, **kwargs)
        except httpx.ConnectError as e:
            logger.debug(f"Connect failed: {method} {endpoint} error={e} [request_id={self.request_id}]")
            raise TransportError(f"Cannot connect to server at {self.base_url}. Is it running?")
        except httpx.TimeoutException:
            raise TransportError(f"Request timed out: {method} {endpoint}")
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP request failed: {e}")

        logger.debug(
            f"Response received: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
        )

        if response.status_code >= 400:
            logger.warning(
                f"Request failed: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
            )
            raise HttpError(self._format_error(response), response.status_code)

        if not response.content:
            return {}
        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ProtocolError(f"Invalid JSON in response to {method} {endpoint}: {e}")
        if not isinstance(body, dict):
            raise ProtocolError(f"Expected a JSON object in response to {method} {endpoint}")
        return body

    @staticmethod
    def _format_error(response: httpx.Response) -> str:
        """
        Extract the server's error message.

        Args:
            response: HTTP response object with status >= 400

        Returns:
            The "error" field, or "HTTP error <code>"
        """
        try:
            error_data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            error_data = None
        if isinstance(error_data, dict) and isinstance(error_data.get('error'), str):
            return error_data['error']
        return f"HTTP error {response.status_code}"

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()

    def __enter__(self) -> 'MarkdownClient':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
