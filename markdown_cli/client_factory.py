"""Transport selection by server URL scheme."""

from markdown_cli.config import Config
from markdown_cli.http_client import MarkdownClient
from markdown_cli.types import FileStoreClient
from markdown_cli.url_client import UrlProtocolClient
from markdown_common.constants import HTTP_SCHEMES, URL_PROTOCOL_SCHEME
from markdown_common.exceptions import UsageError
from markdown_common.logging_config import get_logger

logger = get_logger(__name__)


def create_client(server_url: str, config: Config) -> FileStoreClient:
    """
    Build the client matching the server URL.

    Args:
        server_url: url://<service>/ for the P2P transport, http(s):// for HTTP
        config: Supplies timeouts and bootstrap peers

    Returns:
        UrlProtocolClient or MarkdownClient

    Raises:
        UsageError: If the scheme is not supported
    """
    if server_url.startswith(URL_PROTOCOL_SCHEME):
        logger.debug(f"Using URL protocol transport for {server_url}")
        return UrlProtocolClient(
            server_url,
            bootstrap_peers=config.get_bootstrap_peers(),
            timeout=config.get_rpc_timeout(),
        )
    if server_url.startswith(HTTP_SCHEMES):
        logger.debug(f"Using HTTP transport for {server_url}")
        return MarkdownClient(server_url, timeout=config.get_http_timeout())
    raise UsageError(f"Unsupported server URL: {server_url} (use url://<service>/ or http(s)://)")
