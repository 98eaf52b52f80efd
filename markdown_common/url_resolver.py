"""
Resolver for url://<service>/ addresses.

Delivers service RPCs to the URL protocol network through bootstrap peers.
Each call is one unary gRPC request carrying a JSON envelope. Network
activity is deferred until the first call: constructing a resolver neither
resolves addresses nor opens channels.
"""

import threading
from typing import Dict, List, Optional, Sequence

import grpc

from markdown_common.constants import (
    DEFAULT_BOOTSTRAP_PEERS,
    RPC_TIMEOUT_SECONDS,
    SERVICE_RPC_METHOD,
    URL_PROTOCOL_SCHEME,
)
from markdown_common.dns_discovery import resolve_bootstrap_peers
from markdown_common.exceptions import (
    ResolverError,
    ServiceRpcError,
    ServiceUnavailableError,
)
from markdown_common.logging_config import get_logger
from markdown_common.protocol import ServiceRpcRequest, ServiceRpcResponse

logger = get_logger(__name__)

# Only calls that never reached a peer move on to the next one
_UNDELIVERED_CODES = (grpc.StatusCode.UNAVAILABLE,)


def parse_service_url(service_url: str) -> str:
    """
    Extract the service name from a URL protocol address.

    Args:
        service_url: Address such as "url://markdown/"

    Returns:
        Service name ("markdown")

    Raises:
        ResolverError: If the address is not a url:// address or has no service
    """
    if not service_url.startswith(URL_PROTOCOL_SCHEME):
        raise ResolverError(f"Not a URL protocol address: {service_url}")
    service = service_url[len(URL_PROTOCOL_SCHEME):].split('/', 1)[0]
    if not service:
        raise ResolverError(f"Missing service name in {service_url}")
    return service


class UrlResolver:
    """
    Lazily-joining transport for URL protocol service RPCs.

    Thread-safe for the join step; one resolver is meant to be owned by a
    single client and closed with it.
    """

    def __init__(
        self,
        bootstrap_peers: Optional[Sequence[str]] = None,
        timeout: float = RPC_TIMEOUT_SECONDS
    ):
        """
        Initialize resolver. Performs no network activity.

        Args:
            bootstrap_peers: "host:port" peers to route calls through
            timeout: Per-call deadline in seconds
        """
        self._bootstrap_peers = list(bootstrap_peers or DEFAULT_BOOTSTRAP_PEERS)
        self._timeout = timeout
        self._join_lock = threading.Lock()
        self._peers: Optional[List[str]] = None
        self._channels: Dict[str, grpc.Channel] = {}
        self._closed = False

    @property
    def joined(self) -> bool:
        """True once bootstrap peers have been resolved."""
        return self._peers is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def send_service_rpc_request(
        self,
        service_url: str,
        method: str,
        params: Dict[str, str]
    ) -> Optional[str]:
        """
        Invoke a named method on a URL protocol service.

        Args:
            service_url: Service address ("url://markdown/")
            method: Remote method name
            params: Flat string parameter map

        Returns:
            The JSON-encoded result string, or None when the service returned nothing

        Raises:
            ResolverError: If the resolver is closed or the URL is invalid
            ServiceUnavailableError: If no peer could deliver the call
            ServiceRpcError: If the service reported an error
        """
        if self._closed:
            raise ResolverError("Resolver is closed")

        service = parse_service_url(service_url)
        request = ServiceRpcRequest(service=service, method=method, params=dict(params))
        payload = request.to_json()

        peers = self._ensure_joined()
        last_error: Optional[grpc.RpcError] = None

        for peer in peers:
            call = self._get_channel(peer).unary_unary(
                SERVICE_RPC_METHOD,
                request_serializer=lambda x: x,
                response_deserializer=lambda x: x,
            )
            try:
                response_bytes = call(payload, timeout=self._timeout)
            except grpc.RpcError as e:
                if e.code() in _UNDELIVERED_CODES:
                    logger.warning(f"Peer {peer} could not deliver {service}.{method}: {e.code()} - {e.details()}")
                    last_error = e
                    continue
                raise ServiceRpcError(f"{service}.{method} failed on {peer}: {e.code()} - {e.details()}")

            response = ServiceRpcResponse.from_json(response_bytes)
            if response.error:
                raise ServiceRpcError(response.error)

            logger.debug(f"ServiceRpc {service}.{method} answered by {peer}")
            return response.result

        detail = f" (last error: {last_error.code()})" if last_error is not None else ""
        raise ServiceUnavailableError(
            f"Service '{service}' unreachable via {len(peers)} bootstrap peer(s){detail}"
        )

    def _ensure_joined(self) -> List[str]:
        """
        Resolve bootstrap peers on first use.

        Returns:
            Dialable "IP:PORT" peer list

        Raises:
            ServiceUnavailableError: If no bootstrap peer resolves
        """
        with self._join_lock:
            if self._peers is None:
                logger.info(f"Joining URL protocol network via {len(self._bootstrap_peers)} bootstrap peer(s)")
                peers = resolve_bootstrap_peers(self._bootstrap_peers)
                if not peers:
                    raise ServiceUnavailableError(
                        f"No bootstrap peer could be resolved from {self._bootstrap_peers}"
                    )
                self._peers = peers
            return self._peers

    def _get_channel(self, peer_address: str) -> grpc.Channel:
        """
        Get or create a channel to a peer.

        Args:
            peer_address: Peer address in "IP:PORT" format

        Returns:
            gRPC channel
        """
        if peer_address not in self._channels:
            logger.debug(f"Opening channel to {peer_address}")
            self._channels[peer_address] = grpc.insecure_channel(peer_address)
        return self._channels[peer_address]

    def close(self) -> None:
        """Close all channels. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        for peer_address, channel in self._channels.items():
            channel.close()
            logger.debug(f"Closed channel to {peer_address}")
        self._channels.clear()

    def __enter__(self) -> 'UrlResolver':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
