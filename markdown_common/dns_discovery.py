"""Address resolution for URL protocol bootstrap peers."""

import socket
import logging
from typing import List, Tuple

logger = logging.getLogger(__name__)


def split_address(address: str) -> Tuple[str, int]:
    """
    Split a "host:port" peer address.

    Args:
        address: Peer address such as "198.199.106.165:35000" or "peer.example:35000"

    Returns:
        Tuple of (host, port)

    Raises:
        ValueError: If the address has no port, the port is not numeric
            or the host is an IPv6 literal
    """
    host, sep, port_str = address.strip().rpartition(':')
    if not sep or not host:
        raise ValueError(f"Invalid peer address (expected host:port): {address!r}")
    if host.startswith('[') or ':' in host:
        raise ValueError(f"IPv6 peer addresses are not supported: {address!r}")
    try:
        port = int(port_str)
    except ValueError:
        raise ValueError(f"Invalid port in peer address: {address!r}")
    return host, port


def discover_peers(hostname: str, port: int, family: socket.AddressFamily = socket.AF_INET) -> List[str]:
    """
    Resolve a bootstrap host to all of its peer addresses via DNS.

    Uses socket.getaddrinfo() so that one DNS name may expand to several
    peers. Filters to IPv4 by default to avoid duplicates.

    Args:
        hostname: Host name or literal IP of the bootstrap peer
        port: Peer port number
        family: Address family filter (default: IPv4 only)

    Returns:
        List of "IP:PORT" strings, sorted for determinism.
        Returns empty list if nothing resolved.

    Raises:
        socket.gaierror: If DNS resolution fails
        ValueError: If hostname or port is invalid
    """
    if not hostname:
        raise ValueError("hostname cannot be empty")
    if port <= 0 or port > 65535:
        raise ValueError(f"Invalid port number: {port}")

    try:
        results = socket.getaddrinfo(hostname, port, family, socket.SOCK_STREAM)
    except socket.gaierror as e:
        logger.warning(f"DNS resolution failed for '{hostname}': {e}")
        raise

    unique_ips = {result[4][0] for result in results}
    peer_addresses = sorted(f"{ip}:{port}" for ip in unique_ips)

    logger.debug(f"DNS resolution: {hostname} -> {len(peer_addresses)} address(es) {peer_addresses}")

    return peer_addresses


def resolve_bootstrap_peers(addresses: List[str]) -> List[str]:
    """
    Resolve configured bootstrap peers into dialable addresses.

    Peers that fail to resolve are skipped with a warning, so one stale
    entry does not hide the others. Order of the configured list is kept.

    Args:
        addresses: Configured "host:port" strings

    Returns:
        De-duplicated "IP:PORT" list
    """
    resolved: List[str] = []
    for address in addresses:
        try:
            host, port = split_address(address)
            peers = discover_peers(host, port)
        except (socket.gaierror, ValueError) as e:
            logger.warning(f"Skipping bootstrap peer {address}: {e}")
            continue
        for peer in peers:
            if peer not in resolved:
                resolved.append(peer)
    return resolved
