"""
URL guard - refuse fetch targets on private networks (server-side request forgery).
"""
import ipaddress
import socket
from typing import Optional
from urllib.parse import urlparse

from wsg_check.logger import logger

# Private/internal IP ranges to block
BLOCKED_RANGES = [
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("127.0.0.0/8"),
    ipaddress.ip_network("169.254.0.0/16"),
    ipaddress.ip_network("0.0.0.0/8"),
    ipaddress.ip_network("::1/128"),
    ipaddress.ip_network("fc00::/7"),
    ipaddress.ip_network("fe80::/10"),
]

# Cloud metadata endpoints and loopback names
BLOCKED_HOSTS = {
    "localhost",
    "metadata.google.internal",
    "169.254.169.254",
}


def check_scheme(url: str) -> Optional[str]:
    """Return a reason string when the URL is not an http(s) URL with a host."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        return f"Invalid scheme: {parsed.scheme or '(none)'}"
    if not parsed.hostname:
        return "Empty hostname"
    return None


def check_private_network(url: str) -> Optional[str]:
    """Return a reason string when the URL resolves to a blocked address."""
    hostname = (urlparse(url).hostname or "").lower()
    if hostname in BLOCKED_HOSTS:
        return f"Blocked hostname: {hostname}"

    try:
        ip = ipaddress.ip_address(hostname)
    except ValueError:
        try:
            ip = ipaddress.ip_address(socket.gethostbyname(hostname))
        except socket.gaierror:
            # The fetch itself will fail for an unknown host
            logger.warning(f"DNS resolution failed for {hostname}")
            return None

    for blocked_range in BLOCKED_RANGES:
        if ip in blocked_range:
            return f"IP {ip} is in blocked range {blocked_range}"
    return None


def validate_url(url: str, block_private_networks: bool = False) -> Optional[str]:
    """Validate a fetch target. Returns None when allowed, otherwise the reason."""
    reason = check_scheme(url)
    if reason is None and block_private_networks:
        reason = check_private_network(url)
    return reason
