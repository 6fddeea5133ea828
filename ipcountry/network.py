"""Client address helpers: canonicalization, proxy-header extraction and privacy checks."""

from ipaddress import IPv4Address, IPv6Address, ip_address, ip_network
from typing import Any

from ipcountry.errors import InvalidIpError

IPV4_MAPPED_PREFIX = "::ffff:"

PRIVATE_NETWORKS = (
    ip_network("10.0.0.0/8"),
    ip_network("172.16.0.0/12"),
    ip_network("192.168.0.0/16"),
    ip_network("127.0.0.0/8"),
    ip_network("::1/128"),
    ip_network("fc00::/7"),
    ip_network("fe80::/10"),
)


def _parse_ip(raw: Any) -> IPv4Address | IPv6Address:
    if not isinstance(raw, str):
        raise InvalidIpError(f"Expected an IP address string, got {type(raw).__name__}")

    value = raw.strip()
    if value[: len(IPV4_MAPPED_PREFIX)].lower() == IPV4_MAPPED_PREFIX and "." in value:
        value = value[len(IPV4_MAPPED_PREFIX) :]

    try:
        address = ip_address(value)
    except ValueError as exc:
        raise InvalidIpError(f"{raw!r} is not a valid IPv4 or IPv6 address") from exc

    # Other spellings of a mapped address, e.g. 0:0:0:0:0:ffff:203.0.113.5
    if isinstance(address, IPv6Address) and address.ipv4_mapped is not None:
        return address.ipv4_mapped
    return address


def canonicalize_ip(raw: Any) -> str:
    """Return the canonical text form of ``raw`` or raise InvalidIpError.

    Surrounding whitespace and the ``::ffff:`` IPv4-mapped prefix are removed, so
    dual-stack peers are reported in their IPv4 form.
    """
    return str(_parse_ip(raw))


def extract_client_ip(forwarded_for: str | None, peer_address: str | None, trust_proxy: bool = True) -> str:
    """Pick the best candidate for the original client address.

    The first ``X-Forwarded-For`` entry wins because proxies append to the chain.
    The value is not validated here.
    """
    if trust_proxy and forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop
    return peer_address or ""


def is_private_ip(ip: str) -> bool:
    """Whether a canonical IP falls in a loopback, private or link-local range."""
    address = _parse_ip(ip)
    return any(address in network for network in PRIVATE_NETWORKS)
