from typing import Any

import pytest

from ipcountry.errors import InvalidIpError
from ipcountry.network import canonicalize_ip, extract_client_ip, is_private_ip


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("8.8.8.8", "8.8.8.8"),
        ("  203.0.113.5\t", "203.0.113.5"),
        ("::ffff:203.0.113.5", "203.0.113.5"),
        ("::FFFF:203.0.113.5", "203.0.113.5"),
        (" ::ffff:192.168.1.50 ", "192.168.1.50"),
        ("0:0:0:0:0:ffff:203.0.113.5", "203.0.113.5"),
        ("2001:4860:4860::8888", "2001:4860:4860::8888"),
        ("2001:4860:4860:0:0:0:0:8888", "2001:4860:4860::8888"),
        ("FE80::1", "fe80::1"),
    ],
)
def test_canonicalize_ip_normalizes_valid_addresses(raw: str, expected: str) -> None:
    assert canonicalize_ip(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "   ",
        "not-an-ip",
        "256.1.1.1",
        "1.2.3",
        "1.2.3.4.5",
        "01.2.3.4",
        "2001:db8::g",
        "1::2::3",
        "::ffff:",
        42,
        None,
    ],
)
def test_canonicalize_ip_rejects_invalid_values(raw: Any) -> None:
    with pytest.raises(InvalidIpError):
        canonicalize_ip(raw)


def test_extract_client_ip_first_forwarded_entry_wins() -> None:
    assert extract_client_ip("203.0.113.9, 10.0.0.1", "127.0.0.1") == "203.0.113.9"


def test_extract_client_ip_single_forwarded_entry() -> None:
    assert extract_client_ip("198.51.100.7", "127.0.0.1") == "198.51.100.7"


@pytest.mark.parametrize("header", [None, "", " , 10.0.0.1"])
def test_extract_client_ip_falls_back_to_peer(header: str | None) -> None:
    assert extract_client_ip(header, "192.168.1.50") == "192.168.1.50"


def test_extract_client_ip_without_any_source_is_empty() -> None:
    assert extract_client_ip(None, None) == ""


def test_extract_client_ip_does_not_validate() -> None:
    """Garbage is passed through; rejecting it is the canonicalizer's job."""
    assert extract_client_ip("garbage, 8.8.8.8", "10.0.0.1") == "garbage"


def test_extract_client_ip_ignores_header_when_proxy_not_trusted() -> None:
    assert extract_client_ip("203.0.113.9", "192.168.1.50", trust_proxy=False) == "192.168.1.50"


@pytest.mark.parametrize(
    "ip",
    [
        "10.0.0.5",
        "10.255.255.255",
        "172.16.0.1",
        "172.31.255.255",
        "192.168.1.1",
        "127.0.0.1",
        "127.10.20.30",
        "::1",
        "fc00::1",
        "fd12:3456::1",
        "fe80::1",
        "FEBF::1",
    ],
)
def test_is_private_ip_matches_reserved_ranges(ip: str) -> None:
    assert is_private_ip(ip) is True


@pytest.mark.parametrize(
    "ip",
    [
        "8.8.8.8",
        "203.0.113.5",
        "172.15.255.255",
        "172.32.0.1",
        "192.169.0.1",
        "11.0.0.1",
        "2001:4860:4860::8888",
        "fec0::1",
        "::2",
    ],
)
def test_is_private_ip_treats_other_addresses_as_public(ip: str) -> None:
    assert is_private_ip(ip) is False


def test_mapped_address_is_classified_by_its_ipv4_form() -> None:
    ip = canonicalize_ip("::ffff:203.0.113.5")

    assert ip == "203.0.113.5"
    assert is_private_ip(ip) is False
    assert is_private_ip(canonicalize_ip("::ffff:10.0.0.1")) is True
