"""Client address classification.

Turns whatever the transport gave us (a forwarding header, a peer address)
into a single normalized address plus the two flags the decision rules need.
Matching is exact-string only; there is no subnet logic here beyond the
private-range test.
"""
from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import Optional

from ..core.constants import LOOPBACK_V4, LOOPBACK_V6, UNKNOWN_ADDRESS, V4_MAPPED_PREFIX
from ..core.exceptions import AddressUnresolvable

_PRIVATE_NETWORKS = tuple(
    ipaddress.ip_network(cidr)
    for cidr in ("127.0.0.0/8", "10.0.0.0/8", "172.16.0.0/12", "192.168.0.0/16")
)


@dataclass(frozen=True)
class ClassifiedAddress:
    address: str
    is_private: bool
    is_proxied: bool


def normalize_address(raw: str) -> str:
    """Reduce a raw address value to the left-most, unmapped, IPv4-loopback form."""
    address = raw.split(",")[0].strip() if "," in raw else raw.strip()
    if address.lower().startswith(V4_MAPPED_PREFIX):
        address = address[len(V4_MAPPED_PREFIX):]
    if address == LOOPBACK_V6:
        address = LOOPBACK_V4
    return address


def is_private_address(address: str) -> bool:
    if not address:
        return False
    if address == "localhost":
        return True
    try:
        ip = ipaddress.IPv4Address(address)
    except ValueError:
        return False
    return any(ip in net for net in _PRIVATE_NETWORKS)


def is_proxied_chain(raw: Optional[str]) -> bool:
    return bool(raw) and len(raw.split(",")) > 1


def classify(forwarded_for: Optional[str] = None, peer_address: Optional[str] = None) -> ClassifiedAddress:
    """Classify the caller's origin.

    The forwarding header wins over the transport peer address. Only the
    forwarding header can mark a request as proxied.

    Raises:
        AddressUnresolvable: neither source yields an address.
    """
    raw = (forwarded_for or "").strip() or (peer_address or "").strip()
    address = normalize_address(raw) if raw else ""
    if not address:
        raise AddressUnresolvable("Could not determine your IP address.")

    return ClassifiedAddress(
        address=address,
        is_private=is_private_address(address),
        is_proxied=is_proxied_chain(forwarded_for),
    )


def describe(forwarded_for: Optional[str] = None, peer_address: Optional[str] = None) -> dict:
    """Address probe for the caller: never raises on a missing address."""
    try:
        classified = classify(forwarded_for, peer_address)
        address, is_private = classified.address, classified.is_private
    except AddressUnresolvable:
        address, is_private = UNKNOWN_ADDRESS, False

    return {
        "clientIp": address,
        "isPrivate": is_private,
        "possibleProxy": is_proxied_chain(forwarded_for),
        "note": "You are on a private/local network" if is_private else "You are on a public network",
    }
