"""Addresses assigned to a network interface."""

from __future__ import annotations

import socket

import psutil

from deskkit.util import warn


def _ip(interface: str, family: socket.AddressFamily) -> str | None:
    try:
        addresses = psutil.net_if_addrs()
    except OSError as exc:
        warn(f"getifaddrs: {exc}")
        return None
    for addr in addresses.get(interface, ()):
        if addr.family == family:
            return addr.address
    return None


def ipv4(interface: str) -> str | None:
    """First IPv4 address of an interface."""
    return _ip(interface, socket.AF_INET)


def ipv6(interface: str) -> str | None:
    """First IPv6 address of an interface."""
    return _ip(interface, socket.AF_INET6)