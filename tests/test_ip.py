import socket
from collections import namedtuple
from unittest import mock

import psutil

from deskkit.components.ip import ipv4, ipv6

Addr = namedtuple("Addr", "family address netmask broadcast ptp")

_ADDRS = {
    "eth0": [
        Addr(psutil.AF_LINK, "00:00:5e:00:53:01", None, None, None),
        Addr(socket.AF_INET6, "fe80::1", None, None, None),
        Addr(socket.AF_INET, "192.0.2.5", None, None, None),
    ],
    "lo": [Addr(socket.AF_INET, "127.0.0.1", None, None, None)],
}


def test_ipv4():
    with mock.patch("psutil.net_if_addrs", return_value=_ADDRS):
        assert ipv4("eth0") == "192.0.2.5"


def test_ipv6():
    with mock.patch("psutil.net_if_addrs", return_value=_ADDRS):
        assert ipv6("eth0") == "fe80::1"


def test_missing_family():
    with mock.patch("psutil.net_if_addrs", return_value=_ADDRS):
        assert ipv6("lo") is None


def test_unknown_interface():
    with mock.patch("psutil.net_if_addrs", return_value=_ADDRS):
        assert ipv4("wlan0") is None


def test_lookup_failure():
    with mock.patch("psutil.net_if_addrs", side_effect=OSError("boom")):
        assert ipv4("eth0") is None