"""WiFi signal quality and ESSID."""

from __future__ import annotations

import array
import fcntl
import os
import re
import socket
import struct
from pathlib import Path

from deskkit.util import read_text, warn

SIOCGIWESSID = 0x8B1B
IW_ESSID_MAX_SIZE = 32
_IFNAMSIZ = 16
_IWREQ_SIZE = 32
_MAX_QUALITY = 70

_INT = re.compile(r"[+-]?\d+")


def wifi_perc(interface: str, root: str | os.PathLike = "/") -> str | None:
    """Link quality of a wireless interface in percent."""
    base = Path(root)
    operstate = read_text(base / "sys" / "class" / "net" / interface / "operstate")
    if operstate is None or not operstate.startswith("up\n"):
        return None

    wireless = read_text(base / "proc" / "net" / "wireless")
    if wireless is None:
        return None
    lines = wireless.splitlines(keepends=True)
    if len(lines) < 3:
        return None
    line = lines[2]

    start = line.find(interface)
    if start < 0:
        return None
    tokens = line[start + len(interface) + 2:].split()
    if len(tokens) < 2 or not _INT.match(tokens[0]):
        return None
    match = _INT.match(tokens[1])
    if not match:
        return None
    cur = int(match.group())
    return str(int(cur / _MAX_QUALITY * 100))


def wifi_essid(interface: str) -> str | None:
    """ESSID a wireless interface is associated with."""
    name = interface.encode()
    if len(name) >= _IFNAMSIZ:
        warn("vsnprintf: Output truncated")
        return None

    essid = array.array("B", bytes(IW_ESSID_MAX_SIZE + 1))
    address = essid.buffer_info()[0]
    request = struct.pack(f"{_IFNAMSIZ}sPHH", name, address, len(essid), 0)
    request += bytes(max(0, _IWREQ_SIZE - len(request)))

    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            fcntl.ioctl(sock.fileno(), SIOCGIWESSID, request)
    except OSError as exc:
        warn(f"ioctl 'SIOCGIWESSID': {exc.strerror or exc}")
        return None

    value = essid.tobytes().split(b"\0", 1)[0]
    return value.decode("utf-8", errors="replace") or None