"""Network receive and transmit rates from sysfs counters."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from deskkit.util import fmt_human, read_int

NET_ROOT = "/sys/class/net"
INTERVAL_MS = 1000


class Direction(str, Enum):
    """Which byte counter of an interface to follow."""

    RX = "rx"
    TX = "tx"


class ByteCounter:
    """Follows one interface byte counter and reports its rate per second."""

    def __init__(
        self,
        interface: str,
        direction: Direction | str,
        interval: int = INTERVAL_MS,
        root: str | os.PathLike = NET_ROOT,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, not {interval}")
        self.interface = interface
        self.direction = Direction(direction)
        self.interval = interval
        self.root = Path(root)
        self._bytes = 0

    @property
    def path(self) -> Path:
        return (
            self.root
            / self.interface
            / "statistics"
            / f"{self.direction.value}_bytes"
        )

    def speed(self) -> str | None:
        """Bytes per second since the previous reading, or None on the first."""
        current = read_int(self.path)
        if current is None:
            return None
        previous, self._bytes = self._bytes, current
        if previous == 0:
            return None
        return fmt_human((current - previous) * 1000 // self.interval, 1024)


_counters: dict[tuple[str, Direction], ByteCounter] = {}


def _speed(interface: str, direction: Direction) -> str | None:
    key = (interface, direction)
    counter = _counters.get(key)
    if counter is None:
        counter = _counters[key] = ByteCounter(interface, direction)
    return counter.speed()


def netspeed_rx(interface: str) -> str | None:
    """Receive rate of an interface."""
    return _speed(interface, Direction.RX)


def netspeed_tx(interface: str) -> str | None:
    """Transmit rate of an interface."""
    return _speed(interface, Direction.TX)