"""Date, host, kernel, load, uptime and user information."""

from __future__ import annotations

import os
import platform
import pwd
import socket
import time

from deskkit.util import read_int, warn

ENTROPY_AVAIL = "/proc/sys/kernel/random/entropy_avail"
_MAX_DATETIME = 1024

_UPTIME_CLOCK = getattr(
    time, "CLOCK_BOOTTIME", getattr(time, "CLOCK_UPTIME", time.CLOCK_MONOTONIC)
)


def datetime_str(fmt: str) -> str | None:
    """Local time formatted with strftime."""
    result = time.strftime(fmt, time.localtime())
    if not result or len(result) >= _MAX_DATETIME:
        warn("strftime: Result string exceeds buffer size")
        return None
    return result


def entropy(path: str | os.PathLike = ENTROPY_AVAIL) -> str | None:
    """Available kernel entropy."""
    num = read_int(path)
    return None if num is None else str(num)


def hostname() -> str | None:
    """Name of this host."""
    try:
        return socket.gethostname()
    except OSError as exc:
        warn(f"gethostname: {exc}")
        return None


def kernel_release() -> str | None:
    """Kernel release, as `uname -r` prints it."""
    release = platform.release()
    if not release:
        warn("uname: no release")
        return None
    return release


def load_avg() -> str | None:
    """The 1, 5 and 15 minute load averages."""
    try:
        one, five, fifteen = os.getloadavg()
    except OSError:
        warn("getloadavg: Failed to obtain load average")
        return None
    return f"{one:.2f} {five:.2f} {fifteen:.2f}"


def uptime() -> str | None:
    """System uptime as 'Hh Mm'."""
    try:
        seconds = int(time.clock_gettime(_UPTIME_CLOCK))
    except OSError:
        warn(f"clock_gettime {_UPTIME_CLOCK}")
        return None
    return f"{seconds // 3600}h {seconds % 3600 // 60}m"


def gid() -> str:
    """Group id of the current process."""
    return str(os.getgid())


def uid() -> str:
    """Effective user id of the current process."""
    return str(os.geteuid())


def username() -> str | None:
    """Name of the effective user."""
    euid = os.geteuid()
    try:
        return pwd.getpwuid(euid).pw_name
    except KeyError:
        warn(f"getpwuid '{euid}': no such user")
        return None