"""System facts gathered for the fetch screen."""

from __future__ import annotations

import os
import pwd
import re
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

import psutil

CPUINFO = "/proc/cpuinfo"
MEMINFO = "/proc/meminfo"
PROC_UPTIME = "/proc/uptime"
GPU_COMMAND = "lspci | grep -i vga"
UNKNOWN = "Unknown"
GPU_ERROR = "Error."

_MEM_FIELDS = ("MemTotal:", "MemFree:", "Buffers:", "Cached:")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(frozen=True)
class CPUInfo:
    """CPU model name and overall load in percent (-1 when unknown)."""

    model: str = UNKNOWN
    load: float = -1.0


@dataclass(frozen=True)
class SystemInfo:
    """Kernel, operating system, shell, user and host names."""

    kernel: str = UNKNOWN
    os: str = UNKNOWN
    shell: str = UNKNOWN
    username: str = UNKNOWN
    device_name: str = UNKNOWN


@dataclass(frozen=True)
class DiskInfo:
    """Total and used space of a filesystem, in bytes."""

    total_space: int
    used_space: int


@dataclass(frozen=True)
class Uptime:
    """Time since boot split into days, hours and minutes."""

    days: int = 0
    hours: int = 0
    minutes: int = 0


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def _cpu_model() -> str | None:
    try:
        with open(CPUINFO, encoding="utf-8", errors="replace") as cpuinfo:
            for line in cpuinfo:
                if "model name" in line:
                    return line.partition(":")[2].split(":")[0].strip()
    except OSError:
        return None
    return UNKNOWN


def _cpu_load() -> float:
    try:
        times = psutil.cpu_times()
    except (OSError, psutil.Error):
        return -1.0
    total = sum(times) - getattr(times, "guest", 0.0) - getattr(times, "guest_nice", 0.0)
    if total <= 0:
        return -1.0
    return 100.0 * (1.0 - times.idle / total)


def get_cpu_info() -> CPUInfo:
    """Model name of the first CPU and the load since boot."""
    model = _cpu_model()
    if model is None:
        return CPUInfo()
    return CPUInfo(model=model, load=_cpu_load())


def _read_meminfo(path: str | os.PathLike) -> dict[str, int] | None:
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
    values = dict.fromkeys(_MEM_FIELDS, 0)
    for line in text.splitlines():
        for name in _MEM_FIELDS:
            if line.startswith(name):
                match = _LEADING_INT.match(line[len(name) + 1:])
                values[name] = int(match.group(1)) if match else 0
                break
    return values


def get_memory_usage(path: str | os.PathLike = MEMINFO) -> int:
    """Memory in use in MiB, not counting buffers and cache; -1 if unreadable."""
    values = _read_meminfo(path)
    if values is None:
        return -1
    used = (
        values["MemTotal:"]
        - values["MemFree:"]
        - values["Buffers:"]
        - values["Cached:"]
    )
    return _trunc_div(used, 1024)


def get_memory_total(path: str | os.PathLike = MEMINFO) -> int:
    """Total memory in MiB; -1 if unreadable."""
    values = _read_meminfo(path)
    if values is None:
        return -1
    return _trunc_div(values["MemTotal:"], 1024)


def get_system_info() -> SystemInfo:
    """Kernel release, system name, host name, login shell and user name."""
    try:
        uname = os.uname()
        kernel, os_name, device_name = uname.release, uname.sysname, uname.nodename
    except OSError:
        kernel = os_name = device_name = UNKNOWN

    shell = os.environ.get("SHELL")
    shell_name = UNKNOWN if shell is None else shell.rsplit("/", 1)[-1]

    try:
        user = pwd.getpwuid(os.getuid()).pw_name
    except KeyError:
        user = UNKNOWN

    return SystemInfo(
        kernel=kernel,
        os=os_name,
        shell=shell_name,
        username=user,
        device_name=device_name,
    )


def get_disk_info(path: str | os.PathLike = "/") -> DiskInfo:
    """Size and usage of the filesystem holding ``path``; raises OSError."""
    stat = os.statvfs(path)
    return DiskInfo(
        total_space=stat.f_blocks * stat.f_frsize,
        used_space=(stat.f_blocks - stat.f_bfree) * stat.f_frsize,
    )


def parse_gpu_model(line: str) -> str:
    """The first bracketed name in a PCI listing line; ValueError if there is none."""
    start = line.find("[")
    if start < 0:
        raise ValueError(f"no '[' in {line!r}")
    end = line.find("]", start + 1)
    if end < 0:
        raise ValueError(f"no ']' after '[' in {line!r}")
    return line[start + 1:end]


def get_gpu_model() -> str:
    """Model of the first VGA controller, or 'Error.' if it cannot be found."""
    try:
        completed = subprocess.run(
            GPU_COMMAND,
            shell=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return GPU_ERROR
    lines = completed.stdout.decode("utf-8", errors="replace").splitlines()
    if not lines:
        return GPU_ERROR
    try:
        return parse_gpu_model(lines[0])
    except ValueError:
        return GPU_ERROR


def parse_uptime(text: str) -> Uptime:
    """Split the leading seconds count of an uptime record into days, hours, minutes."""
    match = _LEADING_FLOAT.match(text)
    seconds = float(match.group(1)) if match else 0.0
    total_minutes = int(seconds / 60)
    return Uptime(
        days=_trunc_div(total_minutes, 60 * 24),
        hours=_trunc_div(total_minutes, 60) % 24,
        minutes=total_minutes % 60,
    )


def get_uptime(path: str | os.PathLike = PROC_UPTIME) -> Uptime:
    """Time since boot; zero (with a message on stderr) if it cannot be read."""
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        print(f"Error opening {path}", file=sys.stderr)
        return Uptime()
    if not text:
        print(f"Error reading from {path}", file=sys.stderr)
        return Uptime()
    return parse_uptime(text)


def get_current_username() -> str | None:
    """Name of the user logged in on the controlling terminal, or None."""
    try:
        return os.getlogin()
    except OSError:
        return None