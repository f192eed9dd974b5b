"""Disk space, directory size, temperature and shell command output."""

from __future__ import annotations

import os
import subprocess

from deskkit.util import fmt_human, read_int, warn

_MAX_LINE = 1022


def _statvfs(path: str | os.PathLike) -> os.statvfs_result | None:
    try:
        return os.statvfs(path)
    except OSError as exc:
        warn(f"statvfs '{path}': {exc.strerror or exc}")
        return None


def disk_free(path: str | os.PathLike) -> str | None:
    """Space available to unprivileged users."""
    fs = _statvfs(path)
    return None if fs is None else fmt_human(fs.f_frsize * fs.f_bavail, 1024)


def disk_perc(path: str | os.PathLike) -> str | None:
    """Disk usage in percent."""
    fs = _statvfs(path)
    if fs is None or fs.f_blocks == 0:
        return None
    return str(int(100 * (1.0 - fs.f_bavail / fs.f_blocks)))


def disk_total(path: str | os.PathLike) -> str | None:
    """Total size of the filesystem."""
    fs = _statvfs(path)
    return None if fs is None else fmt_human(fs.f_frsize * fs.f_blocks, 1024)


def disk_used(path: str | os.PathLike) -> str | None:
    """Used space on the filesystem."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * (fs.f_blocks - fs.f_bfree), 1024)


def num_files(path: str | os.PathLike) -> str | None:
    """Number of entries in a directory."""
    try:
        return str(len(os.listdir(path)))
    except OSError as exc:
        warn(f"opendir '{path}': {exc.strerror or exc}")
        return None


def temp(file: str | os.PathLike) -> str | None:
    """Temperature in degrees Celsius from a millidegree sensor file."""
    value = read_int(file)
    return None if value is None else str(value // 1000)


def run_command(cmd: str) -> str | None:
    """First line printed by a shell command, or None if it printed nothing."""
    try:
        completed = subprocess.run(
            cmd, shell=True, stdout=subprocess.PIPE, check=False
        )
    except OSError as exc:
        warn(f"popen '{cmd}': {exc}")
        return None
    output = completed.stdout.decode("utf-8", errors="replace")
    line = output.split("\n", 1)[0][:_MAX_LINE]
    return line or None