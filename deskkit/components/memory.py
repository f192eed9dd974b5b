"""Memory and swap usage from /proc/meminfo."""

from __future__ import annotations

import os

from deskkit.util import fmt_human, read_text

MEMINFO = "/proc/meminfo"


def _meminfo(path: str | os.PathLike) -> dict[str, int] | None:
    """Map each 'Name: value kB' line to its value in kB."""
    text = read_text(path)
    if text is None:
        return None
    fields: dict[str, int] = {}
    for line in text.splitlines():
        name, sep, rest = line.partition(":")
        if not sep:
            continue
        values = rest.split()
        if values and values[0].isdigit():
            fields[name.strip()] = int(values[0])
    return fields


def _fields(path: str | os.PathLike, *names: str) -> tuple[int, ...] | None:
    info = _meminfo(path)
    if info is None:
        return None
    try:
        return tuple(info[name] for name in names)
    except KeyError:
        return None


def _div(numerator: int, denominator: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def ram_free(path: str | os.PathLike = MEMINFO) -> str | None:
    """Memory available for new allocations."""
    fields = _fields(path, "MemAvailable")
    if fields is None:
        return None
    (available,) = fields
    return fmt_human(available * 1024, 1024)


def ram_perc(path: str | os.PathLike = MEMINFO) -> str | None:
    """Memory usage in percent, not counting buffers and cache."""
    fields = _fields(path, "MemTotal", "MemFree", "Buffers", "Cached")
    if fields is None:
        return None
    total, free, buffers, cached = fields
    if total == 0:
        return None
    return str(_div(100 * ((total - free) - (buffers + cached)), total))


def ram_total(path: str | os.PathLike = MEMINFO) -> str | None:
    """Total memory size."""
    fields = _fields(path, "MemTotal")
    if fields is None:
        return None
    (total,) = fields
    return fmt_human(total * 1024, 1024)


def ram_used(path: str | os.PathLike = MEMINFO) -> str | None:
    """Memory in use, not counting buffers and cache."""
    fields = _fields(path, "MemTotal", "MemFree", "Buffers", "Cached")
    if fields is None:
        return None
    total, free, buffers, cached = fields
    return fmt_human((total - free - buffers - cached) * 1024, 1024)


def swap_free(path: str | os.PathLike = MEMINFO) -> str | None:
    """Unused swap space."""
    fields = _fields(path, "SwapFree")
    if fields is None:
        return None
    (free,) = fields
    return fmt_human(free * 1024, 1024)


def swap_perc(path: str | os.PathLike = MEMINFO) -> str | None:
    """Swap usage in percent, not counting swap cache."""
    fields = _fields(path, "SwapTotal", "SwapFree", "SwapCached")
    if fields is None:
        return None
    total, free, cached = fields
    if total == 0:
        return None
    return str(_div(100 * (total - free - cached), total))


def swap_total(path: str | os.PathLike = MEMINFO) -> str | None:
    """Total swap space."""
    fields = _fields(path, "SwapTotal")
    if fields is None:
        return None
    (total,) = fields
    return fmt_human(total * 1024, 1024)


def swap_used(path: str | os.PathLike = MEMINFO) -> str | None:
    """Swap space in use, not counting swap cache."""
    fields = _fields(path, "SwapTotal", "SwapFree", "SwapCached")
    if fields is None:
        return None
    total, free, cached = fields
    return fmt_human((total - free - cached) * 1024, 1024)