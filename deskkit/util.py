"""Small helpers shared by the status components."""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path

_PREFIXES = {
    1000: ("", "k", "M", "G", "T", "P", "E", "Z", "Y"),
    1024: ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"),
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def warn(message: str) -> None:
    """Write a diagnostic line to stderr, prefixed with the program name."""
    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else ""
    if prog and not message.startswith("usage"):
        message = f"{prog}: {message}"
    print(message, file=sys.stderr)


def fmt_human(num: float, base: int) -> str:
    """Format a quantity with a decimal (1000) or binary (1024) prefix."""
    try:
        prefixes = _PREFIXES[base]
    except KeyError:
        raise ValueError(f"fmt_human: invalid base {base}") from None

    scaled = float(num)
    index = 0
    while index < len(prefixes) - 1 and scaled >= base:
        scaled /= base
        index += 1
    return f"{scaled:.1f} {prefixes[index]}"


def read_text(path: str | os.PathLike) -> str | None:
    """Return the contents of a file, or None (with a warning) if it cannot be read."""
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        warn(f"open '{path}': {exc.strerror or exc}")
        return None


def read_int(path: str | os.PathLike) -> int | None:
    """Return the integer at the start of a file, or None."""
    text = read_text(path)
    if text is None:
        return None
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None