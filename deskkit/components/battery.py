"""Battery level, charging state and remaining time from sysfs."""

from __future__ import annotations

import os
from pathlib import Path

from deskkit.util import read_int, read_text

POWER_SUPPLY = "/sys/class/power_supply"

_STATE_SYMBOLS = {"Charging": "+", "Discharging": "-"}


def _pick(base: Path, *names: str) -> Path | None:
    for name in names:
        candidate = base / name
        if os.access(candidate, os.R_OK):
            return candidate
    return None


def _read_state(base: Path) -> str | None:
    text = read_text(base / "status")
    if text is None:
        return None
    tokens = text.split()
    return tokens[0][:12] if tokens else None


def battery_perc(bat: str, root: str | os.PathLike = POWER_SUPPLY) -> str | None:
    """Battery charge in percent."""
    perc = read_int(Path(root) / bat / "capacity")
    return None if perc is None else str(perc)


def battery_state(bat: str, root: str | os.PathLike = POWER_SUPPLY) -> str | None:
    """'+' when charging, '-' when discharging, '?' otherwise."""
    state = _read_state(Path(root) / bat)
    if state is None:
        return None
    return _STATE_SYMBOLS.get(state, "?")


def battery_remaining(bat: str, root: str | os.PathLike = POWER_SUPPLY) -> str | None:
    """Remaining time as 'Hh Mm' while discharging, '' otherwise."""
    base = Path(root) / bat
    state = _read_state(base)
    if state is None:
        return None

    charge_path = _pick(base, "charge_now", "energy_now")
    if charge_path is None:
        return None
    charge_now = read_int(charge_path)
    if charge_now is None:
        return None

    if state != "Discharging":
        return ""

    current_path = _pick(base, "current_now", "power_now")
    if current_path is None:
        return None
    current_now = read_int(current_path)
    if not current_now:
        return None

    timeleft = charge_now / current_now
    hours = int(timeleft)
    minutes = int((timeleft - hours) * 60)
    return f"{hours}h {minutes}m"