"""CPU frequency and usage."""

from __future__ import annotations

import os

from deskkit.util import fmt_human, read_int, read_text

PROC_STAT = "/proc/stat"
SCALING_CUR_FREQ = "/sys/devices/system/cpu/cpu0/cpufreq/scaling_cur_freq"


class CpuUsage:
    """Tracks /proc/stat between samples to compute CPU usage in percent."""

    def __init__(self, stat_path: str | os.PathLike = PROC_STAT) -> None:
        self.stat_path = stat_path
        self._previous: tuple[float, ...] | None = None

    def _read(self) -> tuple[float, ...] | None:
        text = read_text(self.stat_path)
        if text is None:
            return None
        fields = text.split()[1:8]
        if len(fields) != 7:
            return None
        try:
            return tuple(float(field) for field in fields)
        except ValueError:
            return None

    def sample(self) -> str | None:
        """Usage since the previous sample, or None on the first one."""
        current = self._read()
        if current is None:
            return None
        previous, self._previous = self._previous, current
        if previous is None or previous[0] == 0:
            return None

        total = sum(previous) - sum(current)
        if total == 0:
            return None
        # user nice system idle iowait irq softirq: idle and iowait are not busy
        busy_prev = sum(previous) - previous[3] - previous[4]
        busy_cur = sum(current) - current[3] - current[4]
        return str(int(100 * (busy_prev - busy_cur) / total))


_usage = CpuUsage()


def cpu_freq(path: str | os.PathLike = SCALING_CUR_FREQ) -> str | None:
    """Current frequency of the first CPU."""
    freq = read_int(path)  # kHz
    if freq is None:
        return None
    return fmt_human(freq * 1000, 1000)


def cpu_perc() -> str | None:
    """CPU usage in percent since the previous call."""
    return _usage.sample()