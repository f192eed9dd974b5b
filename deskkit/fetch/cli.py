"""Full-screen summary of the machine's hardware and software."""

from __future__ import annotations

import os
import shutil
import sys
from functools import cached_property

from deskkit.fetch.info import (
    get_cpu_info,
    get_current_username,
    get_disk_info,
    get_gpu_model,
    get_memory_total,
    get_memory_usage,
    get_system_info,
    get_uptime,
)

RESET = "\033[0m"
RED = "\033[0;31m"
YELLOW = "\033[0;33m"
MAGENTA = "\033[0;35m"
WHITE = "\033[0;37m"

_BACKGROUNDS = (
    "\033[47m",
    "\033[41m",
    "\033[42m",
    "\033[43m",
    "\033[44m",
    "\033[45m",
    "\033[46m",
    "\033[47m",
)
SQUARES = "".join(f"{bg}    {RESET}" for bg in _BACKGROUNDS)
_SQUARES_WIDTH = 4 * len(_BACKGROUNDS)

ENTER_SCREEN = "\033[?1049h\033[?25l"
LEAVE_SCREEN = "\033[?1049l\033[?25h"

OS_RELEASE = "/etc/os-release"
_BUFFER_BYTES = 99
_LABEL_WIDTH = 27

_ICONS = (
    ("CPU", " "),
    ("RAM", "\U000f035b "),
    ("Disk", " "),
    ("Kernel", " "),
    ("GPU", " "),
    ("Uptime", " "),
    ("OS", " "),
    ("Host", "\U000f03d4 "),
    ("Shell", " "),
    ("WM", " "),
)

_BANNER = (
    "   ▄   ▄████  ▄███▄     ▄▄▄▄▀ ▄█▄     ▄  █ ",
    "    █  █▀   ▀ █▀   ▀ ▀▀▀ █    █▀ ▀▄  █   █ ",
    "██   █ █▀▀    ██▄▄       █    █   ▀  ██▀▀█ ",
    "█ █  █ █      █▄   ▄▀   █     █▄  ▄▀ █   █ ",
    "█  █ █  █     ▀███▀    ▀      ▀███▀     █  ",
    "█   ██   ▀                             ▀   ",
    "                                           ",
)
_OPTIONS = (
    "--cpu --ram --gpu --disk --host --kernel --os --shell --uptime "
    "--colors --wm --user"
)
_USAGE = RED + "\n".join(_BANNER) + f"\n{YELLOW}Usage:\n\n{_OPTIONS}"


def _half(value: int) -> int:
    """Half of an integer, truncated toward zero."""
    return -((-value) // 2) if value < 0 else value // 2


def _truncate(text: str, limit: int) -> str:
    return text.encode("utf-8")[:limit].decode("utf-8", errors="ignore")


def format_info(label: str, value: str) -> str:
    """One coloured 'icon label value' line, limited to the line buffer size."""
    if "Usage" in label:
        return MAGENTA
    color, icon = next(
        ((MAGENTA, icon) for key, icon in _ICONS if key in label), (RESET, "")
    )
    text = f"{color:>{_LABEL_WIDTH}}{icon}{label} {WHITE} {value}{RESET}"
    return _truncate(text, _BUFFER_BYTES)


def centered(text: str, width: int) -> str:
    """Indent ``text`` so that it sits in the middle of a ``width``-column line."""
    offset = _half(width - len(text.encode("utf-8")))
    return " " * abs(offset) + text


def color_squares(width: int) -> str:
    """A blank line followed by the centered row of colour squares."""
    offset = _half(width - _SQUARES_WIDTH)
    return "\n" + " " * abs(offset) + SQUARES


def read_os_name(path: str | os.PathLike = OS_RELEASE) -> str:
    """PRETTY_NAME from an os-release file; raises OSError if it cannot be read."""
    with open(path, encoding="utf-8", errors="replace") as release:
        for line in release:
            if line.startswith("PRETTY_NAME="):
                return _truncate(line[13:], _BUFFER_BYTES).split('"', 1)[0]
    return "Unknown OS"


class _Facts:
    """System facts, each gathered the first time it is needed."""

    @cached_property
    def system(self):
        return get_system_info()

    @cached_property
    def cpu(self):
        return get_cpu_info()

    @cached_property
    def uptime(self):
        return get_uptime()

    @cached_property
    def gpu(self) -> str:
        return get_gpu_model()


class _Screen:
    """Collects the text of the summary, in the order it is to be shown."""

    def __init__(self, width: int) -> None:
        self.width = width
        self.facts = _Facts()
        self.parts: list[str] = []

    def add(self, text: str, end: str = "\n") -> None:
        self.parts.append(text + end)

    def text(self) -> str:
        return "".join(self.parts)

    def info(self, label: str, value: str) -> None:
        text = format_info(label, value)
        if "Usage" in label:
            self.add(text, end="")
        else:
            self.add(centered(text, self.width))

    def memory(self) -> None:
        used, total = get_memory_usage(), get_memory_total()
        self.info("RAM", f"{used / 1024:.2f} GB of {total / 1024:.2f} GB")

    def disk(self) -> None:
        try:
            disk = get_disk_info("/")
        except OSError:
            self.add("Failed to get disk information.")
            return
        gib = 1024 ** 3
        self.info(
            "Disk",
            f"Used: {disk.used_space // gib} GB, Total: {disk.total_space // gib} GB",
        )

    def uptime(self) -> None:
        up = self.facts.uptime
        self.info("Uptime", f"{up.days}d {up.hours}h {up.minutes}m")

    def window_manager(self) -> None:
        self.info("WM", os.environ.get("DESKTOP_SESSION") or "Unknown")

    def os_name(self) -> None:
        try:
            name = read_os_name()
        except OSError as exc:
            print(
                f"Failed to open {OS_RELEASE}: {exc.strerror or exc}",
                file=sys.stderr,
            )
            return
        self.info("OS", name)

    def user(self) -> None:
        self.info("Hi, ", get_current_username() or "Unknown")

    def option(self, arg: str) -> None:
        facts = self.facts
        actions = {
            "--help": lambda: self.add(_USAGE),
            "--cpu": lambda: self.info("CPU", facts.cpu.model),
            "--ram": self.memory,
            "--gpu": lambda: self.info("GPU", facts.gpu),
            "--disk": self.disk,
            "--host": lambda: self.info("Hostname", facts.system.device_name),
            "--kernel": lambda: self.info("Kernel", facts.system.kernel),
            "--os": self.os_name,
            "--shell": lambda: self.info("Shell", facts.system.shell),
            "--uptime": self.uptime,
            "--colors": lambda: self.add(color_squares(self.width)),
            "--wm": self.window_manager,
            "--user": self.user,
        }
        action = actions.get(arg)
        if action is not None:
            action()


def main(argv: list[str] | None = None) -> int:
    """Show the summary on the alternate screen until a key is pressed."""
    args = sys.argv[1:] if argv is None else list(argv)
    print(ENTER_SCREEN, end="")

    size = shutil.get_terminal_size()
    screen = _Screen(size.columns)

    output_lines = len(args) if args else 8
    empty_lines = max(0, _half(size.lines - output_lines))
    screen.add("\n" * empty_lines, end="")

    if not args:
        system = screen.facts.system
        screen.info("Kernel", system.kernel)
        screen.info("Hostname", system.device_name)
        screen.window_manager()
        screen.info("Shell", system.shell)
        screen.uptime()
        screen.add(color_squares(screen.width))

    for arg in args:
        screen.option(arg)

    screen.add("\n" * empty_lines, end="")
    sys.stdout.write(screen.text())
    sys.stdout.flush()

    sys.stdin.read(1)
    print(LEAVE_SCREEN, end="", flush=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())