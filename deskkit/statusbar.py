"""Status line that is refreshed once per interval.

The line goes to the name of the X root window, or to stdout with ``-s``.
"""

from __future__ import annotations

import os
import signal
import socket
import struct
import sys
import time
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from deskkit.components.cpu import cpu_perc
from deskkit.components.system import datetime_str
from deskkit.util import warn

INTERVAL_MS = 1000
UNKNOWN_STR = "n/a"
MAXLEN = 2048

_X_OPCODE_CHANGE_PROPERTY = 18
_X_ATOM_WM_NAME = 39
_X_ATOM_STRING = 31
_X_MAX_REQUEST_UNITS = 0xFFFF
_X_AUTH_NAME = b"MIT-MAGIC-COOKIE-1"
_X_FAMILY_LOCAL = 256


@dataclass(frozen=True)
class Component:
    """One piece of the status line: a value source and a printf-style format."""

    func: Callable[..., str | None]
    fmt: str = "%s"
    arg: str | None = None

    def render(self, unknown: str = UNKNOWN_STR) -> str:
        """Format the current value, using ``unknown`` when none is available."""
        value = self.func() if self.arg is None else self.func(self.arg)
        if value is None:
            value = unknown
        return self.fmt % value


@dataclass(frozen=True)
class Options:
    """Parsed command-line options."""

    stdout: bool = False


def default_components() -> list[Component]:
    """The components shown by default: CPU usage and the date and time."""
    return [
        Component(cpu_perc, "  %s%%  "),
        Component(datetime_str, " %s", "%H:%M  󰃭 %a %d/%m "),
    ]


def render_status(
    components: Iterable[Component],
    unknown: str = UNKNOWN_STR,
    maxlen: int = MAXLEN,
) -> str:
    """Join the rendered components, stopping before the first that would overflow."""
    parts: list[str] = []
    used = 0
    for component in components:
        piece = component.render(unknown)
        size = len(piece.encode("utf-8"))
        if used + size >= maxlen:
            warn("vsnprintf: Output truncated")
            break
        parts.append(piece)
        used += size
    return "".join(parts)


def parse_args(argv: Iterable[str]) -> Options:
    """Parse the arguments that follow the program name; ValueError on bad usage."""
    rest = list(argv)
    stdout = False
    while rest and rest[0].startswith("-") and len(rest[0]) > 1:
        flag = rest.pop(0)
        if flag == "--":
            break
        for char in flag[1:]:
            if char != "s":
                raise ValueError(f"unknown option -{char}")
            stdout = True
    if rest:
        raise ValueError(f"unexpected argument '{rest[0]}'")
    return Options(stdout=stdout)


class _XDisplayError(OSError):
    """The X server could not be reached or refused the connection."""


def _pad4(data: bytes) -> bytes:
    return data + bytes(-len(data) % 4)


def _parse_display(name: str) -> tuple[str, int, int]:
    host, sep, rest = name.rpartition(":")
    if not sep:
        raise _XDisplayError(f"bad display name '{name}'")
    number, _, screen = rest.partition(".")
    try:
        return host, int(number), int(screen or 0)
    except ValueError:
        raise _XDisplayError(f"bad display name '{name}'") from None


def _xauthority_entries(data: bytes) -> Iterator[tuple[int, bytes, bytes, bytes, bytes]]:
    offset = 0

    def field() -> bytes:
        nonlocal offset
        (length,) = struct.unpack_from(">H", data, offset)
        value = data[offset + 2:offset + 2 + length]
        offset += 2 + length
        return value

    while offset + 2 <= len(data):
        try:
            (family,) = struct.unpack_from(">H", data, offset)
            offset += 2
            address, number, name, cookie = field(), field(), field(), field()
        except struct.error:
            return
        yield family, address, number, name, cookie


def _find_cookie(number: int, path: str | os.PathLike | None = None) -> tuple[bytes, bytes]:
    if path is None:
        path = os.environ.get("XAUTHORITY") or Path.home() / ".Xauthority"
    try:
        data = Path(path).read_bytes()
    except OSError:
        return b"", b""
    wanted = str(number).encode()
    local = socket.gethostname().encode()
    fallback: tuple[bytes, bytes] | None = None
    for family, address, entry_number, name, cookie in _xauthority_entries(data):
        if name != _X_AUTH_NAME or entry_number not in (b"", wanted):
            continue
        if family == _X_FAMILY_LOCAL and address == local:
            return name, cookie
        if fallback is None:
            fallback = (name, cookie)
    return fallback or (b"", b"")


class _RootWindow:
    """Minimal X11 client that can set the name of a screen's root window."""

    def __init__(
        self,
        sock: socket.socket,
        auth_name: bytes = b"",
        auth_data: bytes = b"",
        screen: int = 0,
    ) -> None:
        self._sock = sock
        self.root = self._handshake(auth_name, auth_data, screen)

    @classmethod
    def open(cls, display: str | None = None) -> _RootWindow:
        """Connect to the display named by ``display`` or $DISPLAY."""
        display = display if display is not None else os.environ.get("DISPLAY")
        if not display:
            raise _XDisplayError("DISPLAY is not set")
        host, number, screen = _parse_display(display)
        if host in ("", "unix"):
            sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            try:
                sock.connect(f"/tmp/.X11-unix/X{number}")
            except OSError:
                sock.close()
                raise
        else:
            sock = socket.create_connection((host, 6000 + number))
        auth_name, auth_data = _find_cookie(number)
        try:
            return cls(sock, auth_name, auth_data, screen)
        except Exception:
            sock.close()
            raise

    def _recv_exact(self, size: int) -> bytes:
        chunks = bytearray()
        while len(chunks) < size:
            chunk = self._sock.recv(size - len(chunks))
            if not chunk:
                raise _XDisplayError("connection closed by X server")
            chunks += chunk
        return bytes(chunks)

    def _handshake(self, auth_name: bytes, auth_data: bytes, screen: int) -> int:
        request = struct.pack(
            "<BxHHHH2x", 0x6C, 11, 0, len(auth_name), len(auth_data)
        )
        self._sock.sendall(request + _pad4(auth_name) + _pad4(auth_data))

        status, reason_len, _major, _minor, units = struct.unpack(
            "<BBHHH", self._recv_exact(8)
        )
        body = self._recv_exact(units * 4)
        if status == 0:
            reason = body[:reason_len].decode("latin-1", errors="replace")
            raise _XDisplayError(f"connection refused: {reason}")
        if status != 1:
            raise _XDisplayError("X server requires further authentication")

        try:
            vendor_len, _max_request, nscreens, nformats = struct.unpack_from(
                "<HHBB", body, 16
            )
            if screen >= nscreens:
                raise _XDisplayError(f"no screen {screen}")
            offset = 32 + vendor_len + (-vendor_len % 4) + 8 * nformats
            for _ in range(screen):
                ndepths = body[offset + 39]
                offset += 40
                for _ in range(ndepths):
                    (nvisuals,) = struct.unpack_from("<H", body, offset + 2)
                    offset += 8 + 24 * nvisuals
            (root,) = struct.unpack_from("<I", body, offset)
        except (struct.error, IndexError):
            raise _XDisplayError("malformed connection setup reply") from None
        return root

    def store_name(self, name: bytes | None) -> None:
        """Replace the root window's WM_NAME; None stores an empty name."""
        data = name or b""
        padded = _pad4(data)
        units = 6 + len(padded) // 4
        if units > _X_MAX_REQUEST_UNITS:
            raise _XDisplayError("name too long")
        header = struct.pack(
            "<BBHIIIB3xI",
            _X_OPCODE_CHANGE_PROPERTY,
            0,
            units,
            self.root,
            _X_ATOM_WM_NAME,
            _X_ATOM_STRING,
            8,
            len(data),
        )
        self._sock.sendall(header + padded)

    def close(self) -> None:
        self._sock.close()

    def __enter__(self) -> _RootWindow:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class _StopFlag:
    requested = False

    def __call__(self, signo: int, frame: object) -> None:
        self.requested = True


def _program_name() -> str:
    return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "statusbar"


def main(argv: list[str] | None = None) -> int:
    """Run the status loop until SIGINT or SIGTERM; return the exit status."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        options = parse_args(args)
    except ValueError:
        warn(f"usage: {_program_name()} [-s]")
        return 1

    window: _RootWindow | None = None
    if not options.stdout:
        try:
            window = _RootWindow.open()
        except OSError:
            warn("XOpenDisplay: Failed to open display")
            return 1

    stop = _StopFlag()
    previous = {sig: signal.signal(sig, stop) for sig in (signal.SIGINT, signal.SIGTERM)}
    components = default_components()
    try:
        while not stop.requested:
            start = time.monotonic()
            status = render_status(components)

            if window is None:
                try:
                    print(status, flush=True)
                except OSError as exc:
                    warn(f"puts: {exc.strerror or exc}")
                    return 1
            else:
                try:
                    window.store_name(status.encode("utf-8"))
                except OSError:
                    warn("XStoreName: Allocation failed")
                    return 1

            if not stop.requested:
                wait = INTERVAL_MS / 1000 - (time.monotonic() - start)
                if wait >= 0:
                    time.sleep(wait)

        if window is not None:
            try:
                window.store_name(None)
            except OSError:
                warn("XCloseDisplay: Failed to close display")
                return 1
    finally:
        if window is not None:
            window.close()
        for sig, handler in previous.items():
            signal.signal(sig, handler)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())