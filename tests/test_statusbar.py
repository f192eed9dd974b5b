import socket
import struct

import pytest

from deskkit.components.cpu import cpu_perc
from deskkit.components.system import datetime_str
from deskkit.statusbar import (
    Component,
    _RootWindow,
    _XDisplayError,
    default_components,
    main,
    parse_args,
    render_status,
)


def test_render_formats_value():
    assert Component(lambda: "x", "[%s]").render() == "[x]"


def test_render_missing_value_uses_unknown():
    assert Component(lambda: None, "%s").render() == "n/a"
    assert Component(lambda: None, "<%s>").render("??") == "<??>"


def test_render_passes_argument():
    seen = []

    def func(arg):
        seen.append(arg)
        return arg

    assert Component(func, "<%s>", "abc").render() == "<abc>"
    assert seen == ["abc"]


def test_render_percent_escape():
    assert Component(lambda: "50", "%s%%").render() == "50%"


def test_render_status_joins_in_order():
    parts = [Component(lambda: "a"), Component(lambda: None), Component(lambda: "b")]
    assert render_status(parts, unknown="-") == "a-b"


def test_render_status_stops_before_overflow(capsys):
    parts = [Component(lambda: "abc"), Component(lambda: "defgh"), Component(lambda: "i")]
    result = render_status(parts, maxlen=8)
    assert result == "abc"
    assert "truncated" in capsys.readouterr().err


def test_render_status_counts_bytes():
    parts = [Component(lambda: "é"), Component(lambda: "éé")]
    result = render_status(parts, maxlen=5)
    assert result == "é"
    assert len(result.encode("utf-8")) < 5


def test_render_status_empty():
    assert render_status([]) == ""


def test_default_components():
    components = default_components()
    assert [c.func for c in components] == [cpu_perc, datetime_str]
    assert components[1].arg == "%H:%M  󰃭 %a %d/%m "
    assert components[0].arg is None


@pytest.mark.parametrize(
    "argv, stdout",
    [([], False), (["-s"], True), (["-ss"], True), (["--"], False), (["-s", "--"], True)],
)
def test_parse_args_accepts(argv, stdout):
    assert parse_args(argv).stdout is stdout


@pytest.mark.parametrize("argv", [["-x"], ["foo"], ["-"], ["--", "-s"], ["-s", "extra"], ["-sx"]])
def test_parse_args_rejects(argv):
    with pytest.raises(ValueError):
        parse_args(argv)


def test_main_usage_error(capsys):
    assert main(["-x"]) == 1
    assert "usage:" in capsys.readouterr().err


def test_main_without_display(monkeypatch, capsys):
    monkeypatch.delenv("DISPLAY", raising=False)
    assert main([]) == 1
    assert "XOpenDisplay" in capsys.readouterr().err


def _setup_reply(root, status=1, reason=b""):
    if status != 1:
        body = reason + bytes(-len(reason) % 4)
        return struct.pack("<BBHHH", status, len(reason), 11, 0, len(body) // 4) + body
    vendor = b"test"
    body = struct.pack("<IIIIHHBBBBBBBB4x", 0, 0, 0, 0, len(vendor), 0xFFFF, 1, 0, 0, 0, 32, 32, 8, 255)
    body += vendor
    body += struct.pack("<I", root) + bytes(36)
    return struct.pack("<BBHHH", 1, 0, 11, 0, len(body) // 4) + body


def _recv_exact(sock, size):
    data = b""
    while len(data) < size:
        data += sock.recv(size - len(data))
    return data


def test_root_window_store_name():
    client, server = socket.socketpair()
    root = 0x1234
    server.sendall(_setup_reply(root))
    with server, _RootWindow(client) as window:
        assert window.root == root
        setup = _recv_exact(server, 12)
        assert setup[0] == 0x6C
        assert struct.unpack_from("<H", setup, 2)[0] == 11

        window.store_name(b"hello")
        header = _recv_exact(server, 24)
        opcode, mode, units, win, prop, typ, fmt, length = struct.unpack("<BBHIIIB3xI", header)
        payload = _recv_exact(server, units * 4 - 24)
        assert opcode == 18
        assert win == root
        assert fmt == 8
        assert payload[:length] == b"hello"
        assert units * 4 == 24 + len(payload)


def test_root_window_empty_name():
    client, server = socket.socketpair()
    server.sendall(_setup_reply(7))
    with server, _RootWindow(client) as window:
        assert window.root == 7
        _recv_exact(server, 12)
        window.store_name(None)
        header = _recv_exact(server, 24)
        opcode = header[0]
        units = struct.unpack_from("<H", header, 2)[0]
        win = struct.unpack_from("<I", header, 4)[0]
        length = struct.unpack_from("<I", header, 20)[0]
        assert opcode == 18
        assert win == window.root
        assert units == 6
        assert length == 0


def test_root_window_refused():
    client, server = socket.socketpair()
    server.sendall(_setup_reply(0, status=0, reason=b"denied"))
    with server, client:
        with pytest.raises(_XDisplayError, match="denied"):
            _RootWindow(client)


def test_root_window_missing_screen():
    client, server = socket.socketpair()
    server.sendall(_setup_reply(5))
    with server, client:
        with pytest.raises(_XDisplayError):
            _RootWindow(client, screen=3)