from unittest import mock

import pytest

from deskkit.components import wifi

WIRELESS = (
    "Inter-| sta-|   Quality        |   Discarded packets               | Missed | WE\n"
    " face | tus | link level noise |  nwid  crypt   frag  retry   misc | beacon | 22\n"
    " wlan0: 0000   56.  -54.  -256        0      0      0      0     12        0\n"
)


def _make_root(tmp_path, operstate="up\n", wireless=WIRELESS):
    net = tmp_path / "sys" / "class" / "net" / "wlan0"
    net.mkdir(parents=True)
    (net / "operstate").write_text(operstate)
    proc = tmp_path / "proc" / "net"
    proc.mkdir(parents=True)
    (proc / "wireless").write_text(wireless)
    return tmp_path


def test_wifi_perc_reads_link_quality(tmp_path):
    root = _make_root(tmp_path)
    assert wifi.wifi_perc("wlan0", root) == "80"


def test_wifi_perc_in_range(tmp_path):
    root = _make_root(tmp_path)
    assert 0 <= int(wifi.wifi_perc("wlan0", root)) <= 100


def test_wifi_perc_interface_down(tmp_path):
    root = _make_root(tmp_path, operstate="down\n")
    assert wifi.wifi_perc("wlan0", root) is None


def test_wifi_perc_interface_not_listed(tmp_path):
    root = _make_root(tmp_path)
    net = tmp_path / "sys" / "class" / "net" / "wlan1"
    net.mkdir(parents=True)
    (net / "operstate").write_text("up\n")
    assert wifi.wifi_perc("wlan1", root) is None


def test_wifi_perc_too_few_lines(tmp_path):
    root = _make_root(tmp_path, wireless="".join(WIRELESS.splitlines(True)[:2]))
    assert wifi.wifi_perc("wlan0", root) is None


def test_wifi_perc_missing_operstate(tmp_path):
    assert wifi.wifi_perc("wlan0", tmp_path) is None


def test_wifi_essid_name_too_long():
    assert wifi.wifi_essid("x" * 20) is None


def test_wifi_essid_ioctl_failure():
    with mock.patch("fcntl.ioctl", side_effect=OSError(19, "No such device")):
        assert wifi.wifi_essid("wlan0") is None


def test_wifi_essid_empty_result_is_none():
    with mock.patch("fcntl.ioctl", return_value=b"") as ioctl:
        assert wifi.wifi_essid("wlan0") is None
    assert ioctl.call_args.args[1] == wifi.SIOCGIWESSID


@pytest.mark.parametrize("name", ["nosuchif-x0"])
def test_wifi_essid_unknown_interface(name):
    assert wifi.wifi_essid(name) is None