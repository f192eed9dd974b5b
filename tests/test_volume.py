import struct
from unittest import mock

import pytest

from deskkit.components import volume


@pytest.fixture
def card(tmp_path):
    path = tmp_path / "mixer"
    path.write_bytes(b"")
    return path


def _fake_ioctl(devmask, level):
    def fake(fd, request, buffer, mutate=True):
        value = devmask if request == volume.SOUND_MIXER_READ_DEVMASK else level
        struct.pack_into("i", buffer, 0, value)
        return 0

    return fake


def test_missing_device(tmp_path):
    assert volume.vol_perc(tmp_path / "absent") is None


def test_regular_file_is_not_a_mixer(card):
    assert volume.vol_perc(card) is None


def test_reads_left_channel_level(card):
    with mock.patch("fcntl.ioctl", side_effect=_fake_ioctl(1, 0x4B4B)):
        assert volume.vol_perc(card) == "75"


def test_level_masked_to_low_byte(card):
    with mock.patch("fcntl.ioctl", side_effect=_fake_ioctl(1, 0x6400 | 0x32)):
        assert volume.vol_perc(card) == str(0x32)


def test_no_volume_control(card):
    with mock.patch("fcntl.ioctl", side_effect=_fake_ioctl(0b10, 0x4B4B)):
        assert volume.vol_perc(card) is None


def test_read_failure(card):
    with mock.patch("fcntl.ioctl", side_effect=OSError(25, "Inappropriate ioctl")):
        assert volume.vol_perc(card) is None