"""Master volume from an OSS mixer device."""

from __future__ import annotations

import fcntl
import os
import struct

from deskkit.util import warn

_IOC_READ = 2
SOUND_MIXER_VOLUME = 0


def _ior(number: int) -> int:
    """Encode a read ioctl of the 'M' mixer group returning an int."""
    return (_IOC_READ << 30) | (struct.calcsize("i") << 16) | (ord("M") << 8) | number


SOUND_MIXER_READ_DEVMASK = _ior(0xFE)


def _ioctl_int(fd: int, request: int) -> int:
    buffer = bytearray(struct.calcsize("i"))
    fcntl.ioctl(fd, request, buffer, True)
    return struct.unpack("i", buffer)[0]


def vol_perc(card: str | os.PathLike) -> str | None:
    """Volume of the mixer's master channel in percent."""
    try:
        fd = os.open(card, os.O_RDONLY | os.O_NONBLOCK)
    except OSError as exc:
        warn(f"open '{card}': {exc.strerror or exc}")
        return None

    try:
        try:
            devmask = _ioctl_int(fd, SOUND_MIXER_READ_DEVMASK)
        except OSError as exc:
            warn(f"ioctl 'SOUND_MIXER_READ_DEVMASK': {exc.strerror or exc}")
            return None
        if not devmask & (1 << SOUND_MIXER_VOLUME):
            warn(f"mixer '{card}' has no volume control")
            return None
        try:
            level = _ioctl_int(fd, _ior(SOUND_MIXER_VOLUME))
        except OSError as exc:
            warn(f"ioctl 'MIXER_READ({SOUND_MIXER_VOLUME})': {exc.strerror or exc}")
            return None
    finally:
        os.close(fd)

    return str(level & 0xFF)