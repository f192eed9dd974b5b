import pytest

from deskkit.components import memory
from deskkit.util import fmt_human

SAMPLE = """MemTotal:       16000000 kB
MemFree:         4000000 kB
MemAvailable:    8000000 kB
Buffers:         1000000 kB
Cached:          3000000 kB
SwapCached:            0 kB
SwapTotal:       2097152 kB
SwapFree:        1048576 kB
"""


@pytest.fixture
def meminfo(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text(SAMPLE)
    return path


def test_ram_perc(meminfo):
    assert memory.ram_perc(meminfo) == "50"


def test_ram_free_uses_available(meminfo):
    assert memory.ram_free(meminfo) == fmt_human(8000000 * 1024, 1024)


def test_ram_total(meminfo):
    assert memory.ram_total(meminfo) == fmt_human(16000000 * 1024, 1024)


def test_ram_used_excludes_buffers_and_cache(meminfo):
    expected = fmt_human((16000000 - 4000000 - 1000000 - 3000000) * 1024, 1024)
    assert memory.ram_used(meminfo) == expected


def test_swap_total(meminfo):
    assert memory.swap_total(meminfo) == "2.0 Gi"


def test_swap_free_and_used_match_for_half_full(meminfo):
    assert memory.swap_free(meminfo) == memory.swap_used(meminfo)
    assert memory.swap_free(meminfo) == fmt_human(1048576 * 1024, 1024)


def test_swap_perc_consistent_with_ram_half_usage(meminfo):
    assert memory.swap_perc(meminfo) == memory.ram_perc(meminfo)


def test_missing_file_gives_none(tmp_path):
    missing = tmp_path / "absent"
    for func in (
        memory.ram_free,
        memory.ram_perc,
        memory.ram_total,
        memory.ram_used,
        memory.swap_free,
        memory.swap_perc,
        memory.swap_total,
        memory.swap_used,
    ):
        assert func(missing) is None


def test_missing_fields_give_none(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text("MemTotal: 1000 kB\n")
    assert memory.ram_perc(path) is None
    assert memory.swap_total(path) is None
    assert memory.ram_total(path) == fmt_human(1000 * 1024, 1024)


def test_zero_totals_give_none(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text(
        "MemTotal: 0 kB\nMemFree: 0 kB\nMemAvailable: 0 kB\n"
        "Buffers: 0 kB\nCached: 0 kB\n"
        "SwapCached: 0 kB\nSwapTotal: 0 kB\nSwapFree: 0 kB\n"
    )
    assert memory.ram_perc(path) is None
    assert memory.swap_perc(path) is None