import pytest

from deskkit.components.battery import battery_perc, battery_remaining, battery_state


@pytest.fixture
def bat(tmp_path):
    base = tmp_path / "BAT0"
    base.mkdir()
    return base


def test_perc(tmp_path, bat):
    (bat / "capacity").write_text("87\n")
    assert battery_perc("BAT0", tmp_path) == "87"


def test_perc_missing(tmp_path):
    assert battery_perc("BAT9", tmp_path) is None


@pytest.mark.parametrize(
    "status, symbol",
    [("Charging", "+"), ("Discharging", "-"), ("Full", "?"), ("Unknown", "?")],
)
def test_state(tmp_path, bat, status, symbol):
    (bat / "status").write_text(status + "\n")
    assert battery_state("BAT0", tmp_path) == symbol


def test_state_missing(tmp_path):
    assert battery_state("BAT9", tmp_path) is None


def test_remaining_discharging(tmp_path, bat):
    (bat / "status").write_text("Discharging\n")
    (bat / "charge_now").write_text("5\n")
    (bat / "current_now").write_text("2\n")
    assert battery_remaining("BAT0", tmp_path) == "2h 30m"


def test_remaining_energy_and_power_fallback(tmp_path, bat):
    (bat / "status").write_text("Discharging\n")
    (bat / "energy_now").write_text("3\n")
    (bat / "power_now").write_text("2\n")
    assert battery_remaining("BAT0", tmp_path) == "1h 30m"


def test_remaining_charging_is_empty(tmp_path, bat):
    (bat / "status").write_text("Charging\n")
    (bat / "charge_now").write_text("5\n")
    assert battery_remaining("BAT0", tmp_path) == ""


def test_remaining_zero_current(tmp_path, bat):
    (bat / "status").write_text("Discharging\n")
    (bat / "charge_now").write_text("5\n")
    (bat / "current_now").write_text("0\n")
    assert battery_remaining("BAT0", tmp_path) is None


def test_remaining_without_charge_file(tmp_path, bat):
    (bat / "status").write_text("Discharging\n")
    assert battery_remaining("BAT0", tmp_path) is None