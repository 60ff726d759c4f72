import pytest

from uncflow.register import RegisterError
from uncflow.skylake.rapl import RaplPowerLimit, RaplPowerUnit


def test_rapl_power_unit_round_trip():
    unit = RaplPowerUnit(power_units=3, energy_units=14, time_units=10)
    decoded = RaplPowerUnit.from_msr_value(unit.to_msr_value())
    assert decoded.power_units == unit.power_units
    assert decoded.energy_units == unit.energy_units
    assert decoded.time_units == unit.time_units


def test_rapl_power_unit_multipliers():
    unit = RaplPowerUnit(power_units=3, energy_units=14, time_units=10)
    assert unit.power_unit_multiplier() == 1.0 / 8.0
    assert unit.energy_unit_multiplier() == 1.0 / 16384.0
    assert unit.time_unit_multiplier() == 1.0 / 1024.0


def test_rapl_power_unit_encoding():
    unit = RaplPowerUnit(power_units=3, energy_units=14, time_units=10)
    assert unit.to_msr_value() == 0x0A0E03


def test_rapl_power_unit_decode_ignores_reserved_bits():
    decoded = RaplPowerUnit.from_msr_value(0xFFFF_FFFF_FFF0_E0F3)
    assert decoded == RaplPowerUnit(power_units=3, energy_units=0, time_units=0)


def test_rapl_power_unit_validation():
    assert RaplPowerUnit(power_units=15, energy_units=31, time_units=15).validate() is None
    with pytest.raises(RegisterError):
        RaplPowerUnit(power_units=16).validate()
    with pytest.raises(RegisterError):
        RaplPowerUnit(energy_units=32).validate()
    with pytest.raises(RegisterError):
        RaplPowerUnit(time_units=16).validate()


def test_rapl_power_limit_round_trip():
    limit = RaplPowerLimit(
        power_limit_1=100,
        enable_1=True,
        clamp_1=True,
        time_window_1=50,
        power_limit_2=120,
        enable_2=True,
        clamp_2=False,
        time_window_2=60,
        lock=False,
    )
    decoded = RaplPowerLimit.from_msr_value(limit.to_msr_value())
    assert decoded.power_limit_1 == limit.power_limit_1
    assert decoded.enable_1 == limit.enable_1
    assert decoded.time_window_1 == limit.time_window_1
    assert decoded.power_limit_2 == limit.power_limit_2
    assert decoded.enable_2 == limit.enable_2
    assert decoded == limit


def test_rapl_power_limit_lock_bit():
    assert RaplPowerLimit(lock=True).to_msr_value() == 1 << 63
    assert RaplPowerLimit.from_msr_value(1 << 63).lock is True


def test_rapl_power_limit_validation():
    assert RaplPowerLimit(power_limit_1=0x7FFF, time_window_2=127).validate() is None
    with pytest.raises(RegisterError):
        RaplPowerLimit(power_limit_1=0x8000).validate()
    with pytest.raises(RegisterError):
        RaplPowerLimit(time_window_1=128).validate()
    with pytest.raises(RegisterError):
        RaplPowerLimit(power_limit_2=0x8000).validate()
    with pytest.raises(RegisterError):
        RaplPowerLimit(time_window_2=128).validate()