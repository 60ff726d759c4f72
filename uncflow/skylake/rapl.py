"""RAPL (running average power limit) register definitions for Skylake-SP.

RAPL reports energy consumption per power domain and configures power limits.
"""

from __future__ import annotations

from dataclasses import dataclass

from uncflow.register import RegisterError, RegisterLayout

MSR_RAPL_POWER_UNIT = 0x606
MSR_PKG_ENERGY_STATUS = 0x611
MSR_PP0_ENERGY_STATUS = 0x639
MSR_DRAM_ENERGY_STATUS = 0x619
MSR_PKG_POWER_LIMIT = 0x610
MSR_PKG_POWER_INFO = 0x614
MSR_PP0_POWER_LIMIT = 0x638
MSR_DRAM_POWER_LIMIT = 0x618


def _bit(value: int, position: int) -> bool:
    return bool(value & (1 << position))


@dataclass
class RaplPowerUnit(RegisterLayout):
    """Units of the energy, power and time fields of other RAPL registers."""

    power_units: int = 0
    energy_units: int = 0
    time_units: int = 0

    def to_msr_value(self) -> int:
        return (
            (self.power_units & 0x0F)
            | ((self.energy_units & 0x1F) << 8)
            | ((self.time_units & 0x0F) << 16)
        )

    @classmethod
    def from_msr_value(cls, value: int) -> "RaplPowerUnit":
        return cls(
            power_units=value & 0x0F,
            energy_units=(value >> 8) & 0x1F,
            time_units=(value >> 16) & 0x0F,
        )

    def validate(self) -> None:
        if self.power_units > 15:
            raise RegisterError("Power units must be <= 15 (4 bits)")
        if self.energy_units > 31:
            raise RegisterError("Energy units must be <= 31 (5 bits)")
        if self.time_units > 15:
            raise RegisterError("Time units must be <= 15 (4 bits)")

    def power_unit_multiplier(self) -> float:
        """Watts per least significant bit."""
        return 1.0 / (1 << self.power_units)

    def energy_unit_multiplier(self) -> float:
        """Joules per least significant bit."""
        return 1.0 / (1 << self.energy_units)

    def time_unit_multiplier(self) -> float:
        """Seconds per least significant bit."""
        return 1.0 / (1 << self.time_units)


@dataclass
class RaplPowerLimit(RegisterLayout):
    """Two power limits with their time windows for one power domain."""

    power_limit_1: int = 0
    enable_1: bool = False
    clamp_1: bool = False
    time_window_1: int = 0
    power_limit_2: int = 0
    enable_2: bool = False
    clamp_2: bool = False
    time_window_2: int = 0
    lock: bool = False

    def to_msr_value(self) -> int:
        return (
            (self.power_limit_1 & 0x7FFF)
            | (bool(self.enable_1) << 15)
            | (bool(self.clamp_1) << 16)
            | ((self.time_window_1 & 0x7F) << 17)
            | ((self.power_limit_2 & 0x7FFF) << 32)
            | (bool(self.enable_2) << 47)
            | (bool(self.clamp_2) << 48)
            | ((self.time_window_2 & 0x7F) << 49)
            | (bool(self.lock) << 63)
        )

    @classmethod
    def from_msr_value(cls, value: int) -> "RaplPowerLimit":
        return cls(
            power_limit_1=value & 0x7FFF,
            enable_1=_bit(value, 15),
            clamp_1=_bit(value, 16),
            time_window_1=(value >> 17) & 0x7F,
            power_limit_2=(value >> 32) & 0x7FFF,
            enable_2=_bit(value, 47),
            clamp_2=_bit(value, 48),
            time_window_2=(value >> 49) & 0x7F,
            lock=_bit(value, 63),
        )

    def validate(self) -> None:
        if self.power_limit_1 > 0x7FFF:
            raise RegisterError("Power limit 1 must be <= 0x7FFF (15 bits)")
        if self.time_window_1 > 127:
            raise RegisterError("Time window 1 must be <= 127 (7 bits)")
        if self.power_limit_2 > 0x7FFF:
            raise RegisterError("Power limit 2 must be <= 0x7FFF (15 bits)")
        if self.time_window_2 > 127:
            raise RegisterError("Time window 2 must be <= 127 (7 bits)")