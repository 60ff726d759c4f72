"""Core PMU register definitions for Skylake-SP.

Covers the general-purpose event select registers and the fixed-function
counter control of each core's performance monitoring unit.
"""

from __future__ import annotations

from dataclasses import dataclass

from uncflow.register import RegisterLayout

CORE_PMU_COUNTERS = 4
CORE_FIXED_COUNTERS = 3

# Performance event select registers (IA32_PERFEVTSELx)
IA32_PERFEVTSEL0 = 0x186
IA32_PERFEVTSEL1 = 0x187
IA32_PERFEVTSEL2 = 0x188
IA32_PERFEVTSEL3 = 0x189

# Performance counter registers (IA32_PMCx)
IA32_PMC0 = 0xC1
IA32_PMC1 = 0xC2
IA32_PMC2 = 0xC3
IA32_PMC3 = 0xC4

IA32_FIXED_CTR_CTRL = 0x38D

IA32_FIXED_CTR0 = 0x309  # instructions retired
IA32_FIXED_CTR1 = 0x30A  # core cycles
IA32_FIXED_CTR2 = 0x30B  # reference cycles

IA32_PERF_GLOBAL_CTRL = 0x38F
IA32_PERF_GLOBAL_STATUS = 0x38E
IA32_PERF_GLOBAL_STATUS_RESET = 0x390


def _bit(value: int, position: int) -> bool:
    return bool(value & (1 << position))


@dataclass
class CorePerfEvtSel(RegisterLayout):
    """Layout of a core performance event select register."""

    event_select: int = 0
    umask: int = 0
    usr: bool = False
    os: bool = False
    edge: bool = False
    pc: bool = False
    int: bool = False
    any_thread: bool = False
    enable: bool = False
    invert: bool = False
    cmask: int = 0

    def to_msr_value(self) -> int:
        return (
            (self.event_select & 0xFF)
            | ((self.umask & 0xFF) << 8)
            | (bool(self.usr) << 16)
            | (bool(self.os) << 17)
            | (bool(self.edge) << 18)
            | (bool(self.pc) << 19)
            | (bool(self.int) << 20)
            | (bool(self.any_thread) << 21)
            | (bool(self.enable) << 22)
            | (bool(self.invert) << 23)
            | ((self.cmask & 0xFF) << 24)
        )

    @classmethod
    def from_msr_value(cls, value: int) -> "CorePerfEvtSel":
        return cls(
            event_select=value & 0xFF,
            umask=(value >> 8) & 0xFF,
            usr=_bit(value, 16),
            os=_bit(value, 17),
            edge=_bit(value, 18),
            pc=_bit(value, 19),
            int=_bit(value, 20),
            any_thread=_bit(value, 21),
            enable=_bit(value, 22),
            invert=_bit(value, 23),
            cmask=(value >> 24) & 0xFF,
        )


_FIXED_FIELDS = ("os", "usr", "any_thread", "pmi")


@dataclass
class FixedCtrCtrl(RegisterLayout):
    """Control of the three fixed-function counters, four bits each."""

    ctr0_os: bool = False
    ctr0_usr: bool = False
    ctr0_any_thread: bool = False
    ctr0_pmi: bool = False

    ctr1_os: bool = False
    ctr1_usr: bool = False
    ctr1_any_thread: bool = False
    ctr1_pmi: bool = False

    ctr2_os: bool = False
    ctr2_usr: bool = False
    ctr2_any_thread: bool = False
    ctr2_pmi: bool = False

    @staticmethod
    def _layout() -> list[tuple[str, int]]:
        return [
            (f"ctr{counter}_{field}", counter * 4 + offset)
            for counter in range(CORE_FIXED_COUNTERS)
            for offset, field in enumerate(_FIXED_FIELDS)
        ]

    def to_msr_value(self) -> int:
        value = 0
        for name, position in self._layout():
            if getattr(self, name):
                value |= 1 << position
        return value

    @classmethod
    def from_msr_value(cls, value: int) -> "FixedCtrCtrl":
        return cls(**{name: _bit(value, position) for name, position in cls._layout()})