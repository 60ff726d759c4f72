"""CHA (caching/home agent) register definitions for Skylake-SP.

The CHA manages the last level cache and coherency; each unit has four
programmable counters.
"""

from __future__ import annotations

from dataclasses import dataclass

from uncflow.register import RegisterError, RegisterLayout

CHA_COUNT = 28
COUNTERS_PER_CHA = 4
COUNTER_WIDTH_BITS = 48
CHA_BOX_STRIDE = 0x10

CHA_UNIT_BOX_CTL_BASE = 0xE00
CHA_UNIT_CTL0_BASE = 0xE01
CHA_UNIT_CTR0_BASE = 0xE08
CHA_UNIT_FILTER0_BASE = 0xE05
CHA_UNIT_FILTER1_BASE = 0xE06

# Event codes
TOR_OCCUPANCY = 0x36
TOR_INSERTS = 0x35
LLC_LOOKUP = 0x34
LLC_VICTIMS = 0x37
CLOCKTICKS = 0x00

# TOR occupancy/insert unit masks
TOR_UMASK_IO_HIT = 0x14
TOR_UMASK_IO_MISS = 0x24
TOR_UMASK_ALL = 0xFF

# LLC lookup unit masks
LLC_LOOKUP_UMASK_READ = 0x03
LLC_LOOKUP_UMASK_WRITE = 0x05
LLC_LOOKUP_UMASK_REMOTE_SNOOP = 0x09
LLC_LOOKUP_UMASK_ANY = 0x11

# Cache line states for the filter 1 register
STATE_M = 0x40
STATE_E = 0x20
STATE_S = 0x02
STATE_I = 0x01
STATE_SFM = 0x08
STATE_SFE = 0x04
STATE_SFS = 0x02


def box_ctl(cha_index: int) -> int:
    """Box control MSR address of a CHA unit."""
    return CHA_UNIT_BOX_CTL_BASE + cha_index * CHA_BOX_STRIDE


def counter_ctl(cha_index: int, counter_num: int) -> int:
    """Counter control MSR address."""
    return CHA_UNIT_CTL0_BASE + cha_index * CHA_BOX_STRIDE + counter_num


def counter_value(cha_index: int, counter_num: int) -> int:
    """Counter value MSR address."""
    return CHA_UNIT_CTR0_BASE + cha_index * CHA_BOX_STRIDE + counter_num


def filter0(cha_index: int) -> int:
    """Filter 0 MSR address."""
    return CHA_UNIT_FILTER0_BASE + cha_index * CHA_BOX_STRIDE


def filter1(cha_index: int) -> int:
    """Filter 1 MSR address."""
    return CHA_UNIT_FILTER1_BASE + cha_index * CHA_BOX_STRIDE


def _bit(value: int, position: int) -> bool:
    return bool(value & (1 << position))


@dataclass
class ChaBoxControl(RegisterLayout):
    """Freeze and reset control for all counters of one CHA unit."""

    freeze: bool = False
    freeze_enable: bool = False
    reset_counters: bool = False
    reset_control: bool = False

    def to_msr_value(self) -> int:
        value = 0
        if self.freeze:
            value |= 1 << 0
        if self.freeze_enable:
            value |= 1 << 8
        if self.reset_counters:
            value |= 1 << 1
        if self.reset_control:
            value |= 1 << 2
        if not self.freeze and self.freeze_enable:
            value |= 1 << 16  # unfreeze
        return value

    @classmethod
    def from_msr_value(cls, value: int) -> "ChaBoxControl":
        return cls(
            freeze=_bit(value, 0),
            freeze_enable=_bit(value, 8),
            reset_counters=_bit(value, 1),
            reset_control=_bit(value, 2),
        )


@dataclass
class ChaCounterControl(RegisterLayout):
    """Control for one programmable CHA counter."""

    event_select: int = 0
    unit_mask: int = 0
    queue_occupancy_select: int = 0
    edge_detect: bool = False
    enable: bool = False
    invert: bool = False
    threshold: int = 0
    occupancy_invert: bool = False
    occupancy_edge_detect: bool = False

    def to_msr_value(self) -> int:
        return (
            (self.event_select & 0xFF)
            | ((self.unit_mask & 0xFF) << 8)
            | ((self.queue_occupancy_select & 0x03) << 16)
            | (int(self.edge_detect) << 18)
            | (int(self.enable) << 22)
            | (int(self.invert) << 23)
            | ((self.threshold & 0x3F) << 24)
            | (int(self.occupancy_invert) << 30)
            | (int(self.occupancy_edge_detect) << 31)
        )

    @classmethod
    def from_msr_value(cls, value: int) -> "ChaCounterControl":
        return cls(
            event_select=value & 0xFF,
            unit_mask=(value >> 8) & 0xFF,
            queue_occupancy_select=(value >> 16) & 0x03,
            edge_detect=_bit(value, 18),
            enable=_bit(value, 22),
            invert=_bit(value, 23),
            threshold=(value >> 24) & 0x3F,
            occupancy_invert=_bit(value, 30),
            occupancy_edge_detect=_bit(value, 31),
        )

    def validate(self) -> None:
        if self.threshold > 63:
            raise RegisterError("Threshold must be <= 63 (6 bits)")
        if self.queue_occupancy_select > 3:
            raise RegisterError("Queue occupancy select must be 0-3 (2 bits)")


@dataclass
class ChaFilter0(RegisterLayout):
    """Filters events by transaction opcode."""

    opcode_match: int = 0

    def to_msr_value(self) -> int:
        return self.opcode_match & 0xFFFF

    @classmethod
    def from_msr_value(cls, value: int) -> "ChaFilter0":
        return cls(opcode_match=value & 0xFFFF)


@dataclass
class ChaFilter1(RegisterLayout):
    """Filters events by thread id and cache line state."""

    tid: int = 0
    state: int = 0

    def to_msr_value(self) -> int:
        return (self.tid & 0x1FFFF) | ((self.state & 0xFF) << 17)

    @classmethod
    def from_msr_value(cls, value: int) -> "ChaFilter1":
        return cls(tid=value & 0x1FFFF, state=(value >> 17) & 0x7F)

    def validate(self) -> None:
        if self.tid > 0x1FFFF:
            raise RegisterError("TID must be <= 0x1FFFF (17 bits)")