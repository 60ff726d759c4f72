"""IIO (integrated I/O) register definitions for Skylake-SP.

The IIO unit is the PCIe root complex; it carries programmable counters and
free-running PCIe bandwidth counters.
"""

from __future__ import annotations

from dataclasses import dataclass

from uncflow.register import RegisterError, RegisterLayout

IIO_CHANNEL_COUNT = 3
IIO_PCIE_PORT_COUNT = 4
IIO_COUNTERS_PER_UNIT = 4
IIO_COUNTER_WIDTH_BITS = 36
UNCORE_COUNTER_WIDTH_BITS = 48

# MSR addresses, one per IIO channel
IIO_UNIT_BOX_CTL = (0x0A60, 0x0A80, 0x0AA0)
IIO_UNIT_BOX_STATUS = (0x0A67, 0x0A87, 0x0AA7)
IIO_UNIT_CTL0 = (0x0A68, 0x0A88, 0x0AA8)
IIO_UNIT_CTL1 = (0x0A69, 0x0A89, 0x0AA9)
IIO_UNIT_CTL2 = (0x0A6A, 0x0A8A, 0x0AAA)
IIO_UNIT_CTL3 = (0x0A6B, 0x0A8B, 0x0AAB)
IIO_UNIT_CTR0 = (0x0A61, 0x0A81, 0x0AA1)
IIO_UNIT_CTR1 = (0x0A62, 0x0A82, 0x0AA2)
IIO_UNIT_CTR2 = (0x0A63, 0x0A83, 0x0AA3)
IIO_UNIT_CTR3 = (0x0A64, 0x0A84, 0x0AA4)
IIO_UNIT_CLK = (0x0A65, 0x0A85, 0x0AA5)

# Free-running PCIe bandwidth counters, indexed [channel][port]
IIO_PCIE_BANDWIDTH_IN = (
    (0x0B10, 0x0B11, 0x0B12, 0x0B13),
    (0x0B20, 0x0B21, 0x0B22, 0x0B23),
    (0x0B30, 0x0B31, 0x0B32, 0x0B33),
)
IIO_PCIE_BANDWIDTH_OUT = (
    (0x0B14, 0x0B15, 0x0B16, 0x0B17),
    (0x0B24, 0x0B25, 0x0B26, 0x0B27),
    (0x0B34, 0x0B35, 0x0B36, 0x0B37),
)

# Event codes
IIO_TLB_EVENT = 0x41
IIO_OCCUPANCY = 0x40
IIO_COMP_INSERTS = 0xC2
IIO_COMP_OCCUPANCY = 0xD5
CLOCKTICKS = 0x01

# Unit masks
UMASK_TLB_HIT = 0x01
UMASK_TLB_CONTEXT_MISS = 0x02
UMASK_TLB_L1_MISS = 0x04
UMASK_TLB_L2_MISS = 0x08
UMASK_TLB_L3_MISS = 0x10
UMASK_TLB_MISS_ALL = 0x20
UMASK_TLB_FULL = 0x40
UMASK_TLB1_MISS = 0x80
UMASK_COMP_INSERTS = 0x04
CH_MASK_ALL = 0xFF
FC_MASK_ALL = 0x07


def _bit(value: int, position: int) -> bool:
    return bool(value & (1 << position))


@dataclass
class IioCounterControl(RegisterLayout):
    """Control for one programmable IIO counter."""

    event_select: int = 0
    unit_mask: int = 0
    reset_counter: bool = False
    edge_detect: bool = False
    thread_id_enable: bool = False
    overflow_enable: bool = False
    enable: bool = False
    invert: bool = False
    threshold: int = 0
    channel_mask: int = 0
    fc_mask: int = 0

    def to_msr_value(self) -> int:
        return (
            (self.event_select & 0xFF)
            | ((self.unit_mask & 0xFF) << 8)
            | (bool(self.reset_counter) << 17)
            | (bool(self.edge_detect) << 18)
            | (bool(self.thread_id_enable) << 19)
            | (bool(self.overflow_enable) << 20)
            | (bool(self.enable) << 22)
            | (bool(self.invert) << 23)
            | ((self.threshold & 0xFFF) << 24)
            | ((self.channel_mask & 0xFF) << 36)
            | ((self.fc_mask & 0x07) << 44)
        )

    @classmethod
    def from_msr_value(cls, value: int) -> "IioCounterControl":
        return cls(
            event_select=value & 0xFF,
            unit_mask=(value >> 8) & 0xFF,
            reset_counter=_bit(value, 17),
            edge_detect=_bit(value, 18),
            thread_id_enable=_bit(value, 19),
            overflow_enable=_bit(value, 20),
            enable=_bit(value, 22),
            invert=_bit(value, 23),
            threshold=(value >> 24) & 0xFFF,
            channel_mask=(value >> 36) & 0xFF,
            fc_mask=(value >> 44) & 0x07,
        )

    def validate(self) -> None:
        if self.threshold > 0xFFF:
            raise RegisterError("Threshold must be <= 4095 (12 bits)")
        if self.fc_mask > 0x07:
            raise RegisterError("FC mask must be <= 7 (3 bits)")