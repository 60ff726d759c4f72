"""RDT (resource director technology) register definitions for Skylake-SP.

Cache occupancy and memory bandwidth monitoring through RMIDs.
"""

from __future__ import annotations

from dataclasses import dataclass

from uncflow.register import RegisterLayout

IA32_QM_EVTSEL = 0xC8D
IA32_QM_CTR = 0xC8E
IA32_PQR_ASSOC = 0xC8F
IA32_L3_QOS_MASK_BASE = 0xC90
IA32_L2_QOS_MBA_BASE = 0xD50

# Monitoring event ids
LLC_OCCUPANCY = 0x01
LOCAL_MEM_BW = 0x02
REMOTE_MEM_BW = 0x03

_U32 = 0xFFFFFFFF


@dataclass
class QmEventSelect(RegisterLayout):
    """Selects the RMID and event that the QM counter reports."""

    rmid: int = 0
    event_id: int = 0

    def to_msr_value(self) -> int:
        return (self.rmid & _U32) | ((self.event_id & 0xFF) << 32)

    @classmethod
    def from_msr_value(cls, value: int) -> "QmEventSelect":
        return cls(rmid=value & _U32, event_id=(value >> 32) & 0xFF)


@dataclass
class PqrAssoc(RegisterLayout):
    """Associates an RMID and class of service with a logical processor."""

    rmid: int = 0
    cos: int = 0

    def to_msr_value(self) -> int:
        return (self.rmid & _U32) | ((self.cos & _U32) << 32)

    @classmethod
    def from_msr_value(cls, value: int) -> "PqrAssoc":
        return cls(rmid=value & _U32, cos=(value >> 32) & _U32)