"""Metric kinds exported for the core PMU, IIO, IMC, IRP, RAPL and RDT units.

Each enum member's value is the name under which the metric is exported.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional

from uncflow.skylake.iio import IIO_CHANNEL_COUNT, IIO_PCIE_PORT_COUNT


class CoreMetric(Enum):
    """Per-core PMU metrics."""

    IPC = "IPC"
    INSTRUCTIONS = "instructions"
    CYCLES = "cycles"
    L3_CACHE_MISS = "L3CacheMissNum"
    L3_CACHE_REF = "L3CacheRef"
    L2_CACHE_MISS = "L2CacheMissNum"
    L2_CACHE_REF = "L2CacheRef"
    L3_CACHE_HIT_RATIO = "L3CacheHitRatio"
    L2_CACHE_HIT_RATIO = "L2CacheHitRatio"
    L2_PREFETCH_MISS = "L2PrefetchMiss"
    L2_PREFETCH_HIT = "L2PrefetchHit"
    L2_OUT_SILENT = "L2OutSilent"
    L2_OUT_NON_SILENT = "L2OutNonSilent"
    L2_IN = "L2In"
    L2_WRITEBACK = "L2Writeback"
    L3_MPI = "L3MPI"
    L2_MPI = "L2MPI"
    ELAPSED_TIME = "elapsedTime"


class ImcMetric(Enum):
    """Integrated memory controller metrics."""

    MEMORY_READ_BANDWIDTH = "MemoryReadBandwidth"
    MEMORY_WRITE_BANDWIDTH = "MemoryWriteBandwidth"
    MEMORY_LOCAL_READ_BANDWIDTH = "MemoryLocalReadBandwidth"
    MEMORY_LOCAL_WRITE_BANDWIDTH = "MemoryLocalWriteBandwidth"
    MEMORY_REMOTE_READ_BANDWIDTH = "MemoryRemoteReadBandwidth"
    MEMORY_REMOTE_WRITE_BANDWIDTH = "MemoryRemoteWriteBandwidth"
    MEMORY_READ_LATENCY = "IMCReadLatency"
    MEMORY_WRITE_LATENCY = "IMCWriteLatency"
    MEMORY_RPQ_OCCUPANCY = "MemoryRPQOccupancy"
    MEMORY_WPQ_OCCUPANCY = "MemoryWPQOccupancy"
    IMC_RPQ_NON_EMPTY = "IMCRPQNonEmpty"
    IMC_RPQ_FULL = "IMCRPQFull"
    IMC_WPQ_NON_EMPTY = "IMCWPQNonEmpty"
    IMC_WPQ_FULL = "IMCWPQFull"
    IMC_FREQUENCY = "IMCFrequency"
    MEMORY_LOCAL_READ_RATIO = "MemoryLocalReadRatio"
    MEMORY_LOCAL_WRITE_RATIO = "MemoryLocalWriteRatio"


class IrpMetric(Enum):
    """I/O request processing metrics."""

    IRP_LATENCY = "IRPLatency"
    IRP_ANY_OCCUPANCY = "IRPAnyOccupancy"
    IRP_PCIE_READ_BANDWIDTH = "IRPPCIeReadBandwidth"
    IRP_RFO_BANDWIDTH = "IRPRFOBandwidth"
    IRP_ALL_BANDWIDTH = "IRPAllBandwidth"
    IRP_PCI_ITOM_BANDWIDTH = "IRPPCIItoMBandwidth"
    IRP_WB_MTOI_BANDWIDTH = "IRPWbMtoIBandwidth"
    IRP_CLFLUSH_BANDWIDTH = "IRPCLFlushBandwidth"
    IRP_FREQUENCY = "IRPFrequency"


class RaplMetric(Enum):
    """Energy and power metrics per RAPL domain."""

    PACKAGE_ENERGY = "PackageEnergy"
    CORE_ENERGY = "CoreEnergy"
    DRAM_ENERGY = "DRAMEnergy"
    PACKAGE_POWER = "PackagePower"
    CORE_POWER = "CorePower"
    DRAM_POWER = "DRAMPower"


class RdtMetric(Enum):
    """Resource director technology monitoring metrics."""

    LOCAL_MEMORY_BANDWIDTH = "LocalMemoryBandwidth"
    REMOTE_MEMORY_BANDWIDTH = "RemoteMemoryBandwidth"
    TOTAL_MEMORY_BANDWIDTH = "TotalMemoryBandwidth"
    LLC_OCCUPANCY = "CMTLLCOccupancy"


_IIO_FIXED = (
    "IIOTLBMiss",
    "IIOTLBFull",
    "IIOL1Miss",
    "IIOL2Miss",
    "IIOL3Miss",
    "IIOContextMiss",
    "IIOTLBHit",
    "IIOTLB1Miss",
    "IIOOccupancy",
    "IIOFrequency",
)

_PCIE_DIRECTIONS = ("In", "Out")


@dataclass(frozen=True)
class IioMetric:
    """An IIO metric: a fixed unit-wide metric, or PCIe bandwidth of one channel and port.

    For PCIe bandwidth ``kind`` is the direction, ``"In"`` or ``"Out"``.
    """

    kind: str
    channel: Optional[int] = None
    port: Optional[int] = None

    IIO_TLB_MISS: ClassVar["IioMetric"]
    IIO_TLB_FULL: ClassVar["IioMetric"]
    IIO_L1_MISS: ClassVar["IioMetric"]
    IIO_L2_MISS: ClassVar["IioMetric"]
    IIO_L3_MISS: ClassVar["IioMetric"]
    IIO_CONTEXT_MISS: ClassVar["IioMetric"]
    IIO_TLB_HIT: ClassVar["IioMetric"]
    IIO_TLB1_MISS: ClassVar["IioMetric"]
    IIO_OCCUPANCY: ClassVar["IioMetric"]
    IIO_FREQUENCY: ClassVar["IioMetric"]

    def __post_init__(self) -> None:
        if self.channel is None and self.port is None:
            if self.kind not in _IIO_FIXED:
                raise ValueError(f"unknown IIO metric {self.kind!r}")
        elif self.channel is None or self.port is None:
            raise ValueError("PCIe bandwidth metrics need both a channel and a port")
        elif self.kind not in _PCIE_DIRECTIONS:
            raise ValueError(f"PCIe direction must be 'In' or 'Out', not {self.kind!r}")

    @classmethod
    def pcie_in(cls, channel: int, port: int) -> "IioMetric":
        """Inbound PCIe bandwidth of a channel and port."""
        return cls("In", channel, port)

    @classmethod
    def pcie_out(cls, channel: int, port: int) -> "IioMetric":
        """Outbound PCIe bandwidth of a channel and port."""
        return cls("Out", channel, port)

    @property
    def is_pcie_bandwidth(self) -> bool:
        """Whether this is a per-port PCIe bandwidth metric."""
        return self.channel is not None

    @property
    def value(self) -> str:
        """The name under which the metric is exported."""
        if self.channel is None:
            return self.kind
        return f"PCIe{self.channel}{self.port}{self.kind}Bandwidth"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def all(cls) -> list["IioMetric"]:
        """Every IIO metric: the fixed ones, then PCIe in/out for each channel and port."""
        metrics = [cls(kind) for kind in _IIO_FIXED]
        for channel in range(IIO_CHANNEL_COUNT):
            for port in range(IIO_PCIE_PORT_COUNT):
                metrics.append(cls.pcie_in(channel, port))
                metrics.append(cls.pcie_out(channel, port))
        return metrics


IioMetric.IIO_TLB_MISS = IioMetric("IIOTLBMiss")
IioMetric.IIO_TLB_FULL = IioMetric("IIOTLBFull")
IioMetric.IIO_L1_MISS = IioMetric("IIOL1Miss")
IioMetric.IIO_L2_MISS = IioMetric("IIOL2Miss")
IioMetric.IIO_L3_MISS = IioMetric("IIOL3Miss")
IioMetric.IIO_CONTEXT_MISS = IioMetric("IIOContextMiss")
IioMetric.IIO_TLB_HIT = IioMetric("IIOTLBHit")
IioMetric.IIO_TLB1_MISS = IioMetric("IIOTLB1Miss")
IioMetric.IIO_OCCUPANCY = IioMetric("IIOOccupancy")
IioMetric.IIO_FREQUENCY = IioMetric("IIOFrequency")