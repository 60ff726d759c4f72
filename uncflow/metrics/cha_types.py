"""Metric kinds derived from CHA (caching/home agent) events."""

from __future__ import annotations

from enum import Enum


class TransactionMetricType(Enum):
    """Derived metrics computed for each transaction type."""

    BANDWIDTH = "Bandwidth"
    HIT_BANDWIDTH = "HitBandwidth"
    MISS_BANDWIDTH = "MissBandwidth"
    HIT_LATENCY = "HitLatency"
    MISS_LATENCY = "MissLatency"
    HIT_RATE = "HitRate"
    LATENCY = "Latency"
    HIT_OCCUPANCY = "HitOccupancy"
    MISS_OCCUPANCY = "MissOccupancy"


class VictimType(Enum):
    """Cache line state of an LLC victim."""

    M = "M"
    E = "E"
    S = "S"
    F = "F"

    def umask(self) -> int:
        """Unit mask selecting this victim state."""
        return _VICTIM_UMASKS[self]


class SFEvictionType(Enum):
    """Cache line state of a snoop filter eviction."""

    M = "M"
    E = "E"
    S = "S"

    def umask(self) -> int:
        """Unit mask selecting this eviction state."""
        return _SF_EVICTION_UMASKS[self]


_VICTIM_UMASKS = {
    VictimType.M: 0x01,
    VictimType.E: 0x02,
    VictimType.S: 0x04,
    VictimType.F: 0x08,
}

_SF_EVICTION_UMASKS = {
    SFEvictionType.M: 0x01,
    SFEvictionType.E: 0x02,
    SFEvictionType.S: 0x04,
}