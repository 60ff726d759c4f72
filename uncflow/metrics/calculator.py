"""Derivation of CHA metrics from raw occupancy, insert and clocktick counts."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from uncflow.metrics.cha_types import TransactionMetricType

CACHELINE_SIZE = 64

Label = Union[str, Enum]


@dataclass
class RawEventData:
    """Counter readings of one event over a sampling interval (duration in seconds)."""

    occupancy: int = 0
    insert: int = 0
    clockticks: int = 0
    duration: float = 0.0


def bandwidth(insert: int, duration: float) -> float:
    """Bandwidth in GB/s of ``insert`` cache lines over ``duration`` seconds."""
    if duration == 0.0:
        return 0.0
    return insert * CACHELINE_SIZE / duration / 1e9


def latency(occupancy: int, insert: int, clockticks: int, duration: float) -> float:
    """Average latency from occupancy per insert scaled by clockticks per nanosecond."""
    if insert == 0 or clockticks == 0:
        return 0.0
    elapsed_ns = duration * 1e9
    ticks_per_ns = clockticks / elapsed_ns if elapsed_ns else math.inf
    return (occupancy / insert) * ticks_per_ns


def hit_rate(hit_insert: int, miss_insert: int) -> float:
    """Fraction of inserts that hit."""
    total = hit_insert + miss_insert
    if total == 0:
        return 0.0
    return hit_insert / total


def occupancy_ratio(occupancy: int, clockticks: int) -> float:
    """Average queue occupancy per clocktick."""
    if clockticks == 0:
        return 0.0
    return occupancy / clockticks


def _label(value: Label) -> str:
    if isinstance(value, str):
        return value
    return value.value if isinstance(value.value, str) else value.name


@dataclass
class MetricCalculator:
    """Holds raw events by name and derives metrics from them."""

    events: dict[str, RawEventData] = field(default_factory=dict)

    def store_event(self, name: str, data: RawEventData) -> None:
        """Record the readings of an event, replacing earlier ones of that name."""
        self.events[name] = data

    def calculate_transaction_metrics(
        self, transaction: Label
    ) -> dict[TransactionMetricType, float]:
        """All derived metrics of a transaction type; empty unless both hit and miss exist."""
        name = _label(transaction)
        hit = self.events.get(f"{name} Hit")
        miss = self.events.get(f"{name} Miss")
        if hit is None or miss is None:
            return {}

        hit_bw = bandwidth(hit.insert, hit.duration)
        miss_bw = bandwidth(miss.insert, miss.duration)
        return {
            TransactionMetricType.BANDWIDTH: hit_bw + miss_bw,
            TransactionMetricType.HIT_BANDWIDTH: hit_bw,
            TransactionMetricType.MISS_BANDWIDTH: miss_bw,
            TransactionMetricType.HIT_LATENCY: latency(
                hit.occupancy, hit.insert, hit.clockticks, hit.duration
            ),
            TransactionMetricType.MISS_LATENCY: latency(
                miss.occupancy, miss.insert, miss.clockticks, miss.duration
            ),
            TransactionMetricType.LATENCY: 0.0,
            TransactionMetricType.HIT_RATE: hit_rate(hit.insert, miss.insert),
            TransactionMetricType.HIT_OCCUPANCY: occupancy_ratio(hit.occupancy, hit.clockticks),
            TransactionMetricType.MISS_OCCUPANCY: occupancy_ratio(
                miss.occupancy, miss.clockticks
            ),
        }

    def _insert_count(self, name: str) -> int:
        data = self.events.get(name)
        return data.insert if data is not None else 0

    def get_llc_lookup(self, state: Label, lookup_type: Label) -> int:
        """Number of LLC lookups in a cache state of a lookup type."""
        return self._insert_count(f"LLC Lookup {_label(state)} {_label(lookup_type)}")

    def get_llc_victim(self, victim_type: Label) -> int:
        """Number of LLC victims of a cache state."""
        return self._insert_count(f"LLC Victim {_label(victim_type)}")

    def get_sf_eviction(self, eviction_type: Label) -> int:
        """Number of snoop filter evictions of a cache state."""
        return self._insert_count(f"SF Eviction {_label(eviction_type)}")

    def calculate_eviction_bandwidth(self) -> float:
        """Eviction bandwidth in GB/s."""
        data = self.events.get("Eviction")
        return bandwidth(data.insert, data.duration) if data else 0.0

    def calculate_eviction_latency(self) -> float:
        """Average eviction latency."""
        data = self.events.get("Eviction")
        if data is None:
            return 0.0
        return latency(data.occupancy, data.insert, data.clockticks, data.duration)

    def calculate_eviction_queue_occupancy(self) -> float:
        """Average eviction queue occupancy per clocktick."""
        data = self.events.get("Eviction")
        return occupancy_ratio(data.occupancy, data.clockticks) if data else 0.0

    def calculate_uncore_frequency(self) -> float:
        """Uncore frequency in GHz from the first event with clockticks and a duration."""
        for data in self.events.values():
            if data.clockticks > 0 and data.duration > 0.0:
                return data.clockticks / data.duration / 1e9
        return 0.0

    def get_queue_occupancy(self, queue_name: str) -> float:
        """Average occupancy per clocktick of a named queue."""
        data = self.events.get(queue_name)
        return occupancy_ratio(data.occupancy, data.clockticks) if data else 0.0

    def get_credit_metric(self, metric_name: str) -> int:
        """Insert count of a named credit event."""
        return self._insert_count(metric_name)