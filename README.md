# uncflow

Register layouts, MSR access and metric helpers for Intel uncore performance
monitoring on Skylake-SP servers.

## What is in the package

- `uncflow.msr`: `read_msr(cpu, msr)` and `write_msr(cpu, msr, value)` read
  and write 64-bit model-specific registers through `/dev/cpu/<n>/msr`
  (little-endian; writes are opened with `O_SYNC`). Both need root or
  `CAP_SYS_RAWIO` and the `msr` kernel module. Failures raise subclasses of
  `MsrError`: `MsrOpenError`, `MsrSeekError`, `MsrReadError` and
  `MsrWriteError`. `write_msr` raises `ValueError` for a value that does not
  fit in 64 bits.
- `uncflow.register`: the abstract `RegisterLayout` base (`to_msr_value`,
  `from_msr_value`, `validate`), `RegisterError` for out-of-range fields, and
  `Register`, which pairs an MSR address with a layout
  (`Register.with_address`, `validate`, `to_msr_value`, `load_msr_value`).
- `uncflow.skylake`: Skylake-SP register definitions, one module per unit:
  - `cha`: address helpers `box_ctl`, `counter_ctl`, `counter_value`,
    `filter0`, `filter1`; layouts `ChaBoxControl`, `ChaCounterControl`,
    `ChaFilter0`, `ChaFilter1`; event codes, unit masks and state bits.
  - `core`: `CorePerfEvtSel`, `FixedCtrCtrl` and the core PMU MSR addresses.
  - `iio`: `IioCounterControl`, per-channel MSR addresses and the PCIe
    bandwidth counter addresses.
  - `imc`, `irp`: MSR addresses, PCI offsets and event codes.
  - `rapl`: `RaplPowerUnit` (with `power_unit_multiplier`,
    `energy_unit_multiplier`, `time_unit_multiplier`) and `RaplPowerLimit`.
  - `rdt`: `QmEventSelect` and `PqrAssoc`.
- `uncflow.metrics`:
  - `types`: metric name enumerations `CoreMetric`, `ImcMetric`, `IrpMetric`,
    `RaplMetric`, `RdtMetric`, and `IioMetric` (fixed metrics plus per-channel,
    per-port PCIe in/out bandwidth; `IioMetric.all()` lists them all). Each
    metric's `value` is its exported name.
  - `cha_types`: `TransactionMetricType`, `VictimType` and `SFEvictionType`
    (the last two with `umask()`).
  - `calculator`: `RawEventData`, the functions `bandwidth`, `latency`,
    `hit_rate` and `occupancy_ratio`, and `MetricCalculator`, which derives CHA
    bandwidth (GB/s), latency, hit rate, occupancy and uncore frequency (GHz)
    from stored raw readings.

## Install

```
pip install .
```

## Programming a counter

```python
from uncflow.msr import write_msr
from uncflow.skylake.cha import ChaCounterControl, counter_ctl

ctrl = ChaCounterControl(event_select=0x34, enable=True)
ctrl.validate()                      # raises RegisterError if a field is out of range
write_msr(0, counter_ctl(0, 0), ctrl.to_msr_value())
```

Layouts decode as well:

```python
from uncflow.skylake.rapl import RaplPowerUnit

unit = RaplPowerUnit.from_msr_value(0xA0E03)
unit.energy_unit_multiplier()        # joules per counter step
```

## Deriving CHA metrics

Event readings are stored under names; `duration` is in seconds.
Transaction metrics look for the events `"<type> Hit"` and `"<type> Miss"`
and are empty unless both are present.

```python
from uncflow.metrics.calculator import MetricCalculator, RawEventData

calc = MetricCalculator()
calc.store_event("Eviction", RawEventData(occupancy=1000, insert=100,
                                          clockticks=10000, duration=1.0))
calc.calculate_eviction_bandwidth()       # GB/s
calc.calculate_eviction_queue_occupancy()

calc.store_event("PCIeRead Hit", RawEventData(insert=800, clockticks=10, duration=1.0))
calc.store_event("PCIeRead Miss", RawEventData(insert=200, clockticks=10, duration=1.0))
calc.calculate_transaction_metrics("PCIeRead")  # {TransactionMetricType: float}
```

## What the package does not do

It has no command, no collection loop and no metrics server: it does not
program or read the units on its own schedule, and it does not publish the
metric names it defines. Those names and the calculator are building blocks
for a collector you write yourself on top of `read_msr` and `write_msr`.

## Tests

```
pip install .[test]
pytest
```