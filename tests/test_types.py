import pytest

from uncflow.metrics.types import (
    CoreMetric,
    IioMetric,
    ImcMetric,
    IrpMetric,
    RaplMetric,
    RdtMetric,
)
from uncflow.skylake.iio import IIO_CHANNEL_COUNT, IIO_PCIE_PORT_COUNT


@pytest.mark.parametrize(
    "enum_type", [CoreMetric, ImcMetric, IrpMetric, RaplMetric, RdtMetric]
)
def test_exported_names_are_unique(enum_type):
    values = [member.value for member in enum_type]
    assert len(set(values)) == len(values)


@pytest.mark.parametrize(
    "enum_type", [CoreMetric, ImcMetric, IrpMetric, RaplMetric, RdtMetric]
)
def test_lookup_by_exported_name_round_trips(enum_type):
    for member in enum_type:
        assert enum_type(member.value) is member


def test_core_metric_names():
    assert CoreMetric.L3_CACHE_MISS.value == "L3CacheMissNum"
    assert CoreMetric.ELAPSED_TIME.value == "elapsedTime"
    assert CoreMetric("instructions") is CoreMetric.INSTRUCTIONS
    assert list(CoreMetric)[0] is CoreMetric.IPC


def test_imc_latency_names():
    assert ImcMetric("IMCReadLatency") is ImcMetric.MEMORY_READ_LATENCY
    assert ImcMetric("IMCWriteLatency") is ImcMetric.MEMORY_WRITE_LATENCY


def test_rapl_dram_names():
    assert RaplMetric("DRAMEnergy") is RaplMetric.DRAM_ENERGY
    assert RaplMetric("DRAMPower") is RaplMetric.DRAM_POWER


def test_rdt_llc_occupancy_name():
    assert RdtMetric("CMTLLCOccupancy") is RdtMetric.LLC_OCCUPANCY


def test_irp_names():
    assert IrpMetric("IRPPCIItoMBandwidth") is IrpMetric.IRP_PCI_ITOM_BANDWIDTH
    assert IrpMetric.IRP_FREQUENCY.value == "IRPFrequency"


def test_unknown_name_raises():
    with pytest.raises(ValueError):
        CoreMetric("NoSuchMetric")


def test_iio_all_starts_with_fixed_metrics():
    metrics = IioMetric.all()
    assert metrics[0] == IioMetric.IIO_TLB_MISS
    assert metrics[0].value == "IIOTLBMiss"
    fixed = [m for m in metrics if not m.is_pcie_bandwidth]
    assert fixed[-1] == IioMetric.IIO_FREQUENCY
    first_pcie = next(i for i, m in enumerate(metrics) if m.is_pcie_bandwidth)
    assert all(m.is_pcie_bandwidth for m in metrics[first_pcie:])


def test_iio_all_covers_every_channel_and_port():
    pcie = [m for m in IioMetric.all() if m.is_pcie_bandwidth]
    assert len(pcie) == 2 * IIO_CHANNEL_COUNT * IIO_PCIE_PORT_COUNT
    pairs = {(m.channel, m.port, m.kind) for m in pcie}
    assert len(pairs) == len(pcie)


def test_iio_pcie_ordering_and_names():
    pcie = [m for m in IioMetric.all() if m.is_pcie_bandwidth]
    assert pcie[0] == IioMetric.pcie_in(0, 0)
    assert pcie[1] == IioMetric.pcie_out(0, 0)
    assert pcie[0].value == "PCIe00InBandwidth"
    assert pcie[1].value == "PCIe00OutBandwidth"


def test_iio_names_unique_and_hashable():
    metrics = IioMetric.all()
    assert len({m.value for m in metrics}) == len(metrics)
    assert len(set(metrics)) == len(metrics)


def test_iio_str_matches_value():
    metric = IioMetric.pcie_out(2, 3)
    assert str(metric) == metric.value
    assert metric.channel == 2 and metric.port == 3


def test_iio_rejects_unknown_fixed_metric():
    with pytest.raises(ValueError):
        IioMetric("Bogus")


def test_iio_rejects_half_specified_pcie_metric():
    with pytest.raises(ValueError):
        IioMetric("In", channel=1)


def test_iio_rejects_bad_direction():
    with pytest.raises(ValueError):
        IioMetric("Sideways", 0, 0)