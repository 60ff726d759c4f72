"""IRP (I/O request processing) register definitions for Skylake-SP.

Addresses for the counters that track PCIe bandwidth, latency and other I/O
operations.
"""

IRP_UNIT_COUNT = 3
COUNTERS_PER_IRP = 4
COUNTER_WIDTH_BITS = 48
IRP_DEVICE_ID = 0x6F39

# MSR addresses, one per IRP unit
IRP_UNIT_CTRL = (0x0A78, 0x0A98, 0x0AB8)
IRP_UNIT_STATUS = (0x0A7F, 0x0A9F, 0x0ABF)
IRP_CTR0 = (0x0A79, 0x0A99, 0x0AB9)
IRP_CTR1 = (0x0A7A, 0x0A9A, 0x0ABA)
IRP_CTRL0 = (0x0A7B, 0x0A9B, 0x0ABB)
IRP_CTRL1 = (0x0A7C, 0x0A9C, 0x0ABC)

# PCI configuration space offsets
IRP_UNIT_STATUS_ADDR = 0xF8
IRP_UNIT_CTL_ADDR = 0xF4
IRP_CTR_ADDR = (0xA0, 0xB0, 0xB8, 0xC0)
IRP_CTL_ADDR = (0xD8, 0xDC, 0xE0, 0xE4)