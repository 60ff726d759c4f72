"""IMC (integrated memory controller) register definitions for Skylake-SP.

Addresses and event codes for measuring memory bandwidth, latency and queue
occupancy.
"""

IMC_CHANNEL_COUNT = 6
COUNTERS_PER_CHANNEL = 4
COUNTER_WIDTH_BITS = 48
CACHE_LINE_SIZE = 64

# MSR addresses of the IMC counters
IMC_UNIT_CTRL = 0x0F1
IMC_CTR0 = 0x0A0
IMC_CTR1 = 0x0A8
IMC_CTR2 = 0x0B0
IMC_CTR3 = 0x0B8
IMC_CTL0 = 0x0D8
IMC_CTL1 = 0x0DC
IMC_CTL2 = 0x0E0
IMC_CTL3 = 0x0E4

# PCI configuration space offsets
IMC_BOX_CTL = 0x0F4
IMC_DCLK_CTL = 0x0A4
IMC_DCLK_CTR = 0x0A4

# (PCI device, PCI function, device id) of each channel
IMC_CHANNELS = (
    (0x0A, 2, 0x2042),
    (0x0A, 6, 0x2046),
    (0x0B, 2, 0x204A),
    (0x0C, 2, 0x2042),
    (0x0C, 6, 0x2046),
    (0x0D, 2, 0x204A),
)

# Event codes
CAS_COUNT_RD = 0x04
CAS_COUNT_WR = 0x04
CAS_COUNT_RD_UMASK = 0x03
CAS_COUNT_WR_UMASK = 0x0C
RPQ_OCCUPANCY = 0x80
WPQ_OCCUPANCY = 0x81