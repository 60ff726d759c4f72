"""Skylake-SP register definitions for the CHA, core PMU, IIO, IMC, IRP, RAPL and RDT units."""