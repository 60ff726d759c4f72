"""Reading and writing model-specific registers through /dev/cpu/*/msr."""

from __future__ import annotations

import os

_MSR_SIZE = 8
_O_SYNC = getattr(os, "O_SYNC", 0)


class MsrError(Exception):
    """An MSR device could not be accessed."""

    def __init__(self, message: str, cpu: int, source: BaseException) -> None:
        super().__init__(message)
        self.cpu = cpu
        self.source = source


class MsrOpenError(MsrError):
    """The MSR device for a CPU could not be opened."""

    def __init__(self, cpu: int, source: BaseException) -> None:
        super().__init__(f"Failed to open MSR device for CPU {cpu}: {source}", cpu, source)


class _AddressedMsrError(MsrError):
    _action = "access"

    def __init__(self, cpu: int, msr: int, source: BaseException) -> None:
        super().__init__(
            f"Failed to {self._action} MSR 0x{msr:X} on CPU {cpu}: {source}", cpu, source
        )
        self.msr = msr


class MsrReadError(_AddressedMsrError):
    """A register could not be read."""

    _action = "read"


class MsrWriteError(_AddressedMsrError):
    """A register could not be written."""

    _action = "write"


class MsrSeekError(_AddressedMsrError):
    """The device could not be positioned at a register address."""

    _action = "seek to"


def _device_path(cpu: int) -> str:
    return f"/dev/cpu/{cpu}/msr"


def _seek(fd: int, cpu: int, msr: int) -> None:
    try:
        os.lseek(fd, msr, os.SEEK_SET)
    except (OSError, OverflowError) as exc:
        raise MsrSeekError(cpu, msr, exc) from exc


def read_msr(cpu: int, msr: int) -> int:
    """Read the 64-bit value of register ``msr`` on ``cpu``."""
    try:
        fd = os.open(_device_path(cpu), os.O_RDONLY)
    except OSError as exc:
        raise MsrOpenError(cpu, exc) from exc
    try:
        _seek(fd, cpu, msr)
        data = b""
        while len(data) < _MSR_SIZE:
            try:
                chunk = os.read(fd, _MSR_SIZE - len(data))
            except OSError as exc:
                raise MsrReadError(cpu, msr, exc) from exc
            if not chunk:
                raise MsrReadError(cpu, msr, EOFError("failed to fill whole buffer"))
            data += chunk
    finally:
        os.close(fd)
    return int.from_bytes(data, "little")


def write_msr(cpu: int, msr: int, value: int) -> None:
    """Write the 64-bit ``value`` to register ``msr`` on ``cpu``, synchronously."""
    if not 0 <= value < 1 << 64:
        raise ValueError(f"MSR value {value:#x} does not fit in 64 bits")
    try:
        fd = os.open(_device_path(cpu), os.O_WRONLY | _O_SYNC)
    except OSError as exc:
        raise MsrOpenError(cpu, exc) from exc
    try:
        _seek(fd, cpu, msr)
        remaining = memoryview(value.to_bytes(_MSR_SIZE, "little"))
        while remaining:
            try:
                written = os.write(fd, remaining)
            except OSError as exc:
                raise MsrWriteError(cpu, msr, exc) from exc
            if written == 0:
                raise MsrWriteError(cpu, msr, OSError("failed to write whole buffer"))
            remaining = remaining[written:]
    finally:
        os.close(fd)