from dataclasses import dataclass

import pytest

from uncflow.register import Register, RegisterError, RegisterLayout


@dataclass
class MyControl(RegisterLayout):
    enable: bool = False
    threshold: int = 0

    def to_msr_value(self) -> int:
        return (1 if self.enable else 0) | ((self.threshold & 0xFF) << 8)

    @classmethod
    def from_msr_value(cls, value: int) -> "MyControl":
        return cls(enable=bool(value & 1), threshold=(value >> 8) & 0xFF)

    def validate(self) -> None:
        if self.threshold > 0xFF:
            raise RegisterError("threshold too large")


@dataclass
class PlainLayout(RegisterLayout):
    raw: int = 0

    def to_msr_value(self) -> int:
        return self.raw

    @classmethod
    def from_msr_value(cls, value: int) -> "PlainLayout":
        return cls(raw=value)


def test_register_delegates_encoding_to_layout():
    layout = MyControl(enable=True, threshold=10)
    reg = Register(0xE01, layout)
    assert reg.address == 0xE01
    assert reg.to_msr_value() == layout.to_msr_value()
    assert MyControl.from_msr_value(reg.to_msr_value()) == layout


def test_with_address_uses_default_layout():
    reg = Register.with_address(0xE00, MyControl)
    assert reg.address == 0xE00
    assert reg.layout == MyControl()
    assert reg.to_msr_value() == 0


def test_load_msr_value_replaces_layout():
    reg = Register.with_address(0xE01, MyControl)
    original = MyControl(enable=True, threshold=42)
    reg.load_msr_value(original.to_msr_value())
    assert reg.layout == original
    assert reg.address == 0xE01


def test_validate_propagates_layout_error():
    reg = Register(0xE01, MyControl(threshold=300))
    with pytest.raises(RegisterError):
        reg.validate()


def test_default_validate_accepts_any_value():
    reg = Register(0x10, PlainLayout(raw=2**64 - 1))
    assert reg.validate() is None
    assert reg.to_msr_value() == 2**64 - 1


def test_register_error_is_value_error():
    reg = Register(0x20, MyControl(threshold=1000))
    with pytest.raises(ValueError) as info:
        reg.validate()
    assert isinstance(info.value, RegisterError)
    assert "threshold too large" in str(info.value)


def test_layout_base_is_abstract():
    with pytest.raises(TypeError):
        RegisterLayout()