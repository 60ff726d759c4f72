"""Typed layouts for model-specific registers and their addresses."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar


class RegisterError(ValueError):
    """A register layout holds a field value that the hardware cannot encode."""


L = TypeVar("L", bound="RegisterLayout")


class RegisterLayout(ABC):
    """A structured view of a raw 64-bit register value."""

    @abstractmethod
    def to_msr_value(self) -> int:
        """Encode the layout as a raw register value."""

    @classmethod
    @abstractmethod
    def from_msr_value(cls: type[L], value: int) -> L:
        """Decode a raw register value into a layout."""

    def validate(self) -> None:
        """Raise RegisterError if a field is out of range; layouts accept all by default."""


@dataclass
class Register(Generic[L]):
    """A register address paired with its typed layout."""

    address: int
    layout: L

    @classmethod
    def with_address(cls, address: int, layout_type: type[L]) -> "Register[L]":
        """Create a register whose layout has every field at its default."""
        return cls(address, layout_type())

    def validate(self) -> None:
        """Validate the layout, raising RegisterError when it is invalid."""
        self.layout.validate()

    def to_msr_value(self) -> int:
        """Return the raw value to write to this register."""
        return self.layout.to_msr_value()

    def load_msr_value(self, value: int) -> None:
        """Replace the layout with one decoded from a raw value."""
        self.layout = type(self.layout).from_msr_value(value)