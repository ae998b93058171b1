"""Register map model: components, registers, bit fields and enumerations."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Access(enum.Enum):
    """Access policy of a register bit field."""

    RESERVED = "reserved"
    READ_ONLY = "read-only"
    WRITE_ONLY = "write-only"
    READ_WRITE = "read-write"
    WRITE_ONCE = "write-once"
    READ_WRITE_ONCE = "read-write-once"


@dataclass
class Enumeration:
    """A named value that a bit field may hold."""

    name: str
    value: int = 0
    description: str = ""


@dataclass
class RegisterBitmap:
    """A bit field spanning bits ``stop`` (lowest) to ``start`` (highest)."""

    name: str
    start: int = 0
    stop: int = 0
    description: str = ""
    access: Access = Access.READ_WRITE
    enums: list[Enumeration] = field(default_factory=list)

    def sort(self) -> None:
        """Order the enumerations by value."""
        self.enums.sort(key=lambda item: item.value)

    def width(self) -> int:
        """Number of bits covered by the field."""
        return self.start - self.stop + 1


@dataclass
class Register:
    """A register at ``addr`` within its component."""

    name: str
    addr: int = 0
    width: int = 32
    dimensions: int = 1
    description: str = ""
    type_id: str = ""
    copy_of: str = ""
    bitmaps: list[RegisterBitmap] = field(default_factory=list)

    def sort(self) -> None:
        """Order the bit fields from the lowest bit upwards."""
        self.bitmaps.sort(key=lambda bitmap: bitmap.stop)

    def is_type_id_copy(self) -> bool:
        """True when this register reuses the type of another register."""
        return bool(self.copy_of)


@dataclass
class Component:
    """A block of registers mapped at ``base``."""

    name: str
    base: int = 0
    range: int = 0
    address_unit_bits: int = 8
    description: str = ""
    type_id: str = ""
    copy_of: str = ""
    registers: list[Register] = field(default_factory=list)

    def sort(self) -> None:
        """Order the registers by address."""
        self.registers.sort(key=lambda reg: reg.addr)

    def is_type_id_copy(self) -> bool:
        """True when this component reuses the type of another component."""
        return bool(self.copy_of)

    def size(self) -> int:
        """Size of the component: its range, or the extent of its last register."""
        if self.range:
            return self.range
        if not self.registers:
            return 0
        last = self.registers[-1]
        extent = last.dimensions * (last.width // 8) + last.addr
        return extent * (self.address_unit_bits // 8)