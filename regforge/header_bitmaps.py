"""Bit field macros, bit field members and simulator constructors of the C header writer."""

from __future__ import annotations

from typing import Callable

from .header_types import HeaderNaming
from .model import Component, Enumeration, Register, RegisterBitmap
from .naming import camelcase, escape, escape_enum

_ASCII_DIGITS = frozenset("0123456789")


def _field_mask(bitmap: RegisterBitmap) -> int:
    """Mask covering bits ``stop`` to ``start``, as a 32 bit value."""
    if bitmap.start < bitmap.stop:
        return 0
    return ((1 << (bitmap.start + 1)) - (1 << bitmap.stop)) & 0xFFFFFFFF


def _member_identifier(name: str) -> str:
    """A bit field name usable as a structure member."""
    name = escape_enum(name)
    if name[:1] in _ASCII_DIGITS:
        name = "_" + name
    return name


class _Indentation:
    """Indentation counter used when no writer supplies one."""

    def __init__(self) -> None:
        self.level = 0

    def __call__(self, modifier: int = 0) -> str:
        self.level += modifier
        return "    " * max(self.level, 0)


class HeaderBitmaps:
    """Serialises register bit fields for the C header writer.

    ``indent`` is a callable taking a level change and returning the current
    indentation prefix; a writer's ``indent`` method fits.
    """

    def __init__(self, naming: HeaderNaming, indent: Callable[..., str] | None = None):
        self.naming = naming
        self.indent = indent if indent is not None else _Indentation()

    def serialize_enum_definition(self, component: Component, reg: Register,
                                  bitmap: RegisterBitmap, enum: Enumeration):
        """``#define`` of one enumerated value of ``bitmap``."""
        names = (
            component.type_id or component.name,
            reg.type_id or reg.name,
            bitmap.name,
            enum.name,
        )
        macro = "_".join(escape(name).upper() for name in names)
        return f"#define     {macro} 0x{enum.value:x}u\n"

    def serialize_bitmap_definition(self, component: Component, reg: Register,
                                    bitmap: RegisterBitmap):
        """Shift, mask and accessor macros of ``bitmap``, then its enumerated values."""
        prefix = "_".join(
            escape(name).upper() for name in (component.name, reg.name, bitmap.name)
        )
        mask = _field_mask(bitmap)
        shift = bitmap.stop
        lines = [
            f"#define     {prefix}_SHIFT {shift}u\n",
            f"#define     {prefix}_MASK  0x{mask:x}u\n",
            f"#define GET_{prefix}(__reg__)  (((__reg__) & 0x{mask:x}) >> {shift}u)\n",
            f"#define SET_{prefix}(__val__)  (((__val__) << {shift}u) & 0x{mask:x}u)\n",
        ]
        if bitmap.enums:
            lines.extend(
                self.serialize_enum_definition(component, reg, bitmap, item)
                for item in bitmap.enums
            )
            lines.append("\n")
        return "".join(lines)

    def serialize_bitmap_declaration(self, bitmap: RegisterBitmap, regwidth):
        """``BITFIELD_MEMBER`` entry of ``bitmap`` inside a ``regwidth`` bit container."""
        name = _member_identifier(bitmap.name)
        storage = self.naming.type_name(regwidth, False)
        return (
            f"{self.indent()}/** @brief {bitmap.description} */\n"
            f"{self.indent()}BITFIELD_MEMBER({storage}, {name}, {bitmap.stop}, {bitmap.width()})\n"
        )

    def serialize_bitmap_constructor(self, reg: Register, bitmap: RegisterBitmap):
        """Simulator constructor statements that set up ``bitmap``."""
        name = _member_identifier(bitmap.name)
        variable = f"bits.{name}"
        base = f"r{reg.width}"
        lines = [
            f"{self.indent()}{variable}.setBaseRegister(&{base});\n",
            f'{self.indent()}{variable}.setName("{name}");\n',
        ]
        if bitmap.enums:
            lines.extend(
                f'{self.indent()}{variable}.addEnum("{item.name}", 0x{item.value:x});\n'
                for item in bitmap.enums
            )
            lines.append("\n")
        return "".join(lines)

    def serialize_register_constructor(self, component: Component, reg: Register):
        """Simulator constructor body of ``reg``."""
        reg_name = camelcase(reg.name.upper())
        component_type = self.naming.component_type_name(component)
        parts = [
            f"{self.indent()}/** @brief constructor for @ref {component_type}.{reg_name}. */\n",
            f'{self.indent()}r{reg.width}.setName("{reg_name}");\n',
        ]
        parts.extend(self.serialize_bitmap_constructor(reg, bitmap) for bitmap in reg.bitmaps)
        return "".join(parts)