"""Register macros, register containers and register members of the C header writer."""

from __future__ import annotations

import logging

from .header_layout import HeaderLayout
from .model import Component, Register
from .naming import camelcase, escape

_log = logging.getLogger(__name__)

_ASCII_DIGITS = frozenset("0123456789")


def _member_name(name: str) -> str:
    """Name of the structure member that holds a register called ``name``."""
    member = camelcase(escape(name))
    if name[:1] in _ASCII_DIGITS:
        member = "_" + member
        _log.warning("Invalid: %s", member)
    return member


class HeaderRegisters(HeaderLayout):
    """Serialises registers for the C header writer."""

    def serialize_register_definition(self, component: Component, reg: Register):
        """Address macro of ``reg`` followed by its field macros and container type."""
        width = reg.width
        reg_upper = reg.name.upper()
        storage = self.naming.type_name(width, False)
        address = component.base + reg.addr
        define = (
            f"#define REG_{component.name.upper()}_{escape(reg_upper)} "
            f"(({self.naming.volatile()} {storage}*)0x{address:x}) /* {reg.description} */\n"
        )
        if component.is_type_id_copy() or reg.is_type_id_copy():
            return define

        register_type = self.naming.register_type_name(component, reg)
        component_type = self.naming.component_type_name(component)
        display_name = camelcase(reg_upper)

        parts = [define]
        if reg.bitmaps:
            for bitmap in reg.bitmaps:
                bitmap.sort()
                parts.append(self.serialize_bitmap_definition(component, reg, bitmap))
            parts.append("\n")

        parts.append(
            f"{self.indent()}/** @brief Register definition for @ref "
            f"{component_type}.{display_name}. */\n"
        )
        parts.append(f"{self.indent()}typedef register_container {register_type} {{\n")
        self.indent(1)

        parts.append(f"{self.indent()}/** @brief {width}bit direct register access. */\n")
        parts.append(f"{self.indent()}{storage} r{width};\n")

        parts.append(self.serialize_bitfields(component, reg))

        parts.append("#ifdef CXX_SIMULATOR\n")
        parts.append(f"{self.indent()}/** @brief Register name for use with the simulator. */\n")
        parts.append(
            f'{self.indent()}const char* getName(void) {{ return "{display_name}"; }}\n\n'
        )
        parts.append(f"{self.indent()}/** @brief Print register value. */\n")
        parts.append(f"{self.indent()}void print(void) {{ r{width}.print(); }}\n\n")

        parts.append(f"{self.indent()}{register_type}()\n")
        parts.append(f"{self.indent()}{{\n")
        self.indent(1)
        parts.append(self.serialize_register_constructor(component, reg))
        self.indent(-1)
        parts.append(f"{self.indent()}}}\n")

        parts.append(
            f"{self.indent()}{register_type}& operator=(const {register_type}& other)\n"
        )
        parts.append(f"{self.indent()}{{\n")
        parts.append(f"{self.indent(1)}r{width} = other.r{width};\n")
        parts.append(f"{self.indent()}return *this;\n")
        self.indent(-1)
        parts.append(f"{self.indent()}}}\n")
        parts.append("#endif /* CXX_SIMULATOR */\n")

        parts.append(f"{self.indent(-1)}}} {register_type};\n\n")
        return "".join(parts)

    def serialize_register_declaration(self, component: Component, reg: Register):
        """Member declaration of ``reg`` inside its component structure."""
        register_type = self.naming.register_type_name(component, reg)
        member = _member_name(reg.name)
        parts = [f"{self.indent()}/** @brief {reg.description} */\n"]
        if reg.dimensions > 1:
            parts.append(f"{self.indent()}{register_type} {member}[{reg.dimensions}];\n\n")
        else:
            parts.append(f"{self.indent()}{register_type} {member};\n\n")
        return "".join(parts)