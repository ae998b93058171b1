"""Assembly header writer: register addresses, field shifts, masks and values."""

from __future__ import annotations

from .model import Component, Enumeration, Register, RegisterBitmap
from .naming import replace_all
from .writer import Writer

_ASM_TABLE = str.maketrans({ch: "_" for ch in " .,:[]"})


def _asm_escape(text: str) -> str:
    text = text.translate(_ASM_TABLE)
    text = text.replace("@", "_AT_")
    return text.replace("/", "_DIV_")


def _field_mask(bitmap: RegisterBitmap) -> int:
    if bitmap.start < bitmap.stop:
        return 0
    return ((1 << (bitmap.start + 1)) - (1 << bitmap.stop)) & 0xFFFFFFFF


class ASMWriter(Writer):
    """Emits ``.equ`` directives describing every register of every component."""

    def __init__(self, filename, project, template):
        super().__init__(filename, project)
        self.template = template

    def _prefix(self, component: Component, reg: Register, bitmap: RegisterBitmap) -> str:
        return "_".join(
            _asm_escape(name).upper()
            for name in (component.name, reg.name, bitmap.name)
        )

    def serialize_enum_definition(self, component, reg, bitmap, enum: Enumeration):
        prefix = self._prefix(component, reg, bitmap)
        enum_name = _asm_escape(enum.name).upper()
        return f".equ        {prefix}_{enum_name}, 0x{enum.value:x}\n"

    def serialize_bitmap_definition(self, component, reg, bitmap):
        prefix = self._prefix(component, reg, bitmap)
        lines = [
            f".equ        {prefix}_SHIFT, {bitmap.stop}\n",
            f".equ        {prefix}_MASK,  0x{_field_mask(bitmap):x}\n",
        ]
        if bitmap.enums:
            lines.extend(
                self.serialize_enum_definition(component, reg, bitmap, item)
                for item in bitmap.enums
            )
            lines.append("\n")
        return "".join(lines)

    def serialize_register_definition(self, component, reg):
        name = f"REG_{component.name.upper()}_{reg.name.upper()}"
        address = component.base + reg.addr
        line = f".equ    {name}, 0x{address:x}"
        if reg.description:
            line += f" ; {reg.description}"
        parts = [line + "\n"]
        for bitmap in reg.bitmaps:
            bitmap.sort()
            parts.append(self.serialize_bitmap_definition(component, reg, bitmap))
        parts.append("\n")
        return "".join(parts)

    def serialize_component_declaration(self, component):
        parts = []
        for reg in component.registers:
            reg.sort()
            parts.append(self.serialize_register_definition(component, reg))
        return "".join(parts)

    def render(self, components):
        """Return the complete file contents for ``components``."""
        parts = []
        for component in components:
            component.sort()
            parts.append(self.serialize_component_declaration(component) + "\n")
        contents = self.update_template(self.template, self.filename)
        return replace_all(contents, "<SERIALIZED>", "".join(parts))

    def write(self, components):
        self.write_to_file(self.filename, self.render(components))