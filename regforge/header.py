"""C header writer: one header file per component."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path

from .header_register import HeaderRegisters, _member_name
from .header_types import HeaderNaming
from .model import Component, Register
from .naming import replace_all
from .writer import Writer

_log = logging.getLogger(__name__)


def _gap(component: Component, reg: Register, prevreg: Register | None) -> tuple[int, int]:
    """Expected start of ``reg`` and the padding between it and ``prevreg``."""
    if prevreg is None:
        return 0, reg.addr
    units = prevreg.width // component.address_unit_bits
    expected = prevreg.addr + units * prevreg.dimensions
    return expected, reg.addr - expected


def _reduce(padding: int) -> int:
    if padding % 4 == 0:
        return padding // 4
    if padding % 2 == 0:
        return padding // 2
    return padding


def _strip_extension(filename: str) -> str:
    head, dot, _ = filename.rpartition(".")
    return head if dot else filename


class HeaderWriter(Writer):
    """Writes a C header with register macros and types for each component."""

    def __init__(self, filename, project, template):
        super().__init__(filename, project)
        self.template = template
        self._registers = HeaderRegisters(HeaderNaming(self.filename), indent=self.indent)

    @contextmanager
    def _named_after(self, filename):
        previous = self._registers.naming
        self._registers.naming = HeaderNaming(filename)
        try:
            yield
        finally:
            self._registers.naming = previous

    def component_file(self, name):
        """Path of the header file for component ``name``."""
        return f"{_strip_extension(self.filename)}_{name}.h"

    def _loop(self, count: int, statements: list[str]) -> list[str]:
        lines = [f"{self.indent()}for(int i = 0; i < {count}; i++)\n", f"{self.indent()}{{\n"]
        self.indent(1)
        lines.extend(f"{self.indent()}{statement}\n" for statement in statements)
        lines.append(f"{self.indent(-1)}}}\n")
        return lines

    def _structure_members(self, component: Component) -> list[str]:
        naming = self._registers.naming
        parts: list[str] = []
        prevreg = None
        for reg in component.registers:
            expected, padding = _gap(component, reg, prevreg)
            if padding < 0:
                if prevreg is not None:
                    message = (
                        f"requested {padding} bytes of padding between component "
                        f"'{component.name}' registers '{prevreg.name}' and '{reg.name}'"
                    )
                else:
                    message = (
                        f"requested {padding} bytes of padding before component "
                        f"{component.name}'s first register '{reg.name}'"
                    )
                raise ValueError(message)
            if padding > 0:
                if prevreg is not None:
                    _log.info(
                        "adding %d bytes of padding between register %s and %s",
                        padding, prevreg.name, reg.name,
                    )
                else:
                    _log.info(
                        "adding %d bytes of padding before first register %s",
                        padding, reg.name,
                    )
                pad_width = component.address_unit_bits
                for _ in range(2):
                    if pad_width <= 16 and padding % 2 == 0:
                        padding //= 2
                        pad_width *= 2
                parts.append(
                    f"{self.indent()}/** @brief Reserved bytes to pad out data structure. */\n"
                )
                parts.append(
                    f"{self.indent()}{naming.type_name(pad_width, False)} "
                    f"reserved_{expected}[{padding}];\n\n"
                )
            reg.sort()
            parts.append(self._registers.serialize_register_declaration(component, reg))
            prevreg = reg
        return parts

    def _constructor_body(self, component: Component) -> list[str]:
        parts: list[str] = []
        prevreg = None
        for reg in component.registers:
            width = reg.width
            expected, padding = _gap(component, reg, prevreg)
            if padding > 0:
                parts.extend(self._loop(
                    _reduce(padding),
                    [f"reserved_{expected}[i].setComponentOffset(0x{expected:x} "
                     f"+ (i * {width // 8}));"],
                ))
            prevreg = reg

            member = _member_name(reg.name.upper())
            if reg.dimensions > 1:
                base = f"{member}[i].r{width}"
                statements = []
                if reg.type_id:
                    statements.append(f'{base}.setName("{member}");')
                statements.append(
                    f"{base}.setComponentOffset(0x{reg.addr:x} + (i * {width // 8}));"
                )
                parts.extend(self._loop(reg.dimensions, statements))
            else:
                base = f"{member}.r{width}"
                if reg.type_id:
                    parts.append(f'{self.indent()}{base}.setName("{member}");\n')
                parts.append(f"{self.indent()}{base}.setComponentOffset(0x{reg.addr:x});\n")
        return parts

    def _print_body(self, component: Component) -> list[str]:
        parts: list[str] = []
        prevreg = None
        for reg in component.registers:
            expected, padding = _gap(component, reg, prevreg)
            if padding > 0:
                parts.extend(self._loop(_reduce(padding), [f"reserved_{expected}[i].print();"]))
            prevreg = reg

            member = _member_name(reg.name.upper())
            if reg.dimensions > 1:
                parts.extend(self._loop(reg.dimensions, [f"{member}[i].print();"]))
            else:
                parts.append(f"{self.indent()}{member}.print();\n")
        return parts

    def serialize_component_declaration(self, component):
        """Macros, register types and the structure type of ``component``."""
        naming = self._registers.naming
        name = component.name
        component_type = naming.component_type_name(component)
        base = component.base * (component.address_unit_bits // 8)

        parts = [
            f"#define REG_{name}_BASE ((volatile void*)0x{base:x}) /* {component.description} */\n"
        ]
        if component.range:
            parts.append(f"#define REG_{name}_SIZE (0x{component.range:x})\n")
        else:
            parts.append(f"#define REG_{name}_SIZE (sizeof({component_type}))\n")
        parts.append("\n")

        for reg in component.registers:
            reg.sort()
            parts.append(self._registers.serialize_register_definition(component, reg))

        if not component.is_type_id_copy():
            parts.append(f"{self.indent()}/** @brief Component definition for @ref {name}. */\n")
            parts.append(f"{self.indent()}typedef struct {component_type} {{\n")
            self.indent(1)
            parts.extend(self._structure_members(component))

            parts.append("#ifdef CXX_SIMULATOR\n")
            parts.append(
                f"{self.indent()}typedef uint32_t (*callback_t)(uint32_t, uint32_t, void*);\n"
            )
            parts.append(f"{self.indent()}callback_t mIndexReadCallback;\n")
            parts.append(f"{self.indent()}void* mIndexReadCallbackArgs;\n\n")
            parts.append(f"{self.indent()}callback_t mIndexWriteCallback;\n")
            parts.append(f"{self.indent()}void* mIndexWriteCallbackArgs;\n\n")
            parts.append(
                f"{self.indent()}{component_type}() : mIndexReadCallback(0), "
                "mIndexReadCallbackArgs(0), mIndexWriteCallback(0), mIndexWriteCallbackArgs(0)\n"
            )
            parts.append(f"{self.indent()}{{\n")
            self.indent(1)
            parts.extend(self._constructor_body(component))
            parts.append(f"{self.indent(-1)}}}\n")

            parts.append(f"{self.indent()}void print()\n")
            parts.append(f"{self.indent()}{{\n")
            self.indent(1)
            parts.extend(self._print_body(component))
            parts.append(f"{self.indent(-1)}}}\n")

            parts.append(
                f"{self.indent()}uint32_t read(int offset) "
                "{ return mIndexReadCallback(0, offset, mIndexReadCallbackArgs); }\n"
            )
            parts.append(
                f"{self.indent()}void write(int offset, uint32_t value) "
                "{ (void)mIndexWriteCallback(value, offset, mIndexWriteCallbackArgs); }\n"
            )
            parts.append("#endif /* CXX_SIMULATOR */\n")
            parts.append(f"{self.indent(-1)}}} {component_type};\n\n")

        parts.append(f"{self.indent()}/** @brief {component.description} */\n")
        parts.append(f"{self.indent()}extern {naming.volatile()} {component_type} {name};\n\n")
        return "".join(parts)

    def render_component(self, component):
        """Return a mapping of output path to contents for ``component``."""
        filename = self.component_file(component.name)
        includes = ""
        if component.is_type_id_copy():
            includes = f'#include "{self.component_file(component.copy_of)}"\n'

        component.sort()
        contents = replace_all(self.template, "<INCLUDES>", includes)
        contents = self.update_template(contents, filename, component)
        with self._named_after(filename):
            serialized = self.serialize_component_declaration(component)
        contents = replace_all(contents, "<SERIALIZED>", serialized)
        contents = replace_all(contents, "<INIT_FUNCTIONS>", serialized)
        return {filename: contents}

    def write_component(self, component):
        """Write the header file of ``component``."""
        for path, contents in self.render_component(component).items():
            self.write_to_file(Path(path), contents)

    def write(self, components):
        for component in components:
            self.write_component(component)