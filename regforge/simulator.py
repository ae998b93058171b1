"""C++ simulator writer: register models and memory-mapped callback hookup."""

from __future__ import annotations

import logging
from pathlib import Path

from .model import Component, Register
from .naming import camelcase, escape, replace_all
from .writer import Writer

_log = logging.getLogger(__name__)

_ASCII_DIGITS = frozenset("0123456789")


def _member_name(name: str) -> str:
    """The member name used for a register inside its component structure."""
    upper = name.upper()
    member = camelcase(escape(upper))
    if upper[:1] in _ASCII_DIGITS:
        member = "_" + member
        _log.warning("Invalid: %s", member)
    return member


def _gap(component: Component, reg: Register, prevreg: Register | None) -> tuple[int, int]:
    """Expected start of ``reg`` and the padding between it and ``prevreg``."""
    if prevreg is None:
        return 0, reg.addr
    units = prevreg.width // component.address_unit_bits
    expected = prevreg.addr + units * prevreg.dimensions
    return expected, reg.addr - expected


def _strip_extension(filename: str) -> str:
    head, dot, _ = filename.rpartition(".")
    return head if dot else filename


class SimulatorWriter(Writer):
    """Writes a register model file and a memory-map file for each component."""

    def __init__(self, filename, project, template, mmap_template):
        super().__init__(filename, project)
        self.template = template
        self.mmap_template = mmap_template

    def component_file(self, name):
        """Path of the register model file for component ``name``."""
        return f"{_strip_extension(self.filename)}_{name}.cpp"

    def mmap_file(self, name):
        """Path of the memory-map file for component ``name``."""
        return f"{_strip_extension(self.filename)}_{name}_sim.cpp"

    def component_type_name(self, component):
        """C type name of ``component``: its type id or name, upper case, with ``_t``."""
        return (component.type_id or component.name).upper() + "_t"

    def _serialize_register_definition(self, component: Component, reg: Register) -> str:
        type_name = self.component_type_name(component)
        return (
            f"{self.indent()}/** @brief Bitmap for @ref {type_name}."
            f"{camelcase(reg.name.upper())}. */\n\n"
        )

    def serialize_component_declaration(self, component):
        """Register model section of ``component``."""
        parts = [f"{self.indent()}/** @brief Component Registers for @ref {component.name}. */\n"]
        for reg in component.registers:
            reg.sort()
            parts.append(self._serialize_register_definition(component, reg))
        return "".join(parts)

    def _install_callbacks(self, base: str) -> list[str]:
        prefix = self.indent()
        return [
            f"{prefix}{base}.installReadCallback(read, (uint8_t *)base);\n",
            f"{prefix}{base}.installWriteCallback(write, (uint8_t *)base);\n",
        ]

    def serialize_register_mmap_definition(self, component, reg, prevreg):
        """Callback installation for ``reg``, with any padding since ``prevreg``."""
        type_name = self.component_type_name(component)
        expected, padding = _gap(component, reg, prevreg)
        lines: list[str] = []

        if padding < 0:
            if prevreg is not None:
                message = (
                    f"requested {padding} bytes of padding between component type "
                    f"'{type_name}' registers '{prevreg.name}' and '{reg.name}'"
                )
            else:
                message = (
                    f"requested {padding} bytes of padding before component type "
                    f"{type_name}'s first register '{reg.name}'"
                )
            raise ValueError(message)

        if padding > 0:
            if prevreg is not None:
                _log.info(
                    "adding %d bytes of padding between register %s and %s",
                    padding, prevreg.name, reg.name,
                )
            else:
                _log.info("adding %d bytes of padding before first register %s", padding, reg.name)
            if padding % 4 == 0:
                padding //= 4
            elif padding % 2 == 0:
                padding //= 2

            base = f"{component.name}.reserved_{expected}[i]"
            lines.append(f"{self.indent()}for(int i = 0; i < {padding}; i++)\n")
            lines.append(f"{self.indent()}{{\n")
            self.indent(1)
            lines.extend(self._install_callbacks(base))
            lines.append(f"{self.indent(-1)}}}\n")

        lines.append(
            f"{self.indent()}/** @brief Bitmap for @ref {type_name}."
            f"{camelcase(reg.name.upper())}. */\n"
        )

        member = _member_name(reg.name)
        if reg.dimensions > 1:
            base = f"{component.name}.{member}[i].r{reg.width}"
            lines.append(f"{self.indent()}for(int i = 0; i < {reg.dimensions}; i++)\n")
            lines.append(f"{self.indent()}{{\n")
            self.indent(1)
            lines.extend(self._install_callbacks(base))
            lines.append(f"{self.indent(-1)}}}\n")
        else:
            base = f"{component.name}.{member}.r{reg.width}"
            lines.extend(self._install_callbacks(base))

        lines.append("\n")
        return "".join(lines)

    def serialize_mmap_declaration(self, component):
        """Memory-map section of ``component``."""
        parts = [f"{self.indent()}/** @brief Component Registers for @ref {component.name}. */\n"]
        prevreg = None
        for reg in component.registers:
            reg.sort()
            parts.append(self.serialize_register_mmap_definition(component, reg, prevreg))
            prevreg = reg
        return "".join(parts)

    def render_component(self, component):
        """Return a mapping of output path to contents for ``component``."""
        filename = self.component_file(component.name)
        mmap_filename = self.mmap_file(component.name)

        self.indent(1)
        try:
            component.sort()
            contents = self.update_template(self.template, filename, component)
            contents = replace_all(
                contents, "<SERIALIZED>", self.serialize_component_declaration(component)
            )
            mmap_contents = self.update_template(self.mmap_template, mmap_filename, component)
            mmap_contents = replace_all(
                mmap_contents, "<SERIALIZED>", self.serialize_mmap_declaration(component)
            )
        finally:
            self.indent(-1)
        return {filename: contents, mmap_filename: mmap_contents}

    def write_component(self, component):
        """Write both output files of ``component``."""
        for path, contents in self.render_component(component).items():
            self.write_to_file(Path(path), contents)

    def write(self, components):
        for component in components:
            self.write_component(component)