"""Assembly symbol table writer: one global symbol per component."""

from __future__ import annotations

from .model import Component
from .naming import replace_all
from .writer import Writer


def _register_extent(component: Component) -> int:
    if not component.registers:
        return 0
    last = component.registers[-1]
    return last.dimensions * (last.width // 8) + last.addr


class ASMSymbols(Writer):
    """Emits ``.global``/``.equ``/``.size`` directives for each component."""

    def __init__(self, filename, project, template):
        super().__init__(filename, project)
        self.template = template

    def serialize_component_declaration(self, component):
        name = component.name.upper()
        size = component.range or _register_extent(component)
        return (
            f".global {name}\n"
            f".equ    {name}, 0x{component.base:x}\n"
            f".size   {name}, 0x{size:x}\n"
        )

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