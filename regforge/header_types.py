"""Type and qualifier names used by the C header writer."""

from __future__ import annotations

from .model import Component, Register
from .naming import c_type, camelcase, guard_name


class HeaderNaming:
    """Derives C type names from the header file name and the register model."""

    def __init__(self, filename):
        self.filename = str(filename)

    def type_name(self, width, signed):
        """Integer type for ``width`` bits, prefixed with the file's guard name."""
        return f"{guard_name(self.filename)}_{c_type(width, signed)}"

    def volatile(self):
        """Name of the volatile qualifier macro for this file."""
        return guard_name(self.filename) + "_VOLATILE"

    def component_type_name(self, component: Component):
        """C type name of ``component``."""
        return (component.type_id or component.name).upper() + "_t"

    def register_type_name(self, component: Component, reg: Register):
        """C type name of ``reg`` within ``component``."""
        component_name = (component.type_id or component.name).upper()
        reg_name = reg.type_id or reg.name
        return f"Reg{component_name}{camelcase(reg_name)}_t"