"""IP-XACT XML writer."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from .model import Access, Component, Register, RegisterBitmap
from .writer import Writer

_XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
_IPXACT_NAMESPACE = "http://www.accellera.org/XMLSchema/IPXACT/1685-2014"
_SCHEMA_LOCATION = "http://www.accellera.org/images/XMLSchema/IPXACT/1685-2014/index.xsd"

_ACCESS_NAMES = {
    Access.RESERVED: "read-only",
    Access.READ_ONLY: "read-only",
    Access.WRITE_ONLY: "write-only",
    Access.READ_WRITE: "read-write",
    Access.WRITE_ONCE: "writeOnce",
    Access.READ_WRITE_ONCE: "read-writeOnce",
}


def access_name(access: Access) -> str:
    """The IP-XACT access keyword for ``access``."""
    return _ACCESS_NAMES.get(access, "read-write")


def _element(parent: ET.Element, tag: str, value: str | int | None = None) -> ET.Element:
    child = ET.SubElement(parent, tag)
    if isinstance(value, int):
        child.text = f"0x{value:x}"
    elif value is not None:
        child.text = value
    return child


class IPXACTWriter(Writer):
    """Serialises components as an IP-XACT component document."""

    VENDOR = "regforge"
    NAME = "Register Definitions"
    VERSION = "1.0"

    def _serialize_bitmap(self, parent: ET.Element, bitmap: RegisterBitmap) -> None:
        field = _element(parent, "ipxact:field")
        _element(field, "ipxact:name", bitmap.name)
        _element(field, "ipxact:description", bitmap.description)
        _element(field, "ipxact:bitOffset", bitmap.stop)
        _element(field, "ipxact:bitWidth", bitmap.width())
        _element(field, "ipxact:access", access_name(bitmap.access))
        if bitmap.enums:
            field.append(ET.Comment(" LINK: enumeratedValue: see 6.11.10, Enumeration values "))
            values = _element(field, "ipxact:enumeratedValues")
            for item in bitmap.enums:
                node = _element(values, "ipxact:enumeratedValue")
                _element(node, "ipxact:name", item.name)
                _element(node, "ipxact:value", item.value)

    def _serialize_register(self, parent: ET.Element, reg: Register) -> None:
        parent.append(
            ET.Comment(" LINK: registerDefinitionGroup: see 6.11.3, Register definition group ")
        )
        node = _element(parent, "ipxact:register")
        _element(node, "ipxact:name", reg.name)
        _element(node, "ipxact:description", reg.description)
        _element(node, "ipxact:addressOffset", reg.addr)
        if reg.type_id:
            _element(node, "ipxact:typeIdentifier", reg.type_id)
        if reg.dimensions > 1:
            _element(node, "ipxact:dim", reg.dimensions)
        _element(node, "ipxact:size", reg.width)
        _element(node, "ipxact:volatile", "true")
        for bitmap in reg.bitmaps:
            bitmap.sort()
            self._serialize_bitmap(node, bitmap)

    def _serialize_component(self, parent: ET.Element, component: Component) -> None:
        memory_map = _element(parent, "ipxact:memoryMap")
        _element(memory_map, "ipxact:name", component.name)
        _element(memory_map, "ipxact:description", component.description)

        block = _element(memory_map, "ipxact:addressBlock")
        _element(block, "ipxact:name", component.name)
        _element(block, "ipxact:description", component.description)
        _element(block, "ipxact:baseAddress", component.base)
        if component.type_id:
            _element(block, "ipxact:typeIdentifier", component.type_id)
        _element(block, "ipxact:range", component.range)
        _element(block, "ipxact:usage", "register")
        _element(block, "ipxact:volatile", "false")

        if not component.is_type_id_copy():
            for reg in component.registers:
                reg.sort()
                self._serialize_register(block, reg)

        _element(memory_map, "ipxact:addressUnitBits", component.address_unit_bits)

    def build_document(self, components):
        """Build the root ``ipxact:component`` element for ``components``."""
        components = list(components)
        root = ET.Element(
            "ipxact:component",
            {
                "xmlns:xsi": _XSI_NAMESPACE,
                "xmlns:ipxact": _IPXACT_NAMESPACE,
                "xsi:schemaLocation": _SCHEMA_LOCATION,
            },
        )
        _element(root, "ipxact:vendor", self.VENDOR)
        _element(root, "ipxact:library", self.project)
        _element(root, "ipxact:name", self.NAME)
        _element(root, "ipxact:version", self.VERSION)

        if components:
            maps = _element(root, "ipxact:memoryMaps")
            for component in components:
                component.sort()
                self._serialize_component(maps, component)
        return root

    def render(self, components):
        """Return the XML document as text, with its declaration."""
        root = self.build_document(components)
        ET.indent(root, space="\t")
        body = ET.tostring(root, encoding="unicode")
        return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"

    def write(self, components):
        self.write_to_file(self.filename, self.render(components))