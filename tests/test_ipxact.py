import xml.etree.ElementTree as ET

import pytest

from regforge.ipxact import IPXACTWriter, access_name
from regforge.model import Access, Component, Enumeration, Register, RegisterBitmap


def _children(element, tag):
    return [child for child in element if child.tag == tag]


def _text(element, tag):
    (child,) = _children(element, tag)
    return child.text


def _component(**kwargs):
    en = RegisterBitmap(
        "en",
        start=0,
        stop=0,
        access=Access.WRITE_ONCE,
        enums=[Enumeration("on", 1), Enumeration("off", 0)],
    )
    mode = RegisterBitmap("mode", start=7, stop=4, description="Mode")
    ctrl = Register("ctrl", addr=0x10, width=32, description="Control", bitmaps=[mode, en])
    table = Register("table", addr=0x20, dimensions=4, type_id="TableType")
    status = Register("status", addr=0x4)
    return Component("dev", base=0x4000, range=0x100, registers=[ctrl, table, status], **kwargs)


@pytest.mark.parametrize(
    "access,expected",
    [
        (Access.RESERVED, "read-only"),
        (Access.READ_ONLY, "read-only"),
        (Access.WRITE_ONLY, "write-only"),
        (Access.READ_WRITE, "read-write"),
        (Access.WRITE_ONCE, "writeOnce"),
        (Access.READ_WRITE_ONCE, "read-writeOnce"),
    ],
)
def test_access_name(access, expected):
    assert access_name(access) == expected


def test_root_metadata():
    root = IPXACTWriter("out.xml", "proj").build_document([_component()])
    assert root.tag == "ipxact:component"
    assert _text(root, "ipxact:library") == "proj"
    assert _text(root, "ipxact:name") == "Register Definitions"
    assert _text(root, "ipxact:version") == "1.0"
    assert "xmlns:ipxact" in root.attrib


def test_no_components_means_no_memory_maps():
    root = IPXACTWriter("out.xml", "proj").build_document([])
    assert _children(root, "ipxact:memoryMaps") == []


def test_address_block_values():
    root = IPXACTWriter("out.xml", "proj").build_document([_component()])
    block = next(root.iter("ipxact:addressBlock"))
    assert int(_text(block, "ipxact:baseAddress"), 16) == 0x4000
    assert int(_text(block, "ipxact:range"), 16) == 0x100
    assert _text(block, "ipxact:usage") == "register"
    memory_map = next(root.iter("ipxact:memoryMap"))
    assert int(_text(memory_map, "ipxact:addressUnitBits"), 16) == 8


def test_registers_sorted_with_optional_elements():
    root = IPXACTWriter("out.xml", "proj").build_document([_component()])
    regs = list(root.iter("ipxact:register"))
    assert [_text(reg, "ipxact:name") for reg in regs] == ["status", "ctrl", "table"]
    status, ctrl, table = regs
    assert _children(status, "ipxact:dim") == []
    assert int(_text(table, "ipxact:dim"), 16) == 4
    assert _text(table, "ipxact:typeIdentifier") == "TableType"
    assert int(_text(ctrl, "ipxact:addressOffset"), 16) == 0x10
    assert int(_text(ctrl, "ipxact:size"), 16) == 32
    assert _text(ctrl, "ipxact:volatile") == "true"


def test_fields_and_enumerations():
    root = IPXACTWriter("out.xml", "proj").build_document([_component()])
    fields = list(root.iter("ipxact:field"))
    assert [_text(f, "ipxact:name") for f in fields] == ["en", "mode"]
    en, mode = fields
    assert _text(en, "ipxact:access") == "writeOnce"
    assert int(_text(mode, "ipxact:bitOffset"), 16) == 4
    assert int(_text(mode, "ipxact:bitWidth"), 16) == 4
    values = list(en.iter("ipxact:enumeratedValue"))
    assert [_text(v, "ipxact:name") for v in values] == ["off", "on"]
    children = list(en)
    index = children.index(_children(en, "ipxact:enumeratedValues")[0])
    assert children[index - 1].tag is ET.Comment


def test_type_copy_component_has_no_registers():
    root = IPXACTWriter("out.xml", "proj").build_document([_component(copy_of="other")])
    assert list(root.iter("ipxact:register")) == []
    assert len(list(root.iter("ipxact:addressBlock"))) == 1


def test_render_is_parseable_xml():
    text = IPXACTWriter("out.xml", "proj").render([_component()])
    assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
    parsed = ET.fromstring(text.split("\n", 1)[1])
    ns = "{http://www.accellera.org/XMLSchema/IPXACT/1685-2014}"
    assert parsed.tag == ns + "component"
    assert len(list(parsed.iter(ns + "register"))) == 3


def test_write_matches_render(tmp_path):
    path = tmp_path / "out.xml"
    writer = IPXACTWriter(path, "proj")
    writer.write([_component()])
    assert path.read_text(encoding="utf-8") == writer.render([_component()])