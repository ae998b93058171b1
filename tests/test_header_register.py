import pytest

from regforge.header_register import HeaderRegisters
from regforge.header_types import HeaderNaming
from regforge.model import Component, Enumeration, Register, RegisterBitmap
from regforge.naming import camelcase


def _setup():
    naming = HeaderNaming("out.h")
    return naming, HeaderRegisters(naming)


def _component(*regs, **kwargs):
    return Component(name="dev", base=0, registers=list(regs), **kwargs)


def test_address_define_line():
    naming, regs = _setup()
    reg = Register("ctrl", addr=0x10, description="Control")
    text = regs.serialize_register_definition(_component(reg), reg)
    expected = (
        f"#define REG_DEV_CTRL (({naming.volatile()} "
        f"{naming.type_name(32, False)}*)0x10) /* Control */"
    )
    assert text.splitlines()[0] == expected


def test_copied_register_only_has_define():
    _, regs = _setup()
    reg = Register("ctrl", copy_of="other")
    text = regs.serialize_register_definition(_component(reg), reg)
    assert text.count("\n") == 1
    assert "typedef" not in text


def test_copied_component_only_has_define():
    _, regs = _setup()
    reg = Register("ctrl")
    text = regs.serialize_register_definition(_component(reg, copy_of="base"), reg)
    assert text.count("\n") == 1


def test_container_typedef_opens_and_closes():
    naming, regs = _setup()
    reg = Register("ctrl")
    comp = _component(reg)
    text = regs.serialize_register_definition(comp, reg)
    register_type = naming.register_type_name(comp, reg)
    assert f"typedef register_container {register_type} {{\n" in text
    assert text.endswith(f"}} {register_type};\n\n")


def test_bitfields_and_macros_present_with_bitmaps():
    _, regs = _setup()
    bitmap = RegisterBitmap("en", start=0, stop=0, enums=[Enumeration("on", 1)])
    reg = Register("ctrl", bitmaps=[bitmap])
    comp = _component(reg)
    text = regs.serialize_register_definition(comp, reg)
    assert regs.serialize_bitmap_definition(comp, reg, bitmap) in text
    assert "BITFIELD_BEGIN(" in text
    assert "#elif defined(__BIG_ENDIAN__)" in text


def test_no_bitfields_without_bitmaps():
    _, regs = _setup()
    reg = Register("ctrl")
    text = regs.serialize_register_definition(_component(reg), reg)
    assert "BITFIELD_BEGIN" not in text
    assert "#ifdef CXX_SIMULATOR\n" in text


def test_indentation_restored():
    _, regs = _setup()
    bitmap = RegisterBitmap("en", start=3, stop=0)
    reg = Register("ctrl", bitmaps=[bitmap])
    regs.serialize_register_definition(_component(reg), reg)
    assert regs.indent() == ""


def test_simulator_members():
    _, regs = _setup()
    reg = Register("ctrl", width=16)
    text = regs.serialize_register_definition(_component(reg), reg)
    assert f'const char* getName(void) {{ return "{camelcase("CTRL")}"; }}' in text
    assert "r16 = other.r16;" in text
    assert "void print(void) { r16.print(); }" in text


def test_unsupported_width_raises():
    _, regs = _setup()
    reg = Register("ctrl", width=24)
    with pytest.raises(ValueError):
        regs.serialize_register_definition(_component(reg), reg)


def test_declaration_array():
    naming, regs = _setup()
    reg = Register("ctrl", dimensions=4, description="Control")
    comp = _component(reg)
    text = regs.serialize_register_declaration(comp, reg)
    register_type = naming.register_type_name(comp, reg)
    assert f"{register_type} {camelcase('ctrl')}[4];\n\n" in text
    assert text.startswith("/** @brief Control */\n")


def test_declaration_single():
    naming, regs = _setup()
    reg = Register("ctrl")
    comp = _component(reg)
    text = regs.serialize_register_declaration(comp, reg)
    assert text.endswith(f"{naming.register_type_name(comp, reg)} {camelcase('ctrl')};\n\n")


def test_declaration_leading_digit_prefixed():
    _, regs = _setup()
    reg = Register("2nd")
    text = regs.serialize_register_declaration(_component(reg), reg)
    assert " _2nd;" in text