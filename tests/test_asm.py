import pytest

from regforge.asm import ASMWriter
from regforge.model import Component, Enumeration, Register, RegisterBitmap


def _writer(tmp_path=None, template="<SERIALIZED>"):
    filename = "regs.s" if tmp_path is None else str(tmp_path / "regs.s")
    return ASMWriter(filename, "proj", template)


def _component():
    en = RegisterBitmap(
        "en",
        start=0,
        stop=0,
        enums=[Enumeration("on", 1), Enumeration("off", 0)],
    )
    mode = RegisterBitmap("mode", start=7, stop=4)
    ctrl = Register("ctrl", addr=0x10, description="Control", bitmaps=[mode, en])
    status = Register("status", addr=0x4)
    return Component("dev", base=0, registers=[ctrl, status])


def test_enum_definition_line():
    comp = _component()
    reg = comp.registers[0]
    bitmap = reg.bitmaps[1]
    line = _writer().serialize_enum_definition(comp, reg, bitmap, Enumeration("on", 1))
    assert line == ".equ        DEV_CTRL_EN_ON, 0x1\n"


def test_escape_keeps_hyphen_and_replaces_specials():
    comp = Component("dev")
    reg = Register("ctrl")
    bitmap = RegisterBitmap("a.b@c/d")
    line = _writer().serialize_enum_definition(comp, reg, bitmap, Enumeration("x-y", 2))
    assert line.startswith(".equ        DEV_CTRL_A_B_AT_C_DIV_D_X-Y, ")


@pytest.mark.parametrize("start,stop", [(0, 0), (7, 4), (15, 8), (30, 1)])
def test_mask_covers_field(start, stop):
    bitmap = RegisterBitmap("f", start=start, stop=stop)
    text = _writer().serialize_bitmap_definition(Component("c"), Register("r"), bitmap)
    shift_line, mask_line = text.splitlines()
    assert shift_line == f".equ        C_R_F_SHIFT, {stop}"
    mask = int(mask_line.split("0x")[1], 16)
    assert mask >> stop == (1 << bitmap.width()) - 1
    assert mask & ((1 << stop) - 1) == 0


def test_full_width_mask():
    bitmap = RegisterBitmap("all", start=31, stop=0)
    text = _writer().serialize_bitmap_definition(Component("c"), Register("r"), bitmap)
    assert ".equ        C_R_ALL_MASK,  0xffffffff\n" in text


def test_register_line_with_description():
    comp = _component()
    text = _writer().serialize_register_definition(comp, comp.registers[0])
    assert text.splitlines()[0] == ".equ    REG_DEV_CTRL, 0x10 ; Control"


def test_register_without_fields():
    comp = _component()
    text = _writer().serialize_register_definition(comp, comp.registers[1])
    assert text == ".equ    REG_DEV_STATUS, 0x4\n\n"


def test_render_fills_template_and_sorts_registers():
    writer = _writer(template="<FILE>|<SERIALIZED>")
    out = writer.render([_component()])
    assert out.startswith("regs.s|")
    assert out.index("REG_DEV_STATUS") < out.index("REG_DEV_CTRL")


def test_write_matches_render(tmp_path):
    writer = _writer(tmp_path, template="; <PROJECT>\n<SERIALIZED>")
    writer.write([_component()])
    written = (tmp_path / "regs.s").read_text(encoding="utf-8")
    assert written == writer.render([_component()])
    assert written.startswith("; proj\n")