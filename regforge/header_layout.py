"""Bit field layout of C header register containers, with padding and splitting."""

from __future__ import annotations

import dataclasses
import logging

from .header_bitmaps import HeaderBitmaps
from .model import Access, Component, Register, RegisterBitmap

_log = logging.getLogger(__name__)


def _padding(name_start: int, stop: int) -> RegisterBitmap:
    return RegisterBitmap(
        name=f"reserved_{name_start}_{stop}",
        start=name_start,
        stop=stop,
        description="Padding",
        access=Access.RESERVED,
    )


class HeaderLayout(HeaderBitmaps):
    """Lays out the bit fields of a register for both byte orders."""

    def _storage_width(self, reg: Register, bitmap: RegisterBitmap) -> int:
        if reg.width <= 0:
            raise ValueError(f"register {reg.name} has an invalid width of {reg.width}")
        width = reg.width
        base_bit = bitmap.stop
        if base_bit % 8 == 0:
            next_width = reg.width
            if width % 8:
                _log.warning("%s has an unexpected bit width of %d", bitmap.name, width)
                width += 8 - width % 8
            if next_width == 24 or (next_width == 16 and base_bit == 0 and width == 8):
                _log.warning(
                    "converting 8bit field %s to 32bit due to next entry requiring 24bits",
                    bitmap.name,
                )
                width = 32
            if width == 24:
                if base_bit > 8:
                    _log.error("unexpected promotion of 24bit field %s to 32bits", bitmap.name)
                width = 32
        return width

    def _split(self, bitmap: RegisterBitmap, width: int) -> str:
        """Declare a field wider than its storage as several reserved pieces."""
        _log.warning("bitfield %s has an expected width of %d", bitmap.name, width)
        parts = []
        stop = bitmap.stop
        covered = 0
        span = bitmap.start - bitmap.stop
        while covered < span:
            covered += width
            piece_stop = min((covered + bitmap.stop) // 8 * 8, bitmap.start + 1)
            piece = dataclasses.replace(
                bitmap,
                name=f"reserved_{piece_stop - 1}_{stop}",
                start=piece_stop - 1,
                stop=stop,
            )
            parts.append(self.serialize_bitmap_declaration(piece, width))
            stop = piece_stop
        return "".join(parts)

    def convert_bitmap(self, component: Component, reg: Register, bitmap: RegisterBitmap,
                       prev_position):
        """Declare ``bitmap`` following a field that ended at ``prev_position``.

        Returns the declaration text, the position after ``bitmap`` and the
        padding field needed to close a gap before it, or ``None``.
        """
        width = self._storage_width(reg, bitmap)
        bitmap.sort()
        padding = None

        if width <= bitmap.start - bitmap.stop:
            text = self._split(bitmap, width)
        else:
            if prev_position != bitmap.stop:
                current = prev_position
                while current < bitmap.stop:
                    room = width - current % width
                    new_start = min(current + room - 1, bitmap.stop - 1)
                    padding = _padding(new_start, current)
                    _log.info(
                        "adding padding %s (width: %d) before %s",
                        padding.name, width, bitmap.name,
                    )
                    current = new_start + 1
            text = self.serialize_bitmap_declaration(bitmap, width)

        _log.debug("wrote bit %s from %d to %d", bitmap.name, bitmap.start, bitmap.stop)
        return text, bitmap.start + 1, padding

    def serialize_bitfields(self, component: Component, reg: Register):
        """The ``BITFIELD_BEGIN``..``BITFIELD_END`` block of ``reg``, or ``""``."""
        if not reg.bitmaps:
            return ""
        width = reg.width
        storage = self.naming.type_name(width, False)
        head = f"\n{self.indent()}BITFIELD_BEGIN({storage}, bits)\n#if defined(__LITTLE_ENDIAN__)\n"

        self.indent(1)
        try:
            chunks: list[str] = []
            position = 0
            for bitmap in reg.bitmaps:
                text, next_position, padding = self.convert_bitmap(
                    component, reg, bitmap, position
                )
                if padding is not None:
                    padding_text, _, _ = self.convert_bitmap(
                        component, reg, padding, next_position
                    )
                    chunks.append(padding_text)
                chunks.append(text)
                position = next_position

            last = reg.bitmaps[-1]
            if last.start + 1 != width:
                trailing = _padding(width - 1, last.start + 1)
                text, _, _ = self.convert_bitmap(component, reg, trailing, position)
                chunks.append(text)
        finally:
            self.indent(-1)

        return (
            head
            + "".join(chunks)
            + "#elif defined(__BIG_ENDIAN__)\n"
            + "".join(reversed(chunks))
            + "#else\n#error Unknown Endian\n#endif\n"
            + f"{self.indent()}BITFIELD_END({storage}, bits)\n"
        )