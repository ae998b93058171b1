"""Identifier helpers shared by the output writers."""

from __future__ import annotations

_TO_UNDERSCORE = " -.,:[]\u2014"
_UNDERSCORE_TABLE = str.maketrans({ch: "_" for ch in _TO_UNDERSCORE})

_C_TYPES = {8: "int8_t", 16: "int16_t", 32: "int32_t"}


def replace_all(text: str, find: str, replacement: str) -> str:
    """Replace ``find`` in ``text`` until no occurrence is left."""
    if not find:
        raise ValueError("cannot replace an empty string")
    if find == replacement:
        return text
    if find in replacement:
        return text.replace(find, replacement)
    while find in text:
        text = text.replace(find, replacement, 1)
    return text


def escape(text: str) -> str:
    """Turn ``text`` into something usable inside a C identifier."""
    text = text.translate(_UNDERSCORE_TABLE)
    text = text.replace("@", "_AT_")
    return text.replace("/", "_DIV_")


def escape_enum(text: str) -> str:
    """Like :func:`escape`, but spaces are dropped instead of replaced."""
    return escape(text.replace(" ", ""))


def camelcase(text: str) -> str:
    """Convert an underscore separated name to CamelCase."""
    words = text.translate(_UNDERSCORE_TABLE).split("_")
    return "".join(word[:1].upper() + word[1:].lower() for word in words)


def c_type(width: int, signed: bool) -> str:
    """The fixed width C integer type for ``width`` bits."""
    try:
        base = _C_TYPES[width]
    except KeyError:
        raise ValueError(
            f"unable to handle a register width of {width}, please use 8, 16, or 32"
        ) from None
    return base if signed else "u" + base


def guard_name(filename: str) -> str:
    """Include-guard style name derived from a file path."""
    return str(filename).upper().replace(".", "_").replace("/", "_")