# regforge

regforge turns a description of hardware components and their registers
into source files: C headers, assembly include files, assembly symbol
tables, IP-XACT XML documents and C++ simulator sources.

## The register model

A register description is built in Python from the dataclasses in
`regforge.model`:

- `Component` — a block of registers at `base`, with an optional `range`,
  `address_unit_bits` (8 by default), `description`, `type_id` and
  `copy_of` (the name of a component whose type it reuses).
- `Register` — a register at `addr` inside its component, with a `width`
  (32 by default), `dimensions` for arrays, a `description`, `type_id`,
  `copy_of` and a list of `bitmaps`.
- `RegisterBitmap` — a bit field from `stop` (lowest bit) to `start`
  (highest bit), with an `access` kind and a list of `enums`.
- `Enumeration` — a named `value` a bit field can take.
- `Access` — `RESERVED`, `READ_ONLY`, `WRITE_ONLY`, `READ_WRITE`,
  `WRITE_ONCE` or `READ_WRITE_ONCE`.

Each of these containers has a `sort()` method: components order their
registers by address, registers order their bit fields by lowest bit, and
bit fields order their enumerations by value. Writers sort before
serialising, so output comes out in a stable order.
`Component.size()` gives the component's range, or else the extent of its
last register scaled by the address unit.

```python
from regforge.model import Access, Component, Enumeration, Register, RegisterBitmap

uart = Component(
    name="UART",
    base=0x4000,
    registers=[
        Register(
            name="ctrl",
            addr=0x0,
            description="Control register",
            bitmaps=[
                RegisterBitmap("enable", start=0, stop=0, access=Access.READ_WRITE),
                RegisterBitmap(
                    "mode", start=3, stop=1,
                    enums=[Enumeration("idle", 0), Enumeration("run", 1)],
                ),
            ],
        ),
    ],
)
```

## Writers

Every writer takes the output file name and a project name; most also
take the text of the template they fill in.

| Class                                | Output                                     |
|--------------------------------------|--------------------------------------------|
| `regforge.header.HeaderWriter`       | one C header per component                 |
| `regforge.asm.ASMWriter`             | assembly `.equ` definitions for registers, field shifts, masks and values |
| `regforge.symbols.ASMSymbols`        | `.global`, `.equ` and `.size` for each component |
| `regforge.ipxact.IPXACTWriter`       | an IP-XACT component document              |
| `regforge.simulator.SimulatorWriter` | a register model file and a memory-map file per component |

Single-file writers (`ASMWriter`, `ASMSymbols`, `IPXACTWriter`) offer
`render(components)`, which returns the generated text, and
`write(components)`, which writes it to the file name given to the writer.
`IPXACTWriter.build_document(components)` returns the XML element tree
instead of text.

```python
from regforge.asm import ASMWriter

writer = ASMWriter("registers.s", "myproject", "; <FILE>\n<SERIALIZED>")
print(writer.render([uart]))
```

`HeaderWriter` and `SimulatorWriter` work per component.
`render_component(component)` returns a mapping of output path to text,
`write_component(component)` writes those files and `write(components)`
does so for each component. Paths are derived from the writer's file
name: for an output name of `registers.h` and a component `UART` the
header is `registers_UART.h`; `SimulatorWriter` with `sim.cpp` produces
`sim_UART.cpp` and `sim_UART_sim.cpp`, the second filled from its
`mmap_template`.

For a component whose `copy_of` is set, `HeaderWriter` emits the register
address macros only, reuses the other component's types, and puts an
`#include` of that component's header in place of `<INCLUDES>`.

Register layouts that overlap — a register starting before the previous
one ends — raise `ValueError` from the header and simulator writers, as
does a register width other than 8, 16 or 32 where a C type is needed.
Padding inserted between registers and other layout notes are reported
through the standard `logging` module.

## Templates

Template text may contain these placeholders:

- `<FILE>` — the output file name
- `<PROJECT>` — the project name given to the writer
- `<YEAR>` — the current year
- `<GUARD>` — the file name upper-cased with `.` and `/` turned into `_`
- `<VOLATILE>` — the guard followed by `_VOLATILE`
- `<DESCRIPTION>` and `<INIT_FUNCTION>` — the file name without its
  `.cpp` or `.h` suffix
- `<INCLUDES>` — an include line for the matching header
- `<COMPONENT>`, `<COMPONENT_TYPE>`, `<COMPONENT_SIZE>` — the component's
  name, upper-cased type name and size (per-component writers only)
- `<SERIALIZED>` — the generated definitions themselves

## Naming rules

Identifiers in the generated code come from the names in the model,
cleaned by `regforge.naming`: `escape` turns spaces, `-`, `.`, `,`, `:`,
`[`, `]` and em dashes into `_`, `@` into `_AT_` and `/` into `_DIV_`;
`escape_enum` drops spaces before escaping; `camelcase` joins the parts of
a name into `LikeThis`; `c_type(width, signed)` maps 8, 16 and 32 bit
widths to the C fixed-width integer types; `guard_name` builds the guard
name from a path; `replace_all` repeats a replacement until no occurrence
is left.

## What regforge does not do

- It does not read register descriptions from files: the model is built
  in Python by the caller.
- It has no command-line program and does not pick a writer from an
  output file's extension; choose and construct the writer yourself.
- It does not produce LaTeX or other documentation output.