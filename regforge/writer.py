"""Base class for the output writers."""

from __future__ import annotations

import datetime
import functools
from pathlib import Path

from .model import Component
from .naming import guard_name, replace_all


@functools.lru_cache(maxsize=None)
def _current_year() -> str:
    return str(datetime.date.today().year)


class Writer:
    """Common state and template handling for every output format."""

    def __init__(self, filename, project):
        self.filename = str(filename)
        self.project = project
        self._indent = 0

    def indent(self, modifier=0):
        """Change the indentation level by ``modifier`` and return its prefix."""
        self._indent += modifier
        return "    " * max(self._indent, 0)

    def update_template(self, contents, filename, component: Component | None = None):
        """Fill the placeholders of a template and return the result."""
        filename = str(filename)
        if component is not None:
            type_name = (component.type_id or component.name).upper()
            contents = replace_all(contents, "<COMPONENT>", component.name)
            contents = replace_all(contents, "<COMPONENT_TYPE>", type_name)
            contents = replace_all(contents, "<COMPONENT_SIZE>", str(component.size()))

        guard = guard_name(filename)
        contents = replace_all(contents, "<FILE>", filename)
        contents = replace_all(contents, "<PROJECT>", self.project)
        contents = replace_all(contents, "<YEAR>", _current_year())

        stripped = replace_all(filename, ".cpp", "")
        stripped = replace_all(stripped, ".h", "")

        contents = replace_all(contents, "<INIT_FUNCTION>", stripped)
        contents = replace_all(contents, "<GUARD>", guard)
        contents = replace_all(contents, "<VOLATILE>", guard + "_VOLATILE")
        contents = replace_all(contents, "<DESCRIPTION>", stripped)

        includes = replace_all("#include <" + stripped + ".h>", "_sim", "")
        return replace_all(contents, "<INCLUDES>", includes)

    def write_to_file(self, filename, contents):
        """Write ``contents`` to ``filename`` exactly as given."""
        with Path(filename).open("w", encoding="utf-8", newline="") as handle:
            handle.write(contents)