# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.


from __future__ import annotations
from typing import TYPE_CHECKING

import contextlib
import enum
import textwrap
from collections import defaultdict

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class CodeSection(enum.Enum):
    main = enum.auto()
    epilogue = enum.auto()


class GeneratedUnit:
    """Text buffer of a generated TypeScript declaration file."""

    INDENT = " " * 2

    def __init__(self, preamble: str) -> None:
        self._comment_preamble = preamble
        self._indent_level = 0
        self._content: defaultdict[CodeSection, list[str]] = defaultdict(list)
        self._code_section = CodeSection.main
        self._code = self._content[self._code_section]
        self._imports: list[str] = []

    def section_has_content(self, section: CodeSection) -> bool:
        return bool(self._content[section])

    def add_import(self, line: str) -> None:
        if line not in self._imports:
            self._imports.append(line)

    def add_imports(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.add_import(line)

    @contextlib.contextmanager
    def indented(self) -> Iterator[None]:
        self._indent_level += 1
        try:
            yield
        finally:
            self._indent_level -= 1

    @contextlib.contextmanager
    def code_section(self, section: CodeSection) -> Iterator[None]:
        orig_indent_level = self._indent_level
        self._indent_level = 0
        orig_section = self._code_section
        self._code_section = section
        self._code = self._content[self._code_section]
        try:
            yield
        finally:
            self._code_section = orig_section
            self._code = self._content[self._code_section]
            self._indent_level = orig_indent_level

    def write(self, text: str = "") -> None:
        chunk = textwrap.indent(text, prefix=self.INDENT * self._indent_level)
        self._code.append(chunk)

    def write_section_break(self, size: int = 1) -> None:
        self._code.extend([""] * size)

    def get_comment_preamble(self) -> str:
        return self._comment_preamble

    def render_imports(self) -> str:
        return "\n".join(self._imports)

    def render(self) -> str:
        parts = [self.get_comment_preamble()]
        imports = self.render_imports()
        if imports:
            parts.append(imports)
        for section in (CodeSection.main, CodeSection.epilogue):
            if self.section_has_content(section):
                parts.append("\n".join(self._content[section]))
        return "\n\n".join(parts) + "\n"
