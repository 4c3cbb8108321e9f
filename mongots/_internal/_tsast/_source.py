# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.


from __future__ import annotations
from typing import TYPE_CHECKING

import pathlib

from ._nodes import StatementContainer
from ._parser import parse_declarations

if TYPE_CHECKING:
    import os


class SourceFile(StatementContainer):
    """A parsed TypeScript declaration file."""

    def __init__(
        self,
        text: str = "",
        path: str | os.PathLike[str] | None = None,
    ) -> None:
        super().__init__()
        self.path = pathlib.Path(path) if path is not None else None
        self._text = ""
        self._edits: dict[int, tuple[int, str]] = {}
        self.add_statements(text)

    @classmethod
    def from_text(
        cls,
        text: str,
        path: str | os.PathLike[str] | None = None,
    ) -> SourceFile:
        return cls(text, path)

    def add_statements(self, text: str) -> None:
        """Append *text* and reparse the file.

        Nodes obtained before this call are invalidated; pending type
        edits are kept as part of the file text.
        """
        self._text = self.get_full_text() + text
        self._edits = {}
        self.statements = parse_declarations(self._text, self)

    def get_span_text(self, start: int, end: int) -> str:
        edit = self._edits.get(start)
        if edit is not None and edit[0] == end:
            return edit[1]
        return self._text[start:end]

    def replace_span(self, start: int, end: int, text: str) -> None:
        self._edits[start] = (end, text)

    def get_full_text(self) -> str:
        if not self._edits:
            return self._text
        chunks = []
        pos = 0
        for start in sorted(self._edits):
            end, text = self._edits[start]
            chunks.append(self._text[pos:start])
            chunks.append(text)
            pos = end
        chunks.append(self._text[pos:])
        return "".join(chunks)

    def get_root(self, *, augmented: bool) -> StatementContainer:
        """Container holding the generated declarations: the first
        ``declare module`` block of augmented files, else the file."""
        if augmented:
            module = self.get_first_module()
            if module is not None:
                return module.body
        return self

    def save(self, path: str | os.PathLike[str] | None = None) -> pathlib.Path:
        target = pathlib.Path(path) if path is not None else self.path
        if target is None:
            raise ValueError("SourceFile.save(): no path to save to")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.get_full_text(), encoding="utf8")
        return target
