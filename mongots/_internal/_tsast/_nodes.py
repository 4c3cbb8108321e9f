# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.

"""Declaration tree of a generated TypeScript file.

Nodes keep the source offsets of the text they were parsed from.  The
only supported edit is replacing the type of a property signature;
edits are recorded on the owning :class:`SourceFile` and applied when
its text is rendered, so that untouched text is reproduced verbatim.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import dataclasses
import json

if TYPE_CHECKING:
    from ._source import SourceFile


@dataclasses.dataclass(eq=False)
class PropertySignature:
    source: SourceFile = dataclasses.field(repr=False)
    name: str
    optional: bool
    type_start: int
    type_end: int

    def get_name(self) -> str:
        return self.name

    def get_type_text(self) -> str:
        return self.source.get_span_text(self.type_start, self.type_end)

    def set_type(self, text: str) -> None:
        self.source.replace_span(self.type_start, self.type_end, text)


@dataclasses.dataclass(eq=False)
class TypeLiteral:
    properties: list[PropertySignature]

    def get_property(self, name: str) -> PropertySignature | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


@dataclasses.dataclass(eq=False)
class InterfaceDeclaration:
    name: str
    exported: bool
    body: TypeLiteral

    @property
    def properties(self) -> list[PropertySignature]:
        return self.body.properties

    def get_property(self, name: str) -> PropertySignature | None:
        return self.body.get_property(name)


@dataclasses.dataclass(eq=False)
class TypeAliasDeclaration:
    name: str
    exported: bool
    # None when the aliased type is not an object literal
    type_literal: TypeLiteral | None


@dataclasses.dataclass(eq=False)
class ModuleDeclaration:
    name: str
    body: StatementContainer


Statement = InterfaceDeclaration | TypeAliasDeclaration | ModuleDeclaration


@dataclasses.dataclass(eq=False)
class StatementContainer:
    statements: list[Statement] = dataclasses.field(default_factory=list)

    def get_interface(self, name: str) -> InterfaceDeclaration | None:
        for stmt in self.statements:
            if isinstance(stmt, InterfaceDeclaration) and stmt.name == name:
                return stmt
        return None

    def get_type_alias(self, name: str) -> TypeAliasDeclaration | None:
        for stmt in self.statements:
            if isinstance(stmt, TypeAliasDeclaration) and stmt.name == name:
                return stmt
        return None

    def get_first_module(self) -> ModuleDeclaration | None:
        for stmt in self.statements:
            if isinstance(stmt, ModuleDeclaration):
                return stmt
        return None


def unquote(text: str) -> str:
    if text[:1] == '"':
        return str(json.loads(text))
    elif text[:1] == "'":
        return text[1:-1]
    else:
        return text
