# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.

"""Minimal parsed representation of TypeScript declaration files."""

from ._nodes import (
    InterfaceDeclaration,
    ModuleDeclaration,
    PropertySignature,
    StatementContainer,
    TypeAliasDeclaration,
    TypeLiteral,
)
from ._source import SourceFile


__all__ = (
    "InterfaceDeclaration",
    "ModuleDeclaration",
    "PropertySignature",
    "SourceFile",
    "StatementContainer",
    "TypeAliasDeclaration",
    "TypeLiteral",
)
