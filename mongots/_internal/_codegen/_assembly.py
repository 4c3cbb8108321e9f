# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.


from __future__ import annotations
from typing import TYPE_CHECKING

import contextlib
import logging

from mongots._internal._tsast import SourceFile

from . import _docs
from ._compiler import get_id_type, parse_schema
from ._known import get_model_types
from ._module import CodeSection, GeneratedUnit
from ._patch import replace_model_types

if TYPE_CHECKING:
    import os

    from collections.abc import Iterable, Mapping

    from mongots.schema import Schema


logger = logging.getLogger(__name__)


def generate_types(
    schemas: Mapping[str, Schema],
    *,
    is_augmented: bool = False,
    imports: Iterable[str] = (),
    path: str | os.PathLike[str] | None = None,
) -> SourceFile:
    """Compile every schema into one declaration file.

    Each model contributes its lean interface (preceded by its
    sub-document interfaces and model type aliases) followed by its
    document interface.  With *is_augmented* all declarations are
    placed inside a ``declare module "mongoose"`` block.
    """
    unit = GeneratedUnit(_docs.MAIN_HEADER)
    unit.add_import(_docs.IMPORTS)
    unit.add_imports(imports)

    if is_augmented:
        unit.write(_docs.MODULE_DECLARATION_HEADER)
        unit.write_section_break()
        scope = unit.indented()
    else:
        scope = contextlib.nullcontext()

    export = "" if is_augmented else "export "

    with scope:
        for i, (model_name, schema) in enumerate(schemas.items()):
            logger.debug("generating types for %s", model_name)
            if i:
                unit.write_section_break()

            lean = parse_schema(
                schema,
                model_name=model_name,
                add_model=True,
                is_document=False,
                header=(
                    _docs.get_lean_docs(model_name)
                    + f"\n{export}interface {model_name} {{\n"
                ),
                footer="}",
                is_augmented=is_augmented,
            )
            unit.write(lean)
            unit.write_section_break()

            id_type = get_id_type(schema)
            document = parse_schema(
                schema,
                model_name=model_name,
                add_model=True,
                is_document=True,
                header=(
                    _docs.get_document_docs(model_name)
                    + f"\n{export}interface {model_name}Document extends "
                    f"mongoose.Document<{id_type}>, {model_name}Methods {{\n"
                ),
                footer="}",
                is_augmented=is_augmented,
            )
            unit.write(document)

    if is_augmented:
        with unit.code_section(CodeSection.epilogue):
            unit.write(_docs.MODULE_DECLARATION_FOOTER)

    return SourceFile.from_text(unit.render(), path)


def generate(
    schemas: Mapping[str, Schema],
    *,
    is_augmented: bool = False,
    imports: Iterable[str] = (),
    patch: bool = True,
    path: str | os.PathLike[str] | None = None,
) -> SourceFile:
    """Generate the declaration file and patch in known signatures."""
    source_file = generate_types(
        schemas, is_augmented=is_augmented, imports=imports, path=path
    )
    if patch:
        model_types = get_model_types(schemas)
        replace_model_types(
            source_file, model_types, schemas, is_augmented=is_augmented
        )
    return source_file
