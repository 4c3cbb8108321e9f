# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.


from __future__ import annotations
from typing import TYPE_CHECKING

import logging

from ._compiler import should_lean_include_virtuals
from ._signatures import get_func_type

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mongots._internal._tsast import (
        InterfaceDeclaration,
        SourceFile,
        StatementContainer,
    )
    from mongots.schema import Schema

    from ._known import ModelTypes
    from ._signatures import FuncRole


logger = logging.getLogger(__name__)

_FUNCTION_ALIASES: tuple[tuple[FuncRole, str], ...] = (
    ("methods", "Methods"),
    ("statics", "Statics"),
    ("query", "Queries"),
)


def replace_model_types(
    source_file: SourceFile,
    model_types: Mapping[str, ModelTypes],
    schemas: Mapping[str, Schema],
    *,
    is_augmented: bool,
) -> None:
    """Overwrite placeholder member types with known ones.

    Function collection members get the signature synthesized from
    their known ``(params) => ret`` text; virtuals get their inferred
    type on the document interface and, when ``toObject()`` keeps
    virtuals, on the lean interface.  Members without a known type keep
    their generated type.  Applying the pass twice is the same as
    applying it once.
    """
    root = source_file.get_root(augmented=is_augmented)

    for model_name, types in model_types.items():
        for role, suffix in _FUNCTION_ALIASES:
            known = getattr(types, role)
            if not known:
                continue
            _patch_functions(root, model_name, role, suffix, known)

        if types.virtuals:
            _patch_properties(
                root.get_interface(f"{model_name}Document"), types.virtuals
            )
            schema = schemas.get(model_name)
            if schema is not None and should_lean_include_virtuals(
                schema.options
            ):
                _patch_properties(root.get_interface(model_name), types.virtuals)


def _patch_functions(
    root: StatementContainer,
    model_name: str,
    role: FuncRole,
    suffix: str,
    known: Mapping[str, str],
) -> None:
    alias = root.get_type_alias(f"{model_name}{suffix}")
    if alias is None or alias.type_literal is None:
        logger.debug("no %s%s type literal to patch", model_name, suffix)
        return
    for prop in alias.type_literal.properties:
        signature = known.get(prop.get_name())
        if signature:
            prop.set_type(get_func_type(signature, role, model_name))


def _patch_properties(
    interface: InterfaceDeclaration | None,
    known: Mapping[str, str],
) -> None:
    if interface is None:
        return
    for prop in interface.properties:
        new_type = known.get(prop.get_name())
        if new_type:
            prop.set_type(new_type)
