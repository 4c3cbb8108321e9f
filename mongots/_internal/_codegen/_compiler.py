# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.

"""Compile schema trees into TypeScript interface bodies.

Every schema is compiled twice: once into its *lean* shape (plain data,
as returned by ``toObject()``) and once into its *document* shape (the
live mongoose document).  Embedded schemas are hoisted into interfaces
of their own, named after their path, before the remaining fields of
the owning schema are emitted.

The compiler never raises on malformed definitions: a field whose
definition cannot be read is dropped from the output, and a type it does
not know compiles to an empty nested object.  Recursion depth follows
the nesting depth of the schema and is not limited.
"""

from __future__ import annotations
from typing import (
    TYPE_CHECKING,
    Any,
    Final,
)

import dataclasses
import logging

from mongots._internal import _tree
from mongots._internal._naming import get_sub_doc_name, property_key
from mongots._internal._struct import struct
from mongots._internal._tags import (
    NESTED_OBJECT,
    OBJECT_ID_TYPE,
    NativeTag,
    resolve_base_type,
)
from mongots.schema import Model, Schema, VirtualType, is_field_spec

from . import _docs
from ._signatures import parse_functions

if TYPE_CHECKING:
    from collections.abc import Mapping


logger = logging.getLogger(__name__)

INDENT: Final = "  "

# Keys that belong to the ORM's own type machinery rather than to the
# modeled data.
METADATA_KEYS: Final = frozenset(
    {
        "get",
        "set",
        "schemaName",
        "defaultOptions",
        "_checkRequired",
        "_cast",
        "checkRequired",
        "cast",
        "__v",
    }
)

_MISSING: Final = object()


@struct
class CompileContext:
    is_document: bool
    is_augmented: bool = False
    include_virtuals: bool = False
    depth: int = 0

    def nested(self) -> CompileContext:
        return dataclasses.replace(self, depth=self.depth + 1)

    @property
    def export(self) -> str:
        return "" if self.is_augmented else "export "


@struct
class SubEntityBinding:
    name: str
    schema: Schema
    is_array: bool
    default_is_undefined: bool = False
    required: bool = False


def should_lean_include_virtuals(options: Mapping[str, Any]) -> bool:
    """Decide from the ``to_object`` options whether virtuals survive
    ``toObject()`` and hence belong to the lean interface."""
    to_object = options.get("to_object") or {}
    virtuals = to_object.get("virtuals")
    getters = to_object.get("getters")
    if (not virtuals and not getters) or (
        virtuals is False and getters is True
    ):
        return False
    return True


def make_line(
    key: str,
    val: str,
    *,
    is_optional: bool = False,
    indent: str = "",
) -> str:
    line = indent
    if key:
        line += property_key(key)
        if is_optional:
            line += "?"
        line += ": "
    return f"{line}{val};\n"


def get_id_type(schema: Schema) -> str:
    """Type argument of ``mongoose.Document<...>`` for *schema*."""
    id_spec = schema.tree.get("_id")
    if isinstance(id_spec, NativeTag):
        id_spec = {"type": id_spec}
    if isinstance(id_spec, dict):
        id_type = resolve_base_type("_id", id_spec, is_document=True)
        if id_type is not None and id_type != NESTED_OBJECT:
            return id_type
    return OBJECT_ID_TYPE


def parse_schema(
    schema: Schema,
    *,
    is_document: bool,
    model_name: str | None = None,
    add_model: bool = False,
    header: str = "",
    footer: str = "",
    is_augmented: bool = False,
) -> str:
    """Compile *schema* into TypeScript.

    With *model_name*, embedded schemas are hoisted into interfaces of
    their own; with *add_model* (lean shape only) the per-model type
    aliases are emitted as well.  The output is the hoisted interfaces,
    then the model aliases, then *header*, the field lines and *footer*.
    """
    ctx = CompileContext(
        is_document=is_document,
        is_augmented=is_augmented,
        include_virtuals=should_lean_include_virtuals(schema.options),
    )
    return _compile_schema(
        schema,
        ctx,
        model_name=model_name,
        add_model=add_model,
        header=header,
        footer=footer,
    )


def _compile_schema(
    schema: Schema,
    ctx: CompileContext,
    *,
    model_name: str | None,
    add_model: bool,
    header: str,
    footer: str,
) -> str:
    template = ""
    tree: Mapping[str, Any] = schema.tree

    if schema.child_schemas and model_name:
        tree, child_interfaces = _hoist_children(schema, model_name, ctx)
        template += child_interfaces

    if not ctx.is_document and model_name and add_model:
        template += _model_types(schema, model_name, ctx)

    template += header
    template += _compile_fields(tree, ctx)
    template += footer

    return template


def _hoist_children(
    schema: Schema,
    model_name: str,
    ctx: CompileContext,
) -> tuple[dict[str, Any], str]:
    flat = _tree.flatten_tree(schema.tree)
    child_interfaces = ""

    for child in schema.child_schemas:
        path = child.path
        name = get_sub_doc_name(path, model_name)

        # `default: None` on a sub-document array turns off the empty
        # array mongoose would otherwise create, making the field optional
        default_is_undefined = (
            child.is_array and flat.get(f"{path}.default", _MISSING) is None
        )
        binding = SubEntityBinding(
            name=name,
            schema=child.schema,
            is_array=child.is_array,
            default_is_undefined=default_is_undefined,
            required=flat.get(f"{path}.required") is True,
        )
        if child.is_map:
            # the element schema of a map is bound in place of `of`
            flat = _tree.replace_path(flat, f"{path}.of", binding)
        else:
            flat = _tree.replace_path(
                flat, path, [binding] if child.is_array else binding
            )

        if ctx.is_document:
            if child.is_array:
                header = _docs.get_subdocument_docs(model_name, path)
                extends = "mongoose.Types.EmbeddedDocument"
            else:
                header = _docs.get_document_docs(model_name)
                extends = f"mongoose.Document<{OBJECT_ID_TYPE}>"
            header += f"\n{ctx.export}interface {name}Document extends {extends} {{\n"
        else:
            header = _docs.get_lean_docs(model_name, name)
            header += f"\n{ctx.export}interface {name} {{\n"

        child_ctx = CompileContext(
            is_document=ctx.is_document,
            is_augmented=ctx.is_augmented,
            include_virtuals=should_lean_include_virtuals(
                child.schema.options
            ),
        )
        child_interfaces += _compile_schema(
            child.schema,
            child_ctx,
            model_name=name,
            add_model=False,
            header=header,
            footer="}\n\n",
        )

    return _tree.unflatten_tree(flat), child_interfaces


def _model_types(schema: Schema, model_name: str, ctx: CompileContext) -> str:
    export = ctx.export
    template = _docs.get_object_docs(model_name)
    template += f"\n{export}type {model_name}Object = {model_name}\n\n"

    if schema.query:
        template += _docs.get_query_docs(model_name)
        template += f"\n{export}type {model_name}Queries = {{\n"
        template += parse_functions(
            schema.query, model_name, "query", indent=INDENT
        )
        template += "}\n\n"

        augmentation = (
            "interface Query<ResultType, DocType extends Document> "
            f"extends {model_name}Queries {{}}"
        )
        if not ctx.is_augmented:
            augmentation = f'declare module "mongoose" {{{augmentation}}}'
        template += f"{augmentation}\n\n"

    template += _docs.get_method_docs(model_name)
    template += f"\n{export}type {model_name}Methods = {{\n"
    template += parse_functions(
        schema.methods, model_name, "methods", indent=INDENT
    )
    template += "}\n\n"

    template += _docs.get_static_docs(model_name)
    template += f"\n{export}type {model_name}Statics = {{\n"
    template += parse_functions(
        schema.statics, model_name, "statics", indent=INDENT
    )
    template += "}\n\n"

    template += _docs.get_model_docs(model_name)
    template += (
        f"\n{export}interface {model_name}Model extends "
        f"mongoose.Model<{model_name}Document>, {model_name}Statics {{}}\n\n"
    )

    template += _docs.get_schema_docs(model_name)
    template += (
        f"\n{export}type {model_name}Schema = "
        f"mongoose.Schema<{model_name}Document, {model_name}Model>\n\n"
    )

    return template


def _compile_fields(tree: Mapping[str, Any], ctx: CompileContext) -> str:
    return "".join(_parse_key(key, val, ctx) for key, val in tree.items())


def _is_required(val: Any) -> bool:
    return isinstance(val, dict) and bool(val.get("required"))


def _as_field(val: Any) -> Any:
    if isinstance(val, (dict, SubEntityBinding, VirtualType)):
        return val
    elif isinstance(val, Schema) or val is None:
        # an embedded schema with nowhere to be hoisted to
        return None
    else:
        # bare tags read the same as {"type": tag}; tags that cannot be
        # resolved end up as nested objects
        return {"type": val}


def _parse_key(key: str, val: Any, ctx: CompileContext) -> str:
    is_optional = not _is_required(val)
    is_array = False

    if isinstance(val, list):
        is_array = True
        val = val[0] if val else NativeTag.Mixed
        # arrays default to an empty array, so they are only optional
        # when that default was switched off
        if isinstance(val, SubEntityBinding):
            is_optional = val.default_is_undefined
        else:
            is_optional = False
    elif isinstance(val, dict) and isinstance(val.get("type"), list):
        elements = val["type"]
        is_array = True
        is_optional = "default" in val and val["default"] is None
        val = {**val, "type": elements[0] if elements else NativeTag.Mixed}

        # [{type: X, ...}] validates each element as well as the array
        # itself, which implies the array is required
        element = val["type"]
        if isinstance(element, dict) and "type" in element:
            val["type"] = element["type"]
            for attr in ("ref", "enum", "of"):
                if attr in element:
                    val[attr] = element[attr]
            is_optional = False

    val = _as_field(val)
    is_map = isinstance(val, dict) and val.get("type") is NativeTag.Map
    if is_map:
        val = _as_field(val.get("of", NativeTag.Mixed))

    if val is None:
        logger.debug("skipping %r: unrecognized field definition", key)
        return ""

    val_type: str | None
    is_subdoc_array = False

    if isinstance(val, SubEntityBinding):
        val_type = val.name + ("Document" if ctx.is_document else "")
        is_subdoc_array = val.is_array
        if not is_array:
            is_optional = not val.required
    elif isinstance(val, VirtualType):
        if key == "id":
            return ""
        if not ctx.is_document and not ctx.include_virtuals:
            return ""
        val_type = "any"
        is_optional = False
    elif key in METADATA_KEYS:
        return ""
    elif val.get("ref"):
        val_type = _ref_type(val["ref"], ctx)
        if val_type is None:
            logger.debug("skipping %r: unsupported ref %r", key, val["ref"])
            return ""
    else:
        if key == "_id":
            is_optional = False
        converted = resolve_base_type(key, val, is_document=ctx.is_document)
        if converted == NESTED_OBJECT:
            nested_ctx = ctx.nested()
            # a {"type": ...} spec of an unknown type has no fields
            fields = {} if is_field_spec(val) else val
            val_type = (
                "{\n"
                + _compile_fields(fields, nested_ctx)
                + INDENT * nested_ctx.depth
                + "}"
            )
            is_optional = False
        else:
            val_type = converted

    if not val_type:
        return ""

    if is_map:
        if ctx.is_document:
            val_type = f"mongoose.Types.Map<{val_type}>"
        else:
            val_type = f"Map<string, {val_type}>"

    if val_type == "Buffer" and ctx.is_document:
        val_type = "mongoose.Types.Buffer"

    if is_array:
        if ctx.is_document:
            wrapper = "DocumentArray" if is_subdoc_array else "Array"
            val_type = f"mongoose.Types.{wrapper}<{val_type}>"
        else:
            # keep union element types together: (A | B)[]
            if " " in val_type:
                val_type = f"({val_type})"
            val_type = f"{val_type}[]"

    return make_line(
        key,
        val_type,
        is_optional=is_optional,
        indent=INDENT * (ctx.depth + 1),
    )


def _ref_type(ref: Any, ctx: CompileContext) -> str | None:
    if isinstance(ref, Model):
        ref = ref.model_name
    if not isinstance(ref, str):
        return None

    doc_ref = ref.replace("'", "")
    if "." in doc_ref:
        doc_ref = get_sub_doc_name(doc_ref)

    if ctx.is_document:
        doc_ref = f"{doc_ref}Document"
    return f'{doc_ref}["_id"] | {doc_ref}'
