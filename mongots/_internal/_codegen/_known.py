# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.

"""Derive TypeScript signatures from the Python callables of a schema.

Methods, statics and query helpers are plain Python functions whose
first parameter receives the document, model or query.  Their remaining
parameters and their return annotation are rendered as a TypeScript
``(params) => ret`` signature, which the patch pass substitutes for the
generic placeholder.  Functions without any annotations yield no
signature at all.
"""

from __future__ import annotations
from typing import (
    TYPE_CHECKING,
    Any,
    Final,
    TypeVar,
    get_args,
    get_origin,
    get_type_hints,
)

import collections.abc
import dataclasses
import datetime
import decimal
import inspect
import logging

from mongots._internal import _typing_inspect
from mongots._internal._tags import NativeTag, native_tag

from ._signatures import SKIPPED_FUNCTIONS

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from mongots.schema import Schema, VirtualType


logger = logging.getLogger(__name__)

_F = TypeVar("_F", bound="Callable[..., Any]")

_SCALARS: Final[dict[Any, str]] = {
    str: "string",
    int: "number",
    float: "number",
    bool: "boolean",
    bytes: "Buffer",
    bytearray: "Buffer",
    datetime.datetime: "Date",
    datetime.date: "Date",
    decimal.Decimal: "mongoose.Types.Decimal128",
    object: "any",
}

# Spellings of builtin names in annotations that could not be evaluated.
_SCALAR_NAMES: Final[dict[str, str]] = {
    "str": "string",
    "int": "number",
    "float": "number",
    "bool": "boolean",
    "bytes": "Buffer",
    "None": "void",
    "Any": "any",
    "datetime": "Date",
    "date": "Date",
}

_TAG_TYPES: Final[dict[NativeTag, str]] = {
    NativeTag.String: "string",
    NativeTag.Number: "number",
    NativeTag.Boolean: "boolean",
    NativeTag.Date: "Date",
    NativeTag.Buffer: "Buffer",
    NativeTag.ObjectId: "mongoose.Types.ObjectId",
    NativeTag.Decimal128: "mongoose.Types.Decimal128",
    NativeTag.Mixed: "any",
    NativeTag.Map: "Map<string, any>",
}

_SEQUENCES: Final = frozenset(
    {
        list,
        set,
        frozenset,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.Iterable,
        collections.abc.Collection,
    }
)

_MAPPINGS: Final = frozenset(
    {dict, collections.abc.Mapping, collections.abc.MutableMapping}
)

_AWAITABLES: Final = frozenset(
    {collections.abc.Awaitable, collections.abc.Coroutine}
)


@dataclasses.dataclass
class ModelTypes:
    """Known signatures and virtual types of one model."""

    methods: dict[str, str] = dataclasses.field(default_factory=dict)
    statics: dict[str, str] = dataclasses.field(default_factory=dict)
    query: dict[str, str] = dataclasses.field(default_factory=dict)
    virtuals: dict[str, str] = dataclasses.field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.methods or self.statics or self.query or self.virtuals)


def ts_signature(signature: str) -> Callable[[_F], _F]:
    """Declare the TypeScript signature of a schema function explicitly.

    ::

        @schema.method
        @ts_signature("(this: UserDocument, name: string) => boolean")
        def is_named(self, name): ...
    """

    def decorator(fn: _F) -> _F:
        fn.__ts_signature__ = signature  # type: ignore [attr-defined]
        return fn

    return decorator


def _union(members: list[str]) -> str:
    unique = list(dict.fromkeys(members))
    return " | ".join(unique)


def _array_of(element: str) -> str:
    if " " in element:
        element = f"({element})"
    return f"{element}[]"


def ts_type(annotation: Any, *, is_return: bool = False) -> str:
    """Render a Python annotation as a TypeScript type expression."""
    if annotation is inspect.Parameter.empty or annotation is Any:
        return "any"
    if _typing_inspect.is_none_type(annotation):
        return "void" if is_return else "null"
    if isinstance(annotation, str):
        return _SCALAR_NAMES.get(annotation, annotation)
    if _typing_inspect.is_forward_ref(annotation):
        return _SCALAR_NAMES.get(
            annotation.__forward_arg__, annotation.__forward_arg__
        )
    if _typing_inspect.is_type_alias(annotation):
        return ts_type(annotation.__value__, is_return=is_return)
    if _typing_inspect.is_annotated(annotation):
        return ts_type(get_args(annotation)[0], is_return=is_return)
    if _typing_inspect.is_literal(annotation):
        return _union([_literal(v) for v in get_args(annotation)])
    if _typing_inspect.is_union_type(annotation):
        return _union([ts_type(arg) for arg in get_args(annotation)])

    origin = get_origin(annotation)
    args = get_args(annotation)
    if origin is None:
        if not isinstance(annotation, type):
            return "any"
        elif annotation in _SCALARS:
            return _SCALARS[annotation]
        elif annotation in _SEQUENCES or annotation is tuple:
            return "any[]"
        elif annotation in _MAPPINGS:
            return "{ [key: string]: any }"
        tag = native_tag(annotation)
        return _TAG_TYPES[tag] if tag is not None else "any"
    elif origin in _SEQUENCES:
        return _array_of(ts_type(args[0]) if args else "any")
    elif origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return _array_of(ts_type(args[0]))
        return "[" + ", ".join(ts_type(a) for a in args) + "]"
    elif origin in _MAPPINGS:
        value = ts_type(args[1]) if len(args) == 2 else "any"
        return f"{{ [key: string]: {value} }}"
    elif origin in _AWAITABLES:
        inner = args[-1] if args else Any
        return f"Promise<{ts_type(inner, is_return=True)}>"
    else:
        return "any"


def _literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, str):
        return f'"{value}"'
    elif value is None:
        return "null"
    else:
        return str(value)


def _resolve_hints(fn: Callable[..., Any]) -> dict[str, Any]:
    try:
        return get_type_hints(fn)
    except Exception:
        # unresolvable forward references are rendered verbatim
        logger.debug("could not evaluate annotations of %r", fn)
        return dict(getattr(fn, "__annotations__", {}))


def signature_of(fn: Callable[..., Any]) -> str | None:
    """Return the ``(params) => ret`` signature of a schema function, or
    None when it carries no type information."""
    explicit = getattr(fn, "__ts_signature__", None)
    if explicit is not None:
        return str(explicit)

    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return None

    hints = _resolve_hints(fn)
    params = list(sig.parameters.values())
    # the first positional parameter receives the document, model or query
    if params and params[0].kind in {
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    }:
        receiver = params.pop(0)
        hints.pop(receiver.name, None)

    if not hints:
        return None

    rendered = []
    for param in params:
        annotation = hints.get(param.name, inspect.Parameter.empty)
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            rendered.append(f"...{param.name}: {_array_of(ts_type(annotation))}")
        elif param.kind is inspect.Parameter.VAR_KEYWORD:
            value = ts_type(annotation)
            rendered.append(f"{param.name}?: {{ [key: string]: {value} }}")
        else:
            optional = "?" if param.default is not inspect.Parameter.empty else ""
            rendered.append(f"{param.name}{optional}: {ts_type(annotation)}")

    if "return" in hints:
        return_type = ts_type(hints["return"], is_return=True)
    else:
        return_type = "any"
    if inspect.iscoroutinefunction(fn) and not return_type.startswith(
        "Promise<"
    ):
        return_type = f"Promise<{return_type}>"

    return f"({', '.join(rendered)}) => {return_type}"


def virtual_type_of(virtual: VirtualType) -> str | None:
    if virtual.ts_type is not None:
        return virtual.ts_type
    for getter in virtual.getters:
        hints = _resolve_hints(getter)
        if "return" in hints:
            return ts_type(hints["return"])
    return None


def _signatures(funcs: Mapping[str, Callable[..., Any]]) -> dict[str, str]:
    result = {}
    for name, fn in funcs.items():
        if name in SKIPPED_FUNCTIONS:
            continue
        sig = signature_of(fn)
        if sig is not None:
            result[name] = sig
    return result


def get_model_types(schemas: Mapping[str, Schema]) -> dict[str, ModelTypes]:
    """Collect the known signatures and virtual types of every model."""
    model_types = {}
    for model_name, schema in schemas.items():
        virtuals = {}
        for name, virtual in schema.virtuals.items():
            vtype = virtual_type_of(virtual)
            if vtype is not None:
                virtuals[name] = vtype
        types = ModelTypes(
            methods=_signatures(schema.methods),
            statics=_signatures(schema.statics),
            query=_signatures(schema.query),
            virtuals=virtuals,
        )
        if types:
            model_types[model_name] = types
    return model_types
