# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.

"""Python description of Mongoose schemas.

A :class:`Schema` mirrors the runtime shape of a ``mongoose.Schema``: a
normalized definition ``tree``, the embedded ``child_schemas``, the
``methods``, ``statics`` and ``query`` helper collections, ``virtuals``
and ``options``::

    from mongots import Schema, Types, model

    User = model("User", Schema({
        "name": {"type": str, "required": True},
        "friends": [{"type": Types.ObjectId, "ref": "User"}],
    }))
"""

from __future__ import annotations
from typing import (
    TYPE_CHECKING,
    Any,
    TypeVar,
)

import dataclasses

from mongots._internal import _tree
from mongots._internal._struct import struct
from mongots._internal._tags import NativeTag, Types, native_tag

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


_F = TypeVar("_F", bound="Callable[..., Any]")

TIMESTAMPS_INIT = "initializeTimestamps"

_SCHEMA_OPTIONS = frozenset(
    {"_id", "id", "version_key", "timestamps", "to_object"}
)


@dataclasses.dataclass(eq=False)
class VirtualType:
    """A computed property declared with :meth:`Schema.virtual`."""

    path: str
    getters: list[Callable[..., Any]] = dataclasses.field(
        default_factory=list
    )
    setters: list[Callable[..., Any]] = dataclasses.field(
        default_factory=list
    )
    ts_type: str | None = None

    def get(self, fn: _F) -> _F:
        self.getters.append(fn)
        return fn

    def set(self, fn: _F) -> _F:
        self.setters.append(fn)
        return fn


@struct
class ChildSchema:
    path: str
    schema: Schema
    is_array: bool
    is_map: bool = False


def is_field_spec(value: Any) -> bool:
    """Return True if *value* is a ``{"type": ...}`` field definition
    rather than a nested object."""
    return (
        isinstance(value, dict)
        and "type" in value
        and not (isinstance(value["type"], dict) and value["type"])
    )


class Schema:
    Types = Types

    def __init__(
        self,
        definition: Mapping[str, Any] | None = None,
        options: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        opts = {**(options or {}), **kwargs}
        unknown = set(opts) - _SCHEMA_OPTIONS
        if unknown:
            raise TypeError(
                f"unknown schema options: {', '.join(sorted(unknown))}"
            )

        self.options: dict[str, Any] = opts
        self.methods: dict[str, Callable[..., Any]] = {}
        self.statics: dict[str, Callable[..., Any]] = {}
        self.query: dict[str, Callable[..., Any]] = {}
        self.virtuals: dict[str, VirtualType] = {}

        tree = _normalize_tree(definition or {})
        if opts.get("_id", True):
            tree.setdefault("_id", {"type": NativeTag.ObjectId, "auto": True})
        if opts.get("timestamps"):
            tree.setdefault("createdAt", {"type": NativeTag.Date})
            tree.setdefault("updatedAt", {"type": NativeTag.Date})
            self.methods[TIMESTAMPS_INIT] = _initialize_timestamps
        if opts.get("version_key", True):
            tree.setdefault("__v", NativeTag.Number)
        self.tree: dict[str, Any] = tree

        if opts.get("id", True) and opts.get("_id", True):
            self.virtual("id")

        self.child_schemas: list[ChildSchema] = _collect_children(
            self.tree, ""
        )

    def __repr__(self) -> str:
        return f"<Schema paths={list(self.tree)!r}>"

    def virtual(
        self,
        name: str,
        getter: Callable[..., Any] | None = None,
        setter: Callable[..., Any] | None = None,
        *,
        ts_type: str | None = None,
    ) -> VirtualType:
        virtual = self.virtuals.get(name)
        if virtual is None:
            virtual = VirtualType(path=name)
            self.virtuals[name] = virtual
            _tree.set_path(self.tree, name, virtual)
        if getter is not None:
            virtual.get(getter)
        if setter is not None:
            virtual.set(setter)
        if ts_type is not None:
            virtual.ts_type = ts_type
        return virtual

    def method(self, fn: _F, name: str | None = None) -> _F:
        self.methods[name or fn.__name__] = fn
        return fn

    def static(self, fn: _F, name: str | None = None) -> _F:
        self.statics[name or fn.__name__] = fn
        return fn

    def query_helper(self, fn: _F, name: str | None = None) -> _F:
        self.query[name or fn.__name__] = fn
        return fn


@struct
class Model:
    model_name: str
    schema: Schema


def model(name: str, schema: Schema) -> Model:
    return Model(model_name=name, schema=schema)


def _initialize_timestamps(doc: Any) -> Any:
    return doc


def _normalize(value: Any) -> Any:
    tag = native_tag(value)
    if tag is not None:
        return tag
    elif isinstance(value, list):
        items = [_normalize(v) for v in value]
        if len(items) == 1 and isinstance(value[0], dict):
            element = value[0]
            if element and not is_field_spec(element):
                # an array of plain objects is an implicit sub-document
                # array; mongoose gives the element schema its own _id
                return [Schema(element, version_key=False, id=False)]
        return items
    elif isinstance(value, dict):
        if is_field_spec(value):
            spec = dict(value)
            spec["type"] = _normalize(spec["type"])
            if "of" in spec:
                spec["of"] = _normalize(spec["of"])
            return spec
        else:
            return _normalize_tree(value)
    else:
        return value


def _normalize_tree(definition: Mapping[str, Any]) -> dict[str, Any]:
    return {key: _normalize(value) for key, value in definition.items()}


def _collect_children(tree: Mapping[str, Any], prefix: str) -> list[ChildSchema]:
    children = []
    for key, value in tree.items():
        path = f"{prefix}{key}"
        target = value
        element = None
        if is_field_spec(value):
            target = value["type"]
            element = value.get("of")

        if isinstance(target, Schema):
            children.append(
                ChildSchema(path=path, schema=target, is_array=False)
            )
        elif (
            isinstance(target, list)
            and len(target) == 1
            and isinstance(target[0], Schema)
        ):
            children.append(
                ChildSchema(path=path, schema=target[0], is_array=True)
            )
        elif target is NativeTag.Map and isinstance(element, Schema):
            children.append(
                ChildSchema(
                    path=path, schema=element, is_array=False, is_map=True
                )
            )
        elif isinstance(value, dict) and not is_field_spec(value):
            children.extend(_collect_children(value, f"{path}."))
    return children
