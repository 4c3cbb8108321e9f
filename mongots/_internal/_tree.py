# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.

"""Conversions between nested schema trees and dotted-path mappings.

Only plain dicts are descended into; lists, schemas, virtuals and any
other value are leaves.  Empty dicts are kept as leaves so that
``unflatten_tree(flatten_tree(t)) == t`` holds for every tree.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping


def flatten_tree(tree: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in tree.items():
        path = f"{prefix}{key}"
        if isinstance(value, dict) and value:
            flat.update(flatten_tree(value, f"{path}."))
        else:
            flat[path] = value
    return flat


def unflatten_tree(flat: Mapping[str, Any]) -> dict[str, Any]:
    tree: dict[str, Any] = {}
    for path, value in flat.items():
        set_path(tree, path, value)
    return tree


def replace_path(
    flat: Mapping[str, Any],
    path: str,
    value: Any,
) -> dict[str, Any]:
    """Return a copy of *flat* where *path* and everything under it is
    replaced by a single *value*, kept at the position of the first
    replaced entry."""
    result: dict[str, Any] = {}
    nested = f"{path}."
    placed = False
    for key, item in flat.items():
        if key == path or key.startswith(nested):
            if not placed:
                result[path] = value
                placed = True
        else:
            result[key] = item
    if not placed:
        result[path] = value
    return result


def set_path(tree: dict[str, Any], path: str, value: Any) -> None:
    *parents, leaf = path.split(".")
    node = tree
    for part in parents:
        child = node.get(part)
        if not isinstance(child, dict):
            child = node[part] = {}
        node = child
    node[leaf] = value
