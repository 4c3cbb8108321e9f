# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.

"""Discovery of models in Python modules."""

from __future__ import annotations
from typing import TYPE_CHECKING, Any

import glob
import hashlib
import importlib
import importlib.util
import logging
import pathlib
import sys
import types

from mongots.errors import SchemaLoadError
from mongots.schema import Model

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mongots.schema import Schema


logger = logging.getLogger(__name__)


def _import_file(path: pathlib.Path) -> types.ModuleType:
    digest = hashlib.sha1(str(path).encode("utf8")).hexdigest()[:8]
    modname = f"_mongots_models_{path.stem}_{digest}"
    spec = importlib.util.spec_from_file_location(modname, path)
    if spec is None or spec.loader is None:
        raise SchemaLoadError(f"Could not find a module at path {path}.")
    module = importlib.util.module_from_spec(spec)
    sys.modules[modname] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        del sys.modules[modname]
        raise
    return module


def _import(target: str) -> tuple[types.ModuleType, str]:
    path = pathlib.Path(target)
    if path.suffix == ".py" or path.exists():
        if not path.is_file():
            raise SchemaLoadError(f"Could not find a module at path {target}.")
        return _import_file(path.resolve()), path.stem
    try:
        module = importlib.import_module(target)
    except ModuleNotFoundError as e:
        if e.name is not None and target.startswith(e.name):
            raise SchemaLoadError(
                f"Could not find a module at path {target}."
            ) from e
        raise
    return module, target.rpartition(".")[2]


def _candidate_names(filename_root: str) -> list[str]:
    model_name = filename_root[:1].upper() + filename_root[1:]
    lowercase = filename_root[:-1] if filename_root.endswith("s") else filename_root
    lowercase = lowercase.lower()
    return [
        model_name,
        lowercase,
        f"{lowercase}s",
        f"{model_name}s",
    ]


def _find_model(module: types.ModuleType, filename_root: str) -> Model | None:
    exported: dict[str, Any] = vars(module)
    for name in ("default", "model", *_candidate_names(filename_root)):
        obj = exported.get(name)
        if isinstance(obj, Model):
            return obj
    for obj in exported.values():
        if isinstance(obj, Model):
            return obj
    return None


def expand_paths(paths: Iterable[str]) -> list[str]:
    """Expand directories and glob patterns into module paths."""
    expanded: list[str] = []
    for target in paths:
        path = pathlib.Path(target)
        if path.is_dir():
            expanded.extend(
                str(p)
                for p in sorted(path.rglob("*.py"))
                if p.name != "__init__.py"
            )
        elif any(c in target for c in "*?["):
            expanded.extend(sorted(glob.glob(target, recursive=True)))
        else:
            expanded.append(target)
    return expanded


def load_schemas(paths: Iterable[str]) -> dict[str, Schema]:
    """Import every module in *paths* and register the model it exports.

    The model is looked up as the ``default`` or ``model`` attribute,
    then under names derived from the module name (for ``user``:
    ``User``, ``user``, ``users``, ``Users``), then among all module
    attributes.
    """
    schemas: dict[str, Schema] = {}
    for target in expand_paths(paths):
        module, filename_root = _import(target)
        found = _find_model(module, filename_root)
        if found is None:
            raise SchemaLoadError(
                f"A module was found at {target}, but no exported models "
                f"were found. Please ensure this module exports a model "
                f"created with mongots.model()."
            )
        logger.debug("registered model %s from %s", found.model_name, target)
        schemas[found.model_name] = found.schema
    return schemas
