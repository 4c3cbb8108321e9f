# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.

"""Generate TypeScript interfaces from Mongoose schema descriptions."""

from ._internal._codegen._assembly import generate, generate_types
from ._internal._codegen._compiler import parse_schema
from ._internal._codegen._known import ts_signature
from ._internal._loader import load_schemas
from ._internal._tags import Types
from .errors import (
    ConfigError,
    DeclarationSyntaxError,
    MongotsError,
    SchemaLoadError,
)
from .schema import Model, Schema, VirtualType, model

__version__ = "0.1.0"

__all__ = (
    "ConfigError",
    "DeclarationSyntaxError",
    "Model",
    "MongotsError",
    "Schema",
    "SchemaLoadError",
    "Types",
    "VirtualType",
    "generate",
    "generate_types",
    "load_schemas",
    "model",
    "parse_schema",
    "ts_signature",
)
