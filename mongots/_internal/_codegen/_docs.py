# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.

"""Doc comments emitted in front of each generated declaration."""

from __future__ import annotations


MAIN_HEADER = """\
/* tslint:disable */
/* eslint-disable */

// ######################################## THIS FILE WAS GENERATED BY MONGOTS ######################################## //

// NOTE: ANY CHANGES MADE WILL BE OVERWRITTEN ON SUBSEQUENT EXECUTIONS OF MONGOTS.\
"""

IMPORTS = 'import mongoose from "mongoose";'

MODULE_DECLARATION_HEADER = 'declare module "mongoose" {'
MODULE_DECLARATION_FOOTER = "}"


def get_object_docs(model_name: str) -> str:
    var = model_name.lower()
    return f"""\
/**
 * Lean version of {model_name}Document (type alias of `{model_name}`)
 *
 * Use this type alias to avoid conflicts with model names:
 * ```
 * import {{ {model_name} }} from "../models"
 * import {{ {model_name}Object }} from "../interfaces/mongoose.gen.ts"
 *
 * const {var}Object: {model_name}Object = {var}.toObject();
 * ```
 */"""


def get_query_docs(model_name: str) -> str:
    return f"""\
/**
 * Mongoose Query types
 *
 * Use type assertion to ensure {model_name} query type safety:
 * ```
 * {model_name}Schema.query = <{model_name}Queries>{{ ... }};
 * ```
 */"""


def get_method_docs(model_name: str) -> str:
    return f"""\
/**
 * Mongoose Method types
 *
 * Use type assertion to ensure {model_name} methods type safety:
 * ```
 * {model_name}Schema.methods = <{model_name}Methods>{{ ... }};
 * ```
 */"""


def get_static_docs(model_name: str) -> str:
    return f"""\
/**
 * Mongoose Static types
 *
 * Use type assertion to ensure {model_name} statics type safety:
 * ```
 * {model_name}Schema.statics = <{model_name}Statics>{{ ... }};
 * ```
 */"""


def get_model_docs(model_name: str) -> str:
    return f"""\
/**
 * Mongoose Model type
 *
 * Pass this type to the Mongoose Model constructor:
 * ```
 * const {model_name} = mongoose.model<{model_name}Document, {model_name}Model>("{model_name}", {model_name}Schema);
 * ```
 */"""


def get_schema_docs(model_name: str) -> str:
    return f"""\
/**
 * Mongoose Schema type
 *
 * Assign this type to new {model_name} schema instances:
 * ```
 * const {model_name}Schema: {model_name}Schema = new mongoose.Schema({{ ... }})
 * ```
 */"""


def get_lean_docs(model_name: str, full_name: str | None = None) -> str:
    """Docs of a lean interface; pass *full_name* for sub-documents."""
    var = model_name.lower()
    alias_hint = ""
    if not full_name or model_name == full_name:
        alias_hint = (
            " To avoid conflicts with model names, use the type alias"
            f" `{model_name}Object`."
        )
    return f"""\
/**
 * Lean version of {full_name or model_name}Document
 *
 * This has all Mongoose getters & functions removed. This type will be returned from `{model_name}Document.toObject()`.{alias_hint}
 * ```
 * const {var}Object = {var}.toObject();
 * ```
 */"""


def get_subdocument_docs(model_name: str, path: str) -> str:
    return f"""\
/**
 * Mongoose Embedded Document type
 *
 * Type of `{model_name}Document["{path}"]` element.
 */"""


def get_document_docs(model_name: str) -> str:
    return f"""\
/**
 * Mongoose Document type
 *
 * Pass this type to the Mongoose Model constructor:
 * ```
 * const {model_name} = mongoose.model<{model_name}Document, {model_name}Model>("{model_name}", {model_name}Schema);
 * ```
 */"""
