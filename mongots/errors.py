# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.


class MongotsError(Exception):
    """Base class for all mongots errors."""


class SchemaLoadError(MongotsError):
    """A schema module could not be imported or exports no model."""


class ConfigError(MongotsError, ValueError):
    """Invalid generator configuration."""


class DeclarationSyntaxError(MongotsError):
    """A TypeScript declaration file could not be parsed."""
