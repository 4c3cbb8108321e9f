# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.


from __future__ import annotations
from typing import (
    TYPE_CHECKING,
    Any,
    Final,
    Literal,
    TypeAlias,
)

import re

from mongots._internal._naming import property_key
from mongots.schema import TIMESTAMPS_INIT

if TYPE_CHECKING:
    from collections.abc import Mapping


FuncRole: TypeAlias = Literal["methods", "statics", "query"]

DEFAULT_SIGNATURE: Final = "(...args: any[]) => any"

_SIGNATURE_RE = re.compile(r"\((?:this: \w*(?:, )?)?(.*)\) => (.*)", re.S)

# Members the ORM installs on every schema that opts into timestamps.
SKIPPED_FUNCTIONS: Final = frozenset({TIMESTAMPS_INIT})


def get_func_type(signature: str, role: FuncRole, model_name: str) -> str:
    """Bind a ``(params) => ret`` signature to its receiver.

    Query helpers always take and return the query they are chained on;
    methods are bound to the live document and statics to the model.
    An explicit ``this:`` parameter in *signature* is replaced.
    """
    match = _SIGNATURE_RE.match(signature)
    if match is not None:
        params, return_type = match.group(1), match.group(2)
    else:
        params, return_type = "", None

    extra = f", {params}" if params else ""

    if role == "query":
        return (
            f"<Q extends mongoose.Query<any, {model_name}Document>>"
            f"(this: Q{extra}) => Q"
        )
    elif role == "methods":
        receiver = f"{model_name}Document"
    else:
        receiver = f"{model_name}Model"

    return f"(this: {receiver}{extra}) => {return_type or 'any'}"


def parse_functions(
    funcs: Mapping[str, Any],
    model_name: str,
    role: FuncRole,
    *,
    indent: str = "",
) -> str:
    lines = []
    for key in funcs:
        if key in SKIPPED_FUNCTIONS:
            continue
        func_type = get_func_type(DEFAULT_SIGNATURE, role, model_name)
        lines.append(f"{indent}{property_key(key)}: {func_type};\n")
    return "".join(lines)
