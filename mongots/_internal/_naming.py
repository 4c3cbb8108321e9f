# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.

from __future__ import annotations

import functools
import json
import re


_IDENT_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


@functools.cache
def get_sub_doc_name(path: str, model_name: str = "") -> str:
    """Derive the interface name of a sub-document at *path*.

    ``get_sub_doc_name("address.city", "User")`` is ``"UserAddressCity"``;
    a trailing plural ``s`` is stripped: ``"friends"`` becomes
    ``"Friend"``.
    """
    name = model_name + "".join(
        p[:1].upper() + p[1:] for p in path.split(".")
    )
    if name.endswith("s"):
        name = name[:-1]
    return name


def property_key(key: str) -> str:
    if _IDENT_RE.match(key):
        return key
    else:
        return json.dumps(key)
