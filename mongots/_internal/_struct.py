# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.


from __future__ import annotations
from typing import TypeVar
from typing_extensions import dataclass_transform

import dataclasses


_dataclass = dataclasses.dataclass(frozen=True, kw_only=True)

_T = TypeVar("_T")


@dataclass_transform(
    frozen_default=True,
    kw_only_default=True,
)
def struct(t: type[_T]) -> type[_T]:
    return _dataclass(t)
