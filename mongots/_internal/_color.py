# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.

"""ANSI color palette for command-line output."""

from __future__ import annotations

import os
import sys


class Color:
    HEADER = ""
    BLUE = ""
    CYAN = ""
    GREEN = ""
    WARNING = ""
    FAIL = ""
    ENDC = ""
    BOLD = ""
    UNDERLINE = ""


_colors = {
    "HEADER": "\033[95m",
    "BLUE": "\033[94m",
    "CYAN": "\033[96m",
    "GREEN": "\033[92m",
    "WARNING": "\033[93m",
    "FAIL": "\033[91m",
    "ENDC": "\033[0m",
    "BOLD": "\033[1m",
    "UNDERLINE": "\033[4m",
}


_color: Color | None = None


def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    force = os.environ.get("MONGOTS_FORCE_COLOR")
    if force is not None:
        return force.lower() in {"1", "true", "yes"}
    return sys.stderr.isatty()


def get_color() -> Color:
    global _color
    if _color is None:
        _color = Color()
        if _use_color():
            for k, v in _colors.items():
                setattr(_color, k, v)
    return _color
