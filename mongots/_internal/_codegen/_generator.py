# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.


from __future__ import annotations
from typing import (
    TYPE_CHECKING,
    Any,
    TextIO,
)

import io
import json
import os
import sys
import typing

from mongots._internal._color import get_color
from mongots.errors import ConfigError

if TYPE_CHECKING:
    import argparse


C = get_color()

ENV_CONFIG = "MONGOTS_GENERATE_CONFIG"


class AbstractCodeGenerator:
    def __init__(
        self,
        args: argparse.Namespace,
        *,
        interactive: bool = True,
    ):
        self._args = args
        self._quiet = False
        self._interactive = interactive
        self._stderr: TextIO
        if not interactive:
            self._stderr = io.StringIO()
        else:
            self._stderr = sys.stderr

        try:
            self._apply_env_config()
        except ConfigError as e:
            self.print_error(str(e))
            self.abort(22)
        self._apply_cli_config(args)

    def _apply_cli_config(self, args: argparse.Namespace) -> None:
        if getattr(args, "quiet", None) is not None:
            self._quiet = args.quiet

    def _apply_env_config(self) -> None:
        """
        Apply environment configuration.

        MONGOTS_GENERATE_CONFIG is a JSON object in the form:
        {
            "augment": {"value": true},
            "output": {"value": "src/interfaces/mongoose.gen.ts"}
        }

        Every key is dispatched to an ``_apply_env_<key>`` method.
        """
        config_str = os.getenv(ENV_CONFIG)
        if not config_str:
            return
        try:
            config = json.loads(config_str)
        except ValueError as e:
            raise ConfigError(f"{ENV_CONFIG} is not valid JSON: {e}") from e
        if not isinstance(config, dict):
            raise ConfigError(f"{ENV_CONFIG} must be a JSON object")
        for key, value in config.items():
            if not isinstance(value, dict) or "value" not in value:
                raise ConfigError(
                    f"Invalid {ENV_CONFIG} value for {key!r}: "
                    f'expected a JSON object with a "value" key, '
                    f"got {type(value).__name__}"
                )
            m = getattr(self, f"_apply_env_{key}", None)
            if m is None:
                if not self._quiet:
                    self.print_msg(
                        f"{C.WARNING}Skipping unknown environment config: "
                        f"{key}{C.ENDC}"
                    )
                continue
            try:
                m(value["value"])
            except ValueError as e:
                raise ConfigError(f"{ENV_CONFIG}: {e}") from e

    def _apply_env_quiet(self, value: Any) -> None:
        if not isinstance(value, bool):
            raise ValueError('"quiet" must be a boolean')
        self._quiet = value

    def get_error_output(self) -> str:
        if isinstance(self._stderr, io.StringIO):
            return self._stderr.getvalue()
        else:
            raise RuntimeError("Cannot get error output in non-silent mode")

    def abort(self, code: int) -> typing.NoReturn:
        if self._interactive:
            sys.exit(code)
        else:
            raise RuntimeError(f"aborting codegen, code={code}")

    def print_msg(self, msg: str) -> None:
        print(msg, file=self._stderr)

    def print_error(self, msg: str) -> None:
        print(
            f"{C.BOLD}{C.FAIL}error: {C.ENDC}{C.BOLD}{msg}{C.ENDC}",
            file=self._stderr,
        )
