# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.


from __future__ import annotations
from typing import TYPE_CHECKING, Any

import logging
import pathlib

from mongots._internal import _loader
from mongots.errors import DeclarationSyntaxError, SchemaLoadError

from ._assembly import generate
from ._generator import C, AbstractCodeGenerator

if TYPE_CHECKING:
    import argparse


logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = pathlib.Path("src/interfaces/mongoose.gen.ts")


class MongooseTypesGenerator(AbstractCodeGenerator):
    def __init__(
        self,
        args: argparse.Namespace,
        *,
        interactive: bool = True,
    ):
        self._output = DEFAULT_OUTPUT
        self._augment = False
        self._imports: list[str] = []
        self._patch = True
        super().__init__(args, interactive=interactive)

    def _apply_cli_config(self, args: argparse.Namespace) -> None:
        super()._apply_cli_config(args)
        if args.output is not None:
            self._output = pathlib.Path(args.output)
        if args.augment is not None:
            self._augment = args.augment
        if args.imports:
            self._imports = list(args.imports)
        if args.patch is not None:
            self._patch = args.patch

    def _apply_env_output(self, value: Any) -> None:
        if not isinstance(value, str) or not value:
            raise ValueError('"output" must be a non-empty string')
        self._output = pathlib.Path(value)

    def _apply_env_augment(self, value: Any) -> None:
        if not isinstance(value, bool):
            raise ValueError('"augment" must be a boolean')
        self._augment = value

    def _apply_env_imports(self, value: Any) -> None:
        if not isinstance(value, list) or not all(
            isinstance(v, str) for v in value
        ):
            raise ValueError('"imports" must be a list of strings')
        self._imports = value

    def _apply_env_patch(self, value: Any) -> None:
        if not isinstance(value, bool):
            raise ValueError('"patch" must be a boolean')
        self._patch = value

    @property
    def output(self) -> pathlib.Path:
        if self._output.suffix == ".ts":
            return self._output
        # a directory was given
        return self._output / DEFAULT_OUTPUT.name

    def run(self) -> pathlib.Path:
        try:
            schemas = _loader.load_schemas(self._args.paths)
        except SchemaLoadError as e:
            self.print_error(str(e))
            self.abort(2)

        if not schemas:
            self.print_error("no models found")
            self.abort(2)

        if not self._quiet:
            names = ", ".join(schemas)
            self.print_msg(f"Found models: {C.BOLD}{names}{C.ENDC}")

        try:
            source_file = generate(
                schemas,
                is_augmented=self._augment,
                imports=self._imports,
                patch=self._patch,
                path=self.output,
            )
        except DeclarationSyntaxError as e:
            self.print_error(f"could not parse the generated file: {e}")
            self.abort(2)
        try:
            written = source_file.save()
        except OSError:
            logger.exception("could not write %s", self.output)
            self.abort(73)

        if not self._quiet:
            self.print_msg(f"Wrote {C.BOLD}{written}{C.ENDC}")
        self.print_msg(f"{C.GREEN}{C.BOLD}Done.{C.ENDC}")
        return written
