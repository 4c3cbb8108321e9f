# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.


from __future__ import annotations

import argparse
import logging

from mongots._internal._codegen._generator import C
from mongots._internal._codegen._mongoose import MongooseTypesGenerator


class ColoredArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore [override]
        self.exit(
            2,
            f"{C.BOLD}{C.FAIL}error:{C.ENDC} "
            f"{C.BOLD}{message:s}{C.ENDC}\n",
        )


parser = ColoredArgumentParser(
    prog="mongots",
    description="Generate TypeScript interfaces for Mongoose schemas "
    "described in Python modules.",
)
parser.add_argument(
    "paths",
    nargs="+",
    metavar="PATH",
    help="Python files, directories, glob patterns or dotted module names "
    "exporting models created with mongots.model().",
)
parser.add_argument(
    "-o",
    "--output",
    metavar="PATH",
    help="The output file (or directory) for the generated declarations "
    "(default is src/interfaces/mongoose.gen.ts).",
)
parser.add_argument(
    "--augment",
    action=argparse.BooleanOptionalAction,
    default=None,
    help='Wrap the declarations in a `declare module "mongoose"` block.',
)
parser.add_argument(
    "--imports",
    action="append",
    metavar="LINE",
    help="Extra import line to add to the generated file (repeatable).",
)
parser.add_argument(
    "--patch",
    action=argparse.BooleanOptionalAction,
    default=None,
    help="Replace placeholder function and virtual types with types "
    "inferred from Python annotations (default is to patch).",
)
parser.add_argument(
    "-q",
    "--quiet",
    action=argparse.BooleanOptionalAction,
    default=None,
)
parser.add_argument(
    "--debug",
    action="store_true",
    help="Log debug output, including skipped fields.",
)


def main(argv: list[str] | None = None) -> None:
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    MongooseTypesGenerator(args).run()
