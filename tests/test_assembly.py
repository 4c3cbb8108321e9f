# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.

from __future__ import annotations

import unittest

from mongots import Schema, Types, generate_types
from mongots._internal._codegen import _docs
from mongots._internal._codegen._module import CodeSection, GeneratedUnit
from mongots._internal._tsast import InterfaceDeclaration


def blog_schemas():
    user = Schema({"name": {"type": str, "required": True}, "_id": str})
    post = Schema(
        {
            "title": str,
            "author": {"type": Types.ObjectId, "ref": "User"},
            "comments": [{"body": str}],
        },
        timestamps=True,
    )
    return {"User": user, "Post": post}


class TestGeneratedUnit(unittest.TestCase):
    def test_unit_render(self):
        unit = GeneratedUnit("// header")
        unit.add_import("import a;")
        unit.add_imports(["import a;", "import b;"])
        unit.write("line 1\nline 2\n")
        with unit.indented():
            unit.write("nested\n")
        with unit.code_section(CodeSection.epilogue):
            unit.write("end")
        self.assertEqual(
            unit.render(),
            "// header\n\n"
            "import a;\nimport b;\n\n"
            "line 1\nline 2\n\n  nested\n\n\n"
            "end\n",
        )

    def test_unit_empty(self):
        unit = GeneratedUnit("// header")
        self.assertFalse(unit.section_has_content(CodeSection.main))
        self.assertFalse(unit.section_has_content(CodeSection.epilogue))
        self.assertEqual(unit.render(), "// header\n")


class TestGenerateTypes(unittest.TestCase):
    def test_generate_types(self):
        text = generate_types(blog_schemas()).get_full_text()

        self.assertTrue(text.startswith(_docs.MAIN_HEADER))
        self.assertIn('\n\nimport mongoose from "mongoose";\n\n', text)
        self.assertIn("\nexport interface User {\n", text)
        self.assertIn(
            "\nexport interface UserDocument extends "
            "mongoose.Document<string>, UserMethods {\n",
            text,
        )
        self.assertIn(
            "\nexport interface PostDocument extends "
            "mongoose.Document<mongoose.Types.ObjectId>, PostMethods {\n",
            text,
        )
        self.assertIn("\nexport interface PostComment {\n", text)
        self.assertIn('  author?: User["_id"] | User;\n', text)
        self.assertIn(
            '  author?: UserDocument["_id"] | UserDocument;\n', text
        )
        self.assertIn("  createdAt?: Date;\n", text)
        self.assertTrue(text.endswith("}\n"))

        # models are emitted in registration order
        self.assertLess(
            text.index("interface UserDocument "),
            text.index("interface PostComment "),
        )

    def test_generate_types_parses(self):
        sf = generate_types(blog_schemas())
        self.assertEqual(
            [
                s.name
                for s in sf.statements
                if isinstance(s, InterfaceDeclaration)
            ],
            [
                "UserModel",
                "User",
                "UserDocument",
                "PostComment",
                "PostModel",
                "Post",
                "PostCommentDocument",
                "PostDocument",
            ],
        )
        self.assertIsNotNone(sf.get_type_alias("PostMethods").type_literal)

    def test_generate_types_imports(self):
        text = generate_types(
            blog_schemas(), imports=['import { Extra } from "./extra";']
        ).get_full_text()
        self.assertIn(
            'import mongoose from "mongoose";\n'
            'import { Extra } from "./extra";\n',
            text,
        )

    def test_generate_types_augmented(self):
        sf = generate_types(blog_schemas(), is_augmented=True)
        text = sf.get_full_text()

        self.assertIn('\n\ndeclare module "mongoose" {\n\n', text)
        self.assertIn("\n  interface User {\n", text)
        self.assertIn(
            "\n  interface UserDocument extends "
            "mongoose.Document<string>, UserMethods {\n",
            text,
        )
        self.assertNotIn("export interface", text)
        self.assertTrue(text.endswith("\n\n}\n"))

        root = sf.get_root(augmented=True)
        self.assertIsNotNone(root.get_interface("PostComment"))
        self.assertIsNotNone(root.get_type_alias("UserMethods"))

    def test_generate_types_is_deterministic(self):
        first = generate_types(blog_schemas()).get_full_text()
        second = generate_types(blog_schemas()).get_full_text()
        self.assertEqual(first, second)
