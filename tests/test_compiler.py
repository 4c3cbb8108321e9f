# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.

from __future__ import annotations

import decimal
import unittest
import uuid

from mongots import Schema, Types, model, parse_schema
from mongots._internal._codegen._compiler import (
    get_id_type,
    make_line,
    should_lean_include_virtuals,
)


def lean(schema, **kwargs):
    return parse_schema(schema, is_document=False, **kwargs)


def document(schema, **kwargs):
    return parse_schema(schema, is_document=True, **kwargs)


class TestCompilerHelpers(unittest.TestCase):
    def test_make_line(self):
        self.assertEqual(make_line("name", "string"), "name: string;\n")
        self.assertEqual(
            make_line("name", "string", is_optional=True, indent="  "),
            "  name?: string;\n",
        )
        self.assertEqual(
            make_line("first-name", "string"), '"first-name": string;\n'
        )
        self.assertEqual(make_line("", "string"), "string;\n")

    def test_lean_virtuals(self):
        self.assertFalse(should_lean_include_virtuals({}))
        self.assertFalse(should_lean_include_virtuals({"to_object": {}}))
        self.assertTrue(
            should_lean_include_virtuals({"to_object": {"virtuals": True}})
        )
        self.assertTrue(
            should_lean_include_virtuals({"to_object": {"getters": True}})
        )
        self.assertFalse(
            should_lean_include_virtuals(
                {"to_object": {"virtuals": False, "getters": True}}
            )
        )

    def test_id_type(self):
        self.assertEqual(
            get_id_type(Schema({"name": str})), "mongoose.Types.ObjectId"
        )
        self.assertEqual(get_id_type(Schema({"_id": str})), "string")
        self.assertEqual(get_id_type(Schema({"_id": int})), "number")
        self.assertEqual(
            get_id_type(Schema({}, _id=False)), "mongoose.Types.ObjectId"
        )


class TestCompileFields(unittest.TestCase):
    def test_compile_scalars(self):
        schema = Schema(
            {
                "name": {"type": str, "required": True},
                "age": int,
                "active": bool,
                "born": {"type": "Date"},
            }
        )
        expected = (
            "  name: string;\n"
            "  age?: number;\n"
            "  active?: boolean;\n"
            "  born?: Date;\n"
            "  _id: mongoose.Types.ObjectId;\n"
        )
        self.assertEqual(lean(schema), expected)
        # the version key and the id virtual never show up
        self.assertEqual(document(schema), expected)

    def test_compile_header_footer(self):
        schema = Schema({"name": str}, _id=False, version_key=False)
        self.assertEqual(
            lean(schema, header="interface X {\n", footer="}"),
            "interface X {\n  name?: string;\n}",
        )

    def test_compile_shape_dependent(self):
        schema = Schema(
            {
                "price": decimal.Decimal,
                "avatar": bytes,
                "extra": Types.Mixed,
            },
            _id=False,
        )
        self.assertEqual(
            lean(schema),
            "  price?: number;\n  avatar?: Buffer;\n  extra?: any;\n",
        )
        self.assertEqual(
            document(schema),
            "  price?: mongoose.Types.Decimal128;\n"
            "  avatar?: mongoose.Types.Buffer;\n"
            "  extra?: any;\n",
        )

    def test_compile_enum(self):
        schema = Schema(
            {"status": {"type": str, "enum": ["draft", "published"]}},
            _id=False,
        )
        self.assertEqual(lean(schema), '  status?: "draft" | "published";\n')

    def test_compile_arrays(self):
        schema = Schema(
            {
                "tags": [str],
                "scores": {"type": [int], "default": None},
                "labels": {"type": [str], "default": ["a"]},
                "anything": [],
                "statuses": {
                    "type": [{"type": str, "enum": ["a", "b"]}],
                    "default": None,
                },
            },
            _id=False,
        )
        self.assertEqual(
            lean(schema),
            "  tags: string[];\n"
            "  scores?: number[];\n"
            "  labels: string[];\n"
            "  anything: any[];\n"
            '  statuses: ("a" | "b")[];\n',
        )
        self.assertEqual(
            document(schema),
            "  tags: mongoose.Types.Array<string>;\n"
            "  scores?: mongoose.Types.Array<number>;\n"
            "  labels: mongoose.Types.Array<string>;\n"
            "  anything: mongoose.Types.Array<any>;\n"
            '  statuses: mongoose.Types.Array<"a" | "b">;\n',
        )

    def test_compile_refs(self):
        user = model("User", Schema({"name": str}))
        schema = Schema(
            {
                "author": {"type": Types.ObjectId, "ref": user, "required": True},
                "friends": [{"type": Types.ObjectId, "ref": "User"}],
                "pinned": {"type": Types.ObjectId, "ref": "Post.comments"},
            },
            _id=False,
        )
        self.assertEqual(
            lean(schema),
            '  author: User["_id"] | User;\n'
            '  friends: (User["_id"] | User)[];\n'
            '  pinned?: PostComment["_id"] | PostComment;\n',
        )
        self.assertEqual(
            document(schema),
            '  author: UserDocument["_id"] | UserDocument;\n'
            "  friends: mongoose.Types.Array"
            '<UserDocument["_id"] | UserDocument>;\n'
            '  pinned?: PostCommentDocument["_id"] | PostCommentDocument;\n',
        )

    def test_compile_unsupported_ref(self):
        schema = Schema({"owner": {"type": str, "ref": 42}}, _id=False)
        self.assertEqual(lean(schema), "")

    def test_compile_maps(self):
        schema = Schema(
            {
                "counts": {"type": dict, "of": int},
                "meta": {"type": Types.Map},
                "places": {"type": dict, "of": {"type": str, "required": True}},
            },
            _id=False,
        )
        self.assertEqual(
            lean(schema),
            "  counts?: Map<string, number>;\n"
            "  meta?: Map<string, any>;\n"
            "  places?: Map<string, string>;\n",
        )
        self.assertEqual(
            document(schema),
            "  counts?: mongoose.Types.Map<number>;\n"
            "  meta?: mongoose.Types.Map<any>;\n"
            "  places?: mongoose.Types.Map<string>;\n",
        )

    def test_compile_nested_objects(self):
        schema = Schema(
            {"address": {"city": str, "geo": {"lat": float, "lng": float}}},
            _id=False,
        )
        self.assertEqual(
            lean(schema),
            "  address: {\n"
            "    city?: string;\n"
            "    geo: {\n"
            "      lat?: number;\n"
            "      lng?: number;\n"
            "    };\n"
            "  };\n",
        )

    def test_compile_quoted_keys(self):
        schema = Schema({"first-name": str}, _id=False)
        self.assertEqual(lean(schema), '  "first-name"?: string;\n')

    def test_compile_skips_unknown(self):
        schema = Schema(
            {"name": str, "weird": None, "get": str, "schemaName": str},
            _id=False,
        )
        self.assertEqual(lean(schema), "  name?: string;\n")

    def test_compile_unknown_type_is_nested_object(self):
        for token in (uuid.UUID, {"type": uuid.UUID}):
            schema = Schema(
                {"token": token}, _id=False, version_key=False, id=False
            )
            self.assertEqual(lean(schema), "  token: {\n  };\n")
            self.assertEqual(document(schema), "  token: {\n  };\n")

        schema = Schema(
            {"token": {"type": uuid.UUID, "required": True}, "n": 42},
            _id=False,
        )
        self.assertEqual(lean(schema), "  token: {\n  };\n  n: {\n  };\n")

    def test_compile_id_is_never_optional(self):
        schema = Schema({"_id": {"type": str, "required": False}})
        self.assertEqual(lean(schema), "  _id: string;\n")
        self.assertEqual(document(schema), "  _id: string;\n")

        schema = Schema(
            {"_id": {"type": Types.ObjectId, "required": False}, "n": int}
        )
        self.assertEqual(
            lean(schema), "  _id: mongoose.Types.ObjectId;\n  n?: number;\n"
        )

    def test_compile_virtuals(self):
        schema = Schema({"first": str}, _id=False)
        schema.virtual("fullName")
        self.assertEqual(lean(schema), "  first?: string;\n")
        self.assertEqual(
            document(schema), "  first?: string;\n  fullName: any;\n"
        )

        schema = Schema(
            {"first": str}, _id=False, to_object={"virtuals": True}
        )
        schema.virtual("fullName")
        self.assertEqual(
            lean(schema), "  first?: string;\n  fullName: any;\n"
        )

    def test_compile_is_repeatable(self):
        schema = Schema({"tags": [{"label": str}]})
        first = lean(schema, model_name="Post", add_model=True)
        self.assertEqual(lean(schema, model_name="Post", add_model=True), first)


class TestCompileSubdocuments(unittest.TestCase):
    def test_subdocument_nested_path(self):
        city = Schema({"name": str})
        schema = Schema({"address": {"city": city}})
        output = lean(schema, model_name="User")

        self.assertIn(
            "\nexport interface UserAddressCity {\n"
            "  name?: string;\n"
            "  _id: mongoose.Types.ObjectId;\n"
            "}\n\n",
            output,
        )
        self.assertTrue(
            output.endswith(
                "  address: {\n"
                "    city?: UserAddressCity;\n"
                "  };\n"
                "  _id: mongoose.Types.ObjectId;\n"
            )
        )

        output = document(schema, model_name="User")
        self.assertIn(
            "\nexport interface UserAddressCityDocument extends "
            "mongoose.Document<mongoose.Types.ObjectId> {\n",
            output,
        )
        self.assertIn("    city?: UserAddressCityDocument;\n", output)

    def test_subdocument_arrays(self):
        schema = Schema(
            {
                "comments": [{"body": {"type": str, "required": True}}],
                "drafts": {"type": [{"body": str}], "default": None},
            }
        )
        output = lean(schema, model_name="Post")
        self.assertIn("\nexport interface PostComment {\n", output)
        self.assertIn(
            "  body: string;\n  _id: mongoose.Types.ObjectId;\n}\n\n", output
        )
        self.assertIn("  comments: PostComment[];\n", output)
        self.assertIn("  drafts?: PostDraft[];\n", output)

        output = document(schema, model_name="Post")
        self.assertIn(
            "\nexport interface PostCommentDocument extends "
            "mongoose.Types.EmbeddedDocument {\n",
            output,
        )
        self.assertIn(
            "  comments: mongoose.Types.DocumentArray<PostCommentDocument>;\n",
            output,
        )
        self.assertIn(
            "  drafts?: mongoose.Types.DocumentArray<PostDraftDocument>;\n",
            output,
        )

    def test_subdocument_required(self):
        pinned = Schema({"body": str})
        schema = Schema(
            {
                "pinned": {"type": pinned, "required": True},
                "featured": pinned,
            }
        )
        output = lean(schema, model_name="Post")
        self.assertIn("  pinned: PostPinned;\n", output)
        self.assertIn("  featured?: PostFeatured;\n", output)

    def test_subdocument_map_values(self):
        member = Schema({"role": str}, _id=False)
        schema = Schema(
            {
                "members": {"type": Types.Map, "of": member},
                "owners": {"type": dict, "of": member, "required": True},
            },
            _id=False,
        )
        self.assertEqual(
            [(c.path, c.is_map) for c in schema.child_schemas],
            [("members", True), ("owners", True)],
        )

        output = lean(schema, model_name="Team")
        self.assertIn(
            "\nexport interface TeamMember {\n  role?: string;\n}\n\n", output
        )
        self.assertIn("  members?: Map<string, TeamMember>;\n", output)
        self.assertIn("  owners: Map<string, TeamOwner>;\n", output)

        output = document(schema, model_name="Team")
        self.assertIn(
            "\nexport interface TeamMemberDocument extends "
            "mongoose.Document<mongoose.Types.ObjectId> {\n",
            output,
        )
        self.assertIn(
            "  members?: mongoose.Types.Map<TeamMemberDocument>;\n", output
        )
        self.assertIn(
            "  owners: mongoose.Types.Map<TeamOwnerDocument>;\n", output
        )

        # without a model name the element schema is not emitted
        self.assertEqual(lean(schema), "")

    def test_subdocument_augmented(self):
        schema = Schema({"comments": [{"body": str}]})
        output = lean(schema, model_name="Post", is_augmented=True)
        self.assertIn("\ninterface PostComment {\n", output)
        self.assertNotIn("export ", output)

    def test_subdocument_without_model_name(self):
        # without a model name there is nothing to hoist into
        schema = Schema({"comments": [{"body": str}], "title": str})
        self.assertEqual(
            lean(schema),
            "  title?: string;\n  _id: mongoose.Types.ObjectId;\n",
        )

    def test_subdocument_ordering(self):
        schema = Schema({"comments": [{"body": str}], "title": str})
        output = lean(
            schema,
            model_name="Post",
            add_model=True,
            header="export interface Post {\n",
            footer="}",
        )
        child = output.index("export interface PostComment {")
        aliases = output.index("export type PostObject = Post")
        header = output.index("export interface Post {")
        self.assertLess(child, aliases)
        self.assertLess(aliases, header)
        self.assertTrue(output.endswith("}"))


class TestCompileModelTypes(unittest.TestCase):
    def test_model_types(self):
        schema = Schema({"title": str}, timestamps=True)

        @schema.method
        def publish(self):
            pass

        @schema.static
        def find_published(cls):
            pass

        output = lean(schema, model_name="Post", add_model=True)

        self.assertIn("export type PostObject = Post\n", output)
        self.assertIn(
            "export type PostMethods = {\n"
            "  publish: (this: PostDocument, ...args: any[]) => any;\n"
            "}\n",
            output,
        )
        self.assertNotIn("initializeTimestamps", output)
        self.assertIn(
            "export type PostStatics = {\n"
            "  find_published: (this: PostModel, ...args: any[]) => any;\n"
            "}\n",
            output,
        )
        self.assertIn(
            "export interface PostModel extends "
            "mongoose.Model<PostDocument>, PostStatics {}\n",
            output,
        )
        self.assertIn(
            "export type PostSchema = "
            "mongoose.Schema<PostDocument, PostModel>\n",
            output,
        )
        self.assertNotIn("PostQueries", output)

    def test_model_types_queries(self):
        schema = Schema({"title": str})

        @schema.query_helper
        def by_title(query, title):
            pass

        output = lean(schema, model_name="Post", add_model=True)
        self.assertIn(
            "export type PostQueries = {\n"
            "  by_title: <Q extends mongoose.Query<any, PostDocument>>"
            "(this: Q, ...args: any[]) => Q;\n"
            "}\n",
            output,
        )
        self.assertIn(
            'declare module "mongoose" {interface Query<ResultType, '
            "DocType extends Document> extends PostQueries {}}\n",
            output,
        )

        output = lean(
            schema, model_name="Post", add_model=True, is_augmented=True
        )
        self.assertIn(
            "\ninterface Query<ResultType, DocType extends Document> "
            "extends PostQueries {}\n",
            output,
        )

    def test_model_types_document_shape(self):
        schema = Schema({"title": str})
        output = document(schema, model_name="Post", add_model=True)
        self.assertNotIn("PostMethods", output)
