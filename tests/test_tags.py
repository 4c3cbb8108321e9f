# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.

from __future__ import annotations

import datetime
import decimal
import unittest

from mongots._internal._tags import (
    NESTED_OBJECT,
    NativeTag,
    Types,
    native_tag,
    resolve_base_type,
)


class TestNativeTag(unittest.TestCase):
    def test_native_tag_spellings(self):
        self.assertIs(native_tag(str), NativeTag.String)
        self.assertIs(native_tag("String"), NativeTag.String)
        self.assertIs(native_tag(int), NativeTag.Number)
        self.assertIs(native_tag(float), NativeTag.Number)
        self.assertIs(native_tag(bool), NativeTag.Boolean)
        self.assertIs(native_tag(datetime.datetime), NativeTag.Date)
        self.assertIs(native_tag(bytes), NativeTag.Buffer)
        self.assertIs(native_tag(Types.ObjectId), NativeTag.ObjectId)
        self.assertIs(native_tag("ObjectID"), NativeTag.ObjectId)
        self.assertIs(native_tag(decimal.Decimal), NativeTag.Decimal128)
        self.assertIs(native_tag(Types.Mixed), NativeTag.Mixed)
        self.assertIs(native_tag(dict), NativeTag.Map)
        self.assertIs(native_tag(NativeTag.Date), NativeTag.Date)

    def test_native_tag_unknown(self):
        self.assertIsNone(native_tag("Nope"))
        self.assertIsNone(native_tag(list))
        self.assertIsNone(native_tag({"type": str}))
        self.assertIsNone(native_tag(42))


class TestResolveBaseType(unittest.TestCase):
    def resolve(self, spec, *, key="field", is_document=False):
        return resolve_base_type(key, spec, is_document=is_document)

    def test_resolve_scalars(self):
        self.assertEqual(self.resolve({"type": NativeTag.String}), "string")
        self.assertEqual(self.resolve({"type": NativeTag.Number}), "number")
        self.assertEqual(self.resolve({"type": NativeTag.Boolean}), "boolean")
        self.assertEqual(self.resolve({"type": NativeTag.Date}), "Date")
        self.assertEqual(self.resolve({"type": NativeTag.Buffer}), "Buffer")
        self.assertEqual(self.resolve({"type": NativeTag.Mixed}), "any")
        self.assertEqual(
            self.resolve({"type": NativeTag.ObjectId}),
            "mongoose.Types.ObjectId",
        )

    def test_resolve_shape_dependent(self):
        spec = {"type": NativeTag.Decimal128}
        self.assertEqual(self.resolve(spec), "number")
        self.assertEqual(
            self.resolve(spec, is_document=True), "mongoose.Types.Decimal128"
        )

        spec = {"type": NativeTag.Map}
        self.assertEqual(self.resolve(spec), "Map<string, any>")
        self.assertEqual(
            self.resolve(spec, is_document=True), "mongoose.Types.Map<any>"
        )

    def test_resolve_enum(self):
        spec = {"type": NativeTag.String, "enum": ["draft", "published"]}
        self.assertEqual(self.resolve(spec), '"draft" | "published"')

        spec = {"type": NativeTag.String, "enum": {"values": ["a"]}}
        self.assertEqual(self.resolve(spec), '"a"')

        spec = {"type": NativeTag.String, "enum": []}
        self.assertEqual(self.resolve(spec), "string")

    def test_resolve_version_key(self):
        self.assertIsNone(self.resolve({"type": NativeTag.Number}, key="__v"))

    def test_resolve_nested(self):
        self.assertEqual(self.resolve({"city": NativeTag.String}), NESTED_OBJECT)
        self.assertEqual(self.resolve({"type": "unknown"}), NESTED_OBJECT)
