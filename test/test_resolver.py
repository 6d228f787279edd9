"""Tests for path-addressed field resolution."""

import math
import os
import sys
import unittest

from graphql import GraphQLBoolean, GraphQLFloat, GraphQLList, GraphQLObjectType, GraphQLField, GraphQLString

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from jsonql.resolver import PathResolver, coerce_leaf, coerce_output


DOCUMENT = {
    "user": {
        "name": "John",
        "address": {"city": "New York", "zip": 10001},
        "friends": [{"name": "Alice"}, {"name": "Bob"}],
    },
    "a/b": {"c~d": 1},
    "empty": [],
}


class TestPathResolverLocate(unittest.TestCase):
    """Test cases for PathResolver.locate."""

    def setUp(self):
        self.resolver = PathResolver(DOCUMENT)

    def test_locate_scalar(self):
        self.assertEqual(self.resolver.locate(["user", "name"]), "John")
        self.assertEqual(self.resolver.locate(["user", "address", "zip"]), 10001)

    def test_locate_through_list_index(self):
        self.assertEqual(self.resolver.locate(["user", "friends", 1, "name"]), "Bob")

    def test_locate_object_is_fetched_as_is(self):
        self.assertIs(self.resolver.locate(["user", "address"]), DOCUMENT["user"]["address"])

    def test_locate_root(self):
        self.assertIs(self.resolver.locate([]), DOCUMENT)

    def test_keys_needing_pointer_escapes(self):
        self.assertEqual(self.resolver.locate(["a/b", "c~d"]), 1)

    def test_missing_paths(self):
        self.assertIsNone(self.resolver.locate(["user", "age"]))
        self.assertIsNone(self.resolver.locate(["nobody", "name"]))
        self.assertIsNone(self.resolver.locate(["user", "friends", 5, "name"]))
        self.assertIsNone(self.resolver.locate(["user", "name", "first"]))
        self.assertEqual(self.resolver.locate(["user", "age"], default=[]), [])


class TestCoercion(unittest.TestCase):
    """Test cases for coercing document values to field types."""

    def test_string(self):
        self.assertEqual(coerce_leaf("x", GraphQLString), "x")
        self.assertEqual(coerce_leaf(True, GraphQLString), "true")
        self.assertEqual(coerce_leaf(12, GraphQLString), "12")
        self.assertEqual(coerce_leaf({"b": 1, "a": [1, 2]}, GraphQLString), '{"a":[1,2],"b":1}')
        self.assertIsNone(coerce_leaf(None, GraphQLString))
        self.assertIsNone(coerce_leaf(math.inf, GraphQLString))

    def test_float(self):
        self.assertEqual(coerce_leaf(3, GraphQLFloat), 3)
        self.assertEqual(coerce_leaf(2.5, GraphQLFloat), 2.5)
        self.assertIsNone(coerce_leaf("3", GraphQLFloat))
        self.assertIsNone(coerce_leaf(True, GraphQLFloat))
        self.assertIsNone(coerce_leaf(math.nan, GraphQLFloat))
        self.assertIsNone(coerce_leaf({"a": 1}, GraphQLFloat))
        self.assertIsNone(coerce_leaf(10 ** 400, GraphQLFloat))
        self.assertEqual(coerce_leaf(10 ** 400, GraphQLString), "1" + "0" * 400)

    def test_boolean(self):
        self.assertIs(coerce_leaf(False, GraphQLBoolean), False)
        self.assertIsNone(coerce_leaf(0, GraphQLBoolean))
        self.assertIsNone(coerce_leaf("true", GraphQLBoolean))

    def test_lists(self):
        self.assertEqual(coerce_output([1, "a", None], GraphQLList(GraphQLFloat)), [1, None, None])
        self.assertEqual(coerce_output([[1], "x"], GraphQLList(GraphQLList(GraphQLFloat))), [[1], None])
        self.assertIsNone(coerce_output("x", GraphQLList(GraphQLString)))

    def test_objects(self):
        object_type = GraphQLObjectType("Thing", {"a": GraphQLField(GraphQLString)})
        self.assertEqual(coerce_output({"a": 1}, object_type), {"a": 1})
        self.assertIsNone(coerce_output("not an object", object_type))


if __name__ == '__main__':
    unittest.main()
