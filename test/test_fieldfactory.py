"""Tests for building GraphQL fields from sample JSON values."""

import os
import sys
import unittest

from graphql import GraphQLBoolean, GraphQLFloat, GraphQLList, GraphQLObjectType, GraphQLString

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from jsonql.constants import EMPTY_TYPE_FIELD_NAME, JSON_KEY_EXTENSION
from jsonql.fieldfactory import FieldFactory
from jsonql.jsonnode import JsonKind, kind_of
from jsonql.resolver import PathResolver
from jsonql.typecache import TypeCache
from jsonql.unioninfo import UnionRegistry, collect_union_info


def make_factory(document, **kwargs) -> FieldFactory:
    registry = collect_union_info(document, UnionRegistry())
    return FieldFactory(PathResolver(document), registry, TypeCache(), **kwargs)


class TestKindOf(unittest.TestCase):

    def test_kinds(self):
        self.assertEqual(kind_of(None), JsonKind.NULL)
        self.assertEqual(kind_of(True), JsonKind.BOOLEAN)
        self.assertEqual(kind_of(0), JsonKind.NUMBER)
        self.assertEqual(kind_of(1.5), JsonKind.NUMBER)
        self.assertEqual(kind_of("x"), JsonKind.STRING)
        self.assertEqual(kind_of({}), JsonKind.OBJECT)
        self.assertEqual(kind_of([]), JsonKind.ARRAY)
        self.assertEqual(kind_of(b"raw"), JsonKind.UNKNOWN)
        self.assertTrue(JsonKind.NULL.is_scalar)
        self.assertFalse(JsonKind.ARRAY.is_scalar)


class TestFieldFactory(unittest.TestCase):
    """Test cases for FieldFactory."""

    def test_scalar_types(self):
        factory = make_factory({})
        self.assertIs(factory.build_field("s", "text", 0).type, GraphQLString)
        self.assertIs(factory.build_field("n", 3, 0).type, GraphQLFloat)
        self.assertIs(factory.build_field("f", 3.5, 0).type, GraphQLFloat)
        self.assertIs(factory.build_field("b", False, 0).type, GraphQLBoolean)
        self.assertIs(factory.build_field("z", None, 0).type, GraphQLString)
        self.assertIs(factory.build_field("u", object(), 0).type, GraphQLString)

    def test_every_field_has_a_resolver(self):
        factory = make_factory({})
        self.assertIsNotNone(factory.build_field("s", "text", 0).resolve)
        self.assertIsNotNone(factory.build_field("o", {"a": 1}, 0).resolve)
        self.assertIsNotNone(factory.build_field("l", [], 0).resolve)

    def test_depth_ceiling_forces_string(self):
        factory = make_factory({})
        field = factory.build_field("deep", {"a": {"b": 1}}, 11)
        self.assertIs(field.type, GraphQLString)
        field = factory.build_field("deep", {"a": 1}, 10)
        self.assertIsInstance(field.type, GraphQLObjectType)

    def test_custom_depth_ceiling(self):
        factory = make_factory({}, depth_ceiling=1)
        field = factory.build_field("a", {"b": {"c": {"d": 1}}}, 0)
        b_type = field.type.fields["b"].type
        self.assertIsInstance(b_type, GraphQLObjectType)
        self.assertIs(b_type.fields["c"].type, GraphQLString)

    def test_object_fields_are_sorted(self):
        factory = make_factory({})
        field = factory.build_field("user", {"zeta": 1, "alpha": "a", "mid": True}, 0)
        self.assertEqual(field.type.name, "User")
        self.assertEqual(list(field.type.fields), ["alpha", "mid", "zeta"])

    def test_object_fields_include_union_info(self):
        document = {
            "a": {"address": {"city": "Oslo"}},
            "b": {"address": {"street": "Main", "geo": {"lat": 1.0}}},
        }
        factory = make_factory(document)
        field = factory.build_field("address", {"city": "Oslo"}, 1)
        self.assertEqual(set(field.type.fields), {"city", "geo", "street"})
        # a subfield seen only as an object elsewhere still expands
        geo_type = field.type.fields["geo"].type
        self.assertIsInstance(geo_type, GraphQLObjectType)
        self.assertEqual(geo_type.name, "Geo")
        self.assertIn("lat", geo_type.fields)
        # a subfield missing from the sample defaults to String
        self.assertIs(field.type.fields["street"].type, GraphQLString)

    def test_same_key_reuses_cached_type(self):
        factory = make_factory({})
        first = factory.build_field("stat", {"level": 1}, 0)
        second = factory.build_field("stat", {"name": "ice"}, 3)
        self.assertIs(first.type, second.type)
        self.assertEqual(list(second.type.fields), ["level"])
        self.assertIn("Stat", factory.type_cache)

    def test_recursive_key_refers_to_itself(self):
        document = {"node": {"value": 1, "node": {"value": 2}}}
        factory = make_factory(document)
        field = factory.build_field("node", document["node"], 0)
        self.assertIs(field.type.fields["node"].type, field.type)
        self.assertEqual(len(factory.type_cache), 1)

    def test_empty_object_gets_placeholder_field(self):
        factory = make_factory({"meta": {}})
        field = factory.build_field("meta", {}, 0)
        self.assertEqual(list(field.type.fields), [EMPTY_TYPE_FIELD_NAME])

    def test_empty_array_is_list_of_strings(self):
        factory = make_factory({})
        field = factory.build_field("items", [], 0)
        self.assertIsInstance(field.type, GraphQLList)
        self.assertIs(field.type.of_type, GraphQLString)

    def test_array_of_objects_is_merged(self):
        factory = make_factory({})
        field = factory.build_field("items", [{"tier": "A", "x": 1}, {"tier": "B", "y": 2}], 0)
        element_type = field.type.of_type
        self.assertEqual(element_type.name, "Items")
        self.assertEqual(set(element_type.fields), {"tier", "x", "y"})

    def test_mixed_array_uses_first_element(self):
        factory = make_factory({})
        field = factory.build_field("values", [1, "two", {"three": 3}], 0)
        self.assertIs(field.type.of_type, GraphQLFloat)
        field = factory.build_field("words", ["one", 2], 0)
        self.assertIs(field.type.of_type, GraphQLString)

    def test_nested_arrays(self):
        factory = make_factory({})
        field = factory.build_field("matrix", [[1, 2], [3]], 0)
        self.assertIsInstance(field.type.of_type, GraphQLList)
        self.assertIs(field.type.of_type.of_type, GraphQLFloat)

    def test_invalid_keys_are_renamed(self):
        factory = make_factory({})
        field = factory.build_field("user-info", {"e-mail": "a@b", "e_mail": "x", "2fa": True}, 0)
        self.assertEqual(field.type.name, "UserInfo")
        fields = field.type.fields
        self.assertEqual(set(fields), {"e_mail", "e_mail_1", "_2fa"})
        self.assertEqual(fields["e_mail_1"].extensions[JSON_KEY_EXTENSION], "e-mail")
        self.assertEqual(fields["_2fa"].extensions[JSON_KEY_EXTENSION], "2fa")
        self.assertFalse(fields["e_mail"].extensions)

    def test_reserved_type_names_get_suffix(self):
        factory = make_factory({})
        self.assertEqual(factory.build_field("string", {"a": 1}, 0).type.name, "StringObject")
        self.assertEqual(factory.build_field("rootQuery", {"a": 1}, 0).type.name, "RootQueryObject")

    def test_reserved_names_can_be_extended(self):
        factory = make_factory({}, reserved_names=frozenset(["Query"]))
        self.assertEqual(factory.build_field("query", {"a": 1}, 0).type.name, "QueryObject")

    def test_custom_type_naming(self):
        factory = make_factory({}, type_naming=lambda key: f"Json_{key}")
        self.assertEqual(factory.build_field("user", {"a": 1}, 0).type.name, "Json_user")

    def test_resolver_is_required(self):
        with self.assertRaises(ValueError):
            FieldFactory(None, UnionRegistry(), TypeCache())


if __name__ == '__main__':
    unittest.main()
