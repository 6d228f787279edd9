"""Builds GraphQL fields from sample JSON values.

The factory lives for a single schema build. It reads the union registry
gathered from the whole document, stores every object type it creates in
the type cache, and binds each field to a resolver that looks the value
up in the document when a query asks for it.
"""

import functools
import logging
from typing import AbstractSet, Any, Callable, Dict, List, Optional

from graphql import (
    GraphQLBoolean,
    GraphQLField,
    GraphQLFloat,
    GraphQLList,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLString,
)

from jsonql.common import object_type_name, unique_field_names
from jsonql.constants import DEPTH_CEILING, EMPTY_TYPE_FIELD_NAME, JSON_KEY_EXTENSION, RESERVED_TYPE_NAMES
from jsonql.jsonnode import JsonKind, JsonNode, kind_of
from jsonql.merge import merge_objects
from jsonql.resolver import PathResolver
from jsonql.typecache import TypeCache
from jsonql.unioninfo import UnionRegistry

logger = logging.getLogger(__name__)

SCALAR_TYPES: Dict[JsonKind, GraphQLScalarType] = {
    JsonKind.STRING: GraphQLString,
    JsonKind.NUMBER: GraphQLFloat,
    JsonKind.BOOLEAN: GraphQLBoolean,
}


def _resolve_nothing(_source, _info, **_args):
    return None


class FieldFactory:
    """Creates GraphQL fields for JSON values."""

    def __init__(self, resolver: PathResolver, union_registry: UnionRegistry, type_cache: TypeCache,
                 depth_ceiling: int = DEPTH_CEILING, type_naming: Optional[Callable[[str], str]] = None,
                 reserved_names: AbstractSet[str] = RESERVED_TYPE_NAMES):
        """
        Initialize the factory for one build pass.

        Args:
            resolver: Resolver bound to the document being typed
            union_registry: Union information gathered from that document
            type_cache: Cache receiving the object types of this pass
            depth_ceiling: Depth past which values are typed as String
            type_naming: Maps a bare key to an object type name
            reserved_names: Type names the default naming must avoid
        """
        if resolver is None:
            raise ValueError("A resolver is required to build fields")
        self.resolver = resolver
        self.union_registry = union_registry
        self.type_cache = type_cache
        self.depth_ceiling = depth_ceiling
        self.type_naming = type_naming or functools.partial(object_type_name, reserved_names=reserved_names)

    def build_field(self, key: str, value: JsonNode, depth: int) -> GraphQLField:
        """Dispatches field creation on the kind of the sample value."""
        if depth > self.depth_ceiling:
            logger.debug("depth ceiling reached at '%s' (depth %d), typing as String", key, depth)
            return self.build_scalar_field(JsonKind.STRING)

        kind = kind_of(value)
        if kind == JsonKind.OBJECT:
            return self.build_object_field(key, value, depth)
        if kind == JsonKind.ARRAY:
            return self.build_list_field(key, value, depth)
        return self.build_scalar_field(kind)

    def build_scalar_field(self, kind: JsonKind) -> GraphQLField:
        """Returns a field for a scalar; null and unrecognized values become String."""
        scalar_type = SCALAR_TYPES.get(kind, GraphQLString)
        return GraphQLField(scalar_type, resolve=self.resolver.scalar_resolver(scalar_type))

    def build_object_field(self, key: str, sample: Dict[str, Any], depth: int) -> GraphQLField:
        """
        Returns a field typed by the object type named after `key`.

        The type is looked up in the cache first, so all objects sharing a
        bare key resolve to the first type built for it in this pass. A new
        type is cached before its fields are built: a descendant with the
        same key refers back to it instead of defining a second type with
        the same name.
        """
        type_name = self.type_naming(key)
        cached = self.type_cache.get(type_name)
        if cached is not None:
            logger.debug("reusing type '%s' for '%s'", type_name, key)
            return GraphQLField(cached, resolve=self.resolver.object_resolver())

        fields: Dict[str, GraphQLField] = {}
        object_type = self.type_cache.set(type_name, GraphQLObjectType(type_name, lambda: fields))
        fields.update(self.build_fields(sample, self.merge_keys(key, sample), depth + 1, bare_key=key))
        if not fields:
            fields[EMPTY_TYPE_FIELD_NAME] = GraphQLField(GraphQLString, resolve=_resolve_nothing)

        return GraphQLField(object_type, resolve=self.resolver.object_resolver())

    def build_list_field(self, key: str, sample: List[Any], depth: int) -> GraphQLField:
        """
        Returns a list field for a JSON array.

        Arrays of objects are merged into one superset sample so variant
        records share a single element type. Other arrays are typed from
        their first element.
        """
        if not sample:
            return GraphQLField(GraphQLList(GraphQLString),
                                resolve=self.resolver.array_resolver(GraphQLString))

        if all(isinstance(item, dict) for item in sample):
            element = self.build_field(key, merge_objects(sample), depth + 1)
        else:
            element = self.build_field(key, sample[0], depth + 1)

        return GraphQLField(GraphQLList(element.type),
                            resolve=self.resolver.array_resolver(element.type))

    def build_fields(self, sample: Dict[str, Any], keys: List[str], depth: int,
                     bare_key: Optional[str] = None) -> Dict[str, GraphQLField]:
        """
        Builds the fields of an object from its sample and key set.

        A key missing from the sample is typed from an empty object when the
        union registry saw it as an object under `bare_key`, and as a
        missing (String) value otherwise.
        """
        fields: Dict[str, GraphQLField] = {}
        for name, json_key in unique_field_names(keys):
            if json_key in sample:
                value = sample[json_key]
            elif bare_key is not None and self.union_registry.is_object(bare_key, json_key):
                value = {}
            else:
                value = None
            field = self.build_field(json_key, value, depth)
            if name != json_key:
                field = GraphQLField(field.type, resolve=field.resolve,
                                     extensions={JSON_KEY_EXTENSION: json_key})
            fields[name] = field
        return fields

    def merge_keys(self, key: str, sample: Dict[str, Any]) -> List[str]:
        """Returns the sample's keys together with every subfield recorded for `key`, sorted."""
        keys = set(sample)
        keys.update(self.union_registry.subkeys(key))
        return sorted(keys)
