"""Assembles a complete GraphQL schema from a JSON document."""

import logging
from typing import Any, Callable, Dict, Optional

from graphql import (
    GraphQLError,
    GraphQLField,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLString,
    assert_valid_schema,
    print_schema,
)

from jsonql.common import JsonQlError, get_text_hash
from jsonql.constants import DEPTH_CEILING, FALLBACK_FIELD_NAME, RESERVED_TYPE_NAMES, ROOT_TYPE_NAME
from jsonql.fieldfactory import FieldFactory
from jsonql.resolver import PathResolver
from jsonql.typecache import TypeCache
from jsonql.unioninfo import UnionRegistry, collect_union_info

logger = logging.getLogger(__name__)


class SchemaConflictError(JsonQlError):
    """Raised when the generated types do not form a valid GraphQL schema."""


def _resolve_nothing(_source, _info, **_args):
    return None


def schema_fingerprint(schema: GraphQLSchema) -> str:
    """Returns a stable hash of the schema's SDL."""
    return get_text_hash(print_schema(schema))


class GraphQLSchemaBuilder:
    """
    Builds GraphQL schemas from JSON documents.

    Each call to build_schema starts from scratch: a new union registry,
    type cache and resolver are created for the document, so a schema never
    shares state with the one built before it.
    """

    def __init__(self, depth_ceiling: int = DEPTH_CEILING,
                 type_naming: Optional[Callable[[str], str]] = None,
                 root_type_name: str = ROOT_TYPE_NAME,
                 fallback_field_name: str = FALLBACK_FIELD_NAME):
        self.depth_ceiling = depth_ceiling
        self.type_naming = type_naming
        self.root_type_name = root_type_name
        self.fallback_field_name = fallback_field_name

    def build_schema(self, document: Dict[str, Any]) -> GraphQLSchema:
        """Gathers union info and builds the schema for a document.

        Args:
            document: The decoded JSON document; its root must be an object

        Returns:
            A validated schema whose resolvers read from `document`

        Raises:
            SchemaConflictError: If the generated types are rejected by graphql-core
        """
        if not isinstance(document, dict):
            raise TypeError(f"Document root must be a JSON object, got {type(document).__name__}")

        union_registry = collect_union_info(document, UnionRegistry())
        type_cache = TypeCache()
        factory = FieldFactory(PathResolver(document), union_registry, type_cache,
                               depth_ceiling=self.depth_ceiling, type_naming=self.type_naming,
                               reserved_names=RESERVED_TYPE_NAMES | {self.root_type_name})

        try:
            fields: Dict[str, GraphQLField] = factory.build_fields(document, sorted(document), 0)
            # an object type needs at least one field
            if not fields:
                fields[self.fallback_field_name] = GraphQLField(GraphQLString, resolve=_resolve_nothing)
            root_query = GraphQLObjectType(self.root_type_name, fields)
            schema = GraphQLSchema(query=root_query)
            assert_valid_schema(schema)
        except (GraphQLError, TypeError) as e:
            raise SchemaConflictError("Generated types do not form a valid schema",
                                      context=str(e), cause=e) from e

        logger.debug("built schema with %d root fields, %d object types, %d union keys",
                     len(fields), len(type_cache), len(union_registry))
        return schema
