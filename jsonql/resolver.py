"""Lazy, path-addressed resolution of GraphQL fields against a JSON document.

Generated schemas never embed document values. Each field carries a
resolver that, when the query engine evaluates it, turns the engine's
path (field names and list indices) into a JSON pointer and looks the
value up in the document the schema was built from.
"""

import json
import math
from typing import Any, Callable, Dict, List

from graphql import (
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    GraphQLBoolean,
    GraphQLFloat,
    GraphQLList,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLOutputType,
    GraphQLResolveInfo,
    GraphQLScalarType,
    GraphQLSchema,
    InlineFragmentNode,
    SelectionSetNode,
)
from jsonpointer import JsonPointer

from jsonql.constants import JSON_KEY_EXTENSION

PathSegment = str | int

_MISSING = object()


def json_key_of(schema: GraphQLSchema, type_name: str | None, field_name: str) -> str:
    """Maps a GraphQL field name back to the JSON key it was generated from."""
    if type_name is None:
        return field_name
    parent = schema.get_type(type_name)
    if not isinstance(parent, GraphQLObjectType):
        return field_name
    field = parent.fields.get(field_name)
    if field is None or not field.extensions:
        return field_name
    return field.extensions.get(JSON_KEY_EXTENSION, field_name)


def _match_fields(selection_set: SelectionSetNode, fragments: Dict[str, FragmentDefinitionNode],
                  response_key: str, matched: List[FieldNode]) -> None:
    """Collects the field nodes answering to a response key, looking through fragments."""
    for selection in selection_set.selections:
        if isinstance(selection, FieldNode):
            key = selection.alias.value if selection.alias else selection.name.value
            if key == response_key:
                matched.append(selection)
        elif isinstance(selection, InlineFragmentNode):
            _match_fields(selection.selection_set, fragments, response_key, matched)
        elif isinstance(selection, FragmentSpreadNode):
            fragment = fragments.get(selection.name.value)
            if fragment is not None:
                _match_fields(fragment.selection_set, fragments, response_key, matched)


def path_segments(info: GraphQLResolveInfo) -> List[PathSegment]:
    """
    Builds the document path of the field being resolved.

    The engine's path holds response keys, which differ from field names
    wherever the query uses aliases. Enclosing fields are matched against
    the operation's selections to recover their real names; the current
    field is known from `info.field_name`.

    Args:
        info: The resolve info passed by the query engine.

    Returns:
        List of JSON keys and list indices from the document root.
    """
    nodes = []
    node = info.path
    while node is not None:
        nodes.append(node)
        node = node.prev
    nodes.reverse()

    segments: List[PathSegment] = []
    selection_sets = [info.operation.selection_set]
    last = len(nodes) - 1
    for index, node in enumerate(nodes):
        if isinstance(node.key, int):
            segments.append(node.key)
            continue
        if index == last:
            name = info.field_name
        else:
            matched: List[FieldNode] = []
            for selection_set in selection_sets:
                _match_fields(selection_set, info.fragments, node.key, matched)
            name = matched[0].name.value if matched else node.key
            selection_sets = [field.selection_set for field in matched if field.selection_set]
        segments.append(json_key_of(info.schema, node.typename, name))
    return segments


def coerce_leaf(value: Any, scalar_type: GraphQLScalarType) -> Any:
    """Coerces a document value to what a scalar field can serialize, or None."""
    if value is None:
        return None
    if scalar_type is GraphQLBoolean:
        return value if isinstance(value, bool) else None
    if scalar_type is GraphQLFloat:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        try:
            return value if math.isfinite(value) else None
        except OverflowError:
            # integers beyond the float range
            return None
    # String
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(',', ':'), sort_keys=True)
    return str(value)


def coerce_output(value: Any, output_type: GraphQLOutputType) -> Any:
    """Coerces a document value to the shape of an output type, or None."""
    if isinstance(output_type, GraphQLNonNull):
        output_type = output_type.of_type
    if isinstance(output_type, GraphQLList):
        if not isinstance(value, list):
            return None
        return [coerce_output(item, output_type.of_type) for item in value]
    if isinstance(output_type, GraphQLObjectType):
        return value if isinstance(value, dict) else None
    if isinstance(output_type, GraphQLScalarType):
        return coerce_leaf(value, output_type)
    return value


class PathResolver:
    """
    Resolves fields against one JSON document.

    Every call locates its path afresh; nothing is cached. A missing path
    is never an error: scalar and object fields resolve to None, array
    fields to an empty list.
    """

    def __init__(self, document: Any):
        self.document = document

    def locate(self, segments: List[PathSegment], default: Any = None) -> Any:
        """Returns the value at a path, or `default` when the path is absent."""
        if not segments:
            return self.document
        pointer = JsonPointer.from_parts(segments)
        return pointer.resolve(self.document, default)

    def resolve_scalar_value(self, info: GraphQLResolveInfo, scalar_type: GraphQLScalarType) -> Any:
        return coerce_leaf(self.locate(path_segments(info)), scalar_type)

    def resolve_object_value(self, info: GraphQLResolveInfo) -> Any:
        value = self.locate(path_segments(info))
        return value if isinstance(value, dict) else None

    def resolve_array_value(self, info: GraphQLResolveInfo, item_type: GraphQLOutputType) -> List[Any]:
        value = self.locate(path_segments(info), _MISSING)
        if not isinstance(value, list):
            return []
        return [coerce_output(item, item_type) for item in value]

    def scalar_resolver(self, scalar_type: GraphQLScalarType) -> Callable[..., Any]:
        """Binds a resolver for a scalar field of the given type."""
        def resolve(_source, info, **_args):
            return self.resolve_scalar_value(info, scalar_type)
        return resolve

    def object_resolver(self) -> Callable[..., Any]:
        def resolve(_source, info, **_args):
            return self.resolve_object_value(info)
        return resolve

    def array_resolver(self, item_type: GraphQLOutputType) -> Callable[..., Any]:
        """Binds a resolver for a list field whose elements have the given type."""
        def resolve(_source, info, **_args):
            return self.resolve_array_value(info, item_type)
        return resolve
