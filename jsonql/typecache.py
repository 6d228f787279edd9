"""Per-build cache of generated GraphQL object types."""

import logging
from typing import Dict, Optional

from graphql import GraphQLObjectType

logger = logging.getLogger(__name__)


class TypeCache:
    """Maps a type name to the object type built for it in the current pass.

    The first type stored under a name wins; later attempts to store a
    different type under the same name return the one already held.
    """

    def __init__(self):
        self._types: Dict[str, GraphQLObjectType] = {}

    def get(self, type_name: str) -> Optional[GraphQLObjectType]:
        return self._types.get(type_name)

    def set(self, type_name: str, object_type: GraphQLObjectType) -> GraphQLObjectType:
        existing = self._types.get(type_name)
        if existing is not None:
            logger.debug("type %s already cached, keeping first definition", type_name)
            return existing
        self._types[type_name] = object_type
        return object_type

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def names(self):
        return sorted(self._types)
