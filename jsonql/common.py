"""
Common utility functions for jsonql.
"""

# pylint: disable=line-too-long

import hashlib
import re
from typing import AbstractSet, List, Optional, Tuple

from jsonql.constants import RESERVED_TYPE_NAMES


class JsonQlError(Exception):
    """
    Base class for errors raised by jsonql.

    Attributes:
        message: Human-readable error description
        context: Optional context about where the error occurred
        cause: Optional underlying exception that caused this error
    """

    def __init__(self, message: str, context: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        self.message = message
        self.context = context
        self.cause = cause
        full_message = message
        if context:
            full_message = f"{message} (context: {context})"
        super().__init__(full_message)


def graphql_name(name) -> str:
    """Convert a JSON key into a valid GraphQL name."""
    if isinstance(name, int):
        name = '_' + str(name)
    val = re.sub(r'[^a-zA-Z0-9_]', '_', name)
    if not val or re.match(r'^[0-9]', val):
        val = '_' + val
    # names starting with '__' are reserved for introspection
    if val.startswith('__'):
        val = '_' + val.lstrip('_')
    return val


def unique_field_names(keys: List[str]) -> List[Tuple[str, str]]:
    """
    Assign a distinct GraphQL field name to each JSON key.

    Keys that already are valid names keep them. The others are sanitized
    with graphql_name and get a numeric suffix when the sanitized name is
    taken. The result follows the order of `keys`.

    Args:
        keys (List[str]): The JSON keys, in a deterministic order.

    Returns:
        List[Tuple[str, str]]: (GraphQL name, JSON key) pairs.
    """
    names = {}
    taken = set()
    for key in keys:
        if graphql_name(key) == key:
            names[key] = key
            taken.add(key)
    for key in keys:
        if key in names:
            continue
        base = graphql_name(key)
        candidate = base
        suffix = 1
        while candidate in taken:
            candidate = f"{base}_{suffix}"
            suffix += 1
        names[key] = candidate
        taken.add(candidate)
    return [(names[key], key) for key in keys]


def pascal(string):
    """
    Convert a string to PascalCase from snake_case, camelCase, or PascalCase.
    Underscores at the beginning of the string are preserved in the output, but
    underscores in the middle of the string are removed.

    Args:
        string (str): The string to convert.

    Returns:
        str: The string in PascalCase.
    """
    if not string or len(string) == 0:
        return string
    words = []
    startswith_under = string[0] == '_'
    if '_' in string:
        # snake_case
        words = re.split(r'_', string)
    elif string[0].isupper():
        # PascalCase
        words = re.findall(r'[A-Z][a-z0-9_]*', string)
    else:
        # camelCase
        words = re.findall(r'[a-z0-9]+|[A-Z][a-z0-9_]*', string)
    result = ''.join(word[:1].upper() + word[1:] for word in words)
    if startswith_under:
        result = '_' + result
    return result


def object_type_name(key: str, reserved_names: AbstractSet[str] = RESERVED_TYPE_NAMES) -> str:
    """
    Derive the GraphQL object type name for a bare JSON key.

    The name depends on the key alone, so every object stored under the
    same key anywhere in a document maps to the same type. Names in
    `reserved_names` get an "Object" suffix.
    """
    name = pascal(graphql_name(key))
    if name in reserved_names:
        name += 'Object'
    return name


def get_text_hash(text: str) -> str:
    """Return the hex SHA-256 digest of a text."""
    return hashlib.sha256(text.encode('utf-8')).hexdigest()
