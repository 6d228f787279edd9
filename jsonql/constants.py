"""Constants for the jsonql package."""

# Fields nested deeper than this are typed as plain strings.
DEPTH_CEILING = 10

ROOT_TYPE_NAME = 'RootQuery'

# Inserted into the root type when the document has no top-level keys.
FALLBACK_FIELD_NAME = 'anyField'

# Placeholder for object types that would otherwise have no fields.
EMPTY_TYPE_FIELD_NAME = '_empty'

# Field extension holding the original JSON key of a renamed field.
JSON_KEY_EXTENSION = 'json_key'

# Type names that inferred object types must not take.
RESERVED_TYPE_NAMES = frozenset(['String', 'Float', 'Int', 'Boolean', 'ID', ROOT_TYPE_NAME])

DEFAULT_REFRESH_INTERVAL = 5.0

DEFAULT_FETCH_TIMEOUT = 30
