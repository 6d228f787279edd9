"""Command functions: infer GraphQL schemas from JSON documents and query them.

This module provides:
- j2gql: Write the SDL of the schema inferred from a JSON file
- gqlquery: Run a GraphQL query against a JSON file
- gqlwatch: Keep the SDL of a refreshing JSON source up to date
"""

import json
import logging
import os
import time
from typing import Any, Dict, Optional

from graphql import print_schema

from jsonql.app import JsonGraphQLApp, Snapshot
from jsonql.constants import DEFAULT_REFRESH_INTERVAL, DEPTH_CEILING
from jsonql.provider import FileDocumentProvider, provider_for
from jsonql.schemabuilder import GraphQLSchemaBuilder

logger = logging.getLogger(__name__)


def _write_text(path: str, text: str) -> None:
    # Ensure output directory exists
    output_dir = os.path.dirname(path)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir)

    with open(path, 'w', encoding='utf-8') as f:
        f.write(text)
        if not text.endswith('\n'):
            f.write('\n')


def convert_json_to_graphql(json_file_path: str, graphql_schema_path: str,
                            depth_ceiling: Optional[int] = None) -> str:
    """Infers a GraphQL schema from a JSON file and writes it as SDL.

    Args:
        json_file_path: Path of the JSON document
        graphql_schema_path: Output path for the SDL
        depth_ceiling: Depth past which values are typed as String

    Returns:
        The SDL text
    """
    document = FileDocumentProvider(json_file_path).fetch()
    builder = GraphQLSchemaBuilder(depth_ceiling=depth_ceiling if depth_ceiling is not None else DEPTH_CEILING)
    sdl = print_schema(builder.build_schema(document.data))
    _write_text(graphql_schema_path, sdl)
    return sdl


def query_json_document(json_file_path: str, query: str, result_file_path: str,
                        variables: Optional[str] = None,
                        depth_ceiling: Optional[int] = None) -> Dict[str, Any]:
    """Runs a GraphQL query against the schema inferred from a JSON file.

    Args:
        json_file_path: Path of the JSON document
        query: The query text, or '@' followed by the path of a file holding it
        result_file_path: Output path for the JSON result
        variables: Optional JSON object text with the query variables
        depth_ceiling: Depth past which values are typed as String

    Returns:
        The formatted execution result ('data' and, if any, 'errors')
    """
    if query.startswith('@'):
        with open(query[1:], 'r', encoding='utf-8') as f:
            query = f.read()
    variable_values = json.loads(variables) if variables else None

    app = JsonGraphQLApp(FileDocumentProvider(json_file_path),
                         depth_ceiling=depth_ceiling if depth_ceiling is not None else DEPTH_CEILING)
    app.refresh()
    result = app.execute(query, variables=variable_values).formatted
    _write_text(result_file_path, json.dumps(result, indent=2))
    return result


def watch_json_document(source: str, graphql_schema_path: Optional[str] = None,
                        interval: Optional[float] = None, depth_ceiling: Optional[int] = None,
                        max_cycles: Optional[int] = None) -> None:
    """Rebuilds the schema of a JSON source on a timer until interrupted.

    The SDL is logged, and written to `graphql_schema_path` if given,
    whenever a refresh produces a schema that differs from the last one.

    Args:
        source: File path, file:// URL or http(s):// URL of the document
        graphql_schema_path: Optional output path for the SDL
        interval: Seconds between refreshes
        depth_ceiling: Depth past which values are typed as String
        max_cycles: Stop after this many timer ticks; runs until interrupted if None
    """
    interval = interval if interval is not None else DEFAULT_REFRESH_INTERVAL
    app = JsonGraphQLApp(provider_for(source),
                         depth_ceiling=depth_ceiling if depth_ceiling is not None else DEPTH_CEILING)
    last_fingerprint = [None]

    def on_publish(snapshot: Snapshot) -> None:
        if snapshot.fingerprint == last_fingerprint[0]:
            return
        last_fingerprint[0] = snapshot.fingerprint
        sdl = print_schema(snapshot.schema)
        logger.info("schema changed (generation %d)", snapshot.generation)
        if graphql_schema_path:
            _write_text(graphql_schema_path, sdl)
        else:
            print(sdl)

    app.add_listener(on_publish)
    app.refresh()
    app.start_background_refresh(interval)
    cycles = 0
    try:
        while max_cycles is None or cycles < max_cycles:
            time.sleep(interval)
            cycles += 1
    except KeyboardInterrupt:
        logger.info("interrupted, stopping")
    finally:
        app.stop(timeout=interval)
