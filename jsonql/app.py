"""Serves GraphQL queries over a JSON document that is refreshed on a timer.

Every refresh fetches the document, builds a new schema for it and
publishes both as one immutable Snapshot by replacing a single
reference. The resolvers of a schema only read the document that schema
was built from, so a query running against one snapshot can never see
data from another, however the refreshes interleave with it.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from graphql import ExecutionResult, GraphQLSchema, graphql_sync

from jsonql.common import JsonQlError
from jsonql.constants import DEFAULT_REFRESH_INTERVAL
from jsonql.provider import DocumentProvider
from jsonql.schemabuilder import GraphQLSchemaBuilder, schema_fingerprint

logger = logging.getLogger(__name__)


class SchemaNotReadyError(JsonQlError):
    """Raised when a query arrives before any schema has been published."""


@dataclass(frozen=True)
class Snapshot:
    """A schema together with the document its resolvers read from."""
    schema: GraphQLSchema
    document: Dict[str, Any]
    raw: bytes
    generation: int
    fingerprint: str


class JsonGraphQLApp:
    """
    Keeps a published (schema, document) snapshot up to date.

    Rebuilds are serialized by a lock; queries never take it. They read
    the current snapshot reference once and run entirely against it.
    """

    def __init__(self, provider: DocumentProvider, schema_builder: Optional[GraphQLSchemaBuilder] = None,
                 **builder_options):
        """
        Initialize the app.

        :param provider: Source of the JSON document.
        :param schema_builder: Builder to use; one is created from builder_options if omitted.
        """
        self.provider = provider
        self.schema_builder = schema_builder or GraphQLSchemaBuilder(**builder_options)
        self._snapshot: Optional[Snapshot] = None
        self._generation = 0
        self._refresh_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._listeners: List[Callable[[Snapshot], None]] = []

    @property
    def snapshot(self) -> Optional[Snapshot]:
        return self._snapshot

    @property
    def schema(self) -> Optional[GraphQLSchema]:
        snapshot = self._snapshot
        return snapshot.schema if snapshot else None

    def add_listener(self, listener: Callable[[Snapshot], None]) -> None:
        """Registers a callback invoked with every newly published snapshot."""
        self._listeners.append(listener)

    def refresh(self) -> Snapshot:
        """
        Runs one rebuild cycle and publishes its result.

        A failure leaves the previously published snapshot in place.

        :return: The newly published snapshot.
        :raises DocumentFetchError: If the provider cannot deliver the document.
        :raises SchemaConflictError: If the schema cannot be assembled.
        """
        with self._refresh_lock:
            document = self.provider.fetch()
            schema = self.schema_builder.build_schema(document.data)
            snapshot = Snapshot(
                schema=schema,
                document=document.data,
                raw=document.raw,
                generation=self._generation + 1,
                fingerprint=schema_fingerprint(schema),
            )
            self._generation = snapshot.generation
            self._snapshot = snapshot

        logger.info("schema updated: generation %d, fingerprint %s, source %s",
                    snapshot.generation, snapshot.fingerprint[:12], self.provider.source)
        for listener in list(self._listeners):
            listener(snapshot)
        return snapshot

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None,
                operation_name: Optional[str] = None) -> ExecutionResult:
        """Executes a GraphQL query against the current snapshot."""
        snapshot = self._snapshot
        if snapshot is None:
            raise SchemaNotReadyError("No schema has been published yet", context=self.provider.source)
        return graphql_sync(snapshot.schema, query,
                            variable_values=variables, operation_name=operation_name)

    def start_background_refresh(self, interval: float = DEFAULT_REFRESH_INTERVAL) -> None:
        """Starts a daemon thread that calls refresh() every `interval` seconds."""
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("Background refresh is already running")
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._refresh_loop, args=(interval,),
                                        name='jsonql-refresh', daemon=True)
        self._thread.start()

    @property
    def is_refreshing(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stops the background refresh thread."""
        self._stop_event.set()
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
            logger.debug("background refresh stopped")
        self._thread = None

    def _refresh_loop(self, interval: float) -> None:
        while not self._stop_event.wait(interval):
            try:
                self.refresh()
            except JsonQlError as e:
                logger.error("failed to update schema: %s", e)
            except Exception:  # pylint: disable=broad-except
                logger.exception("unexpected error while updating schema")
