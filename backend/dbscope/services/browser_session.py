"""Browser session: the application state controller behind the view layer.

Owns all connection state (the engine holds none) and routes engine results
into what the view renders. Every data load takes a new generation number;
a result that arrives after a newer load started, or after a disconnect, is
dropped instead of overwriting fresher state.
"""

import structlog

from dbscope.core.config import settings
from dbscope.core.errors import (
    DatabaseConnectionError,
    NotConnectedError,
    TableNotFoundError,
)
from dbscope.core.metrics import stale_results_discarded_total
from dbscope.schemas.query import QueryResult
from dbscope.schemas.schema import TableSchema
from dbscope.schemas.session import ConnectionDetails, SessionState, ViewMode
from dbscope.services.connection_simulator import ConnectionSimulator
from dbscope.services.query_engine import QueryEngine
from dbscope.services.schema_registry import SchemaRegistry

logger = structlog.stdlib.get_logger(__name__)


class BrowserSession:
    def __init__(
        self,
        simulator: ConnectionSimulator,
        registry: SchemaRegistry,
        engine: QueryEngine,
        page_size: int | None = None,
    ):
        self._simulator = simulator
        self._registry = registry
        self._engine = engine
        self._page_size = page_size or settings.simulation.default_page_size

        self.is_connected = False
        self.is_connecting = False
        self.connection_error: str | None = None
        self.schemas: list[TableSchema] = []
        self.selected_table: str | None = None
        self.active_tab = ViewMode.DATA
        self.data: QueryResult | None = None
        self.loading = False
        self.is_ssl = True
        self.table_filter = ""

        self._generation = 0

    # --- connection ---

    async def connect(self, details: ConnectionDetails) -> bool:
        """Run the handshake, then load the catalog and the first table.

        Connection failures are stored in ``connection_error`` and re-raised
        so API callers can map them to a status code. A handshake overtaken
        by ``disconnect()`` or by a later ``connect()`` leaves the session
        untouched and returns False.
        """
        generation = self._next_generation()
        self.is_connecting = True
        self.connection_error = None
        try:
            await self._simulator.connect(details)
            if generation != self._generation:
                self._discard_stale(generation)
                return False
            schemas = await self._registry.list_schemas()
        except DatabaseConnectionError as exc:
            if generation == self._generation:
                self.connection_error = str(exc) or "Failed to connect to database"
            logger.warning("session_connect_failed", error=str(exc))
            raise
        finally:
            if generation == self._generation:
                self.is_connecting = False

        if generation != self._generation:
            self._discard_stale(generation)
            return False

        self.schemas = schemas
        self.is_connected = True
        self.is_ssl = details.ssl
        logger.info("session_connected", tables=len(schemas), ssl=details.ssl)

        if schemas:
            self.selected_table = schemas[0].name
            await self._load_table_data(schemas[0].name)
        return True

    def disconnect(self) -> None:
        self._next_generation()
        self.is_connected = False
        self.is_connecting = False
        self.schemas = []
        self.data = None
        self.selected_table = None
        self.loading = False
        logger.info("session_disconnected")

    # --- navigation ---

    async def select_table(self, table_name: str) -> None:
        self._require_connection("select a table")
        if not any(schema.name == table_name for schema in self.schemas):
            raise TableNotFoundError(table_name)
        self.selected_table = table_name
        if self.active_tab == ViewMode.DATA:
            await self._load_table_data(table_name)

    async def switch_tab(self, mode: ViewMode) -> None:
        self._require_connection("switch tabs")
        self.active_tab = mode
        if mode == ViewMode.DATA and self.selected_table:
            await self._load_table_data(self.selected_table)

    async def run_query(self, sql: str) -> QueryResult:
        self._require_connection("run a query")
        generation = self._start_load()
        try:
            result = await self._engine.execute(sql)
        finally:
            self._end_load(generation)
        self._store_result(generation, result)
        return result

    async def fetch_table_page(self, table_name: str, page: int, page_size: int) -> QueryResult:
        """Page through a table without touching the displayed data."""
        self._require_connection("fetch table data")
        if not any(schema.name == table_name for schema in self.schemas):
            raise TableNotFoundError(table_name)
        return await self._engine.fetch_page(table_name, page, page_size)

    def toggle_ssl(self) -> bool:
        self.is_ssl = not self.is_ssl
        return self.is_ssl

    def set_table_filter(self, text: str) -> None:
        self.table_filter = text

    def filtered_schemas(self, text: str | None = None) -> list[TableSchema]:
        needle = (self.table_filter if text is None else text).lower()
        return [schema for schema in self.schemas if needle in schema.name.lower()]

    def snapshot(self) -> SessionState:
        return SessionState(
            is_connected=self.is_connected,
            is_connecting=self.is_connecting,
            connection_error=self.connection_error,
            schemas=list(self.schemas),
            selected_table=self.selected_table,
            active_tab=self.active_tab,
            data=self.data,
            loading=self.loading,
            is_ssl=self.is_ssl,
            table_filter=self.table_filter,
        )

    # --- internals ---

    def _require_connection(self, operation: str) -> None:
        if not self.is_connected:
            raise NotConnectedError(operation)

    async def _load_table_data(self, table_name: str) -> None:
        generation = self._start_load()
        try:
            result = await self._engine.fetch_page(table_name, 0, self._page_size)
        finally:
            self._end_load(generation)
        self._store_result(generation, result)

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _start_load(self) -> int:
        self.loading = True
        return self._next_generation()

    def _end_load(self, generation: int) -> None:
        # An overtaken load leaves the flag to the load that replaced it.
        if generation == self._generation:
            self.loading = False

    def _store_result(self, generation: int, result: QueryResult) -> None:
        if generation != self._generation:
            self._discard_stale(generation)
            return
        self.data = result

    def _discard_stale(self, generation: int) -> None:
        stale_results_discarded_total.inc()
        logger.info(
            "stale_result_discarded",
            generation=generation,
            current=self._generation,
        )
