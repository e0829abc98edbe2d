"""Schema Registry: the fixed table catalog served by the mock backend.

The catalog is built once at import time and never mutated. Components get it
through a SchemaRegistry instance so tests can inject alternate fixtures.
"""

import asyncio
import logging
from collections.abc import Iterable

from dbscope.core.config import settings
from dbscope.core.metrics import schema_listings_total
from dbscope.schemas.schema import Column, ColumnReference, TableSchema

logger = logging.getLogger(__name__)


def _fk(name: str, col_type: str, table: str, column: str = "id") -> Column:
    return Column(
        name=name,
        type=col_type,
        is_foreign_key=True,
        references=ColumnReference(table=table, column=column),
    )


# Declaration order matters: the first table is the resolver's fallback.
DEFAULT_CATALOG: tuple[TableSchema, ...] = (
    TableSchema(
        name="users",
        row_count=12500,
        columns=(
            Column(name="id", type="uuid", is_primary_key=True),
            Column(name="email", type="varchar(255)"),
            Column(name="full_name", type="varchar(100)"),
            Column(name="created_at", type="timestamp"),
            Column(name="role", type="varchar(20)"),
            Column(name="is_active", type="boolean"),
        ),
    ),
    TableSchema(
        name="products",
        row_count=450,
        columns=(
            Column(name="id", type="serial", is_primary_key=True),
            Column(name="name", type="varchar(100)"),
            Column(name="sku", type="varchar(50)"),
            Column(name="price", type="decimal(10,2)"),
            Column(name="stock_quantity", type="integer"),
            _fk("category_id", "integer", "categories"),
        ),
    ),
    TableSchema(
        name="orders",
        row_count=8900,
        columns=(
            Column(name="id", type="uuid", is_primary_key=True),
            _fk("user_id", "uuid", "users"),
            Column(name="total_amount", type="decimal(10,2)"),
            Column(name="status", type="varchar(20)"),
            Column(name="created_at", type="timestamp"),
        ),
    ),
    TableSchema(
        name="order_items",
        row_count=25000,
        columns=(
            Column(name="id", type="serial", is_primary_key=True),
            _fk("order_id", "uuid", "orders"),
            _fk("product_id", "integer", "products"),
            Column(name="quantity", type="integer"),
            Column(name="unit_price", type="decimal(10,2)"),
        ),
    ),
    TableSchema(
        name="categories",
        row_count=12,
        columns=(
            Column(name="id", type="serial", is_primary_key=True),
            Column(name="name", type="varchar(50)"),
            Column(name="description", type="text"),
        ),
    ),
)


class SchemaRegistry:
    """Read-only view over an immutable table catalog."""

    def __init__(
        self,
        tables: Iterable[TableSchema] = DEFAULT_CATALOG,
        latency_s: float | None = None,
    ):
        self._tables = tuple(tables)
        if not self._tables:
            raise ValueError("Schema registry needs at least one table")

        self._by_name: dict[str, TableSchema] = {}
        for table in self._tables:
            if table.name in self._by_name:
                raise ValueError(f"Duplicate table name in catalog: {table.name}")
            self._by_name[table.name] = table

        self._latency_s = (
            latency_s if latency_s is not None else settings.simulation.schema_latency
        )

    @property
    def tables(self) -> tuple[TableSchema, ...]:
        return self._tables

    async def list_schemas(self) -> list[TableSchema]:
        """Return every table in declared order after the metadata round trip."""
        await asyncio.sleep(self._latency_s)
        schema_listings_total.inc()
        logger.debug("Listing %d schemas", len(self._tables))
        return list(self._tables)

    def get(self, name: str) -> TableSchema | None:
        return self._by_name.get(name)

    def first(self) -> TableSchema:
        return self._tables[0]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._tables)
