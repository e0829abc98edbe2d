"""Query Engine: read-only gate, table resolution and result synthesis.

Nothing here parses SQL. The target table comes from a lexical heuristic
(the token after the first ``from``), and every accepted query returns a
fixed number of synthesized rows regardless of LIMIT, joins or filters.
"""

import asyncio
import time
from collections.abc import Callable, Sequence

import sqlglot
import structlog
from sqlglot import exp

from dbscope.core.config import settings
from dbscope.core.errors import SECURITY_VIOLATION_MESSAGE
from dbscope.core.metrics import (
    queries_rejected_total,
    query_execution_duration_seconds,
    query_result_rows,
)
from dbscope.schemas.query import CellValue, QueryResult
from dbscope.schemas.schema import Column, TableSchema
from dbscope.services.row_synthesizer import synthesize_row
from dbscope.services.schema_registry import SchemaRegistry

logger = structlog.stdlib.get_logger(__name__)

READ_ONLY_PREFIXES = ("SELECT", "EXPLAIN", "SHOW", "WITH")

RowSynthesizer = Callable[[Sequence[Column]], list[CellValue]]


def is_read_only(sql: str) -> bool:
    """Prefix allowlist on the trimmed, upper-cased statement.

    Comments are not stripped, so ``-- note\\nSELECT 1`` is refused.
    """
    return sql.strip().upper().startswith(READ_ONLY_PREFIXES)


def _leading_keyword(sql: str) -> str:
    parts = sql.strip().split(None, 1)
    return parts[0].upper()[:16] if parts else ""


def extract_table_name(sql: str) -> str | None:
    """Return the token following the first ``from``, minus quotes and semicolons."""
    words = sql.lower().split()
    try:
        from_index = words.index("from")
    except ValueError:
        return None
    if from_index + 1 >= len(words):
        return None
    return words[from_index + 1].replace('"', "").replace(";", "")


def build_page_query(table_name: str, page: int, page_size: int) -> str:
    """SELECT * FROM <table> LIMIT <page_size> OFFSET <page * page_size>."""
    query = (
        sqlglot.select("*")
        .from_(exp.Table(this=exp.to_identifier(table_name)))
        .limit(int(page_size))
        .offset(int(page * page_size))
    )
    return query.sql()


class QueryEngine:
    """Executes read-only statements against synthesized data."""

    def __init__(
        self,
        registry: SchemaRegistry,
        synthesizer: RowSynthesizer = synthesize_row,
        latency_s: float | None = None,
        clock: Callable[[], float] = time.perf_counter,
        row_limit: int | None = None,
    ):
        sim = settings.simulation
        self._registry = registry
        self._synthesize = synthesizer
        self._latency_s = latency_s if latency_s is not None else sim.query_latency
        self._clock = clock
        self._row_limit = row_limit if row_limit is not None else sim.query_row_limit

    def resolve_table(self, sql: str) -> TableSchema:
        """Pick exactly one target table, defaulting to the first in the catalog."""
        name = extract_table_name(sql)
        if name:
            found = self._registry.get(name)
            if found is not None:
                return found
        return self._registry.first()

    async def execute(self, sql: str) -> QueryResult:
        """Run ``sql`` against the mock catalog.

        Refused statements resolve normally with ``error`` set; the call
        itself never raises for policy reasons.
        """
        start = self._clock()
        read_only = is_read_only(sql)
        await asyncio.sleep(self._latency_s)
        duration = self._clock() - start
        execution_time_ms = max(round(duration * 1000, 2), 0.0)

        if not read_only:
            queries_rejected_total.inc()
            logger.warning(
                "query_rejected",
                statement=_leading_keyword(sql),
                duration_ms=execution_time_ms,
            )
            return QueryResult.refused(SECURITY_VIOLATION_MESSAGE, execution_time_ms)

        table = self.resolve_table(sql)
        rows = [self._synthesize(table.columns) for _ in range(self._row_limit)]

        statement = next(
            p for p in READ_ONLY_PREFIXES if sql.strip().upper().startswith(p)
        )
        query_execution_duration_seconds.labels(statement=statement).observe(duration)
        query_result_rows.observe(len(rows))
        logger.info(
            "query_executed",
            table=table.name,
            duration_ms=execution_time_ms,
            rows=len(rows),
        )

        return QueryResult(
            columns=table.column_names(),
            rows=rows,
            execution_time_ms=execution_time_ms,
            row_count=len(rows),
        )

    async def fetch_page(self, table_name: str, page: int, page_size: int) -> QueryResult:
        """Fetch a page of ``table_name`` through :meth:`execute`.

        ``page`` and ``page_size`` only shape the generated statement; the
        engine still returns its fixed row count from the first row.
        """
        if page < 0:
            raise ValueError("page must be >= 0")
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        return await self.execute(build_page_query(table_name, page, page_size))
