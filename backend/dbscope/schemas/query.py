"""Pydantic schemas for query execution and results."""

from pydantic import BaseModel, Field

CellValue = str | int | float | bool | None


class QueryRequest(BaseModel):
    sql: str


class QueryResult(BaseModel):
    """Result set returned by the query engine.

    A populated ``error`` means the query was refused, not that it matched
    nothing. In that case ``columns`` and ``rows`` are empty.
    """

    columns: list[str]
    rows: list[list[CellValue]]
    execution_time_ms: float = Field(ge=0)
    row_count: int
    error: str | None = None

    @property
    def failed(self) -> bool:
        return bool(self.error)

    @classmethod
    def refused(cls, error: str, execution_time_ms: float) -> "QueryResult":
        return cls(
            columns=[],
            rows=[],
            execution_time_ms=execution_time_ms,
            row_count=0,
            error=error,
        )
