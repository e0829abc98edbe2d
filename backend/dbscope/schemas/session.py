"""Pydantic schemas for the connection form and the browser session."""

import enum

from pydantic import BaseModel, SecretStr

from dbscope.schemas.query import QueryResult
from dbscope.schemas.schema import TableSchema


class ConnectionDetails(BaseModel):
    """Values submitted by the connection form. Consumed once, never stored."""

    host: str | None = None
    port: str | None = None
    database: str | None = None
    user: str | None = None
    password: SecretStr | None = None
    ssl: bool = True
    is_demo: bool | None = None


class ViewMode(str, enum.Enum):
    DATA = "DATA"
    QUERY = "QUERY"
    ERD = "ERD"


class TabRequest(BaseModel):
    mode: ViewMode


class FilterRequest(BaseModel):
    text: str = ""


class SessionState(BaseModel):
    """Snapshot of everything the view layer renders."""

    is_connected: bool
    is_connecting: bool
    connection_error: str | None = None
    schemas: list[TableSchema] = []
    selected_table: str | None = None
    active_tab: ViewMode = ViewMode.DATA
    data: QueryResult | None = None
    loading: bool = False
    is_ssl: bool = True
    table_filter: str = ""
