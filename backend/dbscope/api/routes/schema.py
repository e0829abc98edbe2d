"""Schema catalog endpoints.

Exposes the table catalog to the sidebar and the relationship diagram to the
ER view. Both require an active connection.
"""

from fastapi import APIRouter, Depends, Query

from dbscope.api.deps import get_connected_session
from dbscope.schemas.schema import DiagramResponse, TableSchema
from dbscope.services.browser_session import BrowserSession
from dbscope.services.relationship_graph import build_diagram

router = APIRouter()


@router.get("", response_model=list[TableSchema])
async def list_tables(
    q: str | None = Query(default=None, description="Case-insensitive name filter"),
    session: BrowserSession = Depends(get_connected_session),
):
    """Return the catalog loaded at connect time, optionally filtered by name.

    Without ``q`` the session's stored sidebar filter applies.
    """
    return session.filtered_schemas(q)


@router.get("/diagram", response_model=DiagramResponse)
async def get_diagram(session: BrowserSession = Depends(get_connected_session)):
    """One node per table on a grid, one edge per foreign key column."""
    return build_diagram(session.schemas)
