"""Table endpoints: sidebar selection and paged table data."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from dbscope.api.deps import get_connected_session, to_http_exception
from dbscope.core.config import settings
from dbscope.core.errors import TableNotFoundError
from dbscope.schemas.query import QueryResult
from dbscope.schemas.session import SessionState
from dbscope.services.browser_session import BrowserSession

router = APIRouter()


@router.post("/{table_name}/select", response_model=SessionState)
async def select_table(
    table_name: str,
    session: BrowserSession = Depends(get_connected_session),
):
    try:
        await session.select_table(table_name)
    except TableNotFoundError as exc:
        raise to_http_exception(exc) from exc
    return session.snapshot()


@router.get("/{table_name}/data", response_model=QueryResult)
async def get_table_data(
    table_name: str,
    page: int = Query(default=0, ge=0),
    page_size: int = Query(default=settings.simulation.default_page_size, ge=1),
    session: BrowserSession = Depends(get_connected_session),
):
    """Fetch a page of table data.

    The mock engine ignores ``page`` and ``page_size`` when producing rows;
    every page holds the same fixed number of freshly synthesized rows.
    """
    try:
        return await session.fetch_table_page(table_name, page, page_size)
    except TableNotFoundError as exc:
        raise to_http_exception(exc) from exc
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
