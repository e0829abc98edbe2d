"""Query runner endpoint.

Refused statements still return 200: the body carries ``error`` and the
client shows it as a failed result, not as a transport error.
"""

from fastapi import APIRouter, Depends

from dbscope.api.deps import get_connected_session
from dbscope.schemas.query import QueryRequest, QueryResult
from dbscope.services.browser_session import BrowserSession

router = APIRouter()


@router.post("", response_model=QueryResult)
async def run_query(
    body: QueryRequest,
    session: BrowserSession = Depends(get_connected_session),
):
    return await session.run_query(body.sql)
