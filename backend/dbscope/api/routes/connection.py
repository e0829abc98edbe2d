"""Connection endpoints: run the simulated handshake or drop the session."""

from fastapi import APIRouter, Depends

from dbscope.api.deps import get_session, to_http_exception
from dbscope.core.errors import DatabaseConnectionError
from dbscope.schemas.session import ConnectionDetails, SessionState
from dbscope.services.browser_session import BrowserSession

router = APIRouter()


@router.post("", response_model=SessionState)
async def connect(
    details: ConnectionDetails,
    session: BrowserSession = Depends(get_session),
):
    """Connect, load the catalog and the first table's data.

    400 when host/user/database are missing, 504 on a simulated timeout.
    The form may simply retry; there is no backoff.
    """
    try:
        await session.connect(details)
    except DatabaseConnectionError as exc:
        raise to_http_exception(exc) from exc
    return session.snapshot()


@router.delete("", response_model=SessionState)
async def disconnect(session: BrowserSession = Depends(get_session)):
    session.disconnect()
    return session.snapshot()
