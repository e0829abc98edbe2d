"""Session endpoints: tab switching, SSL indicator, sidebar filter."""

from fastapi import APIRouter, Depends

from dbscope.api.deps import get_connected_session, get_session
from dbscope.schemas.session import FilterRequest, SessionState, TabRequest
from dbscope.services.browser_session import BrowserSession

router = APIRouter()


@router.get("", response_model=SessionState)
async def get_state(session: BrowserSession = Depends(get_session)):
    return session.snapshot()


@router.put("/tab", response_model=SessionState)
async def switch_tab(
    body: TabRequest,
    session: BrowserSession = Depends(get_connected_session),
):
    """Switch the active view. Switching to DATA reloads the selected table."""
    await session.switch_tab(body.mode)
    return session.snapshot()


@router.post("/ssl", response_model=SessionState)
async def toggle_ssl(session: BrowserSession = Depends(get_connected_session)):
    session.toggle_ssl()
    return session.snapshot()


@router.put("/filter", response_model=SessionState)
async def set_filter(
    body: FilterRequest,
    session: BrowserSession = Depends(get_connected_session),
):
    session.set_table_filter(body.text)
    return session.snapshot()
