"""Dependency injection for FastAPI routes.

Services are built once in the app lifespan and stored on ``app.state``.
Route handlers never instantiate services directly.
"""

from fastapi import Depends, HTTPException, Request, status

from dbscope.core.errors import (
    ConnectionTimeoutError,
    DBScopeError,
    MissingParametersError,
    NotConnectedError,
    TableNotFoundError,
)
from dbscope.services.browser_session import BrowserSession
from dbscope.services.schema_registry import SchemaRegistry


async def get_session(request: Request) -> BrowserSession:
    """Return the process-wide browser session from app state."""
    return request.app.state.session


async def get_schema_registry(request: Request) -> SchemaRegistry:
    return request.app.state.schema_registry


async def get_connected_session(
    session: BrowserSession = Depends(get_session),
) -> BrowserSession:
    """Like get_session, but 409 when no connection is active."""
    if not session.is_connected:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="No active connection"
        )
    return session


_STATUS_BY_ERROR: dict[type[DBScopeError], int] = {
    MissingParametersError: status.HTTP_400_BAD_REQUEST,
    ConnectionTimeoutError: status.HTTP_504_GATEWAY_TIMEOUT,
    NotConnectedError: status.HTTP_409_CONFLICT,
    TableNotFoundError: status.HTTP_404_NOT_FOUND,
}


def to_http_exception(exc: DBScopeError) -> HTTPException:
    """Map a service error to the HTTP status the front-end expects."""
    for error_type, code in _STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return HTTPException(
                status_code=code, detail={"kind": exc.kind, "message": str(exc)}
            )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"kind": exc.kind, "message": str(exc)},
    )
