"""Health check endpoints. No authentication required.

- /health: legacy, backward-compatible
- /health/live: liveness probe (always 200)
- /health/ready: readiness probe (reports catalog and session state)
"""

import structlog
from fastapi import APIRouter, Depends

from dbscope.api.deps import get_schema_registry, get_session
from dbscope.services.browser_session import BrowserSession
from dbscope.services.relationship_graph import validate_references
from dbscope.services.schema_registry import SchemaRegistry

router = APIRouter()
logger = structlog.stdlib.get_logger("dbscope.health")


@router.get("/health")
async def health_check():
    """Legacy health check: backward compatible."""
    return {"status": "healthy", "service": "dbscope"}


@router.get("/health/live")
async def liveness():
    """Liveness probe: process is alive."""
    return {"status": "live"}


@router.get("/health/ready")
async def readiness(
    registry: SchemaRegistry = Depends(get_schema_registry),
    session: BrowserSession = Depends(get_session),
):
    """Readiness probe.

    The mock backend has no external stores, so readiness only depends on the
    catalog being internally consistent. Connection state is informational.
    """
    problems = validate_references(registry.tables)
    if problems:
        logger.warning("readiness_check_failed", dependency="catalog", problems=problems)

    return {
        "status": "ready" if not problems else "degraded",
        "checks": {
            "catalog": {
                "status": "ok" if not problems else "error",
                "tables": len(registry),
                "problems": problems,
            },
            "session": {"connected": session.is_connected},
        },
    }
