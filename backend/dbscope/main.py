"""DBScope FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dbscope.api.routes import connection, health, metrics, query, schema, session, tables
from dbscope.core.config import settings
from dbscope.core.logging_config import configure_logging
from dbscope.core.metrics import app_info
from dbscope.core.middleware import ObservabilityMiddleware
from dbscope.services.browser_session import BrowserSession
from dbscope.services.connection_simulator import ConnectionSimulator
from dbscope.services.query_engine import QueryEngine
from dbscope.services.schema_registry import SchemaRegistry

configure_logging()

VERSION = "0.1.0"


def install_services(
    app: FastAPI,
    *,
    registry: SchemaRegistry | None = None,
    simulator: ConnectionSimulator | None = None,
    engine: QueryEngine | None = None,
) -> BrowserSession:
    """Wire the mock backend onto ``app.state``. Tests pass fast fakes here."""
    registry = registry or SchemaRegistry()
    simulator = simulator or ConnectionSimulator()
    engine = engine or QueryEngine(registry)

    app.state.schema_registry = registry
    app.state.session = BrowserSession(simulator=simulator, registry=registry, engine=engine)
    return app.state.session


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle events."""
    app_info.info({"version": VERSION, "env": settings.app_env})
    if not hasattr(app.state, "session"):
        install_services(app)
    yield


app = FastAPI(
    title="DBScope",
    description="Database browser backed by a mock, read-only query engine",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(ObservabilityMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes, all REST under /api/v1/
app.include_router(health.router, tags=["health"])
app.include_router(connection.router, prefix="/api/v1/connection", tags=["connection"])
app.include_router(session.router, prefix="/api/v1/session", tags=["session"])
app.include_router(schema.router, prefix="/api/v1/schema", tags=["schema"])
app.include_router(tables.router, prefix="/api/v1/tables", tags=["tables"])
app.include_router(query.router, prefix="/api/v1/query", tags=["query"])
app.include_router(metrics.router, tags=["metrics"])
