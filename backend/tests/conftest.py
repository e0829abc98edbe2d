"""Shared test fixtures.

Every simulated latency is zero and the connection failure roll is pinned, so
tests never sleep and never fail at random.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from dbscope.main import app, install_services
from dbscope.schemas.session import ConnectionDetails
from dbscope.services.browser_session import BrowserSession
from dbscope.services.connection_simulator import ConnectionSimulator
from dbscope.services.query_engine import QueryEngine
from dbscope.services.schema_registry import SchemaRegistry

# Above any failure probability: the timeout branch never fires.
NEVER_FAIL = 1.0
ALWAYS_FAIL = 0.0


@pytest.fixture
def registry() -> SchemaRegistry:
    return SchemaRegistry(latency_s=0)


@pytest.fixture
def simulator() -> ConnectionSimulator:
    return ConnectionSimulator(latency_s=0, failure_roll=lambda: NEVER_FAIL)


@pytest.fixture
def engine(registry) -> QueryEngine:
    return QueryEngine(registry, latency_s=0)


@pytest.fixture
def session(simulator, registry, engine) -> BrowserSession:
    return BrowserSession(simulator=simulator, registry=registry, engine=engine)


@pytest.fixture
def demo_details() -> ConnectionDetails:
    return ConnectionDetails(ssl=True, is_demo=True)


@pytest.fixture
def full_details() -> ConnectionDetails:
    return ConnectionDetails(
        host="db.example.com",
        port="5432",
        database="production_db",
        user="postgres",
        password="hunter2",
        ssl=False,
    )


@pytest.fixture
async def connected_session(session, demo_details) -> BrowserSession:
    await session.connect(demo_details)
    return session


@pytest.fixture
async def client(simulator, registry, engine) -> AsyncClient:
    """httpx AsyncClient wired to the FastAPI app with zero-latency services.

    ASGITransport does not run the lifespan, so services are installed here.
    """
    install_services(app, registry=registry, simulator=simulator, engine=engine)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def connected_client(client: AsyncClient) -> AsyncClient:
    response = await client.post("/api/v1/connection", json={"ssl": True, "is_demo": True})
    assert response.status_code == 200
    return client
