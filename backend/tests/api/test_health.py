"""Health endpoint tests."""

from httpx import AsyncClient


async def test_health_check_returns_200(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_health_check_includes_service_name(client: AsyncClient):
    response = await client.get("/health")
    assert response.json()["service"] == "dbscope"


async def test_liveness_returns_200(client: AsyncClient):
    response = await client.get("/health/live")
    assert response.status_code == 200
    assert response.json()["status"] == "live"


async def test_readiness_reports_catalog(client: AsyncClient):
    response = await client.get("/health/ready")
    body = response.json()
    assert response.status_code == 200
    assert body["status"] == "ready"
    assert body["checks"]["catalog"]["tables"] == 5
    assert body["checks"]["session"]["connected"] is False


async def test_request_id_header(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


async def test_metrics_endpoint(client: AsyncClient):
    await client.get("/health")
    response = await client.get("/metrics")
    assert response.status_code == 200
    assert "dbscope_http_requests_total" in response.text
