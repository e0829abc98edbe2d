"""Connection endpoint tests: handshake outcomes mapped to HTTP status."""

from httpx import AsyncClient

from dbscope.main import app
from dbscope.services.connection_simulator import ConnectionSimulator


async def test_demo_connect(client: AsyncClient):
    response = await client.post("/api/v1/connection", json={"ssl": True, "is_demo": True})
    assert response.status_code == 200
    body = response.json()
    assert body["is_connected"] is True
    assert body["selected_table"] == "users"
    assert body["data"]["row_count"] == 100
    assert [s["name"] for s in body["schemas"]] == [
        "users",
        "products",
        "orders",
        "order_items",
        "categories",
    ]


async def test_schema_payload_shape(client: AsyncClient):
    response = await client.post("/api/v1/connection", json={"is_demo": True})
    products = response.json()["schemas"][1]
    category_id = products["columns"][-1]
    assert category_id == {
        "name": "category_id",
        "type": "integer",
        "is_primary_key": False,
        "is_foreign_key": True,
        "references": {"table": "categories", "column": "id"},
    }
    assert products["row_count"] == 450


async def test_missing_parameters_is_400(client: AsyncClient):
    response = await client.post(
        "/api/v1/connection",
        json={"host": "", "user": "x", "database": "y", "ssl": True},
    )
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["kind"] == "missing_parameters"
    assert detail["message"] == "Missing required connection parameters"

    state = await client.get("/api/v1/session")
    assert state.json()["connection_error"] == "Missing required connection parameters"
    assert state.json()["is_connected"] is False


async def test_timeout_is_504(client: AsyncClient):
    app.state.session._simulator = ConnectionSimulator(latency_s=0, failure_roll=lambda: 0.0)
    response = await client.post(
        "/api/v1/connection",
        json={"host": "h", "user": "u", "database": "d", "password": "pw"},
    )
    assert response.status_code == 504
    assert response.json()["detail"]["message"] == "Connection timed out (5432)"


async def test_password_not_echoed(client: AsyncClient):
    response = await client.post(
        "/api/v1/connection",
        json={"host": "h", "user": "u", "database": "d", "password": "s3cret"},
    )
    assert response.status_code == 200
    assert "s3cret" not in response.text


async def test_disconnect(connected_client: AsyncClient):
    response = await connected_client.delete("/api/v1/connection")
    assert response.status_code == 200
    body = response.json()
    assert body["is_connected"] is False
    assert body["schemas"] == []
    assert body["data"] is None
