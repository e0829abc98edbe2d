"""Table selection and table data endpoint tests."""

from httpx import AsyncClient


async def test_select_table(connected_client: AsyncClient):
    response = await connected_client.post("/api/v1/tables/orders/select")
    assert response.status_code == 200
    body = response.json()
    assert body["selected_table"] == "orders"
    assert body["data"]["columns"][1] == "user_id"


async def test_select_unknown_table_is_404(connected_client: AsyncClient):
    response = await connected_client.post("/api/v1/tables/ghost/select")
    assert response.status_code == 404
    assert response.json()["detail"]["kind"] == "table_not_found"


async def test_table_data_ignores_paging(connected_client: AsyncClient):
    response = await connected_client.get(
        "/api/v1/tables/categories/data", params={"page": 4, "page_size": 10}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["columns"] == ["id", "name", "description"]
    assert body["row_count"] == 100


async def test_table_data_validation(connected_client: AsyncClient):
    response = await connected_client.get(
        "/api/v1/tables/users/data", params={"page": -1}
    )
    assert response.status_code == 422
    response = await connected_client.get(
        "/api/v1/tables/users/data", params={"page_size": 0}
    )
    assert response.status_code == 422


async def test_table_data_unknown_table(connected_client: AsyncClient):
    response = await connected_client.get("/api/v1/tables/ghost/data")
    assert response.status_code == 404


async def test_requires_connection(client: AsyncClient):
    response = await client.get("/api/v1/tables/users/data")
    assert response.status_code == 409
