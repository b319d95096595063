import pytest
from httpx import AsyncClient

from equipment_inventory.core.exceptions import InfrastructureError
from tests.fakes import InMemoryEquipmentRepository

pytestmark = pytest.mark.asyncio

NOT_FOUND = {"error": "Product not found"}
MISSING_ID = "00000000-0000-0000-0000-000000000000"


async def test_get_unknown_id_is_404(app_client: AsyncClient):
    r = await app_client.get(f"/api/products/{MISSING_ID}")
    assert r.status_code == 404
    assert r.json() == NOT_FOUND


async def test_get_non_uuid_id_is_404_not_500(app_client: AsyncClient):
    r = await app_client.get("/api/products/not-a-uuid")
    assert r.status_code == 404
    assert r.json() == NOT_FOUND


async def test_get_store_failure_is_500(
    app_client: AsyncClient, equipment_repo: InMemoryEquipmentRepository
):
    row = equipment_repo.seed(name="Ball", quantity=1)
    equipment_repo.fail(InfrastructureError("down"), on={"get"})
    r = await app_client.get(f"/api/products/{row.id}")
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to fetch product"}


async def test_update_only_quantity_leaves_other_fields(
    admin_client: AsyncClient, equipment_repo: InMemoryEquipmentRepository
):
    row = equipment_repo.seed(
        name="Basketball", description="Size 7", quantity=5, required_quantity=10
    )
    r = await admin_client.put(f"/api/products/{row.id}", json={"quantity": 3})
    assert r.status_code == 200
    body = r.json()
    assert body["quantity"] == 3
    assert body["name"] == "Basketball"
    assert body["description"] == "Size 7"
    assert body["requiredQuantity"] == 10

    stored = equipment_repo.rows[row.id]
    assert (stored.name, stored.description, stored.required_quantity) == ("Basketball", "Size 7", 10)


async def test_update_zero_quantity_is_written(
    admin_client: AsyncClient, equipment_repo: InMemoryEquipmentRepository
):
    row = equipment_repo.seed(name="Ball", quantity=4)
    r = await admin_client.put(f"/api/products/{row.id}", json={"quantity": 0})
    assert r.status_code == 200
    assert r.json()["quantity"] == 0


async def test_update_null_name_is_ignored_and_null_description_clears(
    admin_client: AsyncClient, equipment_repo: InMemoryEquipmentRepository
):
    row = equipment_repo.seed(name="Ball", description="old", quantity=4)
    r = await admin_client.put(
        f"/api/products/{row.id}", json={"name": None, "description": None, "quantity": None}
    )
    assert r.status_code == 200
    body = r.json()
    assert body["name"] == "Ball"
    assert body["quantity"] == 4
    assert body["description"] is None


async def test_update_ignores_read_only_fields(
    admin_client: AsyncClient, equipment_repo: InMemoryEquipmentRepository
):
    row = equipment_repo.seed(name="Ball", quantity=4)
    r = await admin_client.put(
        f"/api/products/{row.id}",
        json={"id": "other", "createdAt": "2000-01-01T00:00:00Z", "name": "Ball v2"},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == row.id
    assert body["name"] == "Ball v2"


async def test_update_empty_name_is_400(
    admin_client: AsyncClient, equipment_repo: InMemoryEquipmentRepository
):
    row = equipment_repo.seed(name="Ball", quantity=4)
    r = await admin_client.put(f"/api/products/{row.id}", json={"name": ""})
    assert r.status_code == 400
    assert equipment_repo.writes == []


async def test_update_negative_quantity_is_400(
    admin_client: AsyncClient, equipment_repo: InMemoryEquipmentRepository
):
    row = equipment_repo.seed(name="Ball", quantity=4)
    r = await admin_client.put(f"/api/products/{row.id}", json={"quantity": -2})
    assert r.status_code == 400
    assert equipment_repo.rows[row.id].quantity == 4


async def test_update_unknown_id_is_404(admin_client: AsyncClient):
    r = await admin_client.put(f"/api/products/{MISSING_ID}", json={"quantity": 1})
    assert r.status_code == 404
    assert r.json() == NOT_FOUND


async def test_update_store_failure_is_500(
    admin_client: AsyncClient, equipment_repo: InMemoryEquipmentRepository
):
    row = equipment_repo.seed(name="Ball", quantity=4)
    equipment_repo.fail(InfrastructureError("timeout"), on={"update"})
    r = await admin_client.put(f"/api/products/{row.id}", json={"quantity": 1})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to update product"}


async def test_delete_then_get_is_404(
    admin_client: AsyncClient, equipment_repo: InMemoryEquipmentRepository
):
    row = equipment_repo.seed(name="Ball", quantity=4)
    r = await admin_client.delete(f"/api/products/{row.id}")
    assert r.status_code == 204
    assert r.content == b""

    r2 = await admin_client.get(f"/api/products/{row.id}")
    assert r2.status_code == 404
    assert r2.json() == NOT_FOUND


async def test_delete_unknown_id_is_404(admin_client: AsyncClient):
    r = await admin_client.delete(f"/api/products/{MISSING_ID}")
    assert r.status_code == 404
    assert r.json() == NOT_FOUND


async def test_delete_store_failure_is_500(
    admin_client: AsyncClient, equipment_repo: InMemoryEquipmentRepository
):
    row = equipment_repo.seed(name="Ball", quantity=4)
    equipment_repo.fail(InfrastructureError("down"), on={"delete"})
    r = await admin_client.delete(f"/api/products/{row.id}")
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to delete product"}
    assert row.id in equipment_repo.rows


async def test_basketball_lifecycle(admin_client: AsyncClient):
    created = (
        await admin_client.post(
            "/api/products", json={"name": "Basketball", "quantity": 5, "requiredQuantity": 10}
        )
    ).json()

    r = await admin_client.put(f"/api/products/{created['id']}", json={"quantity": 3})
    assert r.status_code == 200
    assert r.json()["quantity"] == 3
    assert r.json()["name"] == "Basketball"

    assert (await admin_client.delete(f"/api/products/{created['id']}")).status_code == 204
    r = await admin_client.get(f"/api/products/{created['id']}")
    assert r.status_code == 404
    assert r.json() == NOT_FOUND


@pytest.mark.parametrize(
    ("method", "body"),
    [("get", None), ("put", {"quantity": 1}), ("delete", None)],
)
async def test_nul_byte_id_is_404_without_store_call(
    admin_client: AsyncClient, equipment_repo: InMemoryEquipmentRepository, method, body
):
    kwargs = {"json": body} if body is not None else {}
    r = await admin_client.request(method.upper(), "/api/products/ab%00cd", **kwargs)
    assert r.status_code == 404
    assert r.json() == NOT_FOUND
    assert equipment_repo.calls == []


async def test_update_count_above_int4_is_400(
    admin_client: AsyncClient, equipment_repo: InMemoryEquipmentRepository
):
    row = equipment_repo.seed(name="Ball", quantity=4)
    r = await admin_client.put(f"/api/products/{row.id}", json={"requiredQuantity": 3_000_000_000})
    assert r.status_code == 400
    assert r.json() == {"error": "quantity and requiredQuantity must not exceed 2147483647"}
    assert equipment_repo.rows[row.id].required_quantity == 0
    assert equipment_repo.writes == []
