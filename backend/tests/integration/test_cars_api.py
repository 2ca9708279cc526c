"""End-to-end tests for the /cars endpoints over HTTP."""

import pytest
from httpx import AsyncClient

from car_inventory.config import get_settings
from car_inventory.domain.entities.car import MAX_ODOMETER, MAX_PRICE
from car_inventory.domain.exceptions import StoreUnavailableError
from car_inventory.infrastructure.database.repositories import SQLAlchemyCarRepository

CARS = "/api/v1/cars"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _form(**overrides) -> dict[str, str]:
    fields = {
        "brand": "Toyota",
        "model": "Corolla",
        "year": "2020",
        "price": "250000",
        "odometer": "15000",
        "email": "e@x.com",
        "phone": "1234567890",
    }
    fields.update({k: str(v) for k, v in overrides.items()})
    return fields


async def _create(client: AsyncClient, headers: dict, files=None, **overrides) -> dict:
    response = await client.post(CARS, data=_form(**overrides), files=files, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_cars_require_a_bearer_token(client: AsyncClient):
    response = await client.get(CARS)

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_cars_reject_a_bad_token(client: AsyncClient):
    response = await client.get(CARS, headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_list_delete_scenario(client: AsyncClient, user_headers: dict):
    car = await _create(client, user_headers)
    assert car["id"]
    assert car["photo"] is None
    assert car["photo_url"] is None
    assert car["is_deleted"] is False
    assert car["created_by"] is not None

    listed = await client.get(CARS, params={"brand": "Toyota"}, headers=user_headers)
    assert [c["id"] for c in listed.json()["data"]] == [car["id"]]

    deleted = await client.delete(f"{CARS}/{car['id']}", headers=user_headers)
    assert deleted.status_code == 200
    assert deleted.json()["id"] == car["id"]
    assert deleted.json()["deleted_at"] is not None

    listed = await client.get(CARS, params={"brand": "Toyota"}, headers=user_headers)
    assert listed.json()["data"] == []

    again = await client.delete(f"{CARS}/{car['id']}", headers=user_headers)
    assert again.status_code == 404
    fetched = await client.get(f"{CARS}/{car['id']}", headers=user_headers)
    assert fetched.status_code == 404
    updated = await client.put(f"{CARS}/{car['id']}", data={"price": "1"}, headers=user_headers)
    assert updated.status_code == 404


@pytest.mark.asyncio
async def test_list_pagination_metadata(client: AsyncClient, user_headers: dict):
    for price in (100000, 200000, 300000):
        await _create(client, user_headers, price=price)

    response = await client.get(CARS, params={"page": 1, "limit": 2}, headers=user_headers)

    body = response.json()
    assert len(body["data"]) == 2
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "total_pages": 2}


@pytest.mark.asyncio
async def test_list_price_range_and_sort(client: AsyncClient, user_headers: dict):
    for price in (240000, 280000, 250000, 290000):
        await _create(client, user_headers, price=price)

    response = await client.get(
        CARS,
        params={"min_price": 250000, "max_price": 280000, "sort_by": "price", "sort_order": "asc"},
        headers=user_headers,
    )

    assert [c["price"] for c in response.json()["data"]] == [250000, 280000]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [
        {"limit": 101},
        {"page": 0},
        {"sort_by": "color"},
        {"sort_order": "sideways"},
        {"min_price": 2**64},
        {"max_price": 2**64},
        {"year": 10**20},
    ],
)
async def test_list_rejects_bad_query_parameters(client: AsyncClient, user_headers: dict, params):
    response = await client.get(CARS, params=params, headers=user_headers)

    assert response.status_code == 422


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"phone": "12345"},
        {"email": "nope"},
        {"email": "a" * 300 + "@x.com"},
        {"odometer": 99},
        {"odometer": 10**8},
        {"year": 1899},
        {"price": -1},
        {"price": 2**64},
    ],
)
async def test_create_rejects_invalid_fields(client: AsyncClient, user_headers: dict, overrides):
    response = await client.post(CARS, data=_form(**overrides), headers=user_headers)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_largest_price_and_odometer_are_stored(client: AsyncClient, user_headers: dict):
    car = await _create(client, user_headers, price=MAX_PRICE, odometer=MAX_ODOMETER)

    fetched = await client.get(f"{CARS}/{car['id']}", headers=user_headers)

    assert fetched.json()["price"] == MAX_PRICE
    assert fetched.json()["odometer"] == MAX_ODOMETER


@pytest.mark.asyncio
async def test_update_rejects_oversized_price(client: AsyncClient, user_headers: dict):
    car = await _create(client, user_headers)

    response = await client.put(
        f"{CARS}/{car['id']}", data={"price": str(2**64)}, headers=user_headers
    )

    assert response.status_code == 422
    fetched = await client.get(f"{CARS}/{car['id']}", headers=user_headers)
    assert fetched.json()["price"] == 250000


@pytest.mark.asyncio
async def test_search(client: AsyncClient, user_headers: dict):
    await _create(client, user_headers, brand="Toyota", model="Corolla")
    await _create(client, user_headers, brand="Honda", model="Civic", color="Blue")

    missing = await client.get(f"{CARS}/search", headers=user_headers)
    blank = await client.get(f"{CARS}/search", params={"q": ""}, headers=user_headers)
    no_match = await client.get(f"{CARS}/search", params={"q": "Ferrari"}, headers=user_headers)
    match = await client.get(f"{CARS}/search", params={"q": "blue"}, headers=user_headers)

    assert missing.status_code == 400
    assert blank.status_code == 400
    assert no_match.status_code == 200
    assert no_match.json() == []
    assert [c["model"] for c in match.json()] == ["Civic"]


@pytest.mark.asyncio
async def test_stats(client: AsyncClient, user_headers: dict):
    empty = await client.get(f"{CARS}/stats", headers=user_headers)
    assert empty.json() == {
        "total": 0,
        "deleted": 0,
        "active": 0,
        "average_price": 0.0,
        "average_km": 0.0,
    }

    kept = await _create(client, user_headers, price=100000, odometer=1000)
    gone = await _create(client, user_headers, price=500000, odometer=5000)
    await client.delete(f"{CARS}/{gone['id']}", headers=user_headers)

    stats = (await client.get(f"{CARS}/stats", headers=user_headers)).json()
    assert kept["id"]
    assert stats["total"] == 2
    assert stats["deleted"] == 1
    assert stats["active"] == 1
    assert stats["average_price"] == 100000.0
    assert stats["average_km"] == 1000.0


@pytest.mark.asyncio
async def test_update_partial_fields(client: AsyncClient, user_headers: dict):
    car = await _create(client, user_headers, color="Red")

    response = await client.put(
        f"{CARS}/{car['id']}", data={"price": "199000"}, headers=user_headers
    )

    assert response.status_code == 200
    body = response.json()
    assert body["price"] == 199000
    assert body["color"] == "Red"
    assert body["model"] == "Corolla"


@pytest.mark.asyncio
async def test_photo_upload_replace_and_serve(
    client: AsyncClient, user_headers: dict, photo_storage
):
    car = await _create(
        client, user_headers, files={"photo": ("first.png", PNG_BYTES, "image/png")}
    )
    first_url = car["photo_url"]
    assert car["photo"]
    assert first_url.endswith(car["photo"])

    served = await client.get(first_url)
    assert served.status_code == 200
    assert served.content == PNG_BYTES

    response = await client.put(
        f"{CARS}/{car['id']}",
        files={"photo": ("second.webp", b"webp-bytes", "image/webp")},
        headers=user_headers,
    )
    updated = response.json()

    assert response.status_code == 200
    assert updated["photo"] != car["photo"]
    assert not photo_storage.resolve_path(car["photo"]).exists()
    assert photo_storage.resolve_path(updated["photo"]).exists()
    assert (await client.get(first_url)).status_code == 404


@pytest.mark.asyncio
async def test_soft_delete_removes_photo(client: AsyncClient, user_headers: dict, photo_storage):
    car = await _create(
        client, user_headers, files={"photo": ("car.jpg", b"jpeg-bytes", "image/jpeg")}
    )

    await client.delete(f"{CARS}/{car['id']}", headers=user_headers)

    assert not photo_storage.resolve_path(car["photo"]).exists()


@pytest.mark.asyncio
async def test_create_rejects_unsupported_photo(
    client: AsyncClient, user_headers: dict, photo_storage
):
    response = await client.post(
        CARS,
        data=_form(),
        files={"photo": ("car.gif", b"GIF89a", "image/gif")},
        headers=user_headers,
    )

    assert response.status_code == 400
    assert list(photo_storage.root.iterdir()) == []
    listed = await client.get(CARS, headers=user_headers)
    assert listed.json()["pagination"]["total"] == 0


@pytest.mark.asyncio
async def test_photo_route_rejects_traversal(client: AsyncClient):
    response = await client.get("/api/v1/photos/..%5Csecret.png")

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_purge_requires_admin(
    client: AsyncClient, user_headers: dict, admin_headers: dict
):
    car = await _create(client, user_headers)
    await client.delete(f"{CARS}/{car['id']}", headers=user_headers)

    forbidden = await client.delete(f"{CARS}/{car['id']}/purge", headers=user_headers)
    purged = await client.delete(f"{CARS}/{car['id']}/purge", headers=admin_headers)
    again = await client.delete(f"{CARS}/{car['id']}/purge", headers=admin_headers)

    assert forbidden.status_code == 403
    assert purged.status_code == 204
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_store_outage_maps_to_503(client: AsyncClient, user_headers: dict, monkeypatch):
    async def _unavailable(self):
        raise StoreUnavailableError("Data store unavailable during stats")

    monkeypatch.setattr(SQLAlchemyCarRepository, "get_stats", _unavailable)

    response = await client.get(f"{CARS}/stats", headers=user_headers)

    assert response.status_code == 503
    assert response.headers["retry-after"] == "5"


@pytest.mark.asyncio
async def test_create_rejects_photo_over_the_size_limit(
    client: AsyncClient, user_headers: dict, photo_storage
):
    limit = get_settings().max_upload_size_bytes
    oversized = PNG_BYTES + b"\x00" * limit

    response = await client.post(
        CARS,
        data=_form(),
        files={"photo": ("big.png", oversized, "image/png")},
        headers=user_headers,
    )

    assert response.status_code == 400
    assert "maximum size" in response.json()["detail"]
    assert list(photo_storage.root.iterdir()) == []
    listed = await client.get(CARS, headers=user_headers)
    assert listed.json()["pagination"]["total"] == 0
