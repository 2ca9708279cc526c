"""End-to-end tests for the /catalogs endpoints."""

import pytest
from httpx import AsyncClient

CATALOGS = "/api/v1/catalogs"


@pytest.mark.asyncio
async def test_initialize_then_read(client: AsyncClient, user_headers: dict):
    initialized = await client.post(f"{CATALOGS}/initialize", headers=user_headers)
    assert initialized.status_code == 201
    assert initialized.json()["added"] == 8

    brands = (await client.get(f"{CATALOGS}/brands")).json()["brands"]
    assert brands == sorted(brands)
    assert "Toyota" in brands

    models = await client.get(f"{CATALOGS}/models/toyota")
    assert models.status_code == 200
    assert "Corolla" in models.json()["models"]

    full = (await client.get(CATALOGS)).json()["catalogs"]
    assert len(full) == 8


@pytest.mark.asyncio
async def test_initialize_restores_modified_brand(client: AsyncClient, user_headers: dict):
    await client.post(
        CATALOGS, json={"brand": "Toyota", "models": ["OnlyThis"]}, headers=user_headers
    )

    initialized = await client.post(f"{CATALOGS}/initialize", headers=user_headers)
    assert initialized.json()["added"] == 7

    models = (await client.get(f"{CATALOGS}/models/Toyota")).json()["models"]
    assert "Corolla" in models
    assert "OnlyThis" not in models


@pytest.mark.asyncio
async def test_models_for_unknown_brand(client: AsyncClient):
    response = await client.get(f"{CATALOGS}/models/Ferrari")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_years(client: AsyncClient):
    years = (await client.get(f"{CATALOGS}/years")).json()["years"]

    assert years[-1] == 1990
    assert years == sorted(years, reverse=True)


@pytest.mark.asyncio
async def test_writes_require_a_token(client: AsyncClient):
    response = await client.post(CATALOGS, json={"brand": "Kia", "models": ["Rio"]})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_upsert_and_add_model(client: AsyncClient, user_headers: dict):
    created = await client.post(
        CATALOGS, json={"brand": "Kia", "models": ["Rio"]}, headers=user_headers
    )
    assert created.status_code == 201

    replaced = await client.post(
        CATALOGS, json={"brand": "kia", "models": ["Soul", "Sportage"]}, headers=user_headers
    )
    assert [m["name"] for m in replaced.json()["models"]] == ["Soul", "Sportage"]

    added = await client.post(
        f"{CATALOGS}/Kia/models", json={"model": "Rio"}, headers=user_headers
    )
    duplicate = await client.post(
        f"{CATALOGS}/Kia/models", json={"model": "rio"}, headers=user_headers
    )
    missing = await client.post(
        f"{CATALOGS}/Ferrari/models", json={"model": "F40"}, headers=user_headers
    )

    assert added.status_code == 200
    assert duplicate.status_code == 409
    assert missing.status_code == 404
    assert (await client.get(f"{CATALOGS}/models/Kia")).json()["models"] == [
        "Rio",
        "Soul",
        "Sportage",
    ]
