"""Integration tests for user account endpoints"""

import pytest
from httpx import AsyncClient

API = "/api"


@pytest.mark.asyncio
class TestUsersAPI:

    async def test_register(self, client: AsyncClient):
        payload = {
            "email": "jean.leroy@example.fr",
            "first_name": "Jean",
            "last_name": "Leroy",
            "siret": "552 100 554 00013",
        }

        response = await client.post(f"{API}/users", json=payload)

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "jean.leroy@example.fr"
        assert data["siret"] == "55210055400013"
        assert data["status"] == "active"

        profile = await client.get(f"{API}/auth/profile", headers={"X-User-Id": data["id"]})
        assert profile.status_code == 200

    async def test_register_duplicate_email(self, client: AsyncClient, user):
        response = await client.post(
            f"{API}/users",
            json={"email": "Marie.Dupont@example.fr", "first_name": "M", "last_name": "D"},
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "USER_ALREADY_EXISTS"

    async def test_register_invalid_siret(self, client: AsyncClient):
        response = await client.post(
            f"{API}/users",
            json={"email": "a@example.fr", "first_name": "A", "last_name": "B", "siret": "123"},
        )

        assert response.status_code == 422

    async def test_profile_requires_header(self, client: AsyncClient):
        response = await client.get(f"{API}/auth/profile")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    async def test_unknown_user(self, client: AsyncClient):
        response = await client.get(f"{API}/auth/profile", headers={"X-User-Id": "nobody"})

        assert response.status_code == 401

    async def test_update_profile(self, client: AsyncClient, auth_headers):
        response = await client.put(
            f"{API}/auth/profile",
            json={"company_address": "12 rue de la Paix, 75002 Paris", "bank_name": "Crédit Agricole"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["company_address"] == "12 rue de la Paix, 75002 Paris"
        assert data["bank_name"] == "Crédit Agricole"
        assert data["siret"] == "73282932000074"

    async def test_deleted_account_loses_access(self, client: AsyncClient, auth_headers):
        response = await client.delete(f"{API}/auth/profile", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["status"] == "deleted"

        again = await client.get(f"{API}/auth/profile", headers=auth_headers)
        assert again.status_code == 401


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
