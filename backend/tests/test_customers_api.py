"""
Laundry API Backend: Customer API Tests
=========================================

What we test:
    ✅ CRUD for staff, 403 for the user role
    ✅ camelCase body (phoneNumber) in both directions
"""

import pytest

from conftest import API

CUSTOMER = {"name": "Budi", "phoneNumber": "08123456789", "address": "Jl. Mawar 1"}


class TestCustomers:

    @pytest.mark.asyncio
    async def test_create_and_read(self, test_client, admin_headers):
        created = await test_client.post(f"{API}/customers", headers=admin_headers, json=CUSTOMER)
        assert created.status_code == 201
        assert created.json()["message"] == "Customer added successfully"
        assert created.json()["data"]["phoneNumber"] == "08123456789"

        response = await test_client.get(f"{API}/customers/1", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["address"] == "Jl. Mawar 1"

    @pytest.mark.asyncio
    async def test_snake_case_body_also_accepted(self, test_client, admin_headers):
        body = {"name": "Siti", "phone_number": "0813", "address": "Jl. Melati 2"}
        response = await test_client.post(f"{API}/customers", headers=admin_headers, json=body)
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_list(self, test_client, owner_headers):
        await test_client.post(f"{API}/customers", headers=owner_headers, json=CUSTOMER)
        response = await test_client.get(f"{API}/customers", headers=owner_headers)
        assert response.status_code == 200
        assert len(response.json()["data"]) == 1

    @pytest.mark.asyncio
    async def test_update(self, test_client, admin_headers):
        await test_client.post(f"{API}/customers", headers=admin_headers, json=CUSTOMER)
        response = await test_client.put(
            f"{API}/customers/1", headers=admin_headers, json={**CUSTOMER, "name": "Budi S."}
        )
        assert response.status_code == 201
        assert response.json()["message"] == "Customer updated successfully"
        assert response.json()["data"]["name"] == "Budi S."

    @pytest.mark.asyncio
    async def test_update_missing(self, test_client, admin_headers):
        response = await test_client.put(f"{API}/customers/5", headers=admin_headers, json=CUSTOMER)
        assert response.status_code == 400
        assert response.json() == {"error": "No rows updated. Customer ID not found"}

    @pytest.mark.asyncio
    async def test_delete(self, test_client, admin_headers):
        await test_client.post(f"{API}/customers", headers=admin_headers, json=CUSTOMER)
        response = await test_client.delete(f"{API}/customers/1", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["result"]["rowsAffected"] == 1

        gone = await test_client.get(f"{API}/customers/1", headers=admin_headers)
        assert gone.status_code == 404
        assert gone.json() == {"message": "Customer not found"}

    @pytest.mark.asyncio
    async def test_missing_field(self, test_client, admin_headers):
        response = await test_client.post(
            f"{API}/customers", headers=admin_headers, json={"name": "Budi"}
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}

    @pytest.mark.asyncio
    async def test_user_role_forbidden(self, test_client, user_headers):
        response = await test_client.get(f"{API}/customers", headers=user_headers)
        assert response.status_code == 403
        assert response.json() == {"message": "Require owner or admin role"}
