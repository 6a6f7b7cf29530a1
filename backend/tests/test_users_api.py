"""
Laundry API Backend: User API Tests
=====================================

What we test:
    ✅ Profile read/update; the role never changes through /profile
    ✅ User id 1 is readable by the owner only and never deletable
    ✅ Admin listing omits the owner
    ✅ Owner role assignment limits; the owner may update its own record
"""

import pytest

from conftest import ADMIN_ID, API, USER_ID, bearer
from laundryapi.models.user import Role

PROFILE_BODY = {"name": "Renamed", "username": "admin1", "email": "admin1@example.com", "password": "np"}


class TestProfile:

    @pytest.mark.asyncio
    async def test_get_profile(self, test_client, admin_headers):
        response = await test_client.get(f"{API}/profile", headers=admin_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "200 OK"
        assert body["data"]["id"] == ADMIN_ID
        assert body["data"]["role"] == "admin"
        assert "password" not in body["data"]

    @pytest.mark.asyncio
    async def test_update_profile_keeps_role(self, test_client, admin_headers):
        response = await test_client.put(
            f"{API}/profile", headers=admin_headers, json={**PROFILE_BODY, "role": "owner"}
        )
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User updated successfully"
        assert body["result"]["rowsAffected"] == 1
        assert body["data"]["name"] == "Renamed"
        assert body["data"]["role"] == "admin"

    @pytest.mark.asyncio
    async def test_new_password_works_for_login(self, test_client, admin_headers):
        await test_client.put(f"{API}/profile", headers=admin_headers, json=PROFILE_BODY)
        response = await test_client.post(
            f"{API}/auth/login", json={"username": "admin1", "password": "np"}
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_update_to_taken_username(self, test_client, admin_headers):
        response = await test_client.put(
            f"{API}/profile", headers=admin_headers, json={**PROFILE_BODY, "username": "user1"}
        )
        assert response.status_code == 400
        assert response.json() == {
            "error": "user1 is already registered, please use another username"
        }

    @pytest.mark.asyncio
    async def test_profile_of_deleted_account(self, test_client):
        response = await test_client.put(
            f"{API}/profile", headers=bearer(99, Role.USER), json={**PROFILE_BODY, "username": "z"}
        )
        assert response.status_code == 400
        assert response.json() == {"error": "No rows updated. User ID not found"}


class TestReadUser:

    @pytest.mark.asyncio
    async def test_owner_reads_owner(self, test_client, owner_headers):
        response = await test_client.get(f"{API}/users/1", headers=owner_headers)
        assert response.status_code == 200
        assert response.json()["data"]["role"] == "owner"

    @pytest.mark.asyncio
    async def test_admin_cannot_read_owner(self, test_client, admin_headers):
        response = await test_client.get(f"{API}/users/1", headers=admin_headers)
        assert response.status_code == 403
        assert response.json() == {"message": "You don't have authority over that resource"}

    @pytest.mark.asyncio
    async def test_user_reads_other_user(self, test_client, user_headers):
        response = await test_client.get(f"{API}/users/{ADMIN_ID}", headers=user_headers)
        assert response.status_code == 200
        assert response.json()["data"]["username"] == "admin1"

    @pytest.mark.asyncio
    async def test_unknown_user(self, test_client, admin_headers):
        response = await test_client.get(f"{API}/users/99", headers=admin_headers)
        assert response.status_code == 404
        assert response.json() == {"message": "User not found"}


class TestAdministration:

    @pytest.mark.asyncio
    async def test_list_omits_owner(self, test_client, admin_headers):
        response = await test_client.get(f"{API}/admin/users", headers=admin_headers)
        assert response.status_code == 200
        assert [u["id"] for u in response.json()["data"]] == [ADMIN_ID, USER_ID]

    @pytest.mark.asyncio
    async def test_user_role_cannot_list(self, test_client, user_headers):
        response = await test_client.get(f"{API}/admin/users", headers=user_headers)
        assert response.status_code == 403
        assert response.json() == {"message": "Require owner or admin role"}

    @pytest.mark.asyncio
    async def test_delete_user(self, test_client, admin_headers):
        response = await test_client.delete(f"{API}/admin/users/{USER_ID}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {
            "message": "User deleted successfully",
            "result": {"lastInsertId": None, "rowsAffected": 1},
        }
        follow_up = await test_client.get(f"{API}/users/{USER_ID}", headers=admin_headers)
        assert follow_up.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_user(self, test_client, admin_headers):
        response = await test_client.delete(f"{API}/admin/users/99", headers=admin_headers)
        assert response.status_code == 400
        assert response.json() == {"error": "No rows deleted. User ID not found"}

    @pytest.mark.asyncio
    async def test_admin_cannot_delete_owner(self, test_client, admin_headers):
        response = await test_client.delete(f"{API}/admin/users/1", headers=admin_headers)
        assert response.status_code == 400
        assert response.json() == {"message": "You don't have authority over that method"}

    @pytest.mark.asyncio
    async def test_owner_cannot_delete_self(self, test_client, owner_headers):
        response = await test_client.delete(f"{API}/admin/users/1", headers=owner_headers)
        assert response.status_code == 400
        assert response.json() == {
            "message": "You are the owner, if you delete your own account who becomes the owner?"
        }
        still_there = await test_client.get(f"{API}/users/1", headers=owner_headers)
        assert still_there.status_code == 200


class TestOwnerUpdate:

    def setup_method(self):
        self.body = {
            "name": "User One",
            "username": "user1",
            "email": "user1@example.com",
            "password": "pw",
        }

    @pytest.mark.asyncio
    async def test_promote_to_admin(self, test_client, owner_headers):
        response = await test_client.put(
            f"{API}/owner/users/{USER_ID}", headers=owner_headers, json={**self.body, "role": "admin"}
        )
        assert response.status_code == 201
        assert response.json()["data"]["role"] == "admin"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role", ["owner", "superuser"])
    async def test_rejects_other_roles(self, test_client, owner_headers, role):
        response = await test_client.put(
            f"{API}/owner/users/{USER_ID}", headers=owner_headers, json={**self.body, "role": role}
        )
        assert response.status_code == 400
        assert response.json() == {"error": "invalid role, role must admin or user"}

    @pytest.mark.asyncio
    async def test_admin_cannot_assign_roles(self, test_client, admin_headers):
        response = await test_client.put(
            f"{API}/owner/users/{USER_ID}", headers=admin_headers, json={**self.body, "role": "admin"}
        )
        assert response.status_code == 403
        assert response.json() == {"message": "Require owner role"}

    @pytest.mark.asyncio
    async def test_missing_target(self, test_client, owner_headers):
        response = await test_client.put(
            f"{API}/owner/users/99",
            headers=owner_headers,
            json={**self.body, "username": "nobody", "role": "user"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "No rows updated. User ID not found"}

    @pytest.mark.asyncio
    async def test_owner_updates_own_record(self, test_client, owner_headers):
        body = {
            "name": "Owner",
            "username": "owner",
            "email": "owner@laundry.local",
            "password": "new-owner-password",
            "role": "owner",
        }
        response = await test_client.put(f"{API}/owner/users/1", headers=owner_headers, json=body)
        assert response.status_code == 201
        assert response.json()["data"]["id"] == 1
        assert response.json()["data"]["role"] == "owner"

        login = await test_client.post(
            f"{API}/auth/login", json={"username": "owner", "password": "new-owner-password"}
        )
        assert login.status_code == 200

    @pytest.mark.asyncio
    async def test_admin_cannot_change_owner_role(self, test_client, admin_headers, owner_headers):
        body = {
            "name": "Owner",
            "username": "owner",
            "email": "owner@laundry.local",
            "password": "pw",
            "role": "user",
        }
        response = await test_client.put(f"{API}/owner/users/1", headers=admin_headers, json=body)
        assert response.status_code == 403
        assert response.json() == {"message": "Require owner role"}

        owner = await test_client.get(f"{API}/users/1", headers=owner_headers)
        assert owner.json()["data"]["role"] == "owner"
