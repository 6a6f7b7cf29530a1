"""
Laundry API Backend: Application-Level Tests
==============================================

What we test:
    ✅ Health check probes the store
    ✅ Unmatched routes get the JSON 404 body
    ✅ Every response carries X-Request-ID (client value is echoed)
    ✅ Store failures, including a failed commit, are rendered as 500 {error: <message>}
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import API
from laundryapi.exceptions import StoreError
from laundryapi.services.product_service import ProductService
from laundryapi.services.store_errors import commit_or_raise


class TestHealth:

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        response = await test_client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"


class TestRouting:

    @pytest.mark.asyncio
    async def test_unknown_route(self, test_client):
        response = await test_client.get(f"{API}/nothing-here")
        assert response.status_code == 404
        assert response.json() == {"error": "The resource not found"}

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/health")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/health", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"


class TestStoreFailures:

    def setup_method(self):
        self.service = ProductService()

    @pytest.mark.asyncio
    async def test_service_wraps_driver_error(self, mock_db_session):
        failure = OperationalError("SELECT", {}, Exception("database is locked"))
        with patch("laundryapi.services.product_service.products_repo") as mock_repo:
            mock_repo.list_products = AsyncMock(side_effect=failure)
            with pytest.raises(StoreError) as exc_info:
                await self.service.list_products(mock_db_session)
        assert exc_info.value.message == "database is locked"
        assert exc_info.value.context["operation"] == "list_products"

    @pytest.mark.asyncio
    async def test_store_error_response(self, test_client, user_headers):
        failure = OperationalError("SELECT", {}, Exception("disk I/O error"))
        with patch("laundryapi.services.product_service.products_repo") as mock_repo:
            mock_repo.list_products = AsyncMock(side_effect=failure)
            response = await test_client.get(f"{API}/products", headers=user_headers)
        assert response.status_code == 500
        assert response.json() == {"error": "disk I/O error"}

    @pytest.mark.asyncio
    async def test_failed_commit_on_write(self, test_client, owner_headers):
        failure = OperationalError("COMMIT", {}, Exception("database is locked"))
        with patch.object(AsyncSession, "commit", AsyncMock(side_effect=failure)):
            response = await test_client.post(
                f"{API}/products",
                headers=owner_headers,
                json={"name": "Cuci Kering", "price": 10, "type": "kiloan"},
            )
        assert response.status_code == 500
        assert response.json() == {"error": "database is locked"}

        listing = await test_client.get(f"{API}/products", headers=owner_headers)
        assert listing.json()["data"] == []

    @pytest.mark.asyncio
    async def test_commit_failure_becomes_store_error(self, mock_db_session):
        failure = OperationalError("COMMIT", {}, Exception("database is locked"))
        mock_db_session.commit = AsyncMock(side_effect=failure)
        with pytest.raises(StoreError) as exc_info:
            await commit_or_raise(mock_db_session, "create_product")
        assert exc_info.value.message == "database is locked"
        assert exc_info.value.context["operation"] == "create_product"
