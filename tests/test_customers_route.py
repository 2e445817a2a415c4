"""
Tests for the /api/v1/customers endpoint.
"""

from types import SimpleNamespace

import httpx
import pytest
from fastapi import FastAPI

from structured_mapper.api.dependencies import get_customer_dto_service


@pytest.mark.asyncio
async def test_health_check(client: httpx.AsyncClient) -> None:
    """Health endpoint should return 200 with app info."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


@pytest.mark.asyncio
async def test_get_customer(client: httpx.AsyncClient) -> None:
    response = await client.get("/api/v1/customers/12345")
    assert response.status_code == 200
    data = response.json()
    assert data["customer_id"] == 12345
    assert data["date_joined"] == "01/01/1990"
    assert data["contact"]["phone_number"] == "+66971143378"
    assert data["contact"]["home_address"]["country_name"] == "Thailand"
    assert data["contact"]["other_addresses"][1]["country_name"] == "UK"


@pytest.mark.asyncio
async def test_get_customer_not_found(client: httpx.AsyncClient) -> None:
    response = await client.get(
        "/api/v1/customers/999", headers={"X-Request-ID": "req-999"})
    assert response.status_code == 404
    data = response.json()
    assert data["error"] is True
    assert data["error_code"] == "NOT_FOUND"
    assert data["details"] == {"customer_id": 999}
    assert data["request_id"] == "req-999"
    assert response.headers["X-Request-ID"] == "req-999"


@pytest.mark.asyncio
async def test_get_customer_invalid_id(client: httpx.AsyncClient) -> None:
    response = await client.get("/api/v1/customers/0")
    assert response.status_code == 422
    data = response.json()
    assert data["error"] is True
    assert data["error_code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_requests_share_one_customer_dto_service(
    app: FastAPI,
    client: httpx.AsyncClient,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    service = app.state.customer_dto_service
    mapper = service._mapper
    served_by = []
    original_get_by_id = service.get_by_id

    async def recording_get_by_id(customer_id: int):
        served_by.append(service)
        return await original_get_by_id(customer_id)

    monkeypatch.setattr(service, "get_by_id", recording_get_by_id)

    first = await client.get("/api/v1/customers/12345")
    second = await client.get("/api/v1/customers/12345")

    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()
    assert served_by == [service, service]
    assert app.state.customer_dto_service is service
    assert service._mapper is mapper


@pytest.mark.asyncio
async def test_customer_dto_service_dependency_returns_app_instance(
    app: FastAPI,
) -> None:
    request = SimpleNamespace(app=app)

    assert get_customer_dto_service(request) is app.state.customer_dto_service
    assert get_customer_dto_service(request) is get_customer_dto_service(request)
