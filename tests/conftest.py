"""
Pytest configuration & shared fixtures.
"""

from collections.abc import AsyncIterator
from datetime import datetime

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from structured_mapper.api.dependencies import build_customer_dto_service
from structured_mapper.main import create_app
from structured_mapper.schemas import Address, Customer
from structured_mapper.services.address_service import AddressDtoService
from structured_mapper.services.country_service import InMemoryCountryService


@pytest_asyncio.fixture
async def app() -> AsyncIterator[FastAPI]:
    """Provide a fresh FastAPI app with the shared http client in place."""
    application = create_app()

    # ASGITransport does not run the lifespan, so wire state by hand
    async with httpx.AsyncClient(
        base_url="http://fake-countries",
        timeout=httpx.Timeout(5),
    ) as mock_http:
        application.state.http_client = mock_http
        application.state.customer_dto_service = build_customer_dto_service(
            mock_http)
        yield application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    """Provide an async test client."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver",
    ) as ac:
        yield ac


@pytest.fixture
def address() -> Address:
    return Address(
        street="123 Fake Street",
        area="Area",
        province="Province",
        zipcode="0000",
        country_id=1,
    )


@pytest.fixture
def customer() -> Customer:
    return Customer(
        customer_number=12345,
        date_joined=datetime(1990, 1, 1),
        first_name="Mike",
        surname="Chamberlain",
        phone_number="0971143378",
        home_address=Address(
            street="3 Some Lane",
            area="Area",
            province="Province",
            zipcode="0000",
            country_id=1,
        ),
        business_address=Address(
            street="3 Some Lane",
            area="Area",
            province="Province",
            zipcode="0000",
            country_id=1,
        ),
        shipping_address=Address(
            street="1 Ship Lane",
            area="Area",
            province="Province",
            zipcode="0000",
            country_id=2,
        ),
    )


@pytest.fixture
def address_service() -> AddressDtoService:
    return AddressDtoService(InMemoryCountryService(), delay_ms=0)
