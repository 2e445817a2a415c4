"""
Shared FastAPI dependencies — injected into route handlers.

The customer DTO service holds compiled mappers, so it is built once at
startup (see ``main.lifespan``) and stored on ``app.state``. Dependencies
only hand it out.
"""

import httpx
from fastapi import Request

from structured_mapper.config import get_settings
from structured_mapper.services.address_service import AddressDtoService
from structured_mapper.services.country_service import (
    CountryService,
    HttpCountryService,
    InMemoryCountryService,
)
from structured_mapper.services.customer_dto_service import CustomerDtoService
from structured_mapper.services.customer_service import CustomerService


def build_country_service(http_client: httpx.AsyncClient) -> CountryService:
    """HTTP-backed lookups when a country API is configured, else the built-in table."""
    if get_settings().uses_remote_countries:
        return HttpCountryService(http_client=http_client)
    return InMemoryCountryService()


def build_customer_dto_service(http_client: httpx.AsyncClient) -> CustomerDtoService:
    """Wire a CustomerDtoService and its collaborators."""
    return CustomerDtoService(
        customer_service=CustomerService(),
        address_service=AddressDtoService(build_country_service(http_client)),
    )


def get_customer_dto_service(request: Request) -> CustomerDtoService:
    """The application-wide CustomerDtoService created at startup."""
    return request.app.state.customer_dto_service
