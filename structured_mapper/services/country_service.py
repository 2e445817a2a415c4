"""
Country name lookups.

Two interchangeable implementations:
  1. InMemoryCountryService — static table, no I/O.
  2. HttpCountryService     — GET {country_api_url}/countries/{country_id}.

Mapping rules only ever see ``get_country_name`` as an async function.
"""

from abc import ABC, abstractmethod

import httpx

from structured_mapper.config import get_settings
from structured_mapper.core.exceptions import (
    NotFoundException,
    SourceAPIConnectionException,
    SourceAPIException,
    SourceAPITimeoutException,
)
from structured_mapper.core.logging import get_logger
from structured_mapper.schemas import CountryRecord

logger = get_logger(__name__)

_COUNTRY_ENDPOINT = "/countries/{country_id}"

DEFAULT_COUNTRIES: dict[int, str] = {
    1: "Thailand",
    2: "UK",
}


class CountryService(ABC):
    """Contract for resolving a country id into its display name."""

    @abstractmethod
    async def get_country_name(self, country_id: int) -> str:
        """
        Return the name of ``country_id``.

        Raises:
            NotFoundException: If the country is unknown.
        """
        ...


class InMemoryCountryService(CountryService):
    """Country lookups against a fixed table."""

    def __init__(self, countries: dict[int, str] | None = None) -> None:
        self._countries = dict(DEFAULT_COUNTRIES if countries is None else countries)

    async def get_country_name(self, country_id: int) -> str:
        try:
            return self._countries[country_id]
        except KeyError:
            raise NotFoundException(
                message=f"Unknown country {country_id}.",
                details={"country_id": country_id},
            ) from None


class HttpCountryService(CountryService):
    """httpx-backed client for the country API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        settings = get_settings()
        self._http = http_client
        self._base_url = (base_url if base_url is not None
                          else settings.country_api_url).rstrip("/")
        self._timeout = timeout if timeout is not None else settings.country_api_timeout

    async def get_country_name(self, country_id: int) -> str:
        """
        Fetch one country from the country API.

        GET {country_api_url}/countries/{country_id}

        Raises:
            NotFoundException:            HTTP 404.
            SourceAPITimeoutException:    Request timed out.
            SourceAPIConnectionException: Could not connect.
            SourceAPIException:           Any other failure.
        """
        url = f"{self._base_url}{_COUNTRY_ENDPOINT.format(country_id=country_id)}"

        logger.debug("Fetching country", extra={"url": url})

        try:
            response = await self._http.get(url, timeout=self._timeout)
        except httpx.TimeoutException as exc:
            raise SourceAPITimeoutException(
                message=f"Request to {url} timed out after {self._timeout}s.",
                details={"endpoint": url, "error": str(exc)},
            ) from exc
        except httpx.ConnectError as exc:
            raise SourceAPIConnectionException(
                details={"endpoint": url, "error": str(exc)},
            ) from exc
        except httpx.HTTPError as exc:
            raise SourceAPIException(
                message=f"Country API request failed: {exc}",
                details={"endpoint": url},
            ) from exc

        if response.status_code == 404:
            raise NotFoundException(
                message=f"Unknown country {country_id}.",
                details={"country_id": country_id},
            )
        if response.status_code != 200:
            raise SourceAPIException(
                message=f"Country API returned {response.status_code}.",
                details={
                    "endpoint": url,
                    "status_code": response.status_code,
                    "body": response.text[:500],
                },
            )

        try:
            record = CountryRecord(**response.json())
        except Exception as exc:
            raise SourceAPIException(
                message="Failed to parse country API response.",
                details={
                    "endpoint": url,
                    "error": str(exc),
                    "raw_body": response.text[:500],
                },
            ) from exc

        return record.name
