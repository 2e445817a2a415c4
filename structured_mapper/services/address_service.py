"""
Address enrichment — Address → AddressDto with the country name resolved.
"""

import asyncio
import time

from structured_mapper.config import get_settings
from structured_mapper.core.logging import get_logger
from structured_mapper.mappers.builder import MapperBuilder
from structured_mapper.schemas import Address
from structured_mapper.schemas.customer_schema import AddressDto
from structured_mapper.services.country_service import CountryService

logger = get_logger(__name__)


class AddressDtoService:
    """Turn stored addresses into DTOs, looking up the country name."""

    def __init__(
        self,
        country_service: CountryService,
        delay_ms: int | None = None,
    ) -> None:
        self._country_service = country_service
        self._delay = (
            delay_ms if delay_ms is not None
            else get_settings().address_lookup_delay_ms
        ) / 1000
        self._mapper = (
            MapperBuilder(Address, AddressDto)
            .for_field("street", lambda a: a.street)
            .for_field("area", lambda a: a.area)
            .for_field("state", lambda a: a.province)
            .for_field("postcode", lambda a: a.zipcode)
            .for_field("country_name", self._country_name)
            .build()
        )

    async def _country_name(self, address: Address) -> str:
        return await self._country_service.get_country_name(address.country_id)

    async def transform(self, address: Address | None) -> AddressDto | None:
        """
        Map one address. ``None`` maps to ``None``.

        Raises:
            NotFoundException: If the address's country is unknown.
        """
        start = time.perf_counter()
        if self._delay:
            await asyncio.sleep(self._delay)

        dto = await self._mapper(address)

        logger.debug(
            "Address transformed",
            extra={"duration_ms": round((time.perf_counter() - start) * 1000, 2)},
        )
        return dto

    async def transform_many(self, *addresses: Address | None) -> list[AddressDto]:
        """Map several addresses concurrently, dropping absent ones."""
        dtos = await asyncio.gather(*(self.transform(a) for a in addresses))
        return [dto for dto in dtos if dto is not None]
