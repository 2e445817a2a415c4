"""
Customer DTO service — orchestrates load → map → return.

The customer transform is composed from two mappers:
  - a contact mapper (Customer → ContactDto) whose address rules each
    perform their own asynchronous country lookup, and
  - a customer mapper (Customer → CustomerDto) that embeds the contact
    mapper as the ``contact`` field.

Both are built once per service. The application creates a single service
at startup, so the mappers are compiled once and reused for every request.
"""

from structured_mapper.core.logging import get_logger
from structured_mapper.mappers.builder import MapperBuilder
from structured_mapper.schemas import Customer
from structured_mapper.schemas.customer_schema import ContactDto, CustomerDto
from structured_mapper.services.address_service import AddressDtoService
from structured_mapper.services.customer_service import CustomerService
from structured_mapper.utils.phone_numbers import to_international

logger = get_logger(__name__)

DATE_JOINED_FORMAT = "%d/%m/%Y"


def _international_phone(customer: Customer) -> str:
    country_id = customer.home_address.country_id if customer.home_address else 0
    return to_international(customer.phone_number, country_id)


class CustomerDtoService:
    """Load a customer and map it into a CustomerDto."""

    def __init__(
        self,
        customer_service: CustomerService,
        address_service: AddressDtoService,
    ) -> None:
        self._customer_service = customer_service
        self._address_service = address_service

        contact_mapper = (
            MapperBuilder(Customer, ContactDto)
            .for_field("first", lambda c: c.first_name)
            .for_field("last", lambda c: c.surname)
            .for_field("phone_number", _international_phone)
            .for_field("home_address",
                       lambda c: address_service.transform(c.home_address))
            .for_field("other_addresses",
                       lambda c: address_service.transform_many(
                           c.business_address, c.shipping_address))
            .build()
        )

        self._mapper = (
            MapperBuilder(Customer, CustomerDto)
            .for_field("customer_id", lambda c: c.customer_number)
            .for_field("date_joined",
                       lambda c: c.date_joined.strftime(DATE_JOINED_FORMAT))
            .for_field("contact", contact_mapper)
            .build()
        )

    async def get_by_id(self, customer_id: int) -> CustomerDto:
        """
        Raises:
            NotFoundException:     Unknown customer or country.
            MappingFieldException: Phone number cannot be formatted.
        """
        customer = self._customer_service.get_by_id(customer_id)

        dto = await self._mapper(customer)

        logger.info(
            "Customer mapped",
            extra={
                "customer_id": customer_id,
                "other_address_count": len(dto.contact.other_addresses),
            },
        )
        return dto
