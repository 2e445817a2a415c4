"""
Customer DTO schemas (mapping targets).

Every field has a default so a DTO can be created empty and then filled in
rule by rule. Nested DTOs that rules write into through a dotted path
(``contact.first``) are created by ``default_factory``.
"""

from pydantic import BaseModel, Field


class AddressDto(BaseModel):
    """Address as presented to API clients."""

    street: str | None = Field(default=None)
    area: str | None = Field(default=None)
    state: str | None = Field(default=None, description="← Address.province")
    country_name: str | None = Field(
        default=None, description="← country lookup of Address.country_id")
    postcode: str | None = Field(default=None, description="← Address.zipcode")


class ContactDto(BaseModel):
    """Contact details of a customer."""

    first: str | None = Field(default=None)
    last: str | None = Field(default=None)
    phone_number: str | None = Field(
        default=None, description="International format, e.g. +66971143378")
    home_address: AddressDto | None = Field(default=None)
    other_addresses: list[AddressDto] = Field(default_factory=list)


class CustomerDto(BaseModel):
    """Customer as returned by GET /customers/{customer_id}."""

    customer_id: int | None = Field(default=None)
    date_joined: str | None = Field(default=None)
    contact: ContactDto = Field(default_factory=ContactDto)
