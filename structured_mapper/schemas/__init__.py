"""
Pydantic schemas for the customer domain (mapping sources).

These models represent customers as the customer store holds them.
The DTOs they are mapped into live in ``customer_schema``.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class Address(BaseModel):
    """A postal address as stored on a customer record."""

    street: str = Field(default="", description="Street line")
    area: str = Field(default="", description="District / area")
    province: str = Field(default="", description="Province or state")
    country_id: int = Field(default=0, description="Country identifier")
    zipcode: str = Field(default="", description="Postal code")
    phone_number: str = Field(default="", description="Local phone number")


class Customer(BaseModel):
    """A customer record from the customer store."""

    customer_number: int = Field(..., description="Unique customer number")
    date_joined: datetime = Field(..., description="When the customer joined")
    first_name: str = Field(default="", description="Given name")
    surname: str = Field(default="", description="Family name")
    phone_number: str = Field(
        default="", description="Local phone number (leading trunk 0)")
    home_address: Address | None = Field(default=None)
    business_address: Address | None = Field(default=None)
    shipping_address: Address | None = Field(default=None)


class CountryRecord(BaseModel):
    """
    Envelope returned by GET /countries/{country_id} on the country API.
    """

    id: int = Field(..., description="Country identifier")
    name: str = Field(..., description="Display name of the country")

    model_config = {"extra": "allow"}
