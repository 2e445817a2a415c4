"""
In-memory customer store.

Stands in for the system of record the demo API reads customers from.
"""

from datetime import datetime

from structured_mapper.core.exceptions import NotFoundException
from structured_mapper.core.logging import get_logger
from structured_mapper.schemas import Address, Customer

logger = get_logger(__name__)


def _seed_customers() -> dict[int, Customer]:
    customer = Customer(
        customer_number=12345,
        date_joined=datetime(1990, 1, 1),
        first_name="Mike",
        surname="Chamberlain",
        phone_number="0971143378",
        home_address=Address(
            street="3 Some Lane",
            area="Area",
            province="Province",
            zipcode="1234",
            country_id=1,
        ),
        business_address=Address(
            street="Agoda, Central World",
            area="Pathum Wan",
            province="Bangkok",
            zipcode="15000",
            country_id=1,
        ),
        shipping_address=Address(
            street="1 Shipping Street",
            area="Shipton",
            province="Shingsford",
            zipcode="SHP100",
            country_id=2,
        ),
    )
    return {customer.customer_number: customer}


class CustomerService:
    """Look customers up by number."""

    def __init__(self, customers: dict[int, Customer] | None = None) -> None:
        self._customers = _seed_customers() if customers is None else dict(customers)

    def get_by_id(self, customer_id: int) -> Customer:
        """
        Raises:
            NotFoundException: If no customer has this number.
        """
        customer = self._customers.get(customer_id)
        if customer is None:
            raise NotFoundException(
                message=f"Customer {customer_id} not found.",
                details={"customer_id": customer_id},
            )
        logger.debug("Customer loaded", extra={"customer_id": customer_id})
        return customer
