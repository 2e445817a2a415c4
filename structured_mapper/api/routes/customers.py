"""
Customers endpoint — load a customer and return it as a CustomerDto.

GET /customers/{customer_id}
"""

from fastapi import APIRouter, Depends, Path

from structured_mapper.api.dependencies import get_customer_dto_service
from structured_mapper.schemas.customer_schema import CustomerDto
from structured_mapper.services.customer_dto_service import CustomerDtoService

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get(
    "/{customer_id}",
    response_model=CustomerDto,
    summary="Get a customer as a DTO",
    description=(
        "Loads the customer record and maps it into a CustomerDto. "
        "Home, business and shipping addresses are enriched with their "
        "country names concurrently."
    ),
)
async def get_customer(
    customer_id: int = Path(..., ge=1, description="Customer number"),
    service: CustomerDtoService = Depends(get_customer_dto_service),
) -> CustomerDto:
    return await service.get_by_id(customer_id)
