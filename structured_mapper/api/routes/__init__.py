"""
Route aggregation for API v1.
"""

from fastapi import APIRouter

from structured_mapper.api.routes.customers import router as customers_router

router = APIRouter()
router.include_router(customers_router)
