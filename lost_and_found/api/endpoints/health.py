"""Health check endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ...domain.services.lost_and_found_service import LostAndFoundService
from ...infrastructure.dependencies import get_lost_and_found_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

VERSION = "0.1.0"


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    storage: str


@router.get("/health", response_model=HealthResponse)
async def health_check(
    service: LostAndFoundService = Depends(get_lost_and_found_service),
) -> HealthResponse:
    """Check service health and the configured storage backend."""
    return HealthResponse(
        status="healthy",
        version=VERSION,
        storage=service.repository_name,
    )


@router.get("/test-db")
async def test_db(service: LostAndFoundService = Depends(get_lost_and_found_service)):
    """Check the storage connection with a trivial query.

    Raises:
        HTTPException: If the store cannot be queried
    """
    try:
        healthy = await service.check_storage()
    except Exception as e:
        logger.error(f"❌ DB test failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="DB test failed")

    if not healthy:
        raise HTTPException(status_code=500, detail="DB test failed")

    return {"message": "DB works!", "storage": service.repository_name}
