"""Found item endpoints used by staff."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator

from ...domain.models.found_item import FoundItemRecord
from ...domain.services.lost_and_found_service import LostAndFoundService
from ...infrastructure.dependencies import get_lost_and_found_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/found-items", tags=["found-items"])


class FoundItemCreateRequest(BaseModel):
    """Request model for logging a found item."""

    admin_id: int = Field(..., description="Staff member logging the item")
    item_type: str = Field(..., min_length=1)
    found_location: str = Field(..., min_length=1)
    found_time: datetime
    color: Optional[str] = None
    brand_model: Optional[str] = None
    public_description: Optional[str] = None
    photo_url: Optional[str] = None
    storage_location: Optional[str] = None

    @field_validator("item_type", "found_location", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator(
        "color", "brand_model", "public_description", "photo_url", "storage_location",
        mode="before",
    )
    @classmethod
    def empty_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class FoundItemCreateResponse(BaseModel):
    """Response model for a logged found item."""

    message: str
    found_item_id: int


@router.post("", status_code=201, response_model=FoundItemCreateResponse)
async def log_found_item(
    request: FoundItemCreateRequest,
    service: LostAndFoundService = Depends(get_lost_and_found_service),
) -> FoundItemCreateResponse:
    """Log an item recovered by staff."""
    record = FoundItemRecord(**request.model_dump())

    try:
        stored = await service.log_found_item(record)
    except Exception as e:
        logger.error(f"❌ Error inserting found item: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Database error")

    return FoundItemCreateResponse(
        message="Found item logged successfully",
        found_item_id=stored.id,
    )


@router.get("")
async def list_found_items(
    service: LostAndFoundService = Depends(get_lost_and_found_service),
) -> List[Dict[str, Any]]:
    """Return all currently available found items, most recently found first."""
    try:
        records = await service.list_available_found_items()
    except Exception as e:
        logger.error(f"❌ Error fetching found items: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Database error")

    return [record.to_dict() for record in records]
