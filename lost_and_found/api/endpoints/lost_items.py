"""Lost item report endpoints."""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, field_validator

from ...domain.errors import NotFoundError
from ...domain.models.lost_item import LostItemReport
from ...domain.services.lost_and_found_service import LostAndFoundService
from ...infrastructure.dependencies import get_lost_and_found_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/lost-items", tags=["lost-items"])


class LostItemCreateRequest(BaseModel):
    """Request model for reporting a lost item."""

    user_id: int = Field(..., description="Reporting student")
    item_type: str = Field(..., min_length=1, description="Item category, e.g. 'backpack'")
    lost_location: str = Field(..., min_length=1, description="Where the item was lost")
    lost_time_from: Optional[datetime] = None
    lost_time_to: Optional[datetime] = None
    color: Optional[str] = None
    brand_model: Optional[str] = None
    public_description: Optional[str] = None
    secret_info_1: Optional[str] = Field(None, description="Private detail only the owner knows")
    secret_info_2: Optional[str] = Field(None, description="Second private detail")

    @field_validator("item_type", "lost_location", mode="before")
    @classmethod
    def strip_strings(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v


class LostItemCreateResponse(BaseModel):
    """Response model for a created lost item report."""

    message: str
    lost_item_id: int


class LostItemResponse(BaseModel):
    """Public view of a lost item report; never carries the secrets."""

    id: int
    user_id: int
    item_type: str
    lost_location: str
    lost_time_from: Optional[datetime] = None
    lost_time_to: Optional[datetime] = None
    color: Optional[str] = None
    brand_model: Optional[str] = None
    public_description: Optional[str] = None
    status: str
    created_at: datetime

    @classmethod
    def from_report(cls, report: LostItemReport) -> "LostItemResponse":
        data = report.to_dict()
        data["user_id"] = data.pop("reporter_id")
        return cls(**data)


@router.post("", status_code=201, response_model=LostItemCreateResponse)
async def report_lost_item(
    request: LostItemCreateRequest,
    service: LostAndFoundService = Depends(get_lost_and_found_service),
) -> LostItemCreateResponse:
    """Report a new lost item."""
    report = LostItemReport(
        reporter_id=request.user_id,
        item_type=request.item_type,
        lost_location=request.lost_location,
        lost_time_from=request.lost_time_from,
        lost_time_to=request.lost_time_to,
        color=request.color,
        brand_model=request.brand_model,
        public_description=request.public_description,
        secret_info_1=request.secret_info_1,
        secret_info_2=request.secret_info_2,
    )

    try:
        stored = await service.report_lost_item(report)
    except Exception as e:
        logger.error(f"❌ Error inserting lost item: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Database error")

    return LostItemCreateResponse(
        message="Lost item reported successfully",
        lost_item_id=stored.id,
    )


@router.get("", response_model=List[LostItemResponse])
async def list_lost_items(
    service: LostAndFoundService = Depends(get_lost_and_found_service),
) -> List[LostItemResponse]:
    """List all lost item reports, newest first."""
    try:
        reports = await service.list_lost_items()
    except Exception as e:
        logger.error(f"❌ Error fetching lost items: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Database error")

    return [LostItemResponse.from_report(report) for report in reports]


@router.get("/user/{user_id}", response_model=List[LostItemResponse])
async def list_user_lost_items(
    user_id: int,
    service: LostAndFoundService = Depends(get_lost_and_found_service),
) -> List[LostItemResponse]:
    """List the lost item reports of one student, newest first."""
    try:
        reports = await service.list_lost_items_for_user(user_id)
    except Exception as e:
        logger.error(f"❌ Error fetching user lost items: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Database error")

    return [LostItemResponse.from_report(report) for report in reports]


@router.get("/{lost_item_id}/matches")
async def get_matches(
    lost_item_id: int,
    service: LostAndFoundService = Depends(get_lost_and_found_service),
) -> List[Dict[str, Any]]:
    """Return found items that likely match a lost item report.

    Raises:
        HTTPException: 404 if the lost item report does not exist
    """
    try:
        matches = await service.find_matches_for(lost_item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"❌ Error computing matches: {type(e).__name__}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Database error")

    return [match.to_dict() for match in matches]
