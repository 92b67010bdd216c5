"""Claim submission endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ...domain.errors import NotFoundError
from ...domain.models.claim import ClaimStatus, ClaimSubmission
from ...domain.services.lost_and_found_service import LostAndFoundService
from ...infrastructure.dependencies import get_lost_and_found_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/claims", tags=["claims"])


class ClaimCreateRequest(BaseModel):
    """Request model for claiming a found item."""

    lost_item_id: int = Field(..., description="The claimer's lost item report")
    found_item_id: int = Field(..., description="Found item being claimed")
    claimer_id: int = Field(..., description="Student making the claim")
    verification_input_1: Optional[str] = Field(None, description="Answer to the first secret")
    verification_input_2: Optional[str] = Field(None, description="Answer to the second secret")


class ClaimCreateResponse(BaseModel):
    """Response model for a created claim."""

    message: str
    claim_id: int
    status: ClaimStatus


@router.post("", status_code=201, response_model=ClaimCreateResponse)
async def create_claim(
    request: ClaimCreateRequest,
    service: LostAndFoundService = Depends(get_lost_and_found_service),
) -> ClaimCreateResponse:
    """Claim a found item, auto-verifying it when both secrets match.

    Raises:
        HTTPException: 404 if the referenced lost item report does not exist
    """
    logger.info(
        f"📨 Claim submitted: lost_item_id={request.lost_item_id}, "
        f"found_item_id={request.found_item_id}, claimer_id={request.claimer_id}"
    )

    try:
        claim = await service.submit_claim(ClaimSubmission(**request.model_dump()))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"❌ Error creating claim: {type(e).__name__}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Database error")

    return ClaimCreateResponse(
        message="Claim created successfully",
        claim_id=claim.id,
        status=claim.status,
    )
