"""Domain model for ownership claims."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class ClaimStatus(str, Enum):
    """Initial status of a claim, decided once at submission."""

    VERIFIED = "verified"  # Both secrets matched exactly
    PENDING = "pending"  # Needs manual review


class VerificationInputs(BaseModel):
    """Secrets submitted by a claimer."""

    verification_input_1: Optional[str] = None
    verification_input_2: Optional[str] = None

    class Config:
        """Pydantic model configuration."""
        frozen = True


class ClaimSubmission(BaseModel):
    """A student's assertion of ownership over a found item."""

    lost_item_id: int = Field(..., description="Lost item report the claim is tied to")
    found_item_id: int = Field(..., description="Found item being claimed")
    claimer_id: int = Field(..., description="Student making the claim")
    verification_input_1: Optional[str] = Field(None, repr=False)
    verification_input_2: Optional[str] = Field(None, repr=False)

    class Config:
        """Pydantic model configuration."""
        frozen = True

    @property
    def inputs(self) -> VerificationInputs:
        """The submitted verification pair."""
        return VerificationInputs(
            verification_input_1=self.verification_input_1,
            verification_input_2=self.verification_input_2,
        )


class Claim(BaseModel):
    """A persisted claim with its adjudicated status."""

    id: Optional[int] = None
    lost_item_id: int
    found_item_id: int
    claimer_id: int
    verification_input_1: Optional[str] = Field(None, exclude=True, repr=False)
    verification_input_2: Optional[str] = Field(None, exclude=True, repr=False)
    status: ClaimStatus
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        """Pydantic model configuration."""
        frozen = True

    @classmethod
    def from_submission(cls, submission: ClaimSubmission, status: ClaimStatus) -> "Claim":
        """Build the record to persist for a submission."""
        return cls(
            lost_item_id=submission.lost_item_id,
            found_item_id=submission.found_item_id,
            claimer_id=submission.claimer_id,
            verification_input_1=submission.verification_input_1 or None,
            verification_input_2=submission.verification_input_2 or None,
            status=status,
        )
