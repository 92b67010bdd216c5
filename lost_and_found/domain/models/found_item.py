"""Domain model for found items logged by staff."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class FoundItemStatus(str, Enum):
    """Availability of a found item."""

    AVAILABLE = "available"  # Held by staff, can be matched and claimed
    CLAIMED = "claimed"
    RETURNED = "returned"


class FoundItemRecord(BaseModel):
    """An item recovered and held by staff."""

    id: Optional[int] = Field(None, description="Assigned by the repository on creation")
    admin_id: int = Field(..., description="Staff member who logged the item")
    item_type: str = Field(..., description="Free text category")
    found_location: str = Field(..., description="Where the item was found")
    found_time: Optional[datetime] = Field(None, description="When the item was found")
    color: Optional[str] = None
    brand_model: Optional[str] = None
    public_description: Optional[str] = None
    photo_url: Optional[str] = None
    storage_location: Optional[str] = Field(None, description="Where staff keep the item")
    status: FoundItemStatus = FoundItemStatus.AVAILABLE
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        """Pydantic model configuration."""
        frozen = True

    @property
    def is_available(self) -> bool:
        """Check if the item can still be matched."""
        return self.status == FoundItemStatus.AVAILABLE

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary for API responses."""
        return self.model_dump(mode="json")
