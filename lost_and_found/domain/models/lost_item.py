"""Domain model for lost item reports."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class LostItemStatus(str, Enum):
    """Lifecycle of a lost item report."""

    OPEN = "open"
    RESOLVED = "resolved"


class LostItemSecrets(BaseModel):
    """The private verification pair stored with a lost item report."""

    secret_info_1: Optional[str] = Field(None, description="First verification secret")
    secret_info_2: Optional[str] = Field(None, description="Second verification secret")

    class Config:
        """Pydantic model configuration."""
        frozen = True


class LostItemReport(BaseModel):
    """A student's report of a missing item.

    The two secrets are write-once: they are excluded from serialization and
    from ``repr`` so they cannot leak into list or match responses.
    """

    id: Optional[int] = Field(None, description="Assigned by the repository on creation")
    reporter_id: int = Field(..., description="Student who filed the report")
    item_type: str = Field(..., description="Free text category, e.g. 'backpack'")
    lost_location: str = Field(..., description="Where the item was lost")
    lost_time_from: Optional[datetime] = Field(None, description="Start of the loss window")
    lost_time_to: Optional[datetime] = Field(None, description="End of the loss window")
    color: Optional[str] = None
    brand_model: Optional[str] = None
    public_description: Optional[str] = Field(None, description="Shown to other users")
    secret_info_1: Optional[str] = Field(None, exclude=True, repr=False)
    secret_info_2: Optional[str] = Field(None, exclude=True, repr=False)
    status: LostItemStatus = LostItemStatus.OPEN
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        """Pydantic model configuration."""
        frozen = True  # Immutable model
        json_schema_extra = {
            "example": {
                "reporter_id": 7,
                "item_type": "backpack",
                "lost_location": "main library",
                "lost_time_from": "2024-01-01T08:00:00",
                "lost_time_to": "2024-01-01T18:00:00",
                "color": "black",
                "public_description": "Black backpack with a laptop sleeve",
            }
        }

    @property
    def secrets(self) -> LostItemSecrets:
        """The stored verification pair."""
        return LostItemSecrets(
            secret_info_1=self.secret_info_1,
            secret_info_2=self.secret_info_2,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Public representation for API responses."""
        return self.model_dump(mode="json")
