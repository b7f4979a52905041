"""Complaint schemas."""
from pydantic import BaseModel, ConfigDict, Field, computed_field
from typing import Optional
from datetime import datetime

from swachhsnap.models.complaint import (
    ComplaintCategory,
    ComplaintPriority,
    ComplaintStatus,
    FeedbackRating,
)


class ComplaintResponse(BaseModel):
    """Complaint response."""
    id: str
    user_id: int
    user_name: str
    category: ComplaintCategory
    description: str
    before_image: str
    after_image: Optional[str] = None
    latitude: float
    longitude: float
    status: ComplaintStatus
    priority: ComplaintPriority
    assigned_sweeper_id: Optional[int] = None
    assigned_sweeper_name: Optional[str] = None
    feedback: Optional[FeedbackRating] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def category_label(self) -> str:
        return self.category.label


class ComplaintDetail(ComplaintResponse):
    """Complaint plus the closest sensitive zone, for the admin detail view."""
    nearest_zone: Optional[str] = None
    nearest_zone_distance_m: Optional[float] = None


class AssignSweeperRequest(BaseModel):
    """Admin assigns a complaint to a sweeper."""
    sweeper_id: int


class FeedbackRequest(BaseModel):
    """Citizen rates a closed complaint."""
    rating: FeedbackRating


class ComplaintStats(BaseModel):
    """Counters shown on the admin dashboard."""
    total: int = 0
    pending: int = 0
    completed: int = 0
    high_priority: int = Field(0, description="Open complaints near a sensitive zone")
