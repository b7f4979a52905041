"""Volunteer event schemas."""
from pydantic import BaseModel, ConfigDict, Field
from typing import List
from datetime import datetime


class EventCreate(BaseModel):
    """Create volunteer event (admin)."""
    title: str = Field(..., min_length=1, max_length=200)
    date: datetime
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    description: str = ""


class EventResponse(BaseModel):
    """Volunteer event response."""
    id: str
    title: str
    date: datetime
    latitude: float
    longitude: float
    description: str
    participants: List[int] = []
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ParticipationRequest(BaseModel):
    """Join (true) or leave (false) an event."""
    is_joining: bool
