"""Pydantic schemas for API validation and serialization."""
from swachhsnap.schemas.user import (
    UserCreate, UserRegister, UserResponse, SweeperInfo, Token, LoginResponse
)
from swachhsnap.schemas.complaint import (
    ComplaintResponse, ComplaintDetail, AssignSweeperRequest, FeedbackRequest, ComplaintStats
)
from swachhsnap.schemas.event import (
    EventCreate, EventResponse, ParticipationRequest
)

__all__ = [
    "UserCreate",
    "UserRegister",
    "UserResponse",
    "SweeperInfo",
    "Token",
    "LoginResponse",
    "ComplaintResponse",
    "ComplaintDetail",
    "AssignSweeperRequest",
    "FeedbackRequest",
    "ComplaintStats",
    "EventCreate",
    "EventResponse",
    "ParticipationRequest",
]
