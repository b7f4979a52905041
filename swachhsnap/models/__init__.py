"""Database models."""
from swachhsnap.models.user import User, UserRole
from swachhsnap.models.complaint import (
    Complaint,
    ComplaintCategory,
    ComplaintPriority,
    ComplaintStatus,
    FeedbackRating,
)
from swachhsnap.models.event import VolunteerEvent, EventParticipant

__all__ = [
    "User",
    "UserRole",
    "Complaint",
    "ComplaintCategory",
    "ComplaintPriority",
    "ComplaintStatus",
    "FeedbackRating",
    "VolunteerEvent",
    "EventParticipant",
]
