"""Repository layer for data access."""
from swachhsnap.repositories.user_repository import UserRepository
from swachhsnap.repositories.complaint_repository import ComplaintRepository
from swachhsnap.repositories.event_repository import EventRepository

__all__ = [
    "UserRepository",
    "ComplaintRepository",
    "EventRepository",
]
