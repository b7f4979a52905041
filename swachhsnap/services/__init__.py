"""Service layer for business logic."""
from swachhsnap.services.auth_service import AuthService
from swachhsnap.services.user_service import UserService
from swachhsnap.services.complaint_service import ComplaintService
from swachhsnap.services.event_service import EventService
from swachhsnap.services.media_service import MediaService

__all__ = [
    "AuthService",
    "UserService",
    "ComplaintService",
    "EventService",
    "MediaService",
]
