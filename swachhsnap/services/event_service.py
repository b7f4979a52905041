"""Volunteer event service."""
import logging
from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from swachhsnap.models.event import VolunteerEvent
from swachhsnap.models.user import User
from swachhsnap.repositories.event_repository import EventRepository
from swachhsnap.schemas.event import EventCreate
from swachhsnap.services.realtime import EVENTS, SnapshotHub, hub as default_hub


logger = logging.getLogger(__name__)


class EventService:
    """Volunteer event business logic."""

    def __init__(self, db: Session, hub: Optional[SnapshotHub] = None):
        self.db = db
        self.hub = hub or default_hub
        self.event_repo = EventRepository(db)

    def create_event(self, event_data: EventCreate, created_by: User) -> VolunteerEvent:
        """Host a new clean-up event (admin)."""
        event = self.event_repo.create(
            title=event_data.title,
            date=event_data.date,
            latitude=event_data.latitude,
            longitude=event_data.longitude,
            description=event_data.description,
            created_by=created_by.id,
        )
        logger.info("event.created id=%s", event.id)
        self.hub.publish(EVENTS)
        return event

    def get_event(self, event_id: str) -> VolunteerEvent:
        """
        Get event by ID.

        Raises:
            HTTPException: If event not found
        """
        event = self.event_repo.get_by_id(event_id)

        if not event:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Event not found"
            )

        return event

    def get_events(self) -> List[VolunteerEvent]:
        """All events ordered by scheduled date."""
        return self.event_repo.get_all()

    def toggle_participation(self, event_id: str, user: User, is_joining: bool) -> VolunteerEvent:
        """
        Join or leave an event.

        Idempotent: joining twice or leaving without being a member leaves
        the participant set unchanged.
        """
        event = self.get_event(event_id)
        is_member = self.event_repo.is_participant(event.id, user.id)

        if is_joining and not is_member:
            self.event_repo.add_participant(event.id, user.id)
        elif not is_joining and is_member:
            self.event_repo.remove_participant(event.id, user.id)
        else:
            return event

        logger.info("event.participation id=%s user_id=%s joined=%s", event.id, user.id, is_joining)
        self.hub.publish(EVENTS)
        return event
