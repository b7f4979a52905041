"""Volunteer event repository."""
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from swachhsnap.models.event import VolunteerEvent, EventParticipant


class EventRepository:
    """Data access for volunteer events and their participants."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, event_id: str) -> Optional[VolunteerEvent]:
        return self.db.query(VolunteerEvent).filter(VolunteerEvent.id == event_id).first()

    def get_all(self) -> List[VolunteerEvent]:
        """All events, soonest first."""
        return (
            self.db.query(VolunteerEvent)
            .options(selectinload(VolunteerEvent.participant_links))
            .order_by(VolunteerEvent.date.asc())
            .all()
        )

    def create(self, **fields) -> VolunteerEvent:
        event = VolunteerEvent(**fields)
        self.db.add(event)
        self.db.commit()
        self.db.refresh(event)
        return event

    def is_participant(self, event_id: str, user_id: int) -> bool:
        return (
            self.db.query(EventParticipant)
            .filter(EventParticipant.event_id == event_id, EventParticipant.user_id == user_id)
            .first()
            is not None
        )

    def add_participant(self, event_id: str, user_id: int) -> None:
        self.db.add(EventParticipant(event_id=event_id, user_id=user_id))
        self.db.commit()

    def remove_participant(self, event_id: str, user_id: int) -> None:
        (
            self.db.query(EventParticipant)
            .filter(EventParticipant.event_id == event_id, EventParticipant.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
