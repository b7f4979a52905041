"""Volunteer event models."""
import secrets
import string

from sqlalchemy import Column, Integer, String, Text, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from swachhsnap.core.database import Base


def generate_event_id() -> str:
    """Generate a public event identifier, e.g. EVT-4K9Q2Z."""
    alphabet = string.ascii_uppercase + string.digits
    return "EVT-" + "".join(secrets.choice(alphabet) for _ in range(6))


class VolunteerEvent(Base):
    """
    Volunteer event model - a community clean-up hosted by an admin.
    Citizens join and leave through EventParticipant rows.
    """

    __tablename__ = "volunteer_events"

    id = Column(String(20), primary_key=True, default=generate_event_id)
    title = Column(String(200), nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    description = Column(Text, nullable=False, default="")
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    participant_links = relationship(
        "EventParticipant",
        back_populates="event",
        cascade="all, delete-orphan",
    )

    @property
    def participants(self) -> list:
        """Participant user ids in ascending order."""
        return sorted(link.user_id for link in self.participant_links)

    def __repr__(self):
        return f"<VolunteerEvent(id={self.id}, title={self.title})>"


class EventParticipant(Base):
    """Membership of a user in a volunteer event."""

    __tablename__ = "event_participants"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(String(20), ForeignKey("volunteer_events.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    joined_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    event = relationship("VolunteerEvent", back_populates="participant_links")
    user = relationship("User", back_populates="event_participations")

    # A user appears at most once per event
    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_event_participant"),
    )

    def __repr__(self):
        return f"<EventParticipant(event_id={self.event_id}, user_id={self.user_id})>"
