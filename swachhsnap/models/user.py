"""User model."""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from enum import Enum

from swachhsnap.core.database import Base


class UserRole(str, Enum):
    """User roles in the system."""
    CITIZEN = "citizen"
    SWEEPER = "sweeper"
    ADMIN = "admin"


class User(Base):
    """User model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    name = Column(String, nullable=False)
    role = Column(
        SQLEnum(UserRole, values_callable=lambda enum: [member.value for member in enum]),
        nullable=False,
        default=UserRole.CITIZEN,
    )
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    complaints = relationship(
        "Complaint",
        back_populates="reporter",
        foreign_keys="Complaint.user_id",
    )
    event_participations = relationship(
        "EventParticipant",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
