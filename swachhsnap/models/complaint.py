"""Complaint model."""
import secrets
import string

from sqlalchemy import (
    Column, Integer, String, Text, Float, DateTime, ForeignKey, CheckConstraint,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from enum import Enum

from swachhsnap.core.database import Base


class ComplaintCategory(str, Enum):
    """Kind of civic issue being reported."""
    GARBAGE = "garbage"
    ROAD = "road"
    RIVER = "river"
    PUBLIC = "public"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS = {
    ComplaintCategory.GARBAGE: "Garbage Dump",
    ComplaintCategory.ROAD: "Road Damage",
    ComplaintCategory.RIVER: "River Pollution",
    ComplaintCategory.PUBLIC: "Public Area Issue",
}


class ComplaintStatus(str, Enum):
    """Complaint lifecycle status."""
    SUBMITTED = "submitted"
    REVIEW = "review"
    DONE = "done"


class ComplaintPriority(str, Enum):
    """Priority computed from the reported coordinate."""
    NORMAL = "normal"
    HIGH = "high"


class FeedbackRating(str, Enum):
    """Citizen rating of a closed complaint."""
    POOR = "poor"
    AVG = "avg"
    GOOD = "good"


def _values(enum):
    return [member.value for member in enum]


def generate_complaint_id() -> str:
    """Generate a public complaint identifier, e.g. CMP-X72A1B."""
    alphabet = string.ascii_uppercase + string.digits
    return "CMP-" + "".join(secrets.choice(alphabet) for _ in range(6))


class Complaint(Base):
    """
    Complaint model - a geotagged civic issue with before/after photos.

    Table constraints mirror the lifecycle invariants.
    """

    __tablename__ = "complaints"

    id = Column(String(20), primary_key=True, default=generate_complaint_id)

    # Reporter (name denormalized for list views)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    user_name = Column(String, nullable=False)

    category = Column(SQLEnum(ComplaintCategory, values_callable=_values), nullable=False)
    description = Column(Text, nullable=False, default="")
    before_image = Column(String, nullable=False)
    after_image = Column(String, nullable=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)

    status = Column(
        SQLEnum(ComplaintStatus, values_callable=_values),
        nullable=False,
        default=ComplaintStatus.SUBMITTED,
        index=True,
    )
    priority = Column(
        SQLEnum(ComplaintPriority, values_callable=_values),
        nullable=False,
        default=ComplaintPriority.NORMAL,
    )

    assigned_sweeper_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    assigned_sweeper_name = Column(String, nullable=True)
    feedback = Column(SQLEnum(FeedbackRating, values_callable=_values), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    reporter = relationship("User", foreign_keys=[user_id], back_populates="complaints")
    assigned_sweeper = relationship("User", foreign_keys=[assigned_sweeper_id])

    __table_args__ = (
        CheckConstraint(
            "after_image IS NULL OR status IN ('review', 'done')",
            name="check_after_image_status",
        ),
        CheckConstraint(
            "status != 'done' OR after_image IS NOT NULL",
            name="check_done_has_after_image",
        ),
        CheckConstraint(
            "feedback IS NULL OR status = 'done'",
            name="check_feedback_status",
        ),
        CheckConstraint(
            "assigned_sweeper_id IS NULL OR status IN ('review', 'done')",
            name="check_assignment_status",
        ),
    )

    def __repr__(self):
        return f"<Complaint(id={self.id}, status={self.status}, priority={self.priority})>"
