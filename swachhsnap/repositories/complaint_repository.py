"""Complaint repository."""
from typing import List, Optional
from sqlalchemy import case
from sqlalchemy.orm import Session

from swachhsnap.models.complaint import Complaint, ComplaintPriority, ComplaintStatus


class ComplaintRepository:
    """Data access for complaints."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, complaint_id: str) -> Optional[Complaint]:
        return self.db.query(Complaint).filter(Complaint.id == complaint_id).first()

    def list(self, user_id: Optional[int] = None,
             assigned_sweeper_id: Optional[int] = None,
             status: Optional[ComplaintStatus] = None,
             exclude_status: Optional[ComplaintStatus] = None) -> List[Complaint]:
        """
        List complaints matching the filters in display order:
        high priority first, newest first within each priority tier.
        """
        query = self.db.query(Complaint)
        if user_id is not None:
            query = query.filter(Complaint.user_id == user_id)
        if assigned_sweeper_id is not None:
            query = query.filter(Complaint.assigned_sweeper_id == assigned_sweeper_id)
        if status is not None:
            query = query.filter(Complaint.status == status)
        if exclude_status is not None:
            query = query.filter(Complaint.status != exclude_status)

        high_first = case((Complaint.priority == ComplaintPriority.HIGH, 0), else_=1)
        return query.order_by(high_first, Complaint.created_at.desc(), Complaint.id.desc()).all()

    def create(self, **fields) -> Complaint:
        complaint = Complaint(**fields)
        self.db.add(complaint)
        self.db.commit()
        self.db.refresh(complaint)
        return complaint

    def update(self, complaint: Complaint, **fields) -> Complaint:
        for key, value in fields.items():
            setattr(complaint, key, value)
        self.db.commit()
        self.db.refresh(complaint)
        return complaint

    def count(self, status: Optional[ComplaintStatus] = None,
              exclude_status: Optional[ComplaintStatus] = None,
              priority: Optional[ComplaintPriority] = None) -> int:
        query = self.db.query(Complaint)
        if status is not None:
            query = query.filter(Complaint.status == status)
        if exclude_status is not None:
            query = query.filter(Complaint.status != exclude_status)
        if priority is not None:
            query = query.filter(Complaint.priority == priority)
        return query.count()
