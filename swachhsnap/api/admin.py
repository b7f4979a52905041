"""Admin dashboard router."""
from typing import Annotated, List, Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from swachhsnap.core.database import get_db
from swachhsnap.models.complaint import ComplaintStatus
from swachhsnap.services.complaint_service import ComplaintService
from swachhsnap.services.event_service import EventService
from swachhsnap.services.user_service import UserService
from swachhsnap.schemas.complaint import (
    AssignSweeperRequest, ComplaintDetail, ComplaintResponse, ComplaintStats
)
from swachhsnap.schemas.event import EventCreate, EventResponse
from swachhsnap.schemas.user import SweeperInfo
from swachhsnap.api.dependencies import AdminUser

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/complaints", response_model=List[ComplaintResponse])
def list_complaints(
    db: Annotated[Session, Depends(get_db)],
    current_user: AdminUser,
    status: Optional[ComplaintStatus] = None
):
    """
    All complaints, high priority first then newest first.
    """
    return ComplaintService(db).get_all_complaints(status_filter=status)


@router.get("/complaints/{complaint_id}", response_model=ComplaintDetail)
def get_complaint(
    complaint_id: str,
    db: Annotated[Session, Depends(get_db)],
    current_user: AdminUser
):
    """
    Complaint details, with the nearest sensitive zone and how far it is.
    """
    return ComplaintService(db).get_complaint_detail(complaint_id)


@router.get("/stats", response_model=ComplaintStats)
def get_stats(
    db: Annotated[Session, Depends(get_db)],
    current_user: AdminUser
):
    """
    Total, pending, completed and open high-priority counts.
    """
    return ComplaintService(db).get_stats()


@router.get("/sweepers", response_model=List[SweeperInfo])
def list_sweepers(
    db: Annotated[Session, Depends(get_db)],
    current_user: AdminUser
):
    """
    Sweepers available for assignment.
    """
    return UserService(db).get_sweepers()


@router.post("/complaints/{complaint_id}/assign", response_model=ComplaintResponse)
def assign_sweeper(
    complaint_id: str,
    assignment: AssignSweeperRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: AdminUser
):
    """
    Assign a complaint to a sweeper. The complaint moves to review.
    """
    service = ComplaintService(db)
    return service.assign_sweeper(complaint_id, assignment.sweeper_id)


@router.post("/complaints/{complaint_id}/approve", response_model=ComplaintResponse)
def approve_resolution(
    complaint_id: str,
    db: Annotated[Session, Depends(get_db)],
    current_user: AdminUser
):
    """
    Approve the sweeper's proof and close the complaint.

    Rejected with 409 unless the complaint is in review with an after-photo.
    """
    return ComplaintService(db).approve(complaint_id)


@router.post("/events", response_model=EventResponse, status_code=201)
def create_event(
    event_data: EventCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: AdminUser
):
    """
    Host a volunteer clean-up event.
    """
    return EventService(db).create_event(event_data, current_user)


@router.get("/events", response_model=List[EventResponse])
def list_events(
    db: Annotated[Session, Depends(get_db)],
    current_user: AdminUser
):
    """
    All volunteer events with their participants.
    """
    return EventService(db).get_events()
