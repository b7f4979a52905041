"""Citizen dashboard router."""
from typing import Annotated, List, Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from swachhsnap.core.database import get_db
from swachhsnap.models.complaint import ComplaintCategory
from swachhsnap.services.complaint_service import ComplaintService
from swachhsnap.services.event_service import EventService
from swachhsnap.schemas.complaint import ComplaintResponse, FeedbackRequest
from swachhsnap.schemas.event import EventResponse, ParticipationRequest
from swachhsnap.api.dependencies import CitizenUser, Media, read_photo

router = APIRouter(prefix="/citizen", tags=["Citizen"])


@router.post("/complaints", response_model=ComplaintResponse, status_code=201)
def report_complaint(
    db: Annotated[Session, Depends(get_db)],
    current_user: CitizenUser,
    media: Media,
    category: Annotated[ComplaintCategory, Form()],
    latitude: Annotated[float, Form(ge=-90, le=90)],
    longitude: Annotated[float, Form(ge=-180, le=180)],
    description: Annotated[str, Form()] = "",
    photo: Annotated[Optional[UploadFile], File()] = None,
    photo_data_url: Annotated[Optional[str], Form()] = None,
):
    """
    Report a civic issue.

    Multipart form with the "before" photo (file part `photo`, or a base64
    `photo_data_url`) and the device GPS fix. Priority is computed from the
    coordinate. If the photo upload fails nothing is created.
    """
    data, content_type = read_photo(photo, photo_data_url)
    service = ComplaintService(db, media=media)
    return service.create_complaint(
        reporter=current_user,
        category=category,
        description=description,
        latitude=latitude,
        longitude=longitude,
        photo=data,
        content_type=content_type,
    )


@router.get("/complaints", response_model=List[ComplaintResponse])
def get_my_complaints(
    db: Annotated[Session, Depends(get_db)],
    current_user: CitizenUser
):
    """
    Get current citizen's complaints, high priority first.
    """
    return ComplaintService(db).get_citizen_complaints(current_user)


@router.post("/complaints/{complaint_id}/feedback", response_model=ComplaintResponse)
def leave_feedback(
    complaint_id: str,
    feedback: FeedbackRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: CitizenUser
):
    """
    Rate a resolved complaint. Allowed once, only after closure.
    """
    service = ComplaintService(db)
    return service.leave_feedback(complaint_id, current_user, feedback.rating)


@router.get("/events", response_model=List[EventResponse])
def list_events(
    db: Annotated[Session, Depends(get_db)],
    current_user: CitizenUser
):
    """
    Upcoming volunteer events.
    """
    return EventService(db).get_events()


@router.post("/events/{event_id}/participation", response_model=EventResponse)
def toggle_participation(
    event_id: str,
    participation: ParticipationRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: CitizenUser
):
    """
    Join or leave a volunteer event.
    """
    service = EventService(db)
    return service.toggle_participation(event_id, current_user, participation.is_joining)
