"""Sweeper dashboard router."""
from typing import Annotated, List, Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from swachhsnap.core.database import get_db
from swachhsnap.services.complaint_service import ComplaintService
from swachhsnap.schemas.complaint import ComplaintResponse
from swachhsnap.api.dependencies import SweeperUser, Media, read_photo

router = APIRouter(prefix="/sweeper", tags=["Sweeper"])


@router.get("/tasks", response_model=List[ComplaintResponse])
def get_my_tasks(
    db: Annotated[Session, Depends(get_db)],
    current_user: SweeperUser
):
    """
    Open complaints assigned to the current sweeper.
    """
    return ComplaintService(db).get_sweeper_tasks(current_user)


@router.post("/tasks/{complaint_id}/proof", response_model=ComplaintResponse)
def upload_proof(
    complaint_id: str,
    db: Annotated[Session, Depends(get_db)],
    current_user: SweeperUser,
    media: Media,
    photo: Annotated[Optional[UploadFile], File()] = None,
    photo_data_url: Annotated[Optional[str], Form()] = None,
):
    """
    Upload the "after" photo for a task.

    The complaint moves to review and waits for admin approval.
    """
    data, content_type = read_photo(photo, photo_data_url)
    service = ComplaintService(db, media=media)
    return service.submit_proof(complaint_id, current_user, data, content_type)
