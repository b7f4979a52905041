"""Complaint service."""
import logging
from typing import Any, Callable, Dict, List, Optional, Union
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from swachhsnap.core.exceptions import InvalidTransition, MediaUploadError
from swachhsnap.models.complaint import (
    Complaint,
    ComplaintCategory,
    ComplaintPriority,
    ComplaintStatus,
    FeedbackRating,
    generate_complaint_id,
)
from swachhsnap.models.user import User, UserRole
from swachhsnap.repositories.complaint_repository import ComplaintRepository
from swachhsnap.repositories.user_repository import UserRepository
from swachhsnap.schemas.complaint import ComplaintDetail, ComplaintStats
from swachhsnap.services import lifecycle
from swachhsnap.services.media_service import MediaService
from swachhsnap.services.priority import classify_priority, nearest_zone
from swachhsnap.services.realtime import COMPLAINTS, SnapshotHub, hub as default_hub


logger = logging.getLogger(__name__)


class ComplaintService:
    """Complaint lifecycle business logic."""

    def __init__(self, db: Session, media: Optional[MediaService] = None,
                 hub: Optional[SnapshotHub] = None):
        self.db = db
        self.media = media
        self.hub = hub or default_hub
        self.complaint_repo = ComplaintRepository(db)
        self.user_repo = UserRepository(db)

    # ----- reads -----

    def get_complaint(self, complaint_id: str) -> Complaint:
        """
        Get complaint by ID.

        Raises:
            HTTPException: If complaint not found
        """
        complaint = self.complaint_repo.get_by_id(complaint_id)

        if not complaint:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Complaint not found"
            )

        return complaint

    def get_complaint_detail(self, complaint_id: str) -> ComplaintDetail:
        """Complaint with the closest sensitive zone and its distance in meters."""
        complaint = self.get_complaint(complaint_id)
        detail = ComplaintDetail.model_validate(complaint)
        closest = nearest_zone(complaint.latitude, complaint.longitude)
        if closest is not None:
            zone, distance = closest
            detail.nearest_zone = zone.name
            detail.nearest_zone_distance_m = round(distance, 1)
        return detail

    def get_citizen_complaints(self, citizen: User) -> List[Complaint]:
        """Complaints reported by this citizen."""
        return self.complaint_repo.list(user_id=citizen.id)

    def get_sweeper_tasks(self, sweeper: User) -> List[Complaint]:
        """Open complaints assigned to this sweeper."""
        return self.complaint_repo.list(
            assigned_sweeper_id=sweeper.id,
            exclude_status=ComplaintStatus.DONE,
        )

    def get_all_complaints(self, status_filter: Optional[ComplaintStatus] = None) -> List[Complaint]:
        """Every complaint, for the admin dashboard."""
        return self.complaint_repo.list(status=status_filter)

    def complaints_visible_to(self, user: User) -> List[Complaint]:
        """The slice of complaints a user's dashboard subscribes to."""
        if user.role == UserRole.ADMIN:
            return self.get_all_complaints()
        if user.role == UserRole.SWEEPER:
            return self.get_sweeper_tasks(user)
        return self.get_citizen_complaints(user)

    def get_stats(self) -> ComplaintStats:
        """Dashboard counters."""
        return ComplaintStats(
            total=self.complaint_repo.count(),
            pending=self.complaint_repo.count(exclude_status=ComplaintStatus.DONE),
            completed=self.complaint_repo.count(status=ComplaintStatus.DONE),
            high_priority=self.complaint_repo.count(
                exclude_status=ComplaintStatus.DONE,
                priority=ComplaintPriority.HIGH,
            ),
        )

    # ----- writes -----

    def create_complaint(
        self,
        reporter: User,
        category: ComplaintCategory,
        description: str,
        latitude: float,
        longitude: float,
        photo: Union[bytes, str],
        content_type: Optional[str],
    ) -> Complaint:
        """
        Report a new complaint.

        Priority is fixed here from the reported coordinate. The photo is
        uploaded before the record exists, so a failed upload creates nothing.

        Raises:
            HTTPException: If the photo upload fails
        """
        priority = classify_priority(latitude, longitude)
        complaint_id = generate_complaint_id()
        before_image = self._upload(photo, f"complaints/{complaint_id}/before", content_type)

        complaint = self.complaint_repo.create(
            id=complaint_id,
            user_id=reporter.id,
            user_name=reporter.name or "Citizen",
            category=category,
            description=description,
            before_image=before_image,
            latitude=latitude,
            longitude=longitude,
            status=ComplaintStatus.SUBMITTED,
            priority=priority,
        )
        logger.info(
            "complaint.created id=%s priority=%s category=%s",
            complaint.id, priority.value, category.value,
        )
        self.hub.publish(COMPLAINTS)
        return complaint

    def assign_sweeper(self, complaint_id: str, sweeper_id: int) -> Complaint:
        """
        Assign a sweeper (admin).

        Raises:
            HTTPException: If complaint or sweeper not found, or the complaint is closed
        """
        complaint = self.get_complaint(complaint_id)
        sweeper = self.user_repo.get_by_id(sweeper_id)
        if not sweeper or not sweeper.is_active:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Sweeper not found"
            )

        complaint = self._transition(complaint, lambda c: lifecycle.assign_sweeper(c, sweeper))
        logger.info("complaint.assigned id=%s sweeper_id=%s", complaint.id, sweeper.id)
        return complaint

    def submit_proof(self, complaint_id: str, sweeper: User, photo: Union[bytes, str],
                     content_type: Optional[str]) -> Complaint:
        """
        Upload the after-photo for a task (sweeper). Moves the complaint to review.

        Raises:
            HTTPException: If not found, not this sweeper's task, closed, or the upload fails
        """
        complaint = self.get_complaint(complaint_id)
        try:
            lifecycle.ensure_can_submit_proof(complaint, sweeper)
        except InvalidTransition as exc:
            raise _conflict(exc)

        after_image = self._upload(photo, f"complaints/{complaint.id}/after", content_type)
        complaint = self._transition(
            complaint, lambda c: lifecycle.submit_proof(c, sweeper, after_image)
        )
        logger.info("complaint.resolved id=%s sweeper_id=%s", complaint.id, sweeper.id)
        return complaint

    def approve(self, complaint_id: str) -> Complaint:
        """
        Approve a resolution and close the complaint (admin).

        Raises:
            HTTPException: If not found, or not in review with an after-photo
        """
        complaint = self.get_complaint(complaint_id)
        complaint = self._transition(complaint, lifecycle.approve)
        logger.info("complaint.approved id=%s", complaint.id)
        return complaint

    def leave_feedback(self, complaint_id: str, citizen: User, rating: FeedbackRating) -> Complaint:
        """
        Rate a closed complaint (reporting citizen, once).

        Raises:
            HTTPException: If not found, not closed, not the reporter, or already rated
        """
        complaint = self.get_complaint(complaint_id)
        if complaint.user_id != citizen.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only the reporting citizen can leave feedback"
            )
        complaint = self._transition(
            complaint, lambda c: lifecycle.record_feedback(c, citizen, rating)
        )
        logger.info("complaint.feedback id=%s rating=%s", complaint.id, rating.value)
        return complaint

    # ----- helpers -----

    def _transition(self, complaint: Complaint,
                    rule: Callable[[Complaint], Dict[str, Any]]) -> Complaint:
        try:
            updates = rule(complaint)
        except InvalidTransition as exc:
            raise _conflict(exc)

        complaint = self.complaint_repo.update(complaint, **updates)
        self.hub.publish(COMPLAINTS)
        return complaint

    def _upload(self, photo: Union[bytes, str], path: str, content_type: Optional[str]) -> str:
        if self.media is None:
            raise RuntimeError("ComplaintService needs a MediaService to upload photos")
        try:
            return self.media.upload_image(photo, path, content_type)
        except MediaUploadError as exc:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Photo upload failed: {exc}"
            )


def _conflict(exc: InvalidTransition) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
