"""
Complaint lifecycle rules.

    submitted --(admin assigns / sweeper uploads proof)--> review --(admin approves)--> done

Every function validates the transition against the current record and
returns the field updates to persist. Nothing here touches the database.
"""
from typing import Any, Dict

from swachhsnap.core.exceptions import InvalidTransition
from swachhsnap.models.complaint import Complaint, ComplaintStatus, FeedbackRating
from swachhsnap.models.user import User, UserRole


def assign_sweeper(complaint: Complaint, sweeper: User) -> Dict[str, Any]:
    """Admin hands a complaint to a sweeper; the complaint enters review."""
    if sweeper.role != UserRole.SWEEPER:
        raise InvalidTransition(f"User {sweeper.id} is not a sweeper")
    if complaint.status == ComplaintStatus.DONE:
        raise InvalidTransition(f"Complaint {complaint.id} is already closed")

    return {
        "status": ComplaintStatus.REVIEW,
        "assigned_sweeper_id": sweeper.id,
        "assigned_sweeper_name": sweeper.name,
    }


def ensure_can_submit_proof(complaint: Complaint, sweeper: User) -> None:
    """
    Check that a sweeper may upload an after-photo for this complaint.

    Raises:
        InvalidTransition: If the complaint is closed or belongs to another sweeper
    """
    if complaint.status == ComplaintStatus.DONE:
        raise InvalidTransition(f"Complaint {complaint.id} is already closed")
    if complaint.assigned_sweeper_id is not None and complaint.assigned_sweeper_id != sweeper.id:
        raise InvalidTransition(f"Complaint {complaint.id} is assigned to another sweeper")


def submit_proof(complaint: Complaint, sweeper: User, after_image: str) -> Dict[str, Any]:
    """Sweeper uploads resolution proof; the complaint enters (or stays in) review."""
    ensure_can_submit_proof(complaint, sweeper)
    if not after_image:
        raise InvalidTransition("An after-photo URL is required")

    return {
        "status": ComplaintStatus.REVIEW,
        "after_image": after_image,
        "assigned_sweeper_id": sweeper.id,
        "assigned_sweeper_name": sweeper.name,
    }


def approve(complaint: Complaint) -> Dict[str, Any]:
    """Admin closes a complaint. Requires review status and an after-photo."""
    if complaint.status != ComplaintStatus.REVIEW:
        raise InvalidTransition(
            f"Complaint {complaint.id} cannot be approved from status '{complaint.status.value}'"
        )
    if not complaint.after_image:
        raise InvalidTransition(f"Complaint {complaint.id} has no after-photo to approve")

    return {"status": ComplaintStatus.DONE}


def record_feedback(complaint: Complaint, citizen: User, rating: FeedbackRating) -> Dict[str, Any]:
    """The original reporter rates a closed complaint, once."""
    if complaint.user_id != citizen.id:
        raise InvalidTransition("Only the reporting citizen can leave feedback")
    if complaint.status != ComplaintStatus.DONE:
        raise InvalidTransition(f"Complaint {complaint.id} is not closed yet")
    if complaint.feedback is not None:
        raise InvalidTransition(f"Feedback for complaint {complaint.id} was already submitted")

    return {"feedback": rating}
