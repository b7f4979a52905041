import pytest

from swachhsnap.core.exceptions import InvalidTransition
from swachhsnap.models import Complaint, ComplaintStatus, FeedbackRating, User, UserRole
from swachhsnap.services import lifecycle


def _user(user_id, role, name="Someone"):
    return User(id=user_id, role=role, name=name, email=f"u{user_id}@swachhsnap.in")


def _complaint(**overrides):
    fields = dict(
        id="CMP-TEST01",
        user_id=1,
        user_name="John Doe",
        status=ComplaintStatus.SUBMITTED,
        after_image=None,
        assigned_sweeper_id=None,
        assigned_sweeper_name=None,
        feedback=None,
    )
    fields.update(overrides)
    return Complaint(**fields)


CITIZEN = _user(1, UserRole.CITIZEN, "John Doe")
SWEEPER = _user(2, UserRole.SWEEPER, "Rajesh Kumar")
OTHER_SWEEPER = _user(3, UserRole.SWEEPER, "Meena Das")


def test_assign_moves_to_review():
    updates = lifecycle.assign_sweeper(_complaint(), SWEEPER)
    assert updates == {
        "status": ComplaintStatus.REVIEW,
        "assigned_sweeper_id": 2,
        "assigned_sweeper_name": "Rajesh Kumar",
    }


def test_reassign_while_in_review():
    complaint = _complaint(status=ComplaintStatus.REVIEW, assigned_sweeper_id=2)
    assert lifecycle.assign_sweeper(complaint, OTHER_SWEEPER)["assigned_sweeper_id"] == 3


def test_assign_requires_sweeper_role():
    with pytest.raises(InvalidTransition):
        lifecycle.assign_sweeper(_complaint(), CITIZEN)


def test_assign_rejected_once_done():
    complaint = _complaint(status=ComplaintStatus.DONE, after_image="https://cdn.test/a", assigned_sweeper_id=2)
    with pytest.raises(InvalidTransition):
        lifecycle.assign_sweeper(complaint, OTHER_SWEEPER)


def test_proof_on_unassigned_complaint_self_assigns():
    updates = lifecycle.submit_proof(_complaint(), SWEEPER, "https://cdn.test/after")
    assert updates["status"] == ComplaintStatus.REVIEW
    assert updates["after_image"] == "https://cdn.test/after"
    assert updates["assigned_sweeper_id"] == SWEEPER.id


def test_proof_can_be_replaced_while_in_review():
    complaint = _complaint(status=ComplaintStatus.REVIEW, assigned_sweeper_id=2, after_image="https://cdn.test/old")
    updates = lifecycle.submit_proof(complaint, SWEEPER, "https://cdn.test/new")
    assert updates["after_image"] == "https://cdn.test/new"


def test_proof_by_another_sweeper_is_rejected():
    complaint = _complaint(status=ComplaintStatus.REVIEW, assigned_sweeper_id=2)
    with pytest.raises(InvalidTransition, match="another sweeper"):
        lifecycle.ensure_can_submit_proof(complaint, OTHER_SWEEPER)


def test_proof_rejected_once_done():
    complaint = _complaint(status=ComplaintStatus.DONE, after_image="https://cdn.test/a", assigned_sweeper_id=2)
    with pytest.raises(InvalidTransition):
        lifecycle.submit_proof(complaint, SWEEPER, "https://cdn.test/b")


def test_proof_requires_url():
    with pytest.raises(InvalidTransition):
        lifecycle.submit_proof(_complaint(), SWEEPER, "")


def test_approve_closes_reviewed_complaint():
    complaint = _complaint(status=ComplaintStatus.REVIEW, after_image="https://cdn.test/a", assigned_sweeper_id=2)
    assert lifecycle.approve(complaint) == {"status": ComplaintStatus.DONE}


def test_approve_without_after_photo_is_rejected():
    complaint = _complaint(status=ComplaintStatus.REVIEW, assigned_sweeper_id=2)
    with pytest.raises(InvalidTransition, match="no after-photo"):
        lifecycle.approve(complaint)


@pytest.mark.parametrize("status", [ComplaintStatus.SUBMITTED, ComplaintStatus.DONE])
def test_approve_only_from_review(status):
    complaint = _complaint(status=status, after_image="https://cdn.test/a")
    with pytest.raises(InvalidTransition):
        lifecycle.approve(complaint)


def test_feedback_on_closed_complaint():
    complaint = _complaint(status=ComplaintStatus.DONE, after_image="https://cdn.test/a")
    assert lifecycle.record_feedback(complaint, CITIZEN, FeedbackRating.GOOD) == {"feedback": FeedbackRating.GOOD}


def test_feedback_before_closure_is_rejected():
    with pytest.raises(InvalidTransition):
        lifecycle.record_feedback(_complaint(status=ComplaintStatus.REVIEW), CITIZEN, FeedbackRating.POOR)


def test_feedback_only_once():
    complaint = _complaint(status=ComplaintStatus.DONE, after_image="https://cdn.test/a", feedback=FeedbackRating.AVG)
    with pytest.raises(InvalidTransition, match="already"):
        lifecycle.record_feedback(complaint, CITIZEN, FeedbackRating.GOOD)


def test_feedback_only_from_reporter():
    complaint = _complaint(status=ComplaintStatus.DONE, after_image="https://cdn.test/a")
    stranger = _user(9, UserRole.CITIZEN)
    with pytest.raises(InvalidTransition):
        lifecycle.record_feedback(complaint, stranger, FeedbackRating.GOOD)
