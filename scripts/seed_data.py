"""Seed the database with demo accounts, complaints and a volunteer event."""
from datetime import datetime, timedelta, timezone

from swachhsnap.core.database import SessionLocal, engine, Base
from swachhsnap.core.security import get_password_hash
from swachhsnap.models import (
    Complaint,
    ComplaintCategory,
    ComplaintPriority,
    ComplaintStatus,
    EventParticipant,
    FeedbackRating,
    User,
    UserRole,
    VolunteerEvent,
)

SAMPLE_BEFORE = "https://images.unsplash.com/photo-1530587191325-3db32d826c18?w=800"
SAMPLE_ROAD = "https://images.unsplash.com/photo-1515162816999-a0c47dc192f7?w=800"
SAMPLE_AFTER = "https://images.unsplash.com/photo-1596524430615-b46475ddff6e?w=800"


def seed_users(db):
    """Create one account per role."""
    users = {
        "admin": User(
            email="admin@swachhsnap.in",
            hashed_password=get_password_hash("admin123"),
            name="Ward Admin",
            role=UserRole.ADMIN,
        ),
        "sweeper": User(
            email="rajesh@swachhsnap.in",
            hashed_password=get_password_hash("sweeper123"),
            name="Rajesh Kumar",
            role=UserRole.SWEEPER,
        ),
        "citizen": User(
            email="john@swachhsnap.in",
            hashed_password=get_password_hash("citizen123"),
            name="John Doe",
            role=UserRole.CITIZEN,
        ),
    }
    db.add_all(users.values())
    db.flush()
    return users


def seed_complaints(db, citizen, sweeper):
    """An open high-priority report next to City Hospital and a closed one."""
    now = datetime.now(timezone.utc)
    db.add_all([
        Complaint(
            id="CMP-X72A1B",
            user_id=citizen.id,
            user_name=citizen.name,
            category=ComplaintCategory.GARBAGE,
            description="Overflowing garbage bins near the hospital entrance.",
            before_image=SAMPLE_BEFORE,
            latitude=12.9716,
            longitude=77.5946,
            status=ComplaintStatus.SUBMITTED,
            priority=ComplaintPriority.HIGH,
            created_at=now - timedelta(hours=2),
        ),
        Complaint(
            id="CMP-Y91Z3C",
            user_id=citizen.id,
            user_name=citizen.name,
            category=ComplaintCategory.ROAD,
            description="Large pothole on the main road.",
            before_image=SAMPLE_ROAD,
            after_image=SAMPLE_AFTER,
            latitude=12.9250,
            longitude=77.5838,
            status=ComplaintStatus.DONE,
            priority=ComplaintPriority.NORMAL,
            assigned_sweeper_id=sweeper.id,
            assigned_sweeper_name=sweeper.name,
            feedback=FeedbackRating.GOOD,
            created_at=now - timedelta(days=1),
        ),
    ])


def seed_events(db, admin, citizen):
    """A lakeside clean-up two days out with the demo citizen signed up."""
    event = VolunteerEvent(
        id="EVT-001",
        title="Lakeside Cleanup Drive",
        date=datetime.now(timezone.utc) + timedelta(days=2),
        latitude=12.9279,
        longitude=77.6271,
        description="Join us to clean the lake shore. Gloves and bags provided.",
        created_by=admin.id,
    )
    db.add(event)
    db.flush()
    db.add(EventParticipant(event_id=event.id, user_id=citizen.id))


def seed():
    db = SessionLocal()

    try:
        if db.query(User).first():
            print("Data already exists. Skipping seed.")
            return

        users = seed_users(db)
        seed_complaints(db, users["citizen"], users["sweeper"])
        seed_events(db, users["admin"], users["citizen"])
        db.commit()

        print("Seeded demo data:")
        print("  - admin@swachhsnap.in (password: admin123)")
        print("  - rajesh@swachhsnap.in (password: sweeper123)")
        print("  - john@swachhsnap.in (password: citizen123)")
        print("  - complaints CMP-X72A1B, CMP-Y91Z3C and event EVT-001")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    # Create tables if they don't exist
    Base.metadata.create_all(bind=engine)

    seed()
