"""User repository."""
from typing import List, Optional
from sqlalchemy.orm import Session

from swachhsnap.models.user import User, UserRole


class UserRepository:
    """Data access for users."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.lower()).first()

    def exists_by_email(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def get_all(self, skip: int = 0, limit: int = 100,
                role: Optional[UserRole] = None,
                is_active: Optional[bool] = None) -> List[User]:
        query = self.db.query(User)
        if role is not None:
            query = query.filter(User.role == role)
        if is_active is not None:
            query = query.filter(User.is_active == is_active)
        return query.order_by(User.name.asc()).offset(skip).limit(limit).all()

    def create(self, **fields) -> User:
        user = User(**fields)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user
