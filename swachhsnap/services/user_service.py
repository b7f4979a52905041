"""Account service."""
import logging
from typing import List, Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from swachhsnap.core.security import get_password_hash
from swachhsnap.repositories.user_repository import UserRepository
from swachhsnap.models.user import User, UserRole
from swachhsnap.schemas.user import UserCreate


logger = logging.getLogger(__name__)


class UserService:
    """Citizen, sweeper and admin accounts."""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)

    def create_user(self, user_data: UserCreate) -> User:
        """
        Open an account. Emails are unique regardless of case.

        Raises:
            HTTPException: If the email is already registered
        """
        email = user_data.email.lower()
        if self.user_repo.exists_by_email(email):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Email already registered"
            )

        user = self.user_repo.create(
            email=email,
            hashed_password=get_password_hash(user_data.password),
            name=user_data.name.strip(),
            role=user_data.role,
        )
        logger.info("user.created id=%s role=%s", user.id, user.role.value)
        return user

    def get_user(self, user_id: int) -> User:
        """
        Look up an account.

        Raises:
            HTTPException: If there is no such account
        """
        user = self.user_repo.get_by_id(user_id)
        if user is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found"
            )
        return user

    def get_users(self, skip: int = 0, limit: int = 100,
                  role: Optional[UserRole] = None,
                  is_active: Optional[bool] = None) -> List[User]:
        return self.user_repo.get_all(skip=skip, limit=limit, role=role, is_active=is_active)

    def get_sweepers(self) -> List[User]:
        """Active sweepers an admin can hand complaints to."""
        return self.user_repo.get_all(limit=1000, role=UserRole.SWEEPER, is_active=True)
