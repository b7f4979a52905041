"""Sign-in and registration."""
import logging
from datetime import timedelta
from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from swachhsnap.core.security import verify_password, create_access_token
from swachhsnap.core.config import settings
from swachhsnap.repositories.user_repository import UserRepository
from swachhsnap.models.user import User
from swachhsnap.schemas.user import LoginResponse, UserRegister, UserResponse
from swachhsnap.services.user_service import UserService


logger = logging.getLogger(__name__)


class AuthService:
    """Issues session tokens for citizens, sweepers and admins."""

    def __init__(self, db: Session):
        self.db = db
        self.user_repo = UserRepository(db)

    def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """Return the active account matching the credentials, or None."""
        user = self.user_repo.get_by_email(email)
        if user is None or not user.is_active:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    def login(self, email: str, password: str) -> LoginResponse:
        """
        Start a session.

        Raises:
            HTTPException: 401 if the credentials are wrong or the account is disabled
        """
        user = self.authenticate_user(email, password)
        if user is None:
            logger.info("auth.login.failed email=%s", email.lower())
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect email or password",
                headers={"WWW-Authenticate": "Bearer"},
            )

        logger.info("auth.login id=%s role=%s", user.id, user.role.value)
        return self._session_for(user)

    def register(self, user_data: UserRegister) -> LoginResponse:
        """Open an account and start its first session."""
        user = UserService(self.db).create_user(user_data)
        return self._session_for(user)

    def _session_for(self, user: User) -> LoginResponse:
        access_token = create_access_token(
            data={"sub": str(user.id), "role": user.role.value},
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )
        return LoginResponse(access_token=access_token, user=UserResponse.model_validate(user))
