"""Shared API dependencies: current user, role gates, upload backend."""
from typing import Annotated, Optional, Tuple, Union
from fastapi import Depends, HTTPException, UploadFile, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from swachhsnap.core.database import get_db
from swachhsnap.core.security import decode_access_token
from swachhsnap.models.user import User, UserRole
from swachhsnap.repositories.user_repository import UserRepository
from swachhsnap.services.media_service import MediaService, MediaStorage, get_media_storage

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def resolve_user_from_token(token: str, db: Session) -> Optional[User]:
    """Look up the active user a token belongs to, or None."""
    payload = decode_access_token(token)
    if not payload or not payload.get("sub"):
        return None

    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        return None

    user = UserRepository(db).get_by_id(user_id)
    if not user or not user.is_active:
        return None
    return user


def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Resolve the authenticated user from the bearer token."""
    user = resolve_user_from_token(token, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_role(*roles: UserRole):
    """Build a dependency that only lets the given roles through."""

    def checker(current_user: Annotated[User, Depends(get_current_user)]) -> User:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not enough permissions"
            )
        return current_user

    return checker


def get_media_service(
    storage: Annotated[MediaStorage, Depends(get_media_storage)],
) -> MediaService:
    return MediaService(storage)


def read_photo(photo: Optional[UploadFile], photo_data_url: Optional[str]) -> Tuple[Union[bytes, str], Optional[str]]:
    """Take the captured image from a file part or a base64 data URL field."""
    if photo is not None:
        return photo.file.read(), photo.content_type
    if photo_data_url:
        return photo_data_url, None
    raise HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail="A photo is required"
    )


AnyUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_role(UserRole.ADMIN))]
SweeperUser = Annotated[User, Depends(require_role(UserRole.SWEEPER))]
CitizenUser = Annotated[User, Depends(require_role(UserRole.CITIZEN))]
Media = Annotated[MediaService, Depends(get_media_service)]
