"""Account directory router."""
from typing import Annotated, List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from swachhsnap.core.database import get_db
from swachhsnap.services.user_service import UserService
from swachhsnap.schemas.user import UserCreate, UserResponse
from swachhsnap.models.user import UserRole
from swachhsnap.api.dependencies import AdminUser, AnyUser

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=UserResponse, status_code=201)
def create_account(
    user_data: UserCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: AdminUser
):
    """
    Open an account with any role, including other admins (admin).
    """
    return UserService(db).create_user(user_data)


@router.get("/me", response_model=UserResponse)
def read_profile(current_user: AnyUser):
    """
    Profile of the signed-in citizen, sweeper or admin.
    """
    return current_user


@router.get("", response_model=List[UserResponse])
def list_accounts(
    db: Annotated[Session, Depends(get_db)],
    current_user: AdminUser,
    role: Optional[UserRole] = None,
    is_active: Optional[bool] = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
):
    """
    Accounts ordered by name, optionally only one role (admin).
    """
    return UserService(db).get_users(skip=skip, limit=limit, role=role, is_active=is_active)


@router.get("/{user_id}", response_model=UserResponse)
def read_account(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: AdminUser
):
    """
    A single account, e.g. the reporter or sweeper behind a complaint (admin).
    """
    return UserService(db).get_user(user_id)
