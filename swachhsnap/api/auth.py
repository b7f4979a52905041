"""Session router."""
from typing import Annotated
from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from swachhsnap.core.database import get_db
from swachhsnap.services.auth_service import AuthService
from swachhsnap.schemas.user import LoginResponse, UserRegister, UserResponse
from swachhsnap.api.dependencies import AnyUser

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=LoginResponse, status_code=201)
def register(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)]
):
    """
    Create a citizen or sweeper account and sign it in.
    """
    return AuthService(db).register(user_data)


@router.post("/login", response_model=LoginResponse)
def login(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: Annotated[Session, Depends(get_db)]
):
    """
    Sign in with the OAuth2 password form; `username` carries the email.

    The response includes the account so the client can open the dashboard
    for its role.
    """
    return AuthService(db).login(form_data.username, form_data.password)


@router.post("/logout")
def logout(current_user: AnyUser):
    """
    Sign out. Tokens are stateless, so the client just drops its copy.
    """
    return {"message": "Successfully logged out"}


@router.get("/me", response_model=UserResponse)
def who_am_i(current_user: AnyUser):
    """
    The account behind the bearer token; clients poll this to restore a session.
    """
    return current_user
