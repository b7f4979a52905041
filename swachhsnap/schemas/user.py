"""User schemas."""
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from datetime import datetime

from swachhsnap.models.user import UserRole


class UserBase(BaseModel):
    """Base user schema."""
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


SELF_SERVICE_ROLES = (UserRole.CITIZEN, UserRole.SWEEPER)


class UserCreate(UserBase):
    """Account created by an admin; any role."""
    password: str = Field(..., min_length=6)
    role: UserRole = UserRole.CITIZEN


class UserRegister(UserCreate):
    """Public sign-up payload. Admin accounts are only created by admins."""

    @field_validator("role")
    @classmethod
    def self_service_role(cls, value: UserRole) -> UserRole:
        if value not in SELF_SERVICE_ROLES:
            raise ValueError("Only citizen and sweeper accounts can sign up")
        return value


class UserResponse(UserBase):
    """User response."""
    id: int
    role: UserRole
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SweeperInfo(BaseModel):
    """Minimal sweeper info for the assignment picker."""
    id: int
    name: str
    email: str
    model_config = ConfigDict(from_attributes=True)


class Token(BaseModel):
    """JWT token."""
    access_token: str
    token_type: str = "bearer"


class LoginResponse(Token):
    """Token plus the authenticated user."""
    user: UserResponse
