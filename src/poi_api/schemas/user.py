"""User and auth schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from poi_api.models.user import UserRole


class User(BaseModel):
    """A user as seen by the service layer (the acting user)."""

    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    role: UserRole = UserRole.VIEWER
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class UserBase(BaseModel):
    """Base user schema."""

    email: EmailStr


class UserCreate(UserBase):
    """User registration request."""

    password: str = Field(..., min_length=8, max_length=72)
    first_name: str | None = None
    last_name: str | None = None


class UserLogin(UserBase):
    """User login request."""

    password: str = Field(..., max_length=72)


class UserResponse(BaseModel):
    """User response schema. Never carries the password hash."""

    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    profile_image_url: str | None = None
    role: UserRole
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class SessionResponse(BaseModel):
    """Session response schema."""

    token: str
    expires_at: datetime


class AuthResponse(BaseModel):
    """Authentication response with user and session."""

    user: UserResponse
    session: SessionResponse
