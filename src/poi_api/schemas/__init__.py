"""Pydantic schemas for API request/response models."""

from poi_api.schemas.poi import (
    POI,
    Location,
    POICreate,
    POIExport,
    POIType,
    POIUpdate,
)
from poi_api.schemas.user import (
    AuthResponse,
    SessionResponse,
    User,
    UserCreate,
    UserLogin,
    UserResponse,
    UserRole,
)

__all__ = [
    # POI
    "POI",
    "POICreate",
    "POIUpdate",
    "POIExport",
    "POIType",
    "Location",
    # User/Auth
    "User",
    "UserRole",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "SessionResponse",
    "AuthResponse",
]
