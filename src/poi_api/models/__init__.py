"""SQLAlchemy models for the POI map database."""

from poi_api.models.poi import POI, POIType
from poi_api.models.user import Session, User, UserRole

__all__ = [
    "POI",
    "POIType",
    "Session",
    "User",
    "UserRole",
]
