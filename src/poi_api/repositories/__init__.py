"""Data access layer for the POI map API."""

from poi_api.repositories.poi import POIRepository
from poi_api.repositories.protocols import POIStore, UserStore
from poi_api.repositories.user import UserRepository

__all__ = [
    "POIRepository",
    "POIStore",
    "UserRepository",
    "UserStore",
]
