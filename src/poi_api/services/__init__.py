"""Business logic for the POI map API."""

from poi_api.services.permissions import Operation, can_mutate
from poi_api.services.poi import POIService

__all__ = [
    "Operation",
    "POIService",
    "can_mutate",
]
