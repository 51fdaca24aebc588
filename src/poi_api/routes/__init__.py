"""API routes for the POI map."""

from poi_api.routes.pois import router as pois_router

__all__ = [
    "pois_router",
]
