"""POI CRUD and export endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from poi_api.config import settings
from poi_api.dependencies import get_current_user, get_poi_service
from poi_api.schemas import POI, POICreate, POIExport, POIType, User
from poi_api.services import POIService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pois", tags=["pois"])


@router.get("", response_model=list[POI])
async def list_pois(
    poi_type: POIType | None = Query(default=None, alias="type", description="Filter by POI type"),
    service: POIService = Depends(get_poi_service),
    user: User = Depends(get_current_user),
) -> list[POI]:
    """List all POIs, most recent first, optionally filtered by type."""
    return await service.list_pois(poi_type)


@router.post("", response_model=POI, status_code=status.HTTP_201_CREATED)
async def create_poi(
    poi_create: POICreate,
    service: POIService = Depends(get_poi_service),
    user: User = Depends(get_current_user),
) -> POI:
    """Create a new POI owned by the current user. Viewers get 403."""
    return await service.create(user, poi_create)


# Declared before /{poi_id} so "export" is not parsed as an id
@router.get(
    "/export",
    response_model=list[POIExport],
    responses={200: {"description": "JSON file download"}},
)
async def export_pois(
    service: POIService = Depends(get_poi_service),
    user: User = Depends(get_current_user),
) -> JSONResponse:
    """Download every POI as a JSON attachment."""
    records = await service.export()
    logger.info("POI export: count=%s actor=%s", len(records), user.id)
    return JSONResponse(
        content=jsonable_encoder(records),
        headers={
            "Content-Disposition": f"attachment; filename={settings.export_filename}",
        },
    )


@router.get("/{poi_id}", response_model=POI)
async def get_poi(
    poi_id: int,
    service: POIService = Depends(get_poi_service),
    user: User = Depends(get_current_user),
) -> POI:
    """Get a POI by ID."""
    return await service.get(poi_id)


@router.put("/{poi_id}", response_model=POI)
async def update_poi(
    poi_id: int,
    patch: dict[str, Any] = Body(...),
    service: POIService = Depends(get_poi_service),
    user: User = Depends(get_current_user),
) -> POI:
    """Update a POI. Editors may only update POIs they created.

    The body is validated by the service after the POI is loaded, so a
    missing id is 404 whatever the payload.
    """
    return await service.update(user, poi_id, patch)


@router.delete("/{poi_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_poi(
    poi_id: int,
    service: POIService = Depends(get_poi_service),
    user: User = Depends(get_current_user),
) -> Response:
    """Delete a POI. Editors may only delete POIs they created."""
    await service.delete(user, poi_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
