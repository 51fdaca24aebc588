"""POI schemas - request, response and export shapes for Points of Interest."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from poi_api.models.poi import POIType

EXPORT_ID_PREFIX = "poi-"

# Fields that may never be cleared by an update
REQUIRED_FIELDS = ("name", "type", "latitude", "longitude")


def _clean_name(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("name must not be blank")
    return v


def _reject_bool(v: Any) -> Any:
    # bool is an int subclass and lax float parsing would store true as 1.0
    if isinstance(v, bool):
        raise ValueError("coordinate must be a number, not a boolean")
    return v


class POICreate(BaseModel):
    """Request model for creating a new POI."""

    name: str = Field(..., min_length=1, description="Display name for the POI")
    type: POIType
    description: str | None = None
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)

    @field_validator("name")
    @classmethod
    def clean_name(cls, v: str) -> str:
        return _clean_name(v)

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def reject_booleans(cls, v: Any) -> Any:
        return _reject_bool(v)


class POIUpdate(BaseModel):
    """Request model for a partial POI update.

    Only fields present in the payload are validated and applied. Sending
    ``null`` clears ``description``; it is rejected for every other field.
    """

    name: str | None = Field(default=None, min_length=1)
    type: POIType | None = None
    description: str | None = None
    latitude: float | None = Field(default=None, ge=-90, le=90, allow_inf_nan=False)
    longitude: float | None = Field(default=None, ge=-180, le=180, allow_inf_nan=False)

    @field_validator("name")
    @classmethod
    def clean_name(cls, v: str | None) -> str | None:
        return _clean_name(v)

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def reject_booleans(cls, v: Any) -> Any:
        return _reject_bool(v)

    @model_validator(mode="after")
    def reject_cleared_required_fields(self) -> "POIUpdate":
        for field in REQUIRED_FIELDS:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Return only the supplied fields, with enums reduced to their values."""
        return self.model_dump(mode="json", exclude_unset=True)


class POI(BaseModel):
    """A Point of Interest as stored."""

    id: int
    name: str
    type: POIType
    description: str | None = None
    latitude: float
    longitude: float
    created_by: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class Location(BaseModel):
    """Geographic position of an exported POI."""

    lat: float
    lng: float


class POIExport(BaseModel):
    """Normalized record used by the bulk JSON download.

    Field order is part of the download format.
    """

    id: str
    type: POIType
    name: str
    description: str | None
    location: Location
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_poi(cls, poi: POI) -> "POIExport":
        return cls(
            id=f"{EXPORT_ID_PREFIX}{poi.id}",
            type=poi.type,
            name=poi.name,
            description=poi.description,
            location=Location(lat=float(poi.latitude), lng=float(poi.longitude)),
            created_at=poi.created_at,
            updated_at=poi.updated_at,
        )
