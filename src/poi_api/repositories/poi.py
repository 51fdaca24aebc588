"""POI repository - data access for Points of Interest."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from poi_api.models.poi import POI as POIModel
from poi_api.schemas.poi import POI, POICreate, POIType


def _ensure_utc(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware (UTC). SQLite returns naive datetimes."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


class POIRepository:
    """SQLAlchemy-backed POI storage bound to one session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: POICreate, created_by: str, now: datetime) -> POI:
        """Create a new POI."""
        poi = POIModel(
            name=data.name,
            type=data.type.value,
            description=data.description,
            latitude=data.latitude,
            longitude=data.longitude,
            created_by=created_by,
            created_at=now,
            updated_at=now,
        )
        self.db.add(poi)
        await self.db.commit()
        await self.db.refresh(poi)
        return _to_schema(poi)

    async def get(self, poi_id: int) -> POI | None:
        """Get a POI by ID."""
        poi = await self._load(poi_id)
        if poi is None:
            return None
        return _to_schema(poi)

    async def list_pois(self, poi_type: POIType | None = None) -> list[POI]:
        """List all POIs, most recent first, optionally filtered by type."""
        query = select(POIModel)
        if poi_type is not None:
            query = query.where(POIModel.type == poi_type.value)
        query = query.order_by(POIModel.created_at.desc(), POIModel.id.desc())
        result = await self.db.execute(query)
        return [_to_schema(p) for p in result.scalars().all()]

    async def update(self, poi_id: int, changes: dict[str, Any], now: datetime) -> POI | None:
        """Update the supplied fields of a POI."""
        poi = await self._load(poi_id)
        if poi is None:
            return None

        for field, value in changes.items():
            setattr(poi, field, value)
        poi.updated_at = now

        await self.db.commit()
        await self.db.refresh(poi)
        return _to_schema(poi)

    async def delete(self, poi_id: int) -> bool:
        """Delete a POI. Returns False if no row was removed."""
        result = await self.db.execute(delete(POIModel).where(POIModel.id == poi_id))
        await self.db.commit()
        return (result.rowcount or 0) > 0

    async def _load(self, poi_id: int) -> POIModel | None:
        result = await self.db.execute(select(POIModel).where(POIModel.id == poi_id))
        return result.scalar_one_or_none()


def _to_schema(poi: POIModel) -> POI:
    """Convert SQLAlchemy model to Pydantic schema."""
    return POI(
        id=poi.id,
        name=poi.name,
        type=poi.type,
        description=poi.description,
        latitude=float(poi.latitude),
        longitude=float(poi.longitude),
        created_by=poi.created_by,
        created_at=_ensure_utc(poi.created_at),
        updated_at=_ensure_utc(poi.updated_at),
    )
