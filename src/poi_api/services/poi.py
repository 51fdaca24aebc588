"""POI service - permission-checked use cases over the POI store."""

import logging
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from poi_api.errors import ForbiddenError, InvalidPOIError, NotFoundError
from poi_api.repositories.protocols import POIStore, UserStore
from poi_api.schemas.poi import POI, POICreate, POIExport, POIType, POIUpdate
from poi_api.schemas.user import User
from poi_api.services.permissions import Operation, can_mutate

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _validate(model: type[M], data: M | Mapping[str, Any]) -> M:
    """Coerce ``data`` into ``model``, reporting failures as InvalidPOIError."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        errors = [
            {"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]}
            for e in exc.errors(include_url=False, include_context=False, include_input=False)
        ]
        raise InvalidPOIError(errors=errors) from exc


class POIService:
    """Create, update, delete, list and export POIs on behalf of an actor.

    For update and delete the record is loaded first: a missing POI is
    reported as NotFoundError before the permission policy is consulted.
    """

    def __init__(
        self,
        pois: POIStore,
        users: UserStore,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.pois = pois
        self.users = users
        self.now = now

    async def create(self, actor: User, data: POICreate | Mapping[str, Any]) -> POI:
        """Create a POI owned by ``actor``."""
        poi_create = _validate(POICreate, data)
        actor = await self._resolve_actor(actor, Operation.CREATE)
        self._authorize(actor, None, Operation.CREATE)

        poi = await self.pois.create(poi_create, created_by=actor.id, now=self.now())
        logger.info("POI created: poi_id=%s type=%s actor=%s", poi.id, poi.type.value, actor.id)
        return poi

    async def get(self, poi_id: int) -> POI:
        """Get a single POI."""
        return await self._load(poi_id)

    async def update(
        self, actor: User, poi_id: int, patch: POIUpdate | Mapping[str, Any]
    ) -> POI:
        """Apply a partial update to an existing POI."""
        existing = await self._load(poi_id)
        poi_update = _validate(POIUpdate, patch)
        actor = await self._resolve_actor(actor, Operation.UPDATE)
        self._authorize(actor, existing, Operation.UPDATE)

        changes = poi_update.changes()
        updated = await self.pois.update(poi_id, changes, now=self.now())
        if updated is None:
            raise NotFoundError(f"POI {poi_id} not found")
        logger.info(
            "POI updated: poi_id=%s fields=%s actor=%s", poi_id, sorted(changes), actor.id
        )
        return updated

    async def delete(self, actor: User, poi_id: int) -> None:
        """Delete a POI.

        A second delete of the same id raises NotFoundError, as does a delete
        that finds the row already removed by a concurrent request.
        """
        existing = await self._load(poi_id)
        actor = await self._resolve_actor(actor, Operation.DELETE)
        self._authorize(actor, existing, Operation.DELETE)

        if not await self.pois.delete(poi_id):
            raise NotFoundError(f"POI {poi_id} not found")
        logger.info("POI deleted: poi_id=%s actor=%s", poi_id, actor.id)

    async def list_pois(self, poi_type: POIType | None = None) -> list[POI]:
        """All POIs, most recent first."""
        return await self.pois.list_pois(poi_type)

    async def export(self) -> list[POIExport]:
        """All POIs as normalized export records, most recent first."""
        pois = await self.pois.list_pois()
        return [POIExport.from_poi(p) for p in pois]

    async def _load(self, poi_id: int) -> POI:
        poi = await self.pois.get(poi_id)
        if poi is None:
            raise NotFoundError(f"POI {poi_id} not found")
        return poi

    async def _resolve_actor(self, actor: User, operation: Operation) -> User:
        # Re-read the actor so role changes take effect immediately
        current = await self.users.get_by_id(actor.id)
        if current is None:
            logger.warning("POI %s denied: unknown actor=%s", operation.value, actor.id)
            raise ForbiddenError(f"Insufficient permissions to {operation.value} POI")
        return current

    def _authorize(self, actor: User, poi: POI | None, operation: Operation) -> None:
        if not can_mutate(actor, poi, operation):
            logger.warning(
                "POI %s denied: poi_id=%s actor=%s role=%s",
                operation.value,
                poi.id if poi else None,
                actor.id,
                actor.role.value,
            )
            raise ForbiddenError(f"Insufficient permissions to {operation.value} POI")
