"""Storage contracts the POI service depends on.

The SQLAlchemy repositories in this package implement them; tests swap in
in-memory versions.
"""

from datetime import datetime
from typing import Any, Protocol

from poi_api.models.user import UserRole
from poi_api.schemas.poi import POI, POICreate, POIType
from poi_api.schemas.user import User


class POIStore(Protocol):
    """Persistence for Points of Interest."""

    async def create(self, data: POICreate, created_by: str, now: datetime) -> POI:
        """Insert a POI owned by ``created_by`` and return it with its id."""
        ...

    async def get(self, poi_id: int) -> POI | None:
        """Fetch one POI, or None if absent."""
        ...

    async def list_pois(self, poi_type: POIType | None = None) -> list[POI]:
        """All POIs, most recently created first."""
        ...

    async def update(self, poi_id: int, changes: dict[str, Any], now: datetime) -> POI | None:
        """Apply ``changes`` and bump ``updated_at``; None if the row is gone."""
        ...

    async def delete(self, poi_id: int) -> bool:
        """Remove a POI; True only if a row was removed."""
        ...


class UserStore(Protocol):
    """Read lookups (and registration) for users."""

    async def get_by_id(self, user_id: str) -> User | None: ...

    async def get_by_email(self, email: str) -> User | None: ...

    async def create(
        self,
        email: str,
        password_hash: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        role: UserRole = UserRole.VIEWER,
    ) -> User: ...
