"""Permission policy for POI mutations.

Rules:

- Create: any role except Viewer.
- Update / Delete: Admin always; Editor only on POIs they created;
  Viewer never.

Existence is checked by the caller before the policy runs, so a missing POI
is reported as not found rather than forbidden.
"""

from enum import Enum

from poi_api.models.user import UserRole
from poi_api.schemas.poi import POI
from poi_api.schemas.user import User


class Operation(str, Enum):
    """Mutations governed by the policy."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


def can_mutate(actor: User, poi: POI | None, operation: Operation) -> bool:
    """Decide whether ``actor`` may perform ``operation`` on ``poi``."""
    if actor.role == UserRole.VIEWER:
        return False

    if operation == Operation.CREATE:
        return True

    if poi is None:
        return False

    if actor.role == UserRole.ADMIN:
        return True

    return poi.created_by == actor.id
