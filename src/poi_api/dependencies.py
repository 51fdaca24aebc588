"""FastAPI dependencies for the POI map API."""

from datetime import UTC, datetime

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from poi_api.config import settings
from poi_api.database import get_db
from poi_api.models import Session
from poi_api.repositories import POIRepository, UserRepository
from poi_api.schemas import User
from poi_api.services import POIService

# Placeholder user ID for development mode
DEV_USER_ID = "00000000-0000-0000-0000-000000000001"


def parse_bearer_token(authorization: str | None) -> str:
    """Extract the token from an ``Authorization: Bearer`` header or raise 401."""
    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return authorization[7:]


async def get_current_user_id(
    authorization: str | None = Header(default=None),
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
    db: AsyncSession = Depends(get_db),
) -> str:
    """
    Get the current authenticated user ID.

    In dev mode (AUTH_MODE=dev):
        - Accepts X-User-Id header for testing
        - Falls back to DEV_USER_ID if no header provided

    In production mode (AUTH_MODE=production):
        - Requires Authorization: Bearer <token> header
        - Validates token against session database
        - Returns 401 if invalid or expired
    """
    if settings.auth_mode == "dev":
        if x_user_id is not None:
            user_id = x_user_id.strip()
            if not user_id:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Invalid user ID format",
                )
            return user_id
        return DEV_USER_ID

    token = parse_bearer_token(authorization)

    result = await db.execute(
        select(Session).where(Session.token == token).where(Session.expires_at > datetime.now(UTC))
    )
    session = result.scalar_one_or_none()

    if not session:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired session token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return session.user_id


async def get_current_user(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Get the current authenticated user with its role.

    Returns 401 if the session points at a user that no longer exists.
    """
    user = await UserRepository(db).get_by_id(user_id)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return user


async def get_poi_service(db: AsyncSession = Depends(get_db)) -> POIService:
    """Build a POI service bound to the request's database session."""
    return POIService(pois=POIRepository(db), users=UserRepository(db))
