"""Authentication router."""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Annotated

import bcrypt
from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from poi_api.config import settings
from poi_api.database import get_db
from poi_api.dependencies import get_current_user, parse_bearer_token
from poi_api.models import Session
from poi_api.repositories import UserRepository
from poi_api.schemas import (
    AuthResponse,
    SessionResponse,
    User,
    UserCreate,
    UserLogin,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash."""
    return bcrypt.checkpw(password.encode(), password_hash.encode())


def generate_session_token() -> str:
    """Generate a secure random session token."""
    return secrets.token_hex(32)


async def _start_session(db: AsyncSession, user_id: str) -> SessionResponse:
    token = generate_session_token()
    expires_at = datetime.now(UTC) + timedelta(days=settings.session_expire_days)
    db.add(Session(user_id=user_id, token=token, expires_at=expires_at))
    await db.commit()
    return SessionResponse(token=token, expires_at=expires_at)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    """Register a new user. New accounts are Viewers."""
    users = UserRepository(db)
    if await users.get_by_email(user_data.email) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    try:
        user = await users.create(
            email=user_data.email,
            password_hash=hash_password(user_data.password),
            first_name=user_data.first_name,
            last_name=user_data.last_name,
        )
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    session = await _start_session(db, user.id)
    logger.info("User registered: user_id=%s", user.id)

    return AuthResponse(user=UserResponse.model_validate(user), session=session)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    """Login with email and password."""
    found = await UserRepository(db).get_with_password_hash(credentials.email)

    if found is None or found[1] is None or not verify_password(credentials.password, found[1]):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    user, _ = found
    session = await _start_session(db, user.id)

    return AuthResponse(user=UserResponse.model_validate(user), session=session)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    authorization: Annotated[str | None, Header()] = None,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Logout and invalidate the current session."""
    token = parse_bearer_token(authorization)

    result = await db.execute(select(Session).where(Session.token == token))
    session = result.scalar_one_or_none()

    if not session:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid session token",
        )

    await db.delete(session)
    await db.commit()


@router.get("/user", response_model=UserResponse)
async def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserResponse:
    """Get the current authenticated user."""
    return UserResponse.model_validate(current_user)
