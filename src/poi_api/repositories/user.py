"""User repository - exact-match lookups of accounts."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from poi_api.models.user import User as UserModel
from poi_api.models.user import UserRole
from poi_api.schemas.user import User


class UserRepository:
    """SQLAlchemy-backed user lookups bound to one session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: str) -> User | None:
        """Get a user by ID."""
        result = await self.db.execute(select(UserModel).where(UserModel.id == user_id))
        user = result.scalar_one_or_none()
        if user is None:
            return None
        return User.model_validate(user)

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email address."""
        result = await self.db.execute(select(UserModel).where(UserModel.email == email))
        user = result.scalar_one_or_none()
        if user is None:
            return None
        return User.model_validate(user)

    async def get_with_password_hash(self, email: str) -> tuple[User, str | None] | None:
        """Get a user together with its password hash, for login."""
        result = await self.db.execute(select(UserModel).where(UserModel.email == email))
        user = result.scalar_one_or_none()
        if user is None:
            return None
        return User.model_validate(user), user.password_hash

    async def create(
        self,
        email: str,
        password_hash: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        role: UserRole = UserRole.VIEWER,
    ) -> User:
        """Create a user. Raises IntegrityError if the email is taken."""
        user = UserModel(
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            role=role.value,
        )
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        return User.model_validate(user)
