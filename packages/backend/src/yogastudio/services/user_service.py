"""User service — the credential store behind login, registration and the gate."""

from typing import Optional

import structlog
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from yogastudio.auth.password import hash_password
from yogastudio.db.models import Participation, User
from yogastudio.errors import BadRequestError

logger = structlog.get_logger()

EMAIL_TAKEN = "Error: Email is already taken!"


class UserService:
    """Lookup, registration and deletion of users."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, user_id: int) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def exists_by_email(self, email: str) -> bool:
        result = await self.db.execute(select(User.id).where(User.email == email))
        return result.first() is not None

    async def register(
        self,
        *,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        admin: bool = False,
    ) -> User:
        """Create a user with a bcrypt-hashed password.

        Raises BadRequestError when the email is already registered.
        """
        if await self.exists_by_email(email):
            raise BadRequestError(EMAIL_TAKEN)

        user = User(
            email=email,
            first_name=first_name,
            last_name=last_name,
            password_hash=hash_password(password),
            admin=admin,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise BadRequestError(EMAIL_TAKEN)
        await self.db.refresh(user)
        logger.info("user.registered", user_id=user.id)
        return user

    async def delete(self, user_id: int) -> None:
        """Delete a user and their session enrollments."""
        await self.db.execute(
            delete(Participation).where(Participation.user_id == user_id)
        )
        await self.db.execute(delete(User).where(User.id == user_id))
        await self.db.commit()
        logger.info("user.deleted", user_id=user_id)
