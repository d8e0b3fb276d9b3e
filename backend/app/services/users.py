"""User registration and login.

Passwords are stored and compared as plaintext; there is no session layer.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User


class UserService:
    async def get_user(self, session: AsyncSession, user_id: int) -> User | None:
        return await session.get(User, user_id)

    async def get_user_by_email(
        self, session: AsyncSession, email: str
    ) -> User | None:
        result = await session.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def register(
        self, session: AsyncSession, email: str, password: str, full_name: str
    ) -> User | None:
        """Create a user. Returns None if the email is already registered."""
        if await self.get_user_by_email(session, email) is not None:
            return None
        user = User(email=email, password=password, full_name=full_name)
        session.add(user)
        await session.commit()
        return user

    async def authenticate(
        self, session: AsyncSession, email: str, password: str
    ) -> User | None:
        user = await self.get_user_by_email(session, email)
        if user is None or user.password != password:
            return None
        return user


user_service = UserService()
