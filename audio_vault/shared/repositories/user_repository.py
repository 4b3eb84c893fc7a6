"""
User Repository

Database operations specific to the User model.

Common Operations:
==================
- get_by_email()     → Find user by e-mail address (case-insensitive)
- get_by_username()  → Find user by public handle
- email_exists()     → Check if e-mail is already registered
- username_exists()  → Check if a handle is taken

Usage Example:
==============
    async def authenticate(db: AsyncSession, email: str, password: str):
        repo = UserRepository(db)
        user = await repo.get_by_email(email)
        if not user:
            raise AuthenticationError("Incorrect email or password.")
        ...
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from audio_vault.shared.repositories.base import BaseRepository
from audio_vault.shared.models.user import User


class UserRepository(BaseRepository[User]):
    """Repository for User database operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by e-mail address.

        E-mails are stored lower-cased, so the lookup value is normalized the
        same way.

        SQL Generated:
            SELECT * FROM users WHERE email = 'collector@example.com'
        """
        result = await self.session.execute(select(User).where(User.email == email.strip().lower()))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by exact username."""
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if e-mail already exists. Used to reject duplicate registrations."""
        return await self.get_by_email(email) is not None

    async def username_exists(self, username: str) -> bool:
        """Check if a username is already taken."""
        return await self.get_by_username(username) is not None
