"""
Authentication Service

Business logic for user registration and login.

Service Pattern:
================
Services encapsulate business logic and coordinate between:
- Repositories (data access)
- External services (if any)
- Domain logic

Usage:
======
    from audio_vault.shared.services.auth_service import AuthService

    service = AuthService(db)
    user, token, expires = await service.register_user("a@x.com", "secret123")
"""

import re
import uuid
from datetime import timedelta
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from audio_vault.config.settings import settings
from audio_vault.shared.core.exceptions import AuthenticationError, DuplicateResourceError
from audio_vault.shared.core.logging import get_logger
from audio_vault.shared.models.base import utcnow
from audio_vault.shared.models.user import User
from audio_vault.shared.repositories.user_repository import UserRepository
from audio_vault.shared.utils.security import SecurityUtils

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Incorrect email or password."
USERNAME_MAX_LENGTH = 20
USERNAME_MIN_LENGTH = 3


class AuthService:
    """
    Service for authentication-related business logic.

    Handles:
    - User registration with e-mail/password and optional username
    - User authentication (login)
    - JWT token generation

    Attributes:
        session: Database session
        repo: UserRepository instance
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = UserRepository(session)

    async def register_user(
        self,
        email: str,
        password: str,
        username: Optional[str] = None,
    ) -> Tuple[User, str, int]:
        """
        Register a new user.

        Args:
            email: E-mail address (stored lower-cased)
            password: Plain text password (will be hashed)
            username: Public handle; derived from the e-mail when omitted

        Returns:
            Tuple of (user, access_token, expires_in_seconds)

        Raises:
            DuplicateResourceError: If the e-mail or username is taken
        """
        email = email.strip().lower()

        if await self.repo.email_exists(email):
            raise DuplicateResourceError("A user with this email already exists.")

        if username:
            if await self.repo.username_exists(username):
                raise DuplicateResourceError("This username is already taken.")
        else:
            username = await self._derive_username(email)

        # The unique indexes still decide when two registrations race past the checks
        try:
            user = await self.repo.create(
                email=email,
                username=username,
                password_hash=SecurityUtils.hash_password(password),
            )
        except IntegrityError as e:
            logger.warning("Registration lost a uniqueness race", email=email, username=username)
            raise DuplicateResourceError("A user with this email or username already exists.") from e

        logger.info("User registered", user_id=str(user.id), username=user.username)

        token, expires_in = self.issue_token(user)
        return user, token, expires_in

    async def login_user(
        self,
        email: str,
        password: str,
    ) -> Tuple[User, str, int]:
        """
        Authenticate user and generate token.

        Unknown e-mail and wrong password produce the same error.

        Returns:
            Tuple of (user, access_token, expires_in_seconds)

        Raises:
            AuthenticationError: If credentials are invalid
        """
        user = await self.repo.get_by_email(email)
        if not user or not SecurityUtils.verify_password(password, user.password_hash):
            logger.warning("Login failed", email=email.strip().lower())
            raise AuthenticationError(INVALID_CREDENTIALS)

        user.last_login = utcnow()
        await self.repo.save(user)

        logger.info("User logged in", user_id=str(user.id))

        token, expires_in = self.issue_token(user)
        return user, token, expires_in

    @staticmethod
    def issue_token(user: User) -> Tuple[str, int]:
        """Sign a bearer token for `user`. Returns (token, expires_in_seconds)."""
        token = SecurityUtils.create_access_token(
            data={"user_id": str(user.id), "email": user.email},
            secret_key=settings.SECRET_KEY,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            algorithm=settings.JWT_ALGORITHM,
        )
        return token, settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    async def _derive_username(self, email: str) -> str:
        """
        Build a free username from the e-mail local part.

        "John.Doe+vinyl@x.com" → "JohnDoevinyl", then "JohnDoevinyl_1a2b"
        style suffixes until one is free.
        """
        base = re.sub(r"[^A-Za-z0-9_]", "", email.split("@", 1)[0])[:USERNAME_MAX_LENGTH]
        if len(base) < USERNAME_MIN_LENGTH:
            base = f"user{base}"

        candidate = base
        while await self.repo.username_exists(candidate):
            suffix = uuid.uuid4().hex[:4]
            candidate = f"{base[: USERNAME_MAX_LENGTH - len(suffix) - 1]}_{suffix}"
        return candidate
