"""
Security Utilities

Password hashing and JWT token management.

Password Hashing:
=================
bcrypt through passlib's CryptContext; the salt is generated per hash and
stored inside the hash string.

JWT Tokens:
===========
PyJWT, HS256 by default. Tokens carry `user_id` and `email` plus the
standard `exp` / `iat` claims.

Usage:
======
    from audio_vault.shared.utils.security import SecurityUtils

    hashed = SecurityUtils.hash_password("secret123")
    SecurityUtils.verify_password("secret123", hashed)  # True

    token = SecurityUtils.create_access_token(
        data={"user_id": str(user.id), "email": user.email},
        secret_key=settings.SECRET_KEY,
        expires_delta=timedelta(days=90),
    )
    payload = SecurityUtils.decode_access_token(token, settings.SECRET_KEY)
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
)


class SecurityUtils:
    """Stateless helpers for password hashing and bearer tokens."""

    # ═══════════════════════════════════════════════════════════════════════════
    # PASSWORD HASHING
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def hash_password(password: str) -> str:
        """Return a salted bcrypt hash of `password`."""
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against a stored bcrypt hash.

        Malformed hashes count as a mismatch rather than an error.
        """
        try:
            return pwd_context.verify(plain_password, hashed_password)
        except ValueError:
            return False

    # ═══════════════════════════════════════════════════════════════════════════
    # JWT TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def create_access_token(
        data: dict,
        secret_key: str,
        expires_delta: Optional[timedelta] = None,
        algorithm: str = "HS256",
    ) -> str:
        """
        Create a signed JWT.

        Args:
            data: Payload claims (user_id, email)
            secret_key: Signing secret
            expires_delta: Lifetime of the token (default: 90 days)
            algorithm: JWT algorithm

        Returns:
            Encoded JWT string
        """
        now = datetime.now(timezone.utc)
        to_encode = data.copy()
        to_encode.update({
            "exp": now + (expires_delta or timedelta(days=90)),
            "iat": now,
        })

        return jwt.encode(to_encode, secret_key, algorithm=algorithm)

    @staticmethod
    def decode_access_token(
        token: str,
        secret_key: str,
        algorithm: str = "HS256",
    ) -> dict:
        """
        Decode and verify a JWT.

        Raises:
            ValueError: If the token is expired, tampered with or malformed
        """
        try:
            return jwt.decode(token, secret_key, algorithms=[algorithm])
        except jwt.ExpiredSignatureError:
            raise ValueError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {str(e)}")
