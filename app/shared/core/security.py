"""
Security utilities for JWT issuing/validation and password hashing.
Tokens carry an identity plus a role tag (user, caregiver, admin).
"""

import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Optional

from fastapi.encoders import jsonable_encoder
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from ..config.settings import get_settings
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """Role tag carried in every token."""
    USER = "user"
    CAREGIVER = "caregiver"
    ADMIN = "admin"


# Cookie carrying each role's token. The "-client" twin is readable by browser scripts.
ROLE_COOKIES: Dict[Role, str] = {
    Role.USER: "user-token",
    Role.CAREGIVER: "caregiver-token",
    Role.ADMIN: "admin-token",
}


class SecurityManager:
    """
    Centralized security manager for authentication.
    Handles JWT tokens and password hashing.
    """

    def __init__(self):
        self.settings = get_settings()
        self.algorithm = self.settings.JWT_ALGORITHM
        self.secret_key = self.settings.JWT_SECRET_KEY
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=self.settings.BCRYPT_ROUNDS,
        )

    def token_lifetime(self, role: Role) -> timedelta:
        if role == Role.ADMIN:
            return timedelta(days=self.settings.ADMIN_TOKEN_EXPIRE_DAYS)
        return timedelta(days=self.settings.TOKEN_EXPIRE_DAYS)

    def create_access_token(
        self,
        data: Dict[str, Any],
        role: Role,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Create JWT access token with identity claims, role tag and expiration.

        Args:
            data: Identity claims (must include "id")
            role: Role tag written into the token
            expires_delta: Custom expiration time

        Returns:
            str: Encoded JWT token
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or self.token_lifetime(role))

        to_encode = jsonable_encoder(data)
        to_encode.update({
            "sub": str(data["id"]),
            "role": role.value,
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
        })

        encoded_jwt = jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Access token created for {role.value}: {data['id']}")
        return encoded_jwt

    def verify_token(self, token: str, expected_role: Optional[Role] = None) -> Dict[str, Any]:
        """
        Verify and decode JWT token.

        Args:
            token: JWT token to verify
            expected_role: Role the caller must hold, if any

        Returns:
            dict: Decoded token payload

        Raises:
            AuthenticationError: If token is invalid, expired or carries another role
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            logger.info("Token has expired")
            raise AuthenticationError("Unauthorized: Invalid token", details={"reason": "expired"})
        except JWTError as e:
            logger.warning(f"JWT validation failed: {e}")
            raise AuthenticationError("Unauthorized: Invalid token")

        if not payload.get("id") or payload.get("role") not in {r.value for r in Role}:
            logger.warning("Token missing identity or role claims")
            raise AuthenticationError("Unauthorized: Invalid token")

        if expected_role is not None and payload["role"] != expected_role.value:
            logger.warning(
                f"Token role mismatch. Expected: {expected_role.value}, Got: {payload['role']}"
            )
            raise AuthenticationError("Unauthorized: Invalid token")

        return payload

    def get_password_hash(self, password: str) -> str:
        """Hash password using bcrypt."""
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify password against hash.

        Returns:
            bool: True if password matches
        """
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except ValueError as e:
            logger.error(f"Password verification error: {e}")
            return False


@lru_cache()
def get_security_manager() -> SecurityManager:
    """
    Get cached security manager instance.

    Returns:
        SecurityManager: Singleton security manager
    """
    return SecurityManager()


# Convenience functions for direct usage
def create_access_token(
    data: Dict[str, Any],
    role: Role,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create JWT access token."""
    return get_security_manager().create_access_token(data, role, expires_delta)


def verify_token(token: str, expected_role: Optional[Role] = None) -> Dict[str, Any]:
    """Verify JWT token."""
    return get_security_manager().verify_token(token, expected_role)


def get_password_hash(password: str) -> str:
    """Hash password using bcrypt."""
    return get_security_manager().get_password_hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return get_security_manager().verify_password(plain_password, hashed_password)
