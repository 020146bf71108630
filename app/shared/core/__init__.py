"""
Core utilities package for PetVally.
Provides security, the role policy dependencies, exceptions and rate limiting.
"""

from .security import (
    Role,
    ROLE_COOKIES,
    create_access_token,
    verify_token,
    get_password_hash,
    verify_password,
    SecurityManager,
    get_security_manager
)

from .exceptions import (
    PetVallyException,
    AuthenticationError,
    AuthorizationError,
    ValidationError,
    NotFoundError,
    DuplicateResourceError,
    BusinessRuleViolationError,
    ExternalServiceError,
    FileStorageError,
    DatabaseError,
    TransactionError
)

from .dependencies import (
    CurrentPrincipal,
    require_role,
    get_current_user,
    get_current_caregiver,
    get_current_admin
)

__all__ = [
    # Security
    "Role",
    "ROLE_COOKIES",
    "create_access_token",
    "verify_token",
    "get_password_hash",
    "verify_password",
    "SecurityManager",
    "get_security_manager",

    # Exceptions
    "PetVallyException",
    "AuthenticationError",
    "AuthorizationError",
    "ValidationError",
    "NotFoundError",
    "DuplicateResourceError",
    "BusinessRuleViolationError",
    "ExternalServiceError",
    "FileStorageError",
    "DatabaseError",
    "TransactionError",

    # Dependencies
    "CurrentPrincipal",
    "require_role",
    "get_current_user",
    "get_current_caregiver",
    "get_current_admin",
]
