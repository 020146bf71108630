# 📄 File: app/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines all the special error types PetVally uses to communicate
# what went wrong in a clear, organized way instead of generic error messages.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy providing specific error types with HTTP status codes,
# error details, and serialization for the API error envelope.
# 🔗 Dependencies:
# FastAPI status constants, typing
# 🔄 Connected Modules / Calls From:
# All modules for error handling, app.main exception handlers, middleware, domain services

from typing import Any, Dict, Optional

from fastapi import status


class PetVallyException(Exception):
    """
    Base exception class for PetVally.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the API error envelope."""
        return {
            "message": self.message,
            "error": {
                "code": self.error_code,
                "details": self.details,
            }
        }


# =============================================================================
# AUTHENTICATION & AUTHORIZATION EXCEPTIONS
# =============================================================================

class AuthenticationError(PetVallyException):
    """
    Exception raised for authentication failures.
    Used when credentials or tokens are invalid or missing.
    """

    def __init__(
        self,
        message: str = "Unauthorized: Invalid token",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            error_code="AUTHENTICATION_ERROR"
        )


class AuthorizationError(PetVallyException):
    """
    Exception raised for authorization failures.
    Used when the caller does not own the resource it is acting on.
    """

    def __init__(
        self,
        message: str = "Forbidden",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        details = details or {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
            error_code="AUTHORIZATION_ERROR"
        )


# =============================================================================
# REQUEST & RESOURCE EXCEPTIONS
# =============================================================================

class ValidationError(PetVallyException):
    """
    Exception raised for request validation failures.
    Used for missing fields, out of range values and malformed payloads.
    """

    def __init__(
        self,
        message: str = "Bad Request",
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        details = details or {}
        if field:
            details["field"] = field

        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="VALIDATION_ERROR"
        )


class NotFoundError(PetVallyException):
    """Exception raised when a requested resource does not exist."""

    def __init__(
        self,
        message: str = "Not Found",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None
    ):
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code="NOT_FOUND"
        )


class DuplicateResourceError(PetVallyException):
    """Exception raised when creating a resource that already exists."""

    def __init__(
        self,
        message: str = "Resource already exists",
        resource_type: Optional[str] = None,
        field: Optional[str] = None
    ):
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if field:
            details["field"] = field

        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details,
            error_code="DUPLICATE_RESOURCE"
        )


class BusinessRuleViolationError(PetVallyException):
    """
    Exception raised when an operation breaks a domain rule,
    e.g. deleting a pet that has orders or applying to a closed job.
    """

    def __init__(
        self,
        message: str,
        rule: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        details = details or {}
        if rule:
            details["rule"] = rule

        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
            error_code="BUSINESS_RULE_VIOLATION"
        )


# =============================================================================
# INFRASTRUCTURE EXCEPTIONS
# =============================================================================

class ExternalServiceError(PetVallyException):
    """Exception raised when an external collaborator (AI, hosting) fails."""

    def __init__(
        self,
        message: str = "External service error",
        service_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        details = details or {}
        if service_name:
            details["service"] = service_name

        super().__init__(
            message=message,
            status_code=status.HTTP_502_BAD_GATEWAY,
            details=details,
            error_code="EXTERNAL_SERVICE_ERROR"
        )


class FileStorageError(ExternalServiceError):
    """Exception raised when uploading or deleting an image fails."""

    def __init__(self, message: str = "Image storage failed", operation: Optional[str] = None):
        super().__init__(
            message=message,
            service_name="image_storage",
            details={"operation": operation} if operation else None
        )
        self.error_code = "FILE_STORAGE_ERROR"


class DatabaseError(PetVallyException):
    """Exception raised for database operation failures."""

    def __init__(self, message: str = "Database operation failed", operation: Optional[str] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"operation": operation} if operation else None,
            error_code="DATABASE_ERROR"
        )


class TransactionError(DatabaseError):
    """Exception raised when a unit of work cannot be committed."""

    def __init__(self, message: str = "Transaction failed"):
        super().__init__(message=message, operation="transaction")
        self.error_code = "TRANSACTION_ERROR"
