"""Domain exceptions for taskdesk.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class TaskdeskException(Exception):
    """Base exception for all taskdesk errors.

    All custom exceptions inherit from this class to allow consistent
    error handling and logging. Presentation layer maps these to HTTP
    responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the API error handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TaskdeskException):
    """Raised when input validation fails (empty title, inverted dates, bad assignee)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(TaskdeskException):
    """Raised when no actor can be resolved (missing, invalid or unknown credential)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(TaskdeskException):
    """Raised when a resolved actor is denied an operation."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        reason: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, deny reason and message.

        Args:
            resource: Optional resource type (e.g. 'task', 'profile').
            action: Optional operation that was attempted (e.g. 'update_task').
            reason: Optional deny reason (e.g. 'InactiveActor').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"Permission denied: {action} on {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        if reason:
            details["reason"] = reason
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(TaskdeskException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'task', 'profile').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConflictException(TaskdeskException):
    """Raised when an atomic write could not be committed; the caller may retry."""

    def __init__(self, message: str, resource_type: str, resource_id: str) -> None:
        super().__init__(
            message,
            "CONFLICT",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class UsernameAlreadyExistsException(TaskdeskException):
    """Raised when creating a profile whose username is already registered."""

    def __init__(self, username: str) -> None:
        super().__init__(
            f"Username already registered: {username}",
            "USERNAME_TAKEN",
            {"username": username},
        )
