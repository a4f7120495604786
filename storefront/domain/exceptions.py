"""Domain exceptions.

All domain-level errors that represent business rule violations.
Each error carries the HTTP status and machine-readable code the API
layer reports, so routers never translate errors by hand.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    status_code: int = 400
    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Input Errors
# ============================================================================


class InvalidInputError(DomainError):
    """Raised when a request is missing required values or carries bad ones."""

    error_code = "INVALID_INPUT"


class InvalidIdentifierError(InvalidInputError):
    """Raised when an identifier is not a well-formed id."""

    error_code = "INVALID_ID"

    def __init__(self, label: str, value: str) -> None:
        """Initialize invalid identifier error.

        Args:
            label: What the id refers to (e.g., "product", "parent category").
            value: The rejected identifier.
        """
        super().__init__(
            f"Invalid {label} ID",
            details={"id": value},
        )


class VariantValidationError(InvalidInputError):
    """Raised when a product's variant list breaks a variant rule.

    Carries the single human-readable reason produced by the validator.
    """

    error_code = "INVALID_VARIANTS"

    def __init__(self, reason: str) -> None:
        """Initialize variant validation error.

        Args:
            reason: Reason reported by the variant validator.
        """
        super().__init__(reason)
        self.reason = reason


class AddressValidationError(InvalidInputError):
    """Raised when a registration carries no address or a malformed one."""

    error_code = "INVALID_ADDRESS"


# ============================================================================
# Lookup Errors
# ============================================================================


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: str | None = None) -> None:
        """Initialize not found error.

        Args:
            entity_type: Human-readable entity name (e.g., "Product").
            entity_id: ID that was looked up.
        """
        super().__init__(
            f"{entity_type} not found",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )


class ConflictError(DomainError):
    """Raised when a write would break a uniqueness rule."""

    status_code = 409
    error_code = "CONFLICT"


# ============================================================================
# Authentication Errors
# ============================================================================


class AuthenticationError(DomainError):
    """Raised when credentials or tokens are rejected."""

    status_code = 401
    error_code = "UNAUTHORIZED"


class InvalidCredentialsError(AuthenticationError):
    """Raised on a login with unknown email or wrong password."""

    error_code = "INVALID_CREDENTIALS"

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class InvalidTokenError(AuthenticationError):
    """Raised when a bearer token cannot be verified."""

    error_code = "INVALID_TOKEN"

    def __init__(self) -> None:
        super().__init__("Invalid token")


class TokenExpiredError(AuthenticationError):
    """Raised when a bearer token is past its expiry."""

    error_code = "TOKEN_EXPIRED"

    def __init__(self) -> None:
        super().__init__("Token expired")
