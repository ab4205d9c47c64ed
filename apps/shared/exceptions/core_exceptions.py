"""
Core Business Exception Hierarchy for the Secret Friend API

- Clean separation between business and HTTP layers
- Exception Translation from DAL → Service → View layers
- Type-safe error handling with semantic meaning

These exceptions represent BUSINESS failures, not HTTP responses.
HTTP mapping happens in the API exception handler.
"""

import logging

logger = logging.getLogger(__name__)


class AppError(Exception):
    """
    Base class for all business logic errors in the application.

    This is NOT an HTTP exception - it's a pure business domain error.
    HTTP status codes are mapped by the API exception handler.
    """

    def __init__(self, message: str, error_code: str = None, context: dict = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def __str__(self) -> str:
        return self.message

    def get_context(self) -> dict:
        """Get additional error context for logging/debugging"""
        return self.context


class ResourceNotFoundError(AppError):
    """
    Raised when a requested resource doesn't exist.

    Examples:
    - Event not found by UUID
    - Participant not found in event

    HTTP Mapping: 404 NOT FOUND
    """


class BusinessRuleViolation(AppError):
    """
    Raised when user action violates business logic rules.

    Examples:
    - Adding a participant after the draw
    - Running the draw twice
    - Invalid state transitions

    HTTP Mapping: 409 CONFLICT or 400 BAD REQUEST
    """


class ConcurrentModificationError(BusinessRuleViolation):
    """
    Raised when a compare-and-set lost against a concurrent writer
    and the single transparent retry lost as well.

    HTTP Mapping: 409 CONFLICT
    """

    def __init__(self, resource: str, identifier: str = None, **kwargs):
        message = f'{resource} was modified concurrently, please retry'
        kwargs.setdefault('error_code', 'concurrent_modification')
        kwargs.setdefault('context', {'resource': resource, 'identifier': identifier})
        super().__init__(message, **kwargs)


class ValidationError(AppError):
    """
    Raised when input data fails business validation.

    Examples:
    - Malformed email or WhatsApp number
    - Value range where min is above max

    HTTP Mapping: 400 BAD REQUEST
    """

    def __init__(self, message: str, field_errors: dict = None, **kwargs):
        super().__init__(message, **kwargs)
        self.field_errors = field_errors or {}


class PermissionError(AppError):
    """
    Raised when user lacks required permissions for business operation.

    Examples:
    - Organizer opening someone else's event

    HTTP Mapping: 403 FORBIDDEN
    """


class ServiceUnavailableError(AppError):
    """
    Raised when infrastructure dependencies fail.

    Examples:
    - Database connection issues
    - Code store unreachable

    HTTP Mapping: 503 SERVICE UNAVAILABLE
    """


class AuthenticationError(AppError):
    """
    Raised when user authentication fails at business layer.

    HTTP Mapping: 401 UNAUTHORIZED
    """
