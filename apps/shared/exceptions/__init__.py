"""
Shared exceptions for the Secret Friend API.

Import business exceptions from here; the HTTP translation lives in
api_handler.py.
"""

from apps.shared.exceptions.core_exceptions import AppError
from apps.shared.exceptions.core_exceptions import AuthenticationError
from apps.shared.exceptions.core_exceptions import BusinessRuleViolation
from apps.shared.exceptions.core_exceptions import ConcurrentModificationError
from apps.shared.exceptions.core_exceptions import PermissionError
from apps.shared.exceptions.core_exceptions import ResourceNotFoundError
from apps.shared.exceptions.core_exceptions import ServiceUnavailableError
from apps.shared.exceptions.core_exceptions import ValidationError

__all__ = [
    'AppError',
    'AuthenticationError',
    'BusinessRuleViolation',
    'ConcurrentModificationError',
    'PermissionError',
    'ResourceNotFoundError',
    'ServiceUnavailableError',
    'ValidationError',
]
