import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

from django.core.exceptions import ObjectDoesNotExist
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError
from django.db import IntegrityError

from apps.shared.exceptions import AppError
from apps.shared.exceptions import ResourceNotFoundError
from apps.shared.exceptions import ServiceUnavailableError
from apps.shared.exceptions import ValidationError

logger = logging.getLogger(__name__)


class DatabaseErrorHandler:
    """
    Translates ORM exceptions raised inside DAL methods into business
    exceptions, keeping the operation context for logging.
    """

    def __init__(self, operation_type: str = 'database_operation'):
        self.operation_type = operation_type
        # Order matters: IntegrityError is a DatabaseError subclass
        self.error_mappings = {
            IntegrityError: self._handle_integrity_error,
            DjangoValidationError: self._handle_validation_error,
            ObjectDoesNotExist: self._handle_not_found_error,
            DatabaseError: self._handle_database_error,
        }

    def _handle_integrity_error(self, error: IntegrityError, context: dict[str, Any]) -> ValidationError:
        logger.warning(
            f'Integrity constraint violation in {self.operation_type}: {error}',
            extra={'operation': self.operation_type, 'context': context},
        )
        return ValidationError(
            message=f'Data integrity violation: {error!s}',
            error_code=f'{self.operation_type}_integrity_error',
            context={'constraint_violation': True, **context},
        )

    def _handle_validation_error(self, error: DjangoValidationError, context: dict[str, Any]) -> ValidationError:
        logger.warning(
            f'Validation error in {self.operation_type}: {error}',
            extra={'operation': self.operation_type, 'context': context},
        )

        if hasattr(error, 'error_dict'):
            field_errors = {field: [str(e) for e in errors] for field, errors in error.message_dict.items()}
        else:
            field_errors = {'non_field_errors': [str(e) for e in error.messages]}

        return ValidationError(
            message='Validation failed',
            field_errors=field_errors,
            error_code=f'{self.operation_type}_validation_error',
            context=context,
        )

    def _handle_not_found_error(self, error: ObjectDoesNotExist, context: dict[str, Any]) -> ResourceNotFoundError:
        model_name = context.get('model_name', 'Resource')

        logger.debug(
            f'Resource not found in {self.operation_type}: {model_name}',
            extra={'operation': self.operation_type, 'context': context},
        )

        return ResourceNotFoundError(
            message=f'{model_name} not found',
            error_code=f'{model_name.lower()}_not_found',
            context={'model': model_name},
        )

    def _handle_database_error(self, error: DatabaseError, context: dict[str, Any]) -> ServiceUnavailableError:
        logger.critical(
            f'Database infrastructure error in {self.operation_type}: {error}',
            extra={'operation': self.operation_type, 'context': context},
            exc_info=True,
        )
        return ServiceUnavailableError(
            message='Database service is temporarily unavailable',
            error_code=f'{self.operation_type}_database_error',
            context={'infrastructure_failure': True, **context},
        )

    def handle_exception(self, error: Exception, context: dict[str, Any]) -> Exception | None:
        """Return the translated business exception, or None for unmapped errors."""
        for error_type, handler in self.error_mappings.items():
            if isinstance(error, error_type):
                return handler(error, context)
        return None


def handle_db_errors(operation_type: str = None, model_name: str = None):
    """
    Decorator for centralized database error handling in DAL methods.

    Business exceptions raised by the DAL itself pass through untouched;
    unmapped exceptions propagate as they are.

    Usage:
        @handle_db_errors(operation_type='create', model_name='Event')
        def create_event(self, event_data: dict) -> Event:
            return Event.objects.create(**event_data)
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(self, *args, **kwargs) -> Any:
            detected_operation = operation_type or func.__name__.lower()

            try:
                return func(self, *args, **kwargs)
            except AppError:
                raise
            except Exception as e:
                context = {
                    'method': func.__name__,
                    'class': self.__class__.__name__,
                    'operation': detected_operation,
                }
                if model_name:
                    context['model_name'] = model_name

                business_exception = DatabaseErrorHandler(detected_operation).handle_exception(e, context)
                if business_exception is None:
                    raise
                raise business_exception from e

        return wrapper

    return decorator
