"""
Domain-specific business exceptions for Events app.

These are BUSINESS exceptions, not HTTP exceptions; HTTP mapping happens in
the global exception handler.
"""

from apps.shared.exceptions import BusinessRuleViolation
from apps.shared.exceptions import PermissionError
from apps.shared.exceptions import ResourceNotFoundError
from apps.shared.exceptions import ValidationError

# =============================================================================
# Event Domain Exceptions
# =============================================================================


class EventNotFoundError(ResourceNotFoundError):
    """Raised when requested event does not exist."""

    def __init__(self, event_identifier: str = None, **kwargs):
        message = 'Event not found'
        if event_identifier:
            message = f"Event '{event_identifier}' not found"
        super().__init__(message, error_code='event_not_found', **kwargs)


class EventPermissionError(PermissionError):
    """Raised when someone other than the organizer touches an event."""

    def __init__(self, action: str = None, event_id: str = None, **kwargs):
        if action and event_id:
            message = f"Permission denied for '{action}' on event '{event_id}'"
        else:
            message = 'Permission denied for this event operation'
        super().__init__(message, error_code='event_permission_denied', **kwargs)


class EventValidationError(ValidationError):
    """Raised when event data fails business validation."""

    def __init__(self, message: str = 'Event validation failed', **kwargs):
        super().__init__(message, error_code='event_validation_error', **kwargs)


class EventLockedError(BusinessRuleViolation):
    """Raised on roster changes after the draw has been performed."""

    def __init__(self, event_id: str = None, **kwargs):
        super().__init__(
            'The draw has already been performed; the participant list can no longer change',
            error_code='event_locked',
            context={'event_uuid': event_id},
            **kwargs,
        )


# =============================================================================
# Participant Domain Exceptions
# =============================================================================


class ParticipantNotFoundError(ResourceNotFoundError):
    """Raised when requested participant does not exist in the event."""

    def __init__(self, participant_identifier: str = None, **kwargs):
        message = 'Participant not found'
        if participant_identifier:
            message = f"Participant '{participant_identifier}' not found"
        super().__init__(message, error_code='participant_not_found', **kwargs)


class ParticipantError(BusinessRuleViolation):
    """Raised when participant operation violates business rules."""

    def __init__(self, operation: str, reason: str, **kwargs):
        message = f'Participant {operation} failed: {reason}'
        super().__init__(message, error_code=f'participant_{operation}_failed', **kwargs)


class ParticipantAlreadyConfirmedError(ParticipantError):
    def __init__(self, **kwargs):
        super().__init__('confirmation', 'participant is already confirmed', **kwargs)


class ParticipantNotConfirmedError(ParticipantError):
    def __init__(self, **kwargs):
        super().__init__('suggestion', 'only confirmed participants can leave a gift suggestion', **kwargs)


class WhatsAppNumberInUseError(ValidationError):
    """Raised when another participant of the same event already holds the number."""

    def __init__(self, **kwargs):
        reason = 'This WhatsApp number is already used by another participant of this event'
        super().__init__(
            reason,
            field_errors={'whatsapp_number': [reason]},
            error_code='whatsapp_number_in_use',
            **kwargs,
        )


# =============================================================================
# Draw Domain Exceptions
# =============================================================================


class DrawAlreadyPerformedError(BusinessRuleViolation):
    """Raised when the draw is requested a second time."""

    def __init__(self, event_id: str = None, **kwargs):
        super().__init__(
            'The draw for this event has already been performed',
            error_code='draw_already_performed',
            context={'event_uuid': event_id},
            **kwargs,
        )


class DrawNotPerformedError(BusinessRuleViolation):
    """Raised when draw results are requested before the draw."""

    def __init__(self, event_id: str = None, **kwargs):
        super().__init__(
            'The draw for this event has not been performed yet',
            error_code='draw_not_performed',
            context={'event_uuid': event_id},
            **kwargs,
        )


class DrawValidationError(ValidationError):
    """Base for draw preconditions on the roster."""

    def __init__(self, message: str, error_code: str, **kwargs):
        super().__init__(message, error_code=error_code, **kwargs)


class InsufficientParticipantsError(DrawValidationError):
    def __init__(self, count: int, **kwargs):
        super().__init__(
            f'At least 2 participants are needed for the draw, the event has {count}',
            error_code='insufficient_participants',
            context={'participant_count': count},
            **kwargs,
        )


class NotAllConfirmedError(DrawValidationError):
    def __init__(self, pending_ids: list[int], **kwargs):
        super().__init__(
            f'{len(pending_ids)} participant(s) have not confirmed their WhatsApp number yet',
            error_code='participants_not_confirmed',
            context={'pending_participant_ids': pending_ids},
            **kwargs,
        )
