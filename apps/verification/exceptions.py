"""Business exceptions for the verification app."""

from apps.shared.exceptions import ServiceUnavailableError
from apps.shared.exceptions import ValidationError


class InvalidIdentifierError(ValidationError):
    """Raised when an email or WhatsApp number cannot be normalized."""

    def __init__(self, channel: str, reason: str, **kwargs):
        super().__init__(
            f'Invalid {channel} identifier: {reason}',
            field_errors={'identifier': [reason]},
            error_code='invalid_identifier',
            **kwargs,
        )
        self.channel = channel


class WhatsAppDeliveryError(ServiceUnavailableError):
    """Raised by the WhatsApp gateway client when a message is not accepted."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, error_code='whatsapp_delivery_failed', **kwargs)
