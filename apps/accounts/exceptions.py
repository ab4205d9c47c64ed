"""Business exceptions for the accounts app."""

from apps.shared.exceptions import AuthenticationError


class InvalidRefreshTokenError(AuthenticationError):
    """Raised when a refresh token is malformed, expired or already revoked."""

    def __init__(self, reason: str = 'Refresh token is invalid or expired'):
        super().__init__(reason, error_code='invalid_refresh_token')
