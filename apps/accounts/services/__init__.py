from apps.accounts.services.passwordless_service import PasswordlessService
from apps.accounts.services.session_service import SessionService
from apps.accounts.services.session_service import SessionTokens

__all__ = [
    'PasswordlessService',
    'SessionService',
    'SessionTokens',
]
