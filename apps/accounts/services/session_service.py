import logging
from dataclasses import dataclass

from django.contrib.auth.models import update_last_login
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import RefreshToken

from apps.accounts.dal.user_dal import UserDAL
from apps.accounts.exceptions import InvalidRefreshTokenError
from apps.accounts.models import CustomUser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionTokens:
    access: str
    refresh: str
    expires_in: int
    user: CustomUser


class SessionService:
    """Mints and revokes signed JWT sessions for verified organizer emails."""

    def __init__(self, user_dal: UserDAL = None):
        self.user_dal = user_dal or UserDAL()

    def mint(self, identity: str) -> SessionTokens:
        """
        Issue an access/refresh pair bound to the organizer with this email,
        creating the account on first login.
        """
        user, created = self.user_dal.get_or_create_passwordless(identity)
        refresh = RefreshToken.for_user(user)

        if api_settings.UPDATE_LAST_LOGIN:
            update_last_login(None, user)

        logger.info(f'Minted session for user {user.id} (new account: {created})')

        return SessionTokens(
            access=str(refresh.access_token),
            refresh=str(refresh),
            expires_in=int(api_settings.ACCESS_TOKEN_LIFETIME.total_seconds()),
            user=user,
        )

    def revoke(self, refresh_token: str) -> None:
        """
        Blacklist a refresh token.

        Raises:
            InvalidRefreshTokenError: token malformed, expired or already blacklisted
        """
        try:
            RefreshToken(refresh_token).blacklist()
        except TokenError as e:
            logger.warning(f'Logout with unusable refresh token: {e}')
            raise InvalidRefreshTokenError(str(e)) from e

        logger.info('Refresh token blacklisted')
