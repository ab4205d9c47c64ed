from unittest.mock import patch

from django.test import TestCase
from rest_framework_simplejwt.tokens import AccessToken
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken

from apps.accounts.exceptions import InvalidRefreshTokenError
from apps.accounts.models import CustomUser
from apps.accounts.services import SessionService

from .factories import UserFactory


class SessionServiceTest(TestCase):
    def setUp(self):
        self.service = SessionService()

    def test_mint_creates_passwordless_user_on_first_login(self):
        tokens = self.service.mint('new.organizer@example.com')

        user = CustomUser.objects.get(email='new.organizer@example.com')
        self.assertEqual(tokens.user, user)
        self.assertFalse(user.has_usable_password())
        self.assertIsNotNone(user.last_login)
        self.assertEqual(tokens.expires_in, 3600)

    def test_mint_reuses_existing_user(self):
        user = UserFactory(email='ana@example.com')

        tokens = self.service.mint('ana@example.com')

        self.assertEqual(tokens.user.pk, user.pk)
        self.assertEqual(CustomUser.objects.count(), 1)

    def test_tokens_are_signed_and_bound_to_user(self):
        tokens = self.service.mint('ana@example.com')

        access = AccessToken(tokens.access)
        refresh = RefreshToken(tokens.refresh)
        self.assertEqual(str(access['user_id']), str(tokens.user.pk))
        self.assertEqual(str(refresh['user_id']), str(tokens.user.pk))
        self.assertGreater(access['exp'], access['iat'])

    def test_concurrent_first_login_reuses_winner(self):
        winner = UserFactory(email='ana@example.com')

        with patch.object(CustomUser.objects, 'get_by_email', side_effect=[None, winner, winner]):
            tokens = self.service.mint('ana@example.com')

        self.assertEqual(tokens.user.pk, winner.pk)

    def test_revoke_blacklists_refresh_token(self):
        tokens = self.service.mint('ana@example.com')

        self.service.revoke(tokens.refresh)

        self.assertEqual(BlacklistedToken.objects.count(), 1)
        with self.assertRaises(InvalidRefreshTokenError):
            self.service.revoke(tokens.refresh)

    def test_revoke_rejects_garbage(self):
        with self.assertRaises(InvalidRefreshTokenError):
            self.service.revoke('not-a-token')
