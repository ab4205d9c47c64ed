import logging

from django.db import IntegrityError
from django.db import transaction

from apps.accounts.models.custom_user import CustomUser
from apps.shared.decorators import handle_db_errors

logger = logging.getLogger(__name__)


class UserDAL:
    """Data Access Layer for CustomUser operations"""

    @handle_db_errors(operation_type='read', model_name='CustomUser')
    def get_by_id(self, user_id: int) -> CustomUser | None:
        return CustomUser.objects.filter(id=user_id).first()

    @handle_db_errors(operation_type='read', model_name='CustomUser')
    def get_by_email(self, email: str) -> CustomUser | None:
        """Get user by email with case-insensitive lookup"""
        return CustomUser.objects.get_by_email(email)

    @handle_db_errors(operation_type='create', model_name='CustomUser')
    def get_or_create_passwordless(self, email: str) -> tuple[CustomUser, bool]:
        """
        Return the organizer bound to email, creating it on first login.

        Two first logins racing on the same email both end up with the row
        that won the unique constraint.
        """
        user = CustomUser.objects.get_by_email(email)
        if user:
            return user, False

        try:
            with transaction.atomic():
                user = CustomUser.objects.create_passwordless_user(email)
        except IntegrityError:
            logger.info('Concurrent first login, reusing the existing organizer account')
            return CustomUser.objects.get_by_email(email), False

        logger.info(f'Created passwordless organizer account (ID: {user.id})')
        return user, True
