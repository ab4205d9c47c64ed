"""
CustomUserManager for the passwordless organizer model.

Organizers are created by email alone; only superusers get a password so
the Django admin stays reachable.
"""

from django.contrib.auth.models import BaseUserManager


class CustomUserManager(BaseUserManager):
    use_in_migrations = True

    def normalize_email(self, email):
        """Normalize email address (trimmed, lowercase)"""
        if email:
            return super().normalize_email(email.strip()).lower()
        return email

    def create_user(self, email: str, password: str | None = None, **extra_fields):
        """
        Create an organizer.

        Raises:
            ValueError: If email is missing
        """
        if not email:
            raise ValueError('Users must have an email address')

        extra_fields.setdefault('is_active', True)
        user = self.model(email=self.normalize_email(email), **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, email: str, password: str, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if not extra_fields.get('is_staff'):
            raise ValueError('Superuser must have is_staff=True')
        if not extra_fields.get('is_superuser'):
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)

    def create_passwordless_user(self, email: str, **extra_fields):
        return self.create_user(email=email, password=None, **extra_fields)

    def get_by_email(self, email: str):
        """Case-insensitive lookup; None when no account exists."""
        if not email:
            return None
        return self.filter(email__iexact=self.normalize_email(email)).first()

    def get_by_natural_key(self, username):
        return self.get(email__iexact=username)
