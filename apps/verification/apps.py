from django.apps import AppConfig


class VerificationConfig(AppConfig):
    """Configuration for the one-time passcode application."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.verification'
    verbose_name = 'Verification Codes'
