from apps.accounts.models.custom_user import CustomUser

__all__ = [
    'CustomUser',
]
