from apps.verification.models.verification_code import VerificationCode

__all__ = [
    'VerificationCode',
]
