from apps.verification.services.code_issuer import CodeIssuer
from apps.verification.services.code_verifier import CodeVerifier

__all__ = [
    'CodeIssuer',
    'CodeVerifier',
]
