import hashlib
import hmac
import secrets

from django.conf import settings

CODE_LENGTH = 6
CODE_SPACE = 10**CODE_LENGTH


def generate_code() -> str:
    """Uniform 6-digit code from the OS CSPRNG, leading zeros kept."""
    return f'{secrets.randbelow(CODE_SPACE):0{CODE_LENGTH}d}'


def hash_code(code: str) -> str:
    pepper = settings.OTP_PEPPER.encode('utf-8')
    return hmac.new(pepper, code.encode('utf-8'), hashlib.sha256).hexdigest()


def code_matches(code_hash: str, submitted: str) -> bool:
    return hmac.compare_digest(code_hash, hash_code((submitted or '').strip()))
