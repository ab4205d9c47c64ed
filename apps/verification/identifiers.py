"""
Canonical forms for the identifiers codes are issued to.

Both the issuer and the verifier key their records by the normalized value,
so "  Ana@Example.COM " and "ana@example.com" resolve to the same code.
"""

import re

from apps.verification.choices import Channel
from apps.verification.exceptions import InvalidIdentifierError

NON_DIGITS = re.compile(r'\D')

# Area code + subscriber number, with or without the mobile ninth digit
WHATSAPP_LENGTHS = (10, 11)


def normalize_email(raw: str) -> str:
    value = (raw or '').strip().lower()

    if value.count('@') != 1:
        raise InvalidIdentifierError(Channel.EMAIL, 'Email must contain a single @')

    local, domain = value.split('@')
    if not local:
        raise InvalidIdentifierError(Channel.EMAIL, 'Email is missing the part before @')
    if any(char.isspace() for char in value):
        raise InvalidIdentifierError(Channel.EMAIL, 'Email cannot contain spaces')
    if '.' not in domain or domain.startswith('.') or domain.endswith('.'):
        raise InvalidIdentifierError(Channel.EMAIL, 'Email domain is invalid')

    return value


def normalize_whatsapp(raw: str) -> str:
    digits = NON_DIGITS.sub('', raw or '')

    if len(digits) not in WHATSAPP_LENGTHS:
        raise InvalidIdentifierError(
            Channel.WHATSAPP,
            'WhatsApp number must have the area code and number (10 or 11 digits)',
        )

    return digits


_NORMALIZERS = {
    Channel.EMAIL: normalize_email,
    Channel.WHATSAPP: normalize_whatsapp,
}


def normalize_identifier(raw: str, channel: str) -> str:
    """
    Canonicalize raw user input into the comparable key for a channel.

    Raises:
        InvalidIdentifierError: for malformed input or an unknown channel
    """
    try:
        normalizer = _NORMALIZERS[Channel(channel)]
    except ValueError:
        raise InvalidIdentifierError(str(channel), 'Unsupported channel') from None

    return normalizer(raw)


def mask_identifier(identifier: str) -> str:
    """Shorten an identifier for log lines."""
    if '@' in identifier:
        local, domain = identifier.split('@', 1)
        return f'{local[:2]}***@{domain}'
    return f'***{identifier[-4:]}'
