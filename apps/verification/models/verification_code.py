from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.shared.base.models import BaseModel
from apps.verification.choices import Channel
from apps.verification.choices import Purpose


class VerificationCode(BaseModel):
    """
    The single live code for an (identifier, channel, purpose) key.

    Issuing a new code overwrites the row in place; `version` increments on
    every write and is the compare-and-swap token used by the stores.
    """

    identifier = models.CharField(_('Identifier'), max_length=254)
    channel = models.CharField(_('Channel'), max_length=10, choices=Channel.choices)
    purpose = models.CharField(_('Purpose'), max_length=20, choices=Purpose.choices)

    code_hash = models.CharField(_('Code Hash'), max_length=64)
    subject = models.CharField(
        _('Subject'),
        max_length=64,
        blank=True,
        default='',
        help_text=_('Opaque reference the code was issued for, e.g. a participant id'),
    )

    issued_at = models.DateTimeField(_('Issued At'))
    expires_at = models.DateTimeField(_('Expires At'), db_index=True)
    consumed = models.BooleanField(_('Consumed'), default=False)
    attempts = models.PositiveSmallIntegerField(_('Failed Attempts'), default=0)
    version = models.PositiveIntegerField(_('Version'), default=1)

    class Meta:
        db_table = 'verification_code'
        verbose_name = _('Verification Code')
        verbose_name_plural = _('Verification Codes')
        constraints = [
            models.UniqueConstraint(
                fields=['identifier', 'channel', 'purpose'],
                name='unique_verification_code_per_key',
            ),
        ]

    def __str__(self):
        return f'{self.channel}:{self.purpose} code for {self.identifier}'
