from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.shared.base.models import BaseModel

GIFT_SUGGESTION_MAX_LENGTH = 500


class ParticipantQuerySet(models.QuerySet):
    def for_event(self, event):
        return self.filter(event=event)

    def confirmed(self):
        return self.filter(confirmed=True)

    def unconfirmed(self):
        return self.filter(confirmed=False)

    def with_whatsapp(self):
        return self.exclude(whatsapp_number='')


class Participant(BaseModel):
    """Someone taking part in an event's draw, confirmed through their WhatsApp number."""

    event = models.ForeignKey(
        'events.Event',
        on_delete=models.CASCADE,
        related_name='participants',
        verbose_name=_('Event'),
    )
    name = models.CharField(_('Name'), max_length=100)
    whatsapp_number = models.CharField(
        _('WhatsApp Number'),
        max_length=11,
        blank=True,
        default='',
        help_text=_('Normalized digits: area code and number'),
    )
    confirmed = models.BooleanField(_('Confirmed'), default=False)
    confirmed_at = models.DateTimeField(_('Confirmed At'), null=True, blank=True)
    gift_suggestion = models.TextField(
        _('Gift Suggestion'),
        blank=True,
        default='',
        max_length=GIFT_SUGGESTION_MAX_LENGTH,
    )

    objects = ParticipantQuerySet.as_manager()

    class Meta:
        db_table = 'events_participant'
        verbose_name = _('Participant')
        verbose_name_plural = _('Participants')
        ordering = ['name', 'id']
        indexes = [
            models.Index(fields=['event', 'confirmed'], name='participant_event_conf_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['event', 'whatsapp_number'],
                condition=~models.Q(whatsapp_number=''),
                name='unique_participant_whatsapp_per_event',
            ),
        ]

    def __str__(self):
        return f'{self.name} ({self.event_id})'
