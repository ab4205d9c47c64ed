from django.db import models
from django.utils.translation import gettext_lazy as _


class DrawPair(models.Model):
    """Giver -> receiver assignment produced by an event's draw. Never updated."""

    event = models.ForeignKey(
        'events.Event',
        on_delete=models.CASCADE,
        related_name='draw_pairs',
        verbose_name=_('Event'),
    )
    giver = models.ForeignKey(
        'events.Participant',
        on_delete=models.CASCADE,
        related_name='gives_to',
        verbose_name=_('Giver'),
    )
    receiver = models.ForeignKey(
        'events.Participant',
        on_delete=models.CASCADE,
        related_name='receives_from',
        verbose_name=_('Receiver'),
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'events_draw_pair'
        verbose_name = _('Draw Pair')
        verbose_name_plural = _('Draw Pairs')
        ordering = ['giver__name', 'giver_id']
        constraints = [
            models.UniqueConstraint(fields=['event', 'giver'], name='unique_draw_giver_per_event'),
            models.UniqueConstraint(fields=['event', 'receiver'], name='unique_draw_receiver_per_event'),
            models.CheckConstraint(
                condition=~models.Q(giver=models.F('receiver')),
                name='draw_pair_giver_is_not_receiver',
            ),
        ]

    def __str__(self):
        return f'{self.giver_id} -> {self.receiver_id}'
