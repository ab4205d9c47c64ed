import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.shared.base.models import BaseModel


class EventQuerySet(models.QuerySet):
    """QuerySet for events with organizer scoping and roster counts"""

    def for_organizer(self, user_id):
        return self.filter(organizer_id=user_id)

    def with_counts(self):
        """Annotate participant and confirmed participant counts"""
        return self.annotate(
            participant_count=models.Count('participants', distinct=True),
            confirmed_count=models.Count(
                'participants',
                filter=models.Q(participants__confirmed=True),
                distinct=True,
            ),
        )

    def newest_first(self):
        return self.order_by('-created_at', '-id')

    def drawn(self):
        return self.filter(draw_performed=True)

    def pending_draw(self):
        return self.filter(draw_performed=False)


class EventManager(models.Manager):
    def get_queryset(self):
        return EventQuerySet(self.model, using=self._db)

    def for_organizer(self, user_id):
        return self.get_queryset().for_organizer(user_id)

    def with_counts(self):
        return self.get_queryset().with_counts()


class Event(BaseModel):
    """
    A secret friend gift exchange.

    `draw_performed` is a one-way latch: once set, the roster is frozen and
    the draw pairs are immutable. `roster_version` increments on every
    roster change and is the compare-and-set token the draw flips the latch
    against.
    """

    event_uuid = models.UUIDField(
        _('Event UUID'),
        default=uuid.uuid4,
        unique=True,
        editable=False,
        db_index=True,
    )
    organizer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='organized_events',
        verbose_name=_('Organizer'),
    )

    title = models.CharField(_('Title'), max_length=200)
    description = models.TextField(_('Description'), blank=True, default='')
    date = models.DateField(_('Event Date'))
    min_value = models.DecimalField(
        _('Minimum Gift Value'),
        max_digits=10,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0)],
    )
    max_value = models.DecimalField(
        _('Maximum Gift Value'),
        max_digits=10,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0)],
    )

    draw_performed = models.BooleanField(_('Draw Performed'), default=False)
    draw_date = models.DateTimeField(_('Draw Date'), null=True, blank=True)
    roster_version = models.PositiveIntegerField(_('Roster Version'), default=0)

    objects = EventManager()

    class Meta:
        db_table = 'events_event'
        verbose_name = _('Event')
        verbose_name_plural = _('Events')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['organizer', '-created_at'], name='event_organizer_created_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(min_value__gte=0),
                name='event_min_value_non_negative',
            ),
            models.CheckConstraint(
                condition=models.Q(min_value__lte=models.F('max_value')),
                name='event_min_value_lte_max_value',
            ),
        ]

    def __str__(self):
        return f'{self.title} ({self.date})'
